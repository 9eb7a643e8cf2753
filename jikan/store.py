"""Timesheet file store.

One file per project-month inside the data directory:

    <project>-time-<MM>-<YYYY>.csv

Line 1 holds the month's ISO dates, line 2 the hours for each date,
both comma-separated and in ascending date order.
"""

import logging
import os
import stat
import tempfile
from datetime import date
from pathlib import Path
from typing import Union

from .errors import CorruptFormatError, OutOfRangeError, StorageIOError
from .models import DailyRecord, MonthKey

logger = logging.getLogger(__name__)


def _file_mode(path: Path) -> int:
    """Mode for a saved file: keep the old file's, else the umask default."""
    if path.exists():
        return stat.S_IMODE(path.stat().st_mode)
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def timesheet_filename(key: MonthKey) -> str:
    return f"{key.project}-time-{key.month:02d}-{key.year:04d}.csv"


def format_timesheet(record: DailyRecord) -> str:
    """Serialize a record into the two-line file payload."""
    dates = ",".join(d.isoformat() for d in record.dates())
    hours = ",".join(str(h) for h in record.hours)
    return f"{dates}\n{hours}\n"


def _parse_hours(token: str) -> int:
    token = token.strip()
    # isdigit alone accepts things like superscripts that int() rejects
    if not (token.isascii() and token.isdigit()):
        raise ValueError(f"invalid hours value {token!r}")
    return int(token)


def parse_timesheet(text: str, key: MonthKey) -> DailyRecord:
    """
    Parse a stored payload into a DailyRecord for `key`'s month.

    Raises:
        CorruptFormatError: wrong line structure, count mismatch,
            bad hour tokens, or a date header that isn't this month.
    """
    lines = [line for line in text.splitlines() if line.strip()]
    if len(lines) != 2:
        raise CorruptFormatError(f"expected 2 lines (dates, hours), found {len(lines)}")

    header, data = lines
    expected = key.dates()

    tokens = data.split(",")
    if len(tokens) != len(expected):
        raise CorruptFormatError(
            f"{key} has {len(expected)} days but {len(tokens)} hour values are stored"
        )

    try:
        hours = tuple(_parse_hours(token) for token in tokens)
    except ValueError as e:
        raise CorruptFormatError(str(e)) from e

    date_tokens = header.split(",")
    if len(date_tokens) != len(tokens):
        raise CorruptFormatError(
            f"date line has {len(date_tokens)} entries, hours line has {len(tokens)}"
        )
    try:
        dates = [date.fromisoformat(token.strip()) for token in date_tokens]
    except ValueError as e:
        raise CorruptFormatError(f"invalid date in header: {e}") from e
    if dates != expected:
        raise CorruptFormatError(f"date line does not match the days of {key}")

    return DailyRecord(key.year, key.month, hours)


class TimesheetStore:
    """Loads, merges and persists monthly timesheets under one directory."""

    def __init__(self, data_dir: Union[str, Path]):
        self.data_dir = Path(data_dir)

    def path_for(self, key: MonthKey) -> Path:
        return self.data_dir / timesheet_filename(key)

    def exists(self, key: MonthKey) -> bool:
        return self.path_for(key).is_file()

    def _ensure_dir(self):
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageIOError(f"Cannot create data directory {self.data_dir}: {e}") from e

    def load(self, key: MonthKey) -> DailyRecord:
        """
        Load the record for `key`, or a zero-filled one if nothing is stored yet.

        The data directory is created when the file is missing so that a
        following save() can't fail on a missing parent.
        """
        path = self.path_for(key)
        if not path.exists():
            self._ensure_dir()
            logger.debug(f"No timesheet at {path}, starting empty month")
            return DailyRecord.empty(key.year, key.month)

        text = self.read_raw(key)
        try:
            record = parse_timesheet(text, key)
        except CorruptFormatError as e:
            logger.error(f"Corrupt timesheet {path}: {e}")
            raise CorruptFormatError(str(e), path=path) from e

        logger.debug(f"Loaded {path} ({record.total()}h)")
        return record

    def read_raw(self, key: MonthKey) -> str:
        """Stored file contents, verbatim."""
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise StorageIOError(f"No timesheet for {key} at {path}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise StorageIOError(f"Cannot read {path}: {e}") from e

    @staticmethod
    def set_day(record: DailyRecord, day: date, hours: int) -> DailyRecord:
        """Return a copy of `record` with `day` set to `hours`."""
        if not record.contains(day):
            raise OutOfRangeError(
                f"{day.isoformat()} is outside {record.year}-{record.month:02d}"
            )
        return record.replace_day(day, hours)

    def save(self, key: MonthKey, record: DailyRecord):
        """
        Write the full record, replacing whatever was stored before.

        Goes through a temp file in the same directory plus os.replace,
        so a reader sees either the old file or the new one.
        """
        if (record.year, record.month) != (key.year, key.month):
            raise OutOfRangeError(
                f"Record for {record.year}-{record.month:02d} can't be saved as {key}"
            )

        self._ensure_dir()
        path = self.path_for(key)
        tmp_path = None
        try:
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.data_dir,
                prefix=f".{path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = f.name
                f.write(format_timesheet(record))
            os.chmod(tmp_path, _file_mode(path))
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.unlink(tmp_path)
            raise StorageIOError(f"Cannot write {path}: {e}") from e

        logger.info(f"Saved {path} ({record.total()}h)")

    def record_day(self, key: MonthKey, day: date, hours: int) -> DailyRecord:
        """Load the month, set one day, save, and return the saved record."""
        if (day.year, day.month) != (key.year, key.month):
            raise OutOfRangeError(f"{day.isoformat()} is outside {key}")
        record = self.set_day(self.load(key), day, hours)
        self.save(key, record)
        return record
