"""Calendar view of one month of a timesheet.

Two lines of fixed-width cells: day numbers, then hours per day.
A separator closes every Monday-to-Sunday week. Each cell carries a
CellKind so the styling layer can color it however it likes.
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from enum import Enum
from typing import Dict, List

from rich.console import Console
from rich.text import Text

from .errors import MissingDayError
from .models import DailyRecord

logger = logging.getLogger(__name__)

CELL_WIDTH = 3
SEPARATOR = "|"


class CellKind(str, Enum):
    HEADER = "header"
    WEEKDAY = "weekday"
    WEEKEND = "weekend"
    SEPARATOR = "separator"


# Terminal colors per cell kind
STYLES: Dict[CellKind, str] = {
    CellKind.HEADER: "black on blue",
    CellKind.WEEKDAY: "black on green",
    CellKind.WEEKEND: "black on red",
    CellKind.SEPARATOR: "black on cyan",
}


@dataclass(frozen=True)
class Cell:
    text: str
    kind: CellKind


@dataclass
class CalendarLines:
    """Rendered month: `days` is line 1, `hours` is line 2."""
    days: List[Cell] = field(default_factory=list)
    hours: List[Cell] = field(default_factory=list)

    def lines(self) -> List[List[Cell]]:
        return [self.days, self.hours]

    def plain(self) -> List[str]:
        """Unstyled token stream, one string per line."""
        return ["".join(cell.text for cell in line) for line in self.lines()]


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def _pad(text: str) -> str:
    return f"{text:<{CELL_WIDTH}}"


class CalendarRenderer:
    """Turns a DailyRecord into classified calendar cells."""

    def render(self, month_first_day: date, record: DailyRecord) -> CalendarLines:
        """
        Render the month containing `month_first_day`.

        Any date inside the month is accepted; iteration always starts on
        day 1 and stops on the month's last day.

        Raises:
            MissingDayError: `record` doesn't hold a value for some day
                of the month.
        """
        day = month_first_day.replace(day=1)
        month = day.month
        lines = CalendarLines()

        while day.month == month:
            try:
                hours = record.hours_on(day)
            except KeyError as e:
                raise MissingDayError(f"No hours recorded for {day.isoformat()}") from e

            lines.days.append(Cell(_pad(str(day.day)), CellKind.HEADER))
            lines.hours.append(self._hours_cell(day, hours))

            day += timedelta(days=1)
            if day.weekday() == 0:
                lines.days.append(Cell(SEPARATOR, CellKind.SEPARATOR))
                lines.hours.append(Cell(SEPARATOR, CellKind.SEPARATOR))

        logger.debug(f"Rendered {month_first_day:%Y-%m}: {len(lines.hours)} cells per line")
        return lines

    @staticmethod
    def _hours_cell(day: date, hours: int) -> Cell:
        if is_weekend(day):
            # Unworked weekends stay blank instead of showing 0
            text = " " * CELL_WIDTH if hours == 0 else _pad(str(hours))
            return Cell(text, CellKind.WEEKEND)
        return Cell(_pad(str(hours)), CellKind.WEEKDAY)


def to_rich(lines: CalendarLines) -> List[Text]:
    """Map cell kinds onto terminal colors."""
    rendered = []
    for line in lines.lines():
        text = Text()
        for cell in line:
            text.append(cell.text, style=STYLES[cell.kind])
        rendered.append(text)
    return rendered


def print_calendar(console: Console, lines: CalendarLines):
    for text in to_rich(lines):
        console.print(text, soft_wrap=True)
