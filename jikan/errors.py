"""Exceptions raised by the timesheet store and calendar renderer."""
from pathlib import Path
from typing import Optional


class JikanError(Exception):
    """Base class for all timesheet errors surfaced to the CLI."""


class CorruptFormatError(JikanError):
    """Stored timesheet file is malformed or its counts don't line up."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)


class OutOfRangeError(JikanError):
    """Date falls outside the month being mutated."""


class MissingDayError(JikanError):
    """Record does not cover every day of the month being rendered."""


class StorageIOError(JikanError):
    """Filesystem failure while creating, reading or writing a timesheet."""


class ConfigError(JikanError):
    """Config file or JIKAN__* overrides can't be turned into settings."""
