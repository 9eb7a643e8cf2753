"""jikan - personal command-line timesheet."""

__version__ = "0.1.0"

from .errors import (
    CorruptFormatError,
    JikanError,
    MissingDayError,
    OutOfRangeError,
    StorageIOError,
)
from .models import DailyRecord, MonthKey
from .render import CalendarLines, CalendarRenderer, Cell, CellKind
from .store import TimesheetStore

__all__ = [
    'CalendarLines',
    'CalendarRenderer',
    'Cell',
    'CellKind',
    'CorruptFormatError',
    'DailyRecord',
    'JikanError',
    'MissingDayError',
    'MonthKey',
    'OutOfRangeError',
    'StorageIOError',
    'TimesheetStore',
]
