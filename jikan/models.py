"""
Timesheet Data Model
====================
MonthKey identifies one project-month (and therefore one file on disk).
DailyRecord holds the hours worked on every day of that month.
"""
import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Dict, Iterator, List, Tuple


def days_in_month(year: int, month: int) -> int:
    """Number of calendar days in the given month (leap years included)."""
    return calendar.monthrange(year, month)[1]


def month_dates(year: int, month: int) -> List[date]:
    """All dates of a month, ascending, day 1 through the last day."""
    day = date(year, month, 1)
    dates = []
    while day.month == month:
        dates.append(day)
        day += timedelta(days=1)
    return dates


@dataclass(frozen=True)
class MonthKey:
    """Project + year-month. Compared exactly, no case folding."""
    project: str
    year: int
    month: int

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")

    @classmethod
    def for_date(cls, project: str, day: date) -> "MonthKey":
        return cls(project, day.year, day.month)

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def days_in_month(self) -> int:
        return days_in_month(self.year, self.month)

    def dates(self) -> List[date]:
        return month_dates(self.year, self.month)

    def __str__(self) -> str:
        return f"{self.project} {self.year}-{self.month:02d}"


@dataclass(frozen=True)
class DailyRecord:
    """
    Hours worked per day for one month.

    `hours[n]` is the value for day n+1. The tuple always has exactly one
    entry per calendar day, so a record can never have gaps or extra days.
    """
    year: int
    month: int
    hours: Tuple[int, ...]

    def __post_init__(self):
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month must be 1-12, got {self.month}")

        hours = tuple(self.hours)
        expected = days_in_month(self.year, self.month)
        if len(hours) != expected:
            raise ValueError(
                f"{self.year}-{self.month:02d} has {expected} days, got {len(hours)} values"
            )
        for value in hours:
            # bool is an int subclass but never a valid hour count
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise ValueError(f"Hours must be non-negative integers, got {value!r}")

        object.__setattr__(self, "hours", hours)

    @classmethod
    def empty(cls, year: int, month: int) -> "DailyRecord":
        """Record with 0 hours on every day of the month."""
        return cls(year, month, (0,) * days_in_month(year, month))

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def contains(self, day: date) -> bool:
        return day.year == self.year and day.month == self.month

    def dates(self) -> List[date]:
        return month_dates(self.year, self.month)

    def items(self) -> Iterator[Tuple[date, int]]:
        """(date, hours) pairs in ascending date order."""
        return zip(self.dates(), self.hours)

    def hours_on(self, day: date) -> int:
        """Hours stored for `day`. Raises KeyError if the day isn't in this month."""
        if not self.contains(day):
            raise KeyError(day)
        return self.hours[day.day - 1]

    def replace_day(self, day: date, hours: int) -> "DailyRecord":
        """New record with one day's value swapped out."""
        if not self.contains(day):
            raise KeyError(day)
        values = list(self.hours)
        values[day.day - 1] = hours
        return DailyRecord(self.year, self.month, tuple(values))

    def total(self) -> int:
        return sum(self.hours)

    def as_dict(self) -> Dict[date, int]:
        return dict(self.items())
