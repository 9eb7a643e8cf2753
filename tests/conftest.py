"""
jikan Test Configuration

Shared fixtures for all tests.
"""
import io
from datetime import date

import pytest
from rich.console import Console

from jikan.config import Settings
from jikan.models import DailyRecord, MonthKey
from jikan.store import TimesheetStore


# =============================================================================
# FIXTURES: Sample Data
# =============================================================================

@pytest.fixture
def april_key() -> MonthKey:
    """April 2024: 30 days, starts on a Monday."""
    return MonthKey("acme", 2024, 4)


@pytest.fixture
def april_record() -> DailyRecord:
    """April 2024 with a normal working week and one Saturday shift."""
    hours = [0] * 30
    hours[0:5] = [8, 8, 7, 8, 6]   # Mon 1 - Fri 5
    hours[12] = 4                  # Sat 13
    return DailyRecord(2024, 4, tuple(hours))


# =============================================================================
# FIXTURES: Storage & Console
# =============================================================================

@pytest.fixture
def data_dir(tmp_path):
    """Timesheet directory that doesn't exist yet."""
    return tmp_path / "jikan-data"


@pytest.fixture
def store(data_dir) -> TimesheetStore:
    return TimesheetStore(data_dir)


@pytest.fixture
def settings(data_dir) -> Settings:
    return Settings(data_dir=data_dir, log_level="WARNING")


@pytest.fixture
def console():
    """Uncolored console writing into a buffer; read with console.file.getvalue()."""
    return Console(file=io.StringIO(), width=200, color_system=None)


class FakeResolver:
    """Parameter resolver with canned answers; records what was asked."""

    def __init__(self, project="acme", day=None, hours=0):
        self._project = project
        self._day = day
        self._hours = hours
        self.asked = []

    def project(self) -> str:
        self.asked.append("project")
        return self._project

    def day(self, default: date) -> date:
        self.asked.append("day")
        return self._day or default

    def hours(self) -> int:
        self.asked.append("hours")
        return self._hours


@pytest.fixture
def resolver() -> FakeResolver:
    return FakeResolver()


@pytest.fixture
def make_resolver():
    """Factory for resolvers with specific answers."""
    return FakeResolver
