"""
Unit Tests for jikan/models.py

Tests:
- Calendar helpers (month lengths, leap years)
- MonthKey identity
- DailyRecord full-coverage invariant
"""

from datetime import date

import pytest

from jikan.models import DailyRecord, MonthKey, days_in_month, month_dates


class TestCalendarHelpers:
    """Month length and date iteration."""

    @pytest.mark.parametrize("year,month,expected", [
        (2024, 1, 31),
        (2024, 2, 29),  # leap year
        (2023, 2, 28),
        (1900, 2, 28),  # century, not leap
        (2000, 2, 29),  # divisible by 400
        (2024, 4, 30),
        (2024, 12, 31),
    ])
    def test_days_in_month(self, year, month, expected):
        assert days_in_month(year, month) == expected

    def test_month_dates_stay_inside_month(self):
        """December must stop on the 31st, not spill into January."""
        dates = month_dates(2024, 12)

        assert len(dates) == 31
        assert dates[0] == date(2024, 12, 1)
        assert dates[-1] == date(2024, 12, 31)

    def test_month_dates_ascending(self):
        dates = month_dates(2024, 2)
        assert dates == sorted(dates)
        assert len(set(dates)) == 29


class TestMonthKey:
    """MonthKey equality and derived values."""

    def test_for_date(self):
        key = MonthKey.for_date("acme", date(2024, 4, 17))
        assert key == MonthKey("acme", 2024, 4)

    def test_project_is_case_sensitive(self):
        assert MonthKey("acme", 2024, 4) != MonthKey("Acme", 2024, 4)

    def test_hashable(self):
        keys = {MonthKey("acme", 2024, 4), MonthKey("acme", 2024, 4)}
        assert len(keys) == 1

    def test_invalid_month_rejected(self):
        with pytest.raises(ValueError):
            MonthKey("acme", 2024, 13)

    def test_first_day_and_length(self, april_key):
        assert april_key.first_day == date(2024, 4, 1)
        assert april_key.days_in_month == 30
        assert len(april_key.dates()) == 30


class TestDailyRecord:
    """DailyRecord keeps exactly one value per calendar day."""

    def test_empty_has_zero_for_every_day(self):
        record = DailyRecord.empty(2024, 2)

        assert len(record.hours) == 29
        assert all(h == 0 for h in record.hours)

    def test_wrong_length_rejected(self):
        """29 values can't describe a 30-day month."""
        with pytest.raises(ValueError):
            DailyRecord(2024, 4, (0,) * 29)

    def test_extra_days_rejected(self):
        with pytest.raises(ValueError):
            DailyRecord(2024, 4, (0,) * 31)

    @pytest.mark.parametrize("bad", [-1, 1.5, "8", True])
    def test_invalid_hours_rejected(self, bad):
        hours = [0] * 30
        hours[3] = bad
        with pytest.raises(ValueError):
            DailyRecord(2024, 4, tuple(hours))

    def test_list_input_stored_as_tuple(self):
        record = DailyRecord(2023, 2, [1] * 28)
        assert isinstance(record.hours, tuple)

    def test_items_in_date_order(self, april_record):
        items = list(april_record.items())

        assert items[0] == (date(2024, 4, 1), 8)
        assert items[-1] == (date(2024, 4, 30), 0)
        assert [d for d, _ in items] == april_record.dates()

    def test_hours_on(self, april_record):
        assert april_record.hours_on(date(2024, 4, 3)) == 7
        assert april_record.hours_on(date(2024, 4, 13)) == 4

    def test_hours_on_other_month(self, april_record):
        with pytest.raises(KeyError):
            april_record.hours_on(date(2024, 5, 1))

    def test_replace_day_returns_new_record(self, april_record):
        updated = april_record.replace_day(date(2024, 4, 30), 5)

        assert updated.hours_on(date(2024, 4, 30)) == 5
        assert april_record.hours_on(date(2024, 4, 30)) == 0
        assert updated.hours[:29] == april_record.hours[:29]

    def test_total(self, april_record):
        assert april_record.total() == 8 + 8 + 7 + 8 + 6 + 4

    def test_as_dict(self, april_record):
        mapping = april_record.as_dict()

        assert len(mapping) == 30
        assert mapping[date(2024, 4, 5)] == 6

    def test_equality(self, april_record):
        copy = DailyRecord(2024, 4, list(april_record.hours))
        assert copy == april_record
