"""
Tests for calendar predicates.
"""

from datetime import date

import pendulum
import pytest

from businesstime.domain.models import CalendarRules, Instant
from businesstime.domain.predicates import CalendarPredicates, holiday_set


def at(*args):
    return Instant.of(pendulum.datetime(*args))


def on(*args):
    return Instant.of(pendulum.date(*args))


@pytest.fixture
def predicates(rules):
    return CalendarPredicates(rules)


class TestWorkdays:
    """Tests for workday detection."""

    def test_weekdays_and_weekends(self, predicates):
        """Test weekdays and weekends."""
        assert predicates.is_workday(on(2023, 1, 6))      # Friday
        assert not predicates.is_workday(on(2023, 1, 7))  # Saturday
        assert not predicates.is_workday(on(2023, 1, 8))  # Sunday

    def test_configured_holiday(self, rules, predicates):
        """Test configured holiday."""
        rules.add_holiday("2023-01-06")

        assert predicates.is_weekday(on(2023, 1, 6))
        assert not predicates.is_workday(on(2023, 1, 6))

    def test_per_call_holidays(self, rules, predicates):
        """Extra holidays only apply to the call they are passed to."""
        assert not predicates.is_workday(at(2023, 1, 6, 10), ["2023-01-06"])
        assert not predicates.is_workday(at(2023, 1, 6, 10), date(2023, 1, 6))
        assert predicates.is_workday(at(2023, 1, 6, 10))
        assert rules.holidays == set()

    def test_workday_outside_hours_is_still_workday(self, predicates):
        """Test workday outside hours is still workday."""
        assert predicates.is_workday(at(2023, 1, 6, 23, 0))

    def test_holiday_set_normalizes(self):
        """Test holiday set normalizes."""
        assert holiday_set(None) == set()
        assert holiday_set("2023-01-06") == {date(2023, 1, 6)}
        assert holiday_set([pendulum.datetime(2023, 1, 6, 12)]) == {date(2023, 1, 6)}


class TestBusinessHours:
    """Tests for work window predicates."""

    def test_during_business_hours(self, predicates):
        """Test during business hours."""
        assert predicates.during_business_hours(at(2023, 1, 6, 9, 0))
        assert predicates.during_business_hours(at(2023, 1, 6, 12, 0))
        assert predicates.during_business_hours(at(2023, 1, 6, 17, 0))
        assert not predicates.during_business_hours(at(2023, 1, 6, 8, 59))
        assert not predicates.during_business_hours(at(2023, 1, 6, 17, 1))
        assert not predicates.during_business_hours(at(2023, 1, 7, 12, 0))

    def test_dates_count_as_during_hours_on_workdays(self, predicates):
        """Test dates count as during hours on workdays."""
        assert predicates.during_business_hours(on(2023, 1, 6))
        assert not predicates.during_business_hours(on(2023, 1, 7))

    def test_before_and_after(self, predicates):
        """Test before and after."""
        assert predicates.before_business_hours(at(2023, 1, 6, 8, 0))
        assert predicates.after_business_hours(at(2023, 1, 6, 18, 0))
        assert not predicates.before_business_hours(on(2023, 1, 6))
        assert not predicates.after_business_hours(on(2023, 1, 6))

    def test_boundaries_on_non_workday(self, predicates):
        """Test boundaries on non workday."""
        assert predicates.work_day_boundaries(at(2023, 1, 7, 10)) == (None, None)

        bod, eod = predicates.work_day_boundaries(at(2023, 1, 6, 10))
        assert bod.value == pendulum.datetime(2023, 1, 6, 9)
        assert eod.value == pendulum.datetime(2023, 1, 6, 17)

    def test_per_weekday_windows(self):
        """Test per weekday windows."""
        rules = CalendarRules(work_hours={
            "mon": ["9:00", "17:00"],
            "fri": ["10:00", "14:00"],
        })
        predicates = CalendarPredicates(rules)

        assert predicates.beginning_of_workday(at(2023, 1, 6, 12)).value == pendulum.datetime(2023, 1, 6, 10)
        assert predicates.end_of_workday(at(2023, 1, 6, 12)).value == pendulum.datetime(2023, 1, 6, 14)
        # Wednesday is not in the work week once work_hours are set
        assert not predicates.is_workday(at(2023, 1, 4, 12))

    def test_sentinel_end(self):
        """Test a window ending at midnight."""
        predicates = CalendarPredicates(CalendarRules(end_of_workday="00:00"))
        friday = at(2023, 1, 6, 12)

        assert predicates.ends_at_sentinel(friday)
        assert predicates.end_of_workday(friday).value == pendulum.datetime(2023, 1, 6, 23, 59, 59)


class TestWorkHoursTotal:
    """Tests for work_hours_total."""

    def test_default_window(self, predicates):
        """Test default window."""
        assert predicates.work_hours_total(on(2023, 1, 6)).in_hours() == 8

    def test_zero_on_non_workdays(self, predicates):
        """Test zero on non workdays."""
        assert predicates.work_hours_total(on(2023, 1, 7)).total_seconds() == 0
        assert predicates.work_hours_total(on(2023, 1, 6), ["2023-01-06"]).total_seconds() == 0

    def test_per_weekday_window(self):
        """Test per weekday window."""
        rules = CalendarRules(work_hours={"fri": ["10:00", "14:00"], "mon": ["9:00", "00:00"]})
        predicates = CalendarPredicates(rules)

        assert predicates.work_hours_total(on(2023, 1, 6)).in_hours() == 4
        assert predicates.work_hours_total(on(2023, 1, 9)).in_hours() == 15


class TestConsecutiveDays:
    """Tests for consecutive day runs."""

    def test_consecutive_workdays(self, predicates):
        """Test consecutive workdays."""
        days = predicates.consecutive_workdays(on(2023, 1, 4))
        assert days == [date(2023, 1, d) for d in range(2, 7)]

    def test_consecutive_workdays_on_weekend(self, predicates):
        """Test consecutive workdays on weekend."""
        assert predicates.consecutive_workdays(on(2023, 1, 7)) == []

    def test_consecutive_non_working_days(self, rules, predicates):
        """Test consecutive non working days."""
        rules.add_holiday("2023-01-09")
        days = predicates.consecutive_non_working_days(at(2023, 1, 8, 12))

        assert days == [date(2023, 1, 7), date(2023, 1, 8), date(2023, 1, 9)]

    def test_consecutive_non_working_days_on_workday(self, predicates):
        """Test consecutive non working days on workday."""
        assert predicates.consecutive_non_working_days(on(2023, 1, 6)) == []

    def test_scan_is_bounded(self):
        """A seven day work week never ends, so the scan stops after a year each way."""
        predicates = CalendarPredicates(CalendarRules(work_week=["mon", "tue", "wed", "thu", "fri", "sat", "sun"]))
        days = predicates.consecutive_workdays(on(2023, 6, 1))

        assert len(days) == 2 * 366 + 1
        assert days[0] == date(2022, 5, 31)
