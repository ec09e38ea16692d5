"""
Tests for business time between two instants.
"""

from datetime import timedelta

import pendulum

from businesstime.domain.duration import DurationCalculator
from businesstime.domain.models import CalendarRules


class TestBusinessTimeUntil:
    """Tests for DurationCalculator.business_time_until."""

    def test_same_day(self, rules):
        """Test same day."""
        calculator = DurationCalculator(rules)
        start = pendulum.datetime(2023, 1, 4, 10, 0)
        end = pendulum.datetime(2023, 1, 4, 15, 30)

        assert calculator.business_time_until(start, end) == timedelta(hours=5, minutes=30)

    def test_over_weekend(self, rules):
        """Test over weekend."""
        calculator = DurationCalculator(rules)
        start = pendulum.datetime(2023, 1, 6, 16, 0)
        end = pendulum.datetime(2023, 1, 9, 10, 0)

        assert calculator.business_time_until(start, end) == timedelta(hours=2)

    def test_reversed_is_negative(self, rules):
        """Test reversed is negative."""
        calculator = DurationCalculator(rules)
        start = pendulum.datetime(2023, 1, 6, 16, 0)
        end = pendulum.datetime(2023, 1, 9, 10, 0)

        assert calculator.business_time_until(end, start) == -timedelta(hours=2)

    def test_outside_hours_is_clipped(self, rules):
        """Test outside hours is clipped."""
        calculator = DurationCalculator(rules)
        start = pendulum.datetime(2023, 1, 4, 6, 0)
        end = pendulum.datetime(2023, 1, 4, 21, 0)

        assert calculator.business_time_until(start, end) == timedelta(hours=8)

    def test_identical_instants(self, rules, friday):
        """Test identical instants."""
        assert DurationCalculator(rules).business_time_until(friday, friday) == timedelta(0)

    def test_full_days_in_between(self, rules):
        """Test full days in between."""
        calculator = DurationCalculator(rules)
        start = pendulum.datetime(2023, 1, 2, 13, 0)
        end = pendulum.datetime(2023, 1, 5, 11, 0)

        # 4h Monday, 8h Tuesday, 8h Wednesday, 2h Thursday
        assert calculator.business_time_until(start, end) == timedelta(hours=22)

    def test_dates(self, rules):
        """Test business time between two dates."""
        calculator = DurationCalculator(rules)
        result = calculator.business_time_until(pendulum.date(2023, 1, 2), pendulum.date(2023, 1, 6))

        assert result == timedelta(hours=32)

    def test_holidays(self, rules):
        """Test holidays reduce the business time."""
        calculator = DurationCalculator(rules)
        start = pendulum.date(2023, 1, 2)
        end = pendulum.date(2023, 1, 6)

        assert calculator.business_time_until(start, end, ["2023-01-04"]) == timedelta(hours=24)

        rules.add_holiday("2023-01-03")
        assert calculator.business_time_until(start, end) == timedelta(hours=24)

    def test_mixed_date_and_datetime(self, rules):
        """Test mixed date and datetime."""
        calculator = DurationCalculator(rules)
        start = pendulum.date(2023, 1, 4)
        end = pendulum.datetime(2023, 1, 4, 12, 0, tz="Europe/Berlin")

        assert calculator.business_time_until(start, end) == timedelta(hours=3)

    def test_per_weekday_windows(self):
        """Test per weekday windows."""
        rules = CalendarRules(work_hours={
            "mon": ["9:00", "17:00"],
            "tue": ["10:00", "12:00"],
            "wed": ["9:00", "17:00"],
        })
        calculator = DurationCalculator(rules)
        start = pendulum.datetime(2023, 1, 2, 16, 0)
        end = pendulum.datetime(2023, 1, 4, 10, 0)

        assert calculator.business_time_until(start, end) == timedelta(hours=4)

    def test_end_of_day_sentinel(self):
        """Test end of day sentinel."""
        calculator = DurationCalculator(CalendarRules(end_of_workday="00:00"))
        start = pendulum.datetime(2023, 1, 4, 23, 0)
        end = pendulum.datetime(2023, 1, 5, 10, 0)

        assert calculator.business_time_until(start, end) == timedelta(hours=2)
