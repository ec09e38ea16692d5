"""
Tests for rolling instants onto business moments.
"""

import pendulum
import pytest

from businesstime.domain.models import CalendarRules, Instant
from businesstime.domain.rolling import Normalizer


def at(*args):
    return Instant.of(pendulum.datetime(*args))


@pytest.fixture
def normalizer(rules):
    return Normalizer(rules)


class TestRollForward:
    """Tests for Normalizer.roll_forward."""

    @pytest.mark.parametrize("moment, expected", [
        ((2023, 1, 4, 10, 0), (2023, 1, 4, 10, 0)),   # inside hours
        ((2023, 1, 4, 7, 0), (2023, 1, 4, 9, 0)),     # before opening
        ((2023, 1, 4, 18, 0), (2023, 1, 5, 9, 0)),    # after closing
        ((2023, 1, 4, 17, 0), (2023, 1, 5, 9, 0)),    # exactly at closing
        ((2023, 1, 6, 17, 30), (2023, 1, 9, 9, 0)),   # Friday evening
        ((2023, 1, 7, 12, 0), (2023, 1, 9, 9, 0)),    # Saturday
    ])
    def test_roll_forward(self, normalizer, moment, expected):
        """Test rolling forward from various moments."""
        assert normalizer.roll_forward(at(*moment)).value == pendulum.datetime(*expected)

    def test_skips_holidays(self, rules, normalizer):
        """Test skips holidays."""
        rules.add_holiday("2023-01-09")
        assert normalizer.roll_forward(at(2023, 1, 7, 12)).value == pendulum.datetime(2023, 1, 10, 9)

    def test_per_call_holiday(self, normalizer):
        """Test per call holiday."""
        result = normalizer.roll_forward(at(2023, 1, 5, 18), ["2023-01-06"])
        assert result.value == pendulum.datetime(2023, 1, 9, 9)

    def test_dates_roll_to_next_workday(self, normalizer):
        """Test dates roll to next workday."""
        result = normalizer.roll_forward(Instant.of(pendulum.date(2023, 1, 7)))
        assert result.value == pendulum.date(2023, 1, 9)
        assert not result.has_time

    def test_idempotent(self, normalizer):
        """Test rolling twice changes nothing."""
        once = normalizer.roll_forward(at(2023, 1, 6, 20))
        assert normalizer.roll_forward(once) == once


class TestRollBackward:
    """Tests for Normalizer.roll_backward."""

    @pytest.mark.parametrize("moment, expected", [
        ((2023, 1, 4, 10, 0), (2023, 1, 4, 10, 0)),   # inside hours
        ((2023, 1, 4, 18, 0), (2023, 1, 4, 17, 0)),   # after closing
        ((2023, 1, 4, 7, 0), (2023, 1, 3, 17, 0)),    # before opening
        ((2023, 1, 9, 8, 0), (2023, 1, 6, 17, 0)),    # Monday morning
        ((2023, 1, 8, 12, 0), (2023, 1, 6, 17, 0)),   # Sunday
    ])
    def test_roll_backward(self, normalizer, moment, expected):
        """Test rolling backward from various moments."""
        assert normalizer.roll_backward(at(*moment)).value == pendulum.datetime(*expected)

    def test_idempotent(self, normalizer):
        """Test rolling twice changes nothing."""
        once = normalizer.roll_backward(at(2023, 1, 8, 20))
        assert normalizer.roll_backward(once) == once

    def test_sentinel_end(self):
        """Test sentinel end."""
        normalizer = Normalizer(CalendarRules(end_of_workday="00:00"))
        result = normalizer.roll_backward(at(2023, 1, 7, 10))

        assert result.value == pendulum.datetime(2023, 1, 6, 23, 59, 59)


class TestBusinessDaySnapping:
    """Tests for first_business_day and previous_business_day."""

    def test_first_business_day_keeps_time(self, normalizer):
        """Test first business day keeps time."""
        result = normalizer.first_business_day(at(2023, 1, 7, 20, 15))
        assert result.value == pendulum.datetime(2023, 1, 9, 20, 15)

    def test_previous_business_day_keeps_time(self, normalizer):
        """Test previous business day keeps time."""
        result = normalizer.previous_business_day(at(2023, 1, 8, 6, 0))
        assert result.value == pendulum.datetime(2023, 1, 6, 6, 0)

    def test_workday_unchanged(self, normalizer):
        """Test workday unchanged."""
        friday = at(2023, 1, 6, 6, 0)
        assert normalizer.first_business_day(friday) == friday
        assert normalizer.previous_business_day(friday) == friday


class TestDayNeighbours:
    """Tests for the end of the previous and the beginning of the next workday."""

    def test_end_of_previous_day(self, normalizer):
        """Test end of previous day."""
        assert normalizer.end_of_previous_day(at(2023, 1, 9, 12)).value == pendulum.datetime(2023, 1, 6, 17)
        assert normalizer.end_of_previous_day(at(2023, 1, 5, 8)).value == pendulum.datetime(2023, 1, 4, 17)

    def test_beginning_of_next_day(self, normalizer):
        """Test beginning of next day."""
        assert normalizer.beginning_of_next_day(at(2023, 1, 6, 12)).value == pendulum.datetime(2023, 1, 9, 9)
        assert normalizer.beginning_of_next_day(at(2023, 1, 4, 8)).value == pendulum.datetime(2023, 1, 5, 9)
