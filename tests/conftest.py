"""
Shared fixtures for the businesstime tests.
"""

import pendulum
import pytest

import businesstime
from businesstime import CalendarRules


@pytest.fixture(autouse=True)
def reset_calendar():
    """Every test starts from the built-in default rules."""
    businesstime.reset()
    yield
    businesstime.reset()


@pytest.fixture
def rules():
    """Monday to Friday, 09:00 to 17:00, no holidays."""
    return CalendarRules.default()


@pytest.fixture
def friday():
    """Friday 2023-01-06 10:00."""
    return pendulum.datetime(2023, 1, 6, 10, 0, tz="UTC")
