"""
businesstime - business day and business hour arithmetic.

Basic usage::

    import pendulum
    from businesstime import BusinessCalendar

    calendar = BusinessCalendar()
    friday = pendulum.datetime(2023, 1, 6, 16, 30)
    calendar.add_business_hours(friday, 2)     # Monday 10:30
    calendar.add_business_days(friday, 1)      # Monday 16:30
"""

from .config import BusinessTimeConfig, load_rules
from .context import current_rules, default_rules, load, reset, set_default_rules, using_rules
from .domain import (
    BusinessDays,
    BusinessHours,
    BusinessTimeError,
    CalendarPredicates,
    CalendarRules,
    ConfigurationError,
    DurationCalculator,
    Instant,
    InstantKind,
    InvalidArgument,
    Normalizer,
    TimeOfDay,
)
from .services import BusinessCalendar

__version__ = "1.0.0"

__all__ = [
    "BusinessCalendar",
    "BusinessDays",
    "BusinessHours",
    "BusinessTimeConfig",
    "BusinessTimeError",
    "CalendarPredicates",
    "CalendarRules",
    "ConfigurationError",
    "DurationCalculator",
    "Instant",
    "InstantKind",
    "InvalidArgument",
    "Normalizer",
    "TimeOfDay",
    "current_rules",
    "default_rules",
    "load",
    "load_rules",
    "reset",
    "set_default_rules",
    "using_rules",
]
