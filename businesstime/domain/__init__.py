"""
Domain layer - Pure calendar arithmetic without I/O or ambient state.
"""

from .business_days import BusinessDays
from .business_hours import BusinessHours
from .duration import DurationCalculator
from .exceptions import BusinessTimeError, ConfigurationError, InvalidArgument
from .models import CalendarRules, Instant, InstantKind, TimeOfDay
from .predicates import CalendarPredicates
from .rolling import Normalizer

__all__ = [
    "BusinessDays",
    "BusinessHours",
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
]
