"""
Domain-specific exception hierarchy for the business time engine.
"""


class BusinessTimeError(Exception):
    """Base class for all business time errors."""


class InvalidArgument(BusinessTimeError, ValueError):
    """Raised when an input is not a time-like value or cannot be interpreted."""


class ConfigurationError(BusinessTimeError, ValueError):
    """Raised when a calendar rule document cannot be loaded or validated."""
