"""
Service layer helpers that resolve calendar rules and call the domain logic.
"""

from .business_calendar import BusinessCalendar, RulesProvider

__all__ = ["BusinessCalendar", "RulesProvider"]
