"""
Application service exposing the business calendar queries.

The service resolves which rule set applies and delegates the actual
arithmetic to the domain classes. Domain code never looks up ambient
state; the rule set is read here, once per call, and handed down
explicitly. Inject a fixed ``CalendarRules`` or a custom provider to
decouple callers from the context-wide configuration.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Protocol

from pendulum import Duration

from ..context import current_rules
from ..domain.business_days import BusinessDays
from ..domain.business_hours import BusinessHours
from ..domain.duration import DurationCalculator
from ..domain.models import CalendarRules, Instant
from ..domain.offsets import TimeLike
from ..domain.predicates import CalendarPredicates, ExtraHolidays
from ..domain.rolling import Normalizer


class RulesProvider(Protocol):
    """Callable returning the rule set a query should use."""

    def __call__(self) -> CalendarRules:
        ...


class BusinessCalendar:
    """
    Business calendar queries over dates and datetimes.

    Every query accepts an optional ``holidays`` supplement that applies to
    that call only. Results keep the kind of their input, dates in, dates
    out, except for business hour arithmetic: a date given to
    ``add_business_hours`` or ``subtract_business_hours`` counts from
    midnight and comes back as a datetime.
    """

    def __init__(
        self,
        rules: Optional[CalendarRules] = None,
        rules_provider: RulesProvider = current_rules,
    ) -> None:
        self._rules = rules
        self._rules_provider = rules_provider

    @property
    def rules(self) -> CalendarRules:
        """The rule set queries run against right now."""
        if self._rules is not None:
            return self._rules
        return self._rules_provider()

    # ── predicates ───────────────────────────────────────────────────────

    def is_weekday(self, time: TimeLike) -> bool:
        return CalendarPredicates(self.rules).is_weekday(Instant.of(time))

    def is_workday(self, time: TimeLike, holidays: ExtraHolidays = None) -> bool:
        """True on a workday, even outside business hours."""
        return CalendarPredicates(self.rules).is_workday(Instant.of(time), holidays)

    def is_during_business_hours(self, time: TimeLike, holidays: ExtraHolidays = None) -> bool:
        return CalendarPredicates(self.rules).during_business_hours(Instant.of(time), holidays)

    def is_before_business_hours(self, time: TimeLike) -> bool:
        return CalendarPredicates(self.rules).before_business_hours(Instant.of(time))

    def is_after_business_hours(self, time: TimeLike) -> bool:
        return CalendarPredicates(self.rules).after_business_hours(Instant.of(time))

    def beginning_of_workday(self, time: TimeLike) -> TimeLike:
        """Start of the work window on this date, whether or not it is a workday."""
        return CalendarPredicates(self.rules).beginning_of_workday(Instant.of(time)).value

    def end_of_workday(self, time: TimeLike) -> TimeLike:
        """End of the work window on this date, whether or not it is a workday."""
        return CalendarPredicates(self.rules).end_of_workday(Instant.of(time)).value

    def work_hours_total(self, time: TimeLike, holidays: ExtraHolidays = None) -> Duration:
        return CalendarPredicates(self.rules).work_hours_total(Instant.of(time), holidays)

    def consecutive_workdays(self, time: TimeLike, holidays: ExtraHolidays = None) -> List[date]:
        return CalendarPredicates(self.rules).consecutive_workdays(Instant.of(time), holidays)

    def consecutive_non_working_days(self, time: TimeLike, holidays: ExtraHolidays = None) -> List[date]:
        return CalendarPredicates(self.rules).consecutive_non_working_days(Instant.of(time), holidays)

    # ── normalization ────────────────────────────────────────────────────

    def roll_forward(self, time: TimeLike, holidays: ExtraHolidays = None) -> TimeLike:
        """Next beginning of workday when outside business hours, else the time itself."""
        return Normalizer(self.rules).roll_forward(Instant.of(time), holidays).value

    def roll_backward(self, time: TimeLike, holidays: ExtraHolidays = None) -> TimeLike:
        """Previous end of workday when outside business hours, else the time itself."""
        return Normalizer(self.rules).roll_backward(Instant.of(time), holidays).value

    def first_business_day(self, time: TimeLike, holidays: ExtraHolidays = None) -> TimeLike:
        return Normalizer(self.rules).first_business_day(Instant.of(time), holidays).value

    def previous_business_day(self, time: TimeLike, holidays: ExtraHolidays = None) -> TimeLike:
        return Normalizer(self.rules).previous_business_day(Instant.of(time), holidays).value

    # ── offsets ──────────────────────────────────────────────────────────

    def business_days(self, days: int) -> BusinessDays:
        return BusinessDays(days, self.rules)

    def business_hours(self, hours: int) -> BusinessHours:
        return BusinessHours(hours, self.rules)

    def add_business_days(self, time: TimeLike, days: int, holidays: ExtraHolidays = None) -> TimeLike:
        return self.business_days(days).after(time, holidays)

    def subtract_business_days(self, time: TimeLike, days: int, holidays: ExtraHolidays = None) -> TimeLike:
        return self.business_days(days).before(time, holidays)

    def add_business_hours(self, time: TimeLike, hours: int, holidays: ExtraHolidays = None) -> TimeLike:
        return self.business_hours(hours).after(time, holidays)

    def subtract_business_hours(self, time: TimeLike, hours: int, holidays: ExtraHolidays = None) -> TimeLike:
        return self.business_hours(hours).before(time, holidays)

    # ── durations ────────────────────────────────────────────────────────

    def business_time_until(self, start: TimeLike, end: TimeLike, holidays: ExtraHolidays = None) -> Duration:
        """Signed business time from ``start`` until ``end``."""
        return DurationCalculator(self.rules).business_time_until(start, end, holidays)
