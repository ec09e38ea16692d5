"""
Elapsed business time between two instants.
"""

from __future__ import annotations

from typing import Optional, Tuple

import pendulum
from pendulum import Duration

from .models import CalendarRules, Instant
from .predicates import CalendarPredicates, ExtraHolidays
from .rolling import Normalizer


class DurationCalculator:
    """
    Measures business time between two instants.

    The span is split into the rest of the first workday, the full
    workdays strictly in between, and the elapsed part of the last workday.
    The result is negative when the first instant is later than the second.
    """

    def __init__(self, rules: CalendarRules, predicates: Optional[CalendarPredicates] = None):
        self.rules = rules
        self.predicates = predicates or CalendarPredicates(rules)
        self.normalizer = Normalizer(rules, self.predicates)

    def business_time_until(self, start, end, extra_holidays: ExtraHolidays = None) -> Duration:
        """
        Business time from ``start`` until ``end``.

        Args:
            start: Date or datetime the measurement starts from
            end: Date or datetime the measurement runs to
            extra_holidays: Holidays that apply to this call only

        Returns:
            Signed pendulum Duration
        """
        time_a, time_b = self._comparable_pair(Instant.of(start), Instant.of(end))

        # Measure "clockwise" from the earlier instant
        if time_a <= time_b:
            direction = 1
        else:
            time_a, time_b = time_b, time_a
            direction = -1

        time_a = self.normalizer.roll_forward(time_a, extra_holidays)
        time_b = self.normalizer.roll_forward(time_b, extra_holidays)

        if time_a.date() == time_b.date():
            seconds = (time_b - time_a).total_seconds()
        else:
            seconds = (
                self._first_day(time_a)
                + self._days_in_between(time_a, time_b, extra_holidays)
                + self._last_day(time_b)
            )

        return pendulum.duration(seconds=direction * seconds)

    def _first_day(self, instant: Instant) -> float:
        p = self.predicates
        seconds = (p.end_of_workday(instant) - instant).total_seconds()
        if p.ends_at_sentinel(instant):
            seconds += 1
        return seconds

    def _days_in_between(self, time_a: Instant, time_b: Instant, extra_holidays: ExtraHolidays) -> float:
        last = time_b.date()
        day = Instant.of(time_a.date()).add_days(1)
        total = 0.0
        while day.date() < last:
            total += self.predicates.work_hours_total(day, extra_holidays).total_seconds()
            day = day.add_days(1)
        return total

    def _last_day(self, instant: Instant) -> float:
        return (instant - self.predicates.beginning_of_workday(instant)).total_seconds()

    @staticmethod
    def _comparable_pair(time_a: Instant, time_b: Instant) -> Tuple[Instant, Instant]:
        """Promote date-only instants so both sides carry a time of day."""
        tz = None
        for instant in (time_a, time_b):
            if instant.has_time:
                tz = instant.value.tzinfo
        return time_a.promote(tz), time_b.promote(tz)
