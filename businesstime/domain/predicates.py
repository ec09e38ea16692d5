"""
Calendar predicates: which days are workdays and where a day's work window lies.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional, Set, Tuple

from pendulum import Duration
import pendulum

from .models import CalendarRules, Instant, TimeOfDay, coerce_date


ExtraHolidays = Optional[Iterable]

MAX_SCAN_DAYS = 366


def holiday_set(extra_holidays: ExtraHolidays) -> Set[date]:
    """Normalize a per-call holiday supplement (dates, datetimes or ISO strings)."""
    if not extra_holidays:
        return set()
    if isinstance(extra_holidays, (str, date)):
        extra_holidays = [extra_holidays]
    return {coerce_date(day) for day in extra_holidays}


class CalendarPredicates:
    """
    Answers calendar questions about an instant under a fixed rule set.

    Date-only instants count as inside business hours on any workday; only
    instants with a time of day are compared against the work window.
    """

    def __init__(self, rules: CalendarRules):
        self.rules = rules

    def is_weekday(self, instant: Instant) -> bool:
        """True if the instant falls on a day of the configured work week."""
        return instant.weekday() in self.rules.weekdays

    def is_workday(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> bool:
        """
        True if the instant is on a workday, whether or not it is inside
        business hours.

        Args:
            instant: Instant to check
            extra_holidays: Holidays that apply to this call only
        """
        if not self.is_weekday(instant):
            return False
        day = instant.date()
        if self.rules.is_holiday(day):
            return False
        return date(day.year, day.month, day.day) not in holiday_set(extra_holidays)

    def start_time(self, instant: Instant) -> TimeOfDay:
        return self.rules.beginning_of_workday_for(instant.weekday())

    def end_time(self, instant: Instant) -> TimeOfDay:
        return self.rules.end_of_workday_for(instant.weekday())

    def beginning_of_workday(self, instant: Instant) -> Instant:
        """The start of the work window on the instant's date, workday or not."""
        return instant.at(self.start_time(instant))

    def end_of_workday(self, instant: Instant) -> Instant:
        """The end of the work window on the instant's date, workday or not."""
        return instant.at(self.end_time(instant))

    def before_business_hours(self, instant: Instant) -> bool:
        if not instant.has_time:
            return False
        return instant < self.beginning_of_workday(instant)

    def after_business_hours(self, instant: Instant) -> bool:
        if not instant.has_time:
            return False
        return instant > self.end_of_workday(instant)

    def during_business_hours(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> bool:
        if not self.is_workday(instant, extra_holidays):
            return False
        if not instant.has_time:
            return True
        return self.beginning_of_workday(instant) <= instant <= self.end_of_workday(instant)

    def work_day_boundaries(
        self,
        instant: Instant,
        extra_holidays: ExtraHolidays = None,
    ) -> Tuple[Optional[Instant], Optional[Instant]]:
        """Start and end of the work window, or (None, None) on a non-workday."""
        if not self.is_workday(instant, extra_holidays):
            return None, None
        return self.beginning_of_workday(instant), self.end_of_workday(instant)

    def ends_at_sentinel(self, instant: Instant) -> bool:
        """True if the instant's day works through to midnight."""
        return self.end_time(instant) == TimeOfDay.END_OF_DAY

    def work_hours_total(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Duration:
        """Length of the work window on the instant's date; zero on non-workdays."""
        if not self.is_workday(instant, extra_holidays):
            return pendulum.duration()
        return self.rules.total_for(instant.weekday())

    def consecutive_workdays(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> List[date]:
        """The run of adjacent workdays around the instant, sorted; empty on a non-workday."""
        if not self.is_workday(instant, extra_holidays):
            return []
        return self._consecutive_days(instant, lambda day: self.is_workday(day, extra_holidays))

    def consecutive_non_working_days(
        self,
        instant: Instant,
        extra_holidays: ExtraHolidays = None,
    ) -> List[date]:
        """The run of adjacent non-working days around the instant, sorted; empty on a workday."""
        if self.is_workday(instant, extra_holidays):
            return []
        return self._consecutive_days(instant, lambda day: not self.is_workday(day, extra_holidays))

    @staticmethod
    def _consecutive_days(instant: Instant, matches) -> List[date]:
        # Scans stop after a year in each direction
        days = [instant.date()]
        for step in (1, -1):
            current = instant.add_days(step)
            scanned = 0
            while scanned < MAX_SCAN_DAYS and matches(current):
                days.append(current.date())
                current = current.add_days(step)
                scanned += 1
        return sorted(days)
