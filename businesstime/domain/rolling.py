"""
Normalization of arbitrary instants onto valid business instants.
"""

from __future__ import annotations

from typing import Optional

from .models import CalendarRules, Instant, TimeOfDay
from .predicates import CalendarPredicates, ExtraHolidays


class Normalizer:
    """
    Rolls instants forward or backward onto the nearest business moment.

    Every result lies on a workday, inside that day's work window, and
    rolling an already rolled instant returns it unchanged.
    """

    def __init__(self, rules: CalendarRules, predicates: Optional[CalendarPredicates] = None):
        self.rules = rules
        self.predicates = predicates or CalendarPredicates(rules)

    def roll_forward(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Instant:
        """
        Move to the next beginning of workday when outside business hours.

        An instant exactly at the end of the workday belongs to the next
        workday.
        """
        p = self.predicates

        if p.before_business_hours(instant) or not p.is_workday(instant, extra_holidays):
            next_time = p.beginning_of_workday(instant)
        elif p.after_business_hours(instant) or (
            instant.has_time and instant == p.end_of_workday(instant)
        ):
            next_time = p.beginning_of_workday(instant.add_days(1))
        else:
            next_time = instant

        while not p.is_workday(next_time, extra_holidays):
            next_time = p.beginning_of_workday(next_time.add_days(1))

        return next_time

    def roll_backward(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Instant:
        """Move to the previous end of workday when outside business hours."""
        p = self.predicates

        if p.before_business_hours(instant) or not p.is_workday(instant, extra_holidays):
            prev_time = p.end_of_workday(instant.add_days(-1))
        elif p.after_business_hours(instant):
            prev_time = p.end_of_workday(instant)
        else:
            prev_time = instant

        while not p.is_workday(prev_time, extra_holidays):
            prev_time = p.end_of_workday(prev_time.add_days(-1))

        return prev_time

    def first_business_day(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Instant:
        """The instant itself on a workday, otherwise the same time on the next workday."""
        while not self.predicates.is_workday(instant, extra_holidays):
            instant = instant.add_days(1)
        return instant

    def previous_business_day(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Instant:
        """The instant itself on a workday, otherwise the same time on the previous workday."""
        while not self.predicates.is_workday(instant, extra_holidays):
            instant = instant.add_days(-1)
        return instant

    def beginning_of_previous_workday(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Instant:
        return self.predicates.beginning_of_workday(self.roll_backward(instant, extra_holidays))

    def end_of_previous_day(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Instant:
        """End of the nearest workday strictly before the instant's date."""
        return self.roll_backward(instant.add_days(-1).at(TimeOfDay.END_OF_DAY), extra_holidays)

    def beginning_of_next_day(self, instant: Instant, extra_holidays: ExtraHolidays = None) -> Instant:
        """Beginning of the nearest workday strictly after the instant's date."""
        return self.roll_forward(instant.add_days(1).at(TimeOfDay.MIDNIGHT), extra_holidays)
