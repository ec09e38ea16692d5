"""
Whole business day offsets.
"""

from __future__ import annotations

from .models import Instant
from .offsets import BusinessOffset
from .predicates import ExtraHolidays


class BusinessDays(BusinessOffset):
    """
    Adds or subtracts whole business days.

    Days are only consumed on workdays; weekends and holidays are skipped.
    Starting on a non-workday first rolls onto the nearest workday, and that
    roll counts as the first day of a positive count: Saturday plus one
    business day is Monday at the opening of business. A zero count still
    aligns the instant onto a business moment.

    Example::

        BusinessDays(3, rules).after(pendulum.datetime(2023, 1, 6, 10))
    """

    unit = "days"

    @property
    def days(self) -> int:
        return self.count

    def _calculate_after(self, instant: Instant, days: int, extra_holidays: ExtraHolidays) -> Instant:
        p = self.predicates

        if not p.is_workday(instant, extra_holidays):
            instant = self.normalizer.roll_forward(instant, extra_holidays)
            if days > 0:
                days -= 1

        while days > 0 or not p.is_workday(instant, extra_holidays):
            if p.is_workday(instant, extra_holidays):
                days -= 1
            instant = instant.add_days(1)

        if instant.has_time and not p.during_business_hours(instant, extra_holidays):
            instant = self.normalizer.roll_forward(instant, extra_holidays)

        return instant

    def _calculate_before(self, instant: Instant, days: int, extra_holidays: ExtraHolidays) -> Instant:
        p = self.predicates

        if not p.is_workday(instant, extra_holidays):
            instant = self.normalizer.beginning_of_previous_workday(instant, extra_holidays)
            if days > 0:
                days -= 1

        while days > 0 or not p.is_workday(instant, extra_holidays):
            if p.is_workday(instant, extra_holidays):
                days -= 1
            instant = instant.add_days(-1)

        if instant.has_time and not p.during_business_hours(instant, extra_holidays):
            instant = self.normalizer.beginning_of_previous_workday(instant, extra_holidays)

        return instant
