"""
Whole business hour offsets.

Hours are stepped one at a time; each step uses the work window of the
day it starts on.
"""

from __future__ import annotations

import pendulum

from .models import Instant, TimeOfDay
from .offsets import BusinessOffset
from .predicates import ExtraHolidays


ONE_HOUR = pendulum.duration(hours=1)

ONE_SECOND = pendulum.duration(seconds=1)


class BusinessHours(BusinessOffset):
    """
    Adds or subtracts whole business hours.

    Time that spills past the end of a work window continues at the start
    of the next workday (and mirrored when going backwards). Date-only
    instants are treated as midnight of that date.
    """

    unit = "hours"

    @property
    def hours(self) -> int:
        return self.count

    def _calculate_after(self, instant: Instant, hours: int, extra_holidays: ExtraHolidays) -> Instant:
        p = self.predicates
        n = self.normalizer

        after_time = n.roll_forward(instant.promote(), extra_holidays)

        for _ in range(hours):
            bod, eod = p.work_day_boundaries(after_time, extra_holidays)
            eo_prev_day = n.end_of_previous_day(after_time, extra_holidays)
            bo_next_day = n.beginning_of_next_day(after_time, extra_holidays)
            day = after_time.date()
            after_time = after_time.shift(ONE_HOUR)

            leftover = 0.0
            if bod is None:
                if after_time.date() > day:
                    # rolled over midnight out of a non-business day
                    leftover = (after_time - after_time.at(TimeOfDay.MIDNIGHT)).total_seconds()
                    after_time = bo_next_day
            elif after_time > eod:
                leftover = (after_time - eod).total_seconds()
                if p.ends_at_sentinel(eod):
                    # 23:59:59 stands for midnight
                    leftover -= 1
                after_time = bo_next_day
            elif bod > after_time > eo_prev_day:
                leftover = (after_time - eo_prev_day).total_seconds()
                after_time = bod

            after_time = self._carry_forward(after_time, leftover, extra_holidays)

        return after_time

    def _calculate_before(self, instant: Instant, hours: int, extra_holidays: ExtraHolidays) -> Instant:
        p = self.predicates
        n = self.normalizer

        before_time = n.roll_backward(instant.promote(), extra_holidays)

        for _ in range(hours):
            bod, eod = p.work_day_boundaries(before_time, extra_holidays)
            eo_prev_day = n.end_of_previous_day(before_time, extra_holidays)
            day = before_time.date()
            at_day_end = self._at_sentinel_end(before_time)
            before_time = before_time.shift(-ONE_HOUR)
            if at_day_end:
                # 23:59:59 stands for midnight
                before_time = before_time.shift(ONE_SECOND)

            leftover = 0.0
            if bod is None:
                if before_time.date() < day:
                    # rolled back over midnight out of a non-business day
                    midnight = before_time.add_days(1).at(TimeOfDay.MIDNIGHT)
                    leftover = (midnight - before_time).total_seconds()
                    before_time = eo_prev_day
            elif bod > before_time > eo_prev_day:
                leftover = (bod - before_time).total_seconds()
                before_time = eo_prev_day
            elif before_time > eod:
                leftover = (before_time - eod).total_seconds()
                before_time = eod

            before_time = self._carry_backward(before_time, leftover, extra_holidays)

        return before_time

    def _at_sentinel_end(self, instant: Instant) -> bool:
        p = self.predicates
        return p.ends_at_sentinel(instant) and instant == p.end_of_workday(instant)

    def _carry_forward(self, instant: Instant, leftover: float, extra_holidays: ExtraHolidays) -> Instant:
        """Apply leftover seconds from a work window start, spilling into later workdays."""
        p = self.predicates

        while leftover > 0:
            room = (p.end_of_workday(instant) - instant).total_seconds()
            if p.ends_at_sentinel(instant):
                room += 1
                fits = leftover < room
            else:
                fits = leftover <= room

            if fits:
                return instant.shift(pendulum.duration(seconds=leftover))

            leftover -= room
            instant = self.normalizer.beginning_of_next_day(instant, extra_holidays)

        return instant

    def _carry_backward(self, instant: Instant, leftover: float, extra_holidays: ExtraHolidays) -> Instant:
        """Take leftover seconds off a work window end, spilling into earlier workdays."""
        p = self.predicates

        while leftover > 0:
            if self._at_sentinel_end(instant):
                # 23:59:59 stands for midnight
                leftover -= 1

            room = (instant - p.beginning_of_workday(instant)).total_seconds()
            if leftover <= room:
                return instant.shift(pendulum.duration(seconds=-leftover))

            leftover -= room
            instant = self.normalizer.end_of_previous_day(instant, extra_holidays)

        return instant
