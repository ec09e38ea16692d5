"""
Shared behaviour of signed business offsets (days and hours).
"""

from __future__ import annotations

from typing import Optional, Union

import pendulum
from pendulum import Date, DateTime

from .exceptions import InvalidArgument
from .models import CalendarRules, Instant
from .predicates import CalendarPredicates, ExtraHolidays
from .rolling import Normalizer


TimeLike = Union[Date, DateTime]


class BusinessOffset:
    """
    A signed count of business units bound to a rule set.

    ``after`` with a negative count behaves as ``before`` with the count
    negated, and vice versa. Offsets of different kinds cannot be ordered
    against each other.
    """

    unit = "units"

    def __init__(self, count: int, rules: CalendarRules):
        if isinstance(count, bool) or not isinstance(count, int):
            raise InvalidArgument(f"{type(self).__name__} needs a whole number, got {count!r}")
        self.count = count
        self.rules = rules
        self.predicates = CalendarPredicates(rules)
        self.normalizer = Normalizer(rules, self.predicates)

    def after(self, time: TimeLike, extra_holidays: ExtraHolidays = None) -> TimeLike:
        instant = Instant.of(time)
        if self.count >= 0:
            return self._calculate_after(instant, self.count, extra_holidays).value
        return self._calculate_before(instant, -self.count, extra_holidays).value

    def before(self, time: TimeLike, extra_holidays: ExtraHolidays = None) -> TimeLike:
        instant = Instant.of(time)
        if self.count >= 0:
            return self._calculate_before(instant, self.count, extra_holidays).value
        return self._calculate_after(instant, -self.count, extra_holidays).value

    since = after

    def from_now(self, tz: Optional[str] = None, extra_holidays: ExtraHolidays = None) -> DateTime:
        return self.after(pendulum.now(tz), extra_holidays)

    def ago(self, tz: Optional[str] = None, extra_holidays: ExtraHolidays = None) -> DateTime:
        return self.before(pendulum.now(tz), extra_holidays)

    def _calculate_after(self, instant: Instant, count: int, extra_holidays: ExtraHolidays) -> Instant:
        raise NotImplementedError

    def _calculate_before(self, instant: Instant, count: int, extra_holidays: ExtraHolidays) -> Instant:
        raise NotImplementedError

    def _check_comparable(self, other) -> None:
        if type(other) is not type(self):
            raise InvalidArgument(
                f"{type(self).__name__} can't be compared with {type(other).__name__}"
            )

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.count == other.count

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.count))

    def __lt__(self, other) -> bool:
        self._check_comparable(other)
        return self.count < other.count

    def __le__(self, other) -> bool:
        self._check_comparable(other)
        return self.count <= other.count

    def __gt__(self, other) -> bool:
        self._check_comparable(other)
        return self.count > other.count

    def __ge__(self, other) -> bool:
        self._check_comparable(other)
        return self.count >= other.count

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.count})"

    def __str__(self) -> str:
        return f"{self.count} business {self.unit}"
