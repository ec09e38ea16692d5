"""
Domain models for business calendar arithmetic.

``TimeOfDay`` is a wall-clock moment independent of any date, ``Instant`` is
the tagged date/datetime value every calculation works on, and
``CalendarRules`` holds the work week, work-hour windows and holidays.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import date, datetime, time
from enum import Enum
from typing import ClassVar, Dict, FrozenSet, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union

import pendulum
from pendulum import Date, DateTime, Duration

from .exceptions import InvalidArgument


# Index matches datetime.weekday(): 0=Monday, 6=Sunday
WEEKDAY_NAMES: Tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")

DEFAULT_WORK_WEEK: Tuple[str, ...] = ("mon", "tue", "wed", "thu", "fri")

SECONDS_PER_DAY = 24 * 60 * 60

_TIME_PATTERN = re.compile(
    r"^(?P<hour>\d{1,2})(?::(?P<minute>\d{2}))?(?::(?P<second>\d{2}))?\s*(?P<meridiem>[ap]\.?m\.?)?$",
    re.IGNORECASE,
)


def weekday_index(name: str) -> int:
    """Map a weekday name ("mon", "Monday", "TUE") to its datetime.weekday() index."""
    if not isinstance(name, str):
        raise InvalidArgument(f"Weekday name must be a string, got {name!r}")
    key = name.strip().lower()[:3]
    if key not in WEEKDAY_NAMES:
        raise InvalidArgument(f"Unknown weekday name: {name!r}")
    return WEEKDAY_NAMES.index(key)


def weekday_name(index: int) -> str:
    """Short lowercase name for a datetime.weekday() index."""
    return WEEKDAY_NAMES[index]


def coerce_date(value: Union[str, date, "Instant"]) -> date:
    """
    Turn a holiday value into a plain ``datetime.date``.

    Accepts dates, datetimes (the time part is dropped), instants and date
    strings, either ISO formatted or free-form such as "Jan 1st, 2010".
    """
    if isinstance(value, str):
        try:
            parsed = pendulum.parse(value.strip(), exact=True, strict=False)
        except ValueError as exc:
            raise InvalidArgument(f"Cannot parse date {value!r}: {exc}") from exc
        if isinstance(parsed, datetime):
            parsed = parsed.date()
        if not isinstance(parsed, date):
            raise InvalidArgument(f"Expected a date, got {value!r}")
        value = parsed

    day = Instant.of(value).date()
    return date(day.year, day.month, day.day)


@dataclass(frozen=True, order=True)
class TimeOfDay:
    """
    A wall-clock time within a day.

    Invariant: 0 <= hour <= 23. A configured end of workday of 00:00:00 is
    the end-of-day sentinel and is read back as 23:59:59.
    """
    hour: int
    minute: int = 0
    second: int = 0

    MIDNIGHT: ClassVar["TimeOfDay"]
    END_OF_DAY: ClassVar["TimeOfDay"]

    def __post_init__(self):
        if not 0 <= self.hour <= 23:
            raise InvalidArgument(f"Hour must be between 0 and 23, got {self.hour}")
        if not 0 <= self.minute <= 59:
            raise InvalidArgument(f"Minute must be between 0 and 59, got {self.minute}")
        if not 0 <= self.second <= 59:
            raise InvalidArgument(f"Second must be between 0 and 59, got {self.second}")

    @classmethod
    def parse(cls, value: Union[str, time, "TimeOfDay"]) -> "TimeOfDay":
        """
        Parse a time of day.

        Args:
            value: "9:00", "17:30", "09:00:15", "5:30 pm", "12 am",
                a ``datetime.time`` or a ``TimeOfDay``

        Returns:
            TimeOfDay instance

        Raises:
            InvalidArgument: If the value cannot be interpreted
        """
        if isinstance(value, TimeOfDay):
            return value
        if isinstance(value, time):
            return cls(value.hour, value.minute, value.second)
        if not isinstance(value, str):
            raise InvalidArgument(f"Cannot interpret {value!r} as a time of day")

        match = _TIME_PATTERN.match(value.strip())
        if match is None:
            raise InvalidArgument(f"Cannot parse time of day: {value!r}")

        hour = int(match.group("hour"))
        minute = int(match.group("minute") or 0)
        second = int(match.group("second") or 0)
        meridiem = match.group("meridiem")

        if meridiem:
            if not 1 <= hour <= 12:
                raise InvalidArgument(f"12-hour clock value out of range: {value!r}")
            hour = hour % 12
            if meridiem.lower().startswith("p"):
                hour += 12

        return cls(hour, minute, second)

    @property
    def is_midnight(self) -> bool:
        return self == TimeOfDay.MIDNIGHT

    def as_end_of_workday(self) -> "TimeOfDay":
        """Resolve the end-of-day sentinel to 23:59:59."""
        return TimeOfDay.END_OF_DAY if self.is_midnight else self

    def total_seconds(self) -> int:
        return self.hour * 3600 + self.minute * 60 + self.second

    def __sub__(self, other: "TimeOfDay") -> Duration:
        if not isinstance(other, TimeOfDay):
            return NotImplemented
        return pendulum.duration(seconds=self.total_seconds() - other.total_seconds())

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"


TimeOfDay.MIDNIGHT = TimeOfDay(0, 0, 0)
TimeOfDay.END_OF_DAY = TimeOfDay(23, 59, 59)


class InstantKind(Enum):
    """Whether an instant carries a time of day."""
    DATE = "date"
    DATETIME = "datetime"


@dataclass(frozen=True)
class Instant:
    """
    A point in time as seen by the calendar engine.

    DATE instants are never clipped to work-hour windows; only their
    workday status matters. DATETIME instants are subject to clipping.
    """
    value: Union[Date, DateTime]
    kind: InstantKind

    @classmethod
    def of(cls, value: Union[date, datetime, "Instant"]) -> "Instant":
        """
        Wrap a date or datetime value.

        Standard library values are converted to their pendulum
        counterparts; the timezone (or lack of one) is kept as is.

        Raises:
            InvalidArgument: If the value is not date-like
        """
        if isinstance(value, Instant):
            return value
        if isinstance(value, datetime):
            if not isinstance(value, DateTime):
                value = pendulum.instance(value, tz=value.tzinfo)
            return cls(value, InstantKind.DATETIME)
        if isinstance(value, date):
            if not isinstance(value, Date):
                value = pendulum.date(value.year, value.month, value.day)
            return cls(value, InstantKind.DATE)
        raise InvalidArgument(
            f"Business time can only be calculated from date or datetime values, "
            f"got {type(value).__name__}"
        )

    @property
    def has_time(self) -> bool:
        return self.kind is InstantKind.DATETIME

    def date(self) -> date:
        if self.has_time:
            return self.value.date()
        return self.value

    def weekday(self) -> int:
        return self.value.weekday()

    def time_of_day(self) -> TimeOfDay:
        if not self.has_time:
            return TimeOfDay.MIDNIGHT
        return TimeOfDay(self.value.hour, self.value.minute, self.value.second)

    def at(self, time_of_day: TimeOfDay) -> "Instant":
        """Same date at the given time of day; dates are returned unchanged."""
        if not self.has_time:
            return self
        moved = self.value.set(
            hour=time_of_day.hour,
            minute=time_of_day.minute,
            second=time_of_day.second,
            microsecond=0,
        )
        return Instant(moved, self.kind)

    def add_days(self, days: int) -> "Instant":
        return Instant(self.value.add(days=days), self.kind)

    def shift(self, offset: Duration) -> "Instant":
        """Move a datetime instant by an exact duration."""
        return Instant(self.value + offset, self.kind)

    def promote(self, tz=None) -> "Instant":
        """A DATETIME instant at midnight of this instant's date."""
        if self.has_time:
            return self
        day = self.value
        return Instant(
            pendulum.datetime(day.year, day.month, day.day, tz=tz),
            InstantKind.DATETIME,
        )

    def __sub__(self, other: "Instant") -> Duration:
        if not isinstance(other, Instant):
            return NotImplemented
        return pendulum.duration(seconds=(self.value - other.value).total_seconds())

    def __lt__(self, other: "Instant") -> bool:
        return self.value < other.value

    def __le__(self, other: "Instant") -> bool:
        return self.value <= other.value

    def __gt__(self, other: "Instant") -> bool:
        return self.value > other.value

    def __ge__(self, other: "Instant") -> bool:
        return self.value >= other.value


def window_is_ordered(start: TimeOfDay, end: TimeOfDay) -> bool:
    """True if a window opens before it closes; an end at 00:00 closes at midnight."""
    return end.is_midnight or start < end


def _window_length(start: TimeOfDay, end: TimeOfDay) -> Duration:
    # An end at the sentinel runs through to midnight
    end_seconds = SECONDS_PER_DAY if end.is_midnight else end.total_seconds()
    return pendulum.duration(seconds=end_seconds - start.total_seconds())


WorkWindow = Tuple[TimeOfDay, TimeOfDay]


@dataclass
class CalendarRules:
    """
    Business calendar rules.

    When ``work_hours`` is non-empty its keys are the authoritative work
    week and ``work_week`` is ignored.

    Fields are normalized on construction; use the ``set_*`` methods to
    change them afterwards so that derived caches stay valid.
    """
    work_week: List[str] = field(default_factory=lambda: list(DEFAULT_WORK_WEEK))
    holidays: Set[date] = field(default_factory=set)
    beginning_of_workday: TimeOfDay = TimeOfDay(9)
    end_of_workday: TimeOfDay = TimeOfDay(17)
    work_hours: Dict[str, WorkWindow] = field(default_factory=dict)
    work_hours_total: Dict[str, Duration] = field(default_factory=dict, repr=False, compare=False)
    _weekdays: Optional[FrozenSet[int]] = field(default=None, init=False, repr=False, compare=False)

    SETTERS: ClassVar[Tuple[str, ...]] = (
        "work_week",
        "holidays",
        "beginning_of_workday",
        "end_of_workday",
        "work_hours",
    )

    WINDOW_SETTERS: ClassVar[Tuple[str, ...]] = (
        "beginning_of_workday",
        "end_of_workday",
        "work_hours",
    )

    def __post_init__(self):
        self.work_week = self._normalize_work_week(self.work_week)
        self.holidays = {coerce_date(day) for day in self.holidays}
        self.beginning_of_workday = TimeOfDay.parse(self.beginning_of_workday)
        self.end_of_workday = TimeOfDay.parse(self.end_of_workday)
        self.work_hours = self._normalize_work_hours(self.work_hours)
        self.check_windows()

    @classmethod
    def default(cls) -> "CalendarRules":
        """Monday to Friday, 09:00 to 17:00, no holidays."""
        return cls()

    # ── setters ──────────────────────────────────────────────────────────

    def set_work_week(self, days: Sequence[str]) -> None:
        self.work_week = self._normalize_work_week(days)
        self._weekdays = None

    def set_beginning_of_workday(self, value: Union[str, time, TimeOfDay], check: bool = True) -> None:
        self.beginning_of_workday = TimeOfDay.parse(value)
        self.work_hours_total.clear()
        if check:
            self.check_windows()

    def set_end_of_workday(self, value: Union[str, time, TimeOfDay], check: bool = True) -> None:
        self.end_of_workday = TimeOfDay.parse(value)
        self.work_hours_total.clear()
        if check:
            self.check_windows()

    def set_work_hours(self, work_hours: Mapping[str, Sequence], check: bool = True) -> None:
        self.work_hours = self._normalize_work_hours(work_hours)
        self.work_hours_total.clear()
        self._weekdays = None
        if check:
            self.check_windows()

    def set_holidays(self, holidays: Iterable) -> None:
        self.holidays = {coerce_date(day) for day in holidays}

    def add_holiday(self, day) -> None:
        self.holidays.add(coerce_date(day))

    def remove_holiday(self, day) -> None:
        self.holidays.discard(coerce_date(day))

    def apply(self, **overrides) -> "CalendarRules":
        """
        Apply overrides through the setters.

        Window settings may be given in any order; they are checked once
        all overrides are in place.

        Raises:
            InvalidArgument: If an override key is not a calendar setting,
                or a work window would close before it opens
        """
        unknown = sorted(set(overrides) - set(self.SETTERS))
        if unknown:
            raise InvalidArgument(f"Unknown calendar setting(s): {', '.join(unknown)}")

        for name, value in overrides.items():
            setter = getattr(self, f"set_{name}")
            if name in self.WINDOW_SETTERS:
                setter(value, check=False)
            else:
                setter(value)
        self.check_windows()
        return self

    def check_windows(self) -> None:
        """
        Raises:
            InvalidArgument: If the default or a per-weekday window does not
                open before it closes
        """
        if not window_is_ordered(self.beginning_of_workday, self.end_of_workday):
            raise InvalidArgument(
                f"End of workday {self.end_of_workday} must be later than "
                f"beginning of workday {self.beginning_of_workday}"
            )
        for name, (start, end) in self.work_hours.items():
            if not window_is_ordered(start, end):
                raise InvalidArgument(f"Work hours for {name!r} must end later than they start")

    def clone(self) -> "CalendarRules":
        """Structural copy; the clone can be changed without touching this set."""
        copy = CalendarRules(
            work_week=list(self.work_week),
            holidays=set(self.holidays),
            beginning_of_workday=self.beginning_of_workday,
            end_of_workday=self.end_of_workday,
            work_hours=dict(self.work_hours),
        )
        copy.work_hours_total.update(self.work_hours_total)
        return copy

    # ── lookups ──────────────────────────────────────────────────────────

    @property
    def weekdays(self) -> FrozenSet[int]:
        """Weekday indexes that are working days."""
        if self._weekdays is None:
            names = self.work_hours.keys() if self.work_hours else self.work_week
            self._weekdays = frozenset(weekday_index(name) for name in names)
        return self._weekdays

    def is_holiday(self, day: date) -> bool:
        return date(day.year, day.month, day.day) in self.holidays

    def beginning_of_workday_for(self, weekday: int) -> TimeOfDay:
        window = self.work_hours.get(weekday_name(weekday))
        return window[0] if window else self.beginning_of_workday

    def end_of_workday_for(self, weekday: int) -> TimeOfDay:
        window = self.work_hours.get(weekday_name(weekday))
        end = window[1] if window else self.end_of_workday
        return end.as_end_of_workday()

    def total_for(self, weekday: int) -> Duration:
        """Configured length of the work window on a weekday (cached)."""
        name = weekday_name(weekday)
        window = self.work_hours.get(name)
        key = name if window else "default"

        if key not in self.work_hours_total:
            start, end = window or (self.beginning_of_workday, self.end_of_workday)
            self.work_hours_total[key] = _window_length(start, end)
        return self.work_hours_total[key]

    # ── normalization ────────────────────────────────────────────────────

    @staticmethod
    def _normalize_work_week(days: Sequence[str]) -> List[str]:
        if isinstance(days, str):
            days = days.replace(",", " ").split()
        normalized: List[str] = []
        for day in days:
            name = weekday_name(weekday_index(day))
            if name not in normalized:
                normalized.append(name)
        if not normalized:
            raise InvalidArgument("Work week must contain at least one day")
        return normalized

    @staticmethod
    def _normalize_work_hours(work_hours: Mapping[str, Sequence]) -> Dict[str, WorkWindow]:
        normalized: Dict[str, WorkWindow] = {}
        for day, hours in (work_hours or {}).items():
            if len(hours) != 2:
                raise InvalidArgument(f"Work hours for {day!r} must be a [start, end] pair")
            start, end = (TimeOfDay.parse(value) for value in hours)
            normalized[weekday_name(weekday_index(day))] = (start, end)
        return normalized
