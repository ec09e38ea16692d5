"""
Configuration management using Pydantic models loaded from YAML.

A rule document looks like::

    business_time:
      beginning_of_workday: "8:30 am"
      end_of_workday: "5:30 pm"
      work_week: [mon, tue, wed, thu, fri]
      work_hours:
        fri: ["9:00", "13:00"]
      holidays:
        - 2024-01-01
        - 2024-12-25
      timezone: Europe/Berlin
"""

from __future__ import annotations

import logging
from datetime import date, time
from pathlib import Path
from typing import IO, Any, Dict, List, Tuple, Union

import pendulum
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .domain.exceptions import ConfigurationError, InvalidArgument
from .domain.models import (
    DEFAULT_WORK_WEEK,
    CalendarRules,
    TimeOfDay,
    coerce_date,
    weekday_index,
    weekday_name,
    window_is_ordered,
)


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "businesstime.yaml"


def _parse_time_of_day(value: Any) -> TimeOfDay:
    if isinstance(value, bool) or isinstance(value, int):
        # YAML 1.1 reads unquoted 9:00 as the base-60 integer 540
        raise ValueError(f"Times must be quoted strings such as '9:00', got {value!r}")
    if not isinstance(value, (str, time, TimeOfDay)):
        raise ValueError(f"Cannot interpret {value!r} as a time of day")
    return TimeOfDay.parse(value)


class BusinessTimeSettings(BaseModel):
    """Business calendar settings."""
    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    beginning_of_workday: TimeOfDay = TimeOfDay(9)
    end_of_workday: TimeOfDay = TimeOfDay(17)
    work_week: List[str] = Field(default_factory=lambda: list(DEFAULT_WORK_WEEK))
    work_hours: Dict[str, Tuple[TimeOfDay, TimeOfDay]] = Field(default_factory=dict)
    holidays: List[date] = Field(default_factory=list)
    timezone: str = "UTC"

    @field_validator("beginning_of_workday", "end_of_workday", mode="before")
    @classmethod
    def validate_time_of_day(cls, value: Any) -> TimeOfDay:
        """Parse "9:00", "17:30" or "5:30 pm" style values."""
        return _parse_time_of_day(value)

    @field_validator("work_week", mode="before")
    @classmethod
    def validate_work_week(cls, value: Any) -> List[str]:
        """Normalize weekday names and drop duplicates, keeping order."""
        if isinstance(value, str):
            value = value.replace(",", " ").split()
        if not isinstance(value, (list, tuple)) or not value:
            raise ValueError("work_week must be a non-empty list of weekday names")

        names: List[str] = []
        for day in value:
            name = weekday_name(weekday_index(str(day)))
            if name not in names:
                names.append(name)
        return names

    @field_validator("work_hours", mode="before")
    @classmethod
    def validate_work_hours(cls, value: Any) -> Dict[str, Tuple[TimeOfDay, TimeOfDay]]:
        """Ensure each weekday maps to an ordered [start, end] pair."""
        if value is None:
            return {}
        if not isinstance(value, dict):
            raise ValueError("work_hours must map weekday names to [start, end] pairs")

        windows: Dict[str, Tuple[TimeOfDay, TimeOfDay]] = {}
        for day, hours in value.items():
            name = weekday_name(weekday_index(str(day)))
            if not isinstance(hours, (list, tuple)) or len(hours) != 2:
                raise ValueError(f"work_hours for {day!r} must be a [start, end] pair")
            start, end = (_parse_time_of_day(hour) for hour in hours)
            if not window_is_ordered(start, end):
                raise ValueError(f"work_hours for {day!r} must end later than they start")
            windows[name] = (start, end)
        return windows

    @field_validator("holidays", mode="before")
    @classmethod
    def validate_holidays(cls, value: Any) -> List[Any]:
        """Accept YAML dates and date strings such as "2024-12-25" or "Dec 25th, 2024"."""
        if value is None:
            return []
        if not isinstance(value, (list, tuple, set)):
            raise ValueError("holidays must be a list of dates")
        return [coerce_date(day) if isinstance(day, str) else day for day in value]

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Ensure the timezone name is known to pendulum."""
        try:
            pendulum.timezone(value)
        except Exception as exc:
            raise ValueError(f"Unknown timezone: {value!r}") from exc
        return value

    @model_validator(mode="after")
    def validate_hours_order(self) -> "BusinessTimeSettings":
        """Ensure the default window opens before it closes."""
        if not window_is_ordered(self.beginning_of_workday, self.end_of_workday):
            raise ValueError("end_of_workday must be later than beginning_of_workday")
        return self

    def to_rules(self) -> CalendarRules:
        """Build the calendar rule set described by these settings."""
        return CalendarRules(
            work_week=list(self.work_week),
            holidays=set(self.holidays),
            beginning_of_workday=self.beginning_of_workday,
            end_of_workday=self.end_of_workday,
            work_hours=dict(self.work_hours),
        )


class BusinessTimeConfig(BaseModel):
    """Root of a rule document."""
    model_config = ConfigDict(extra="ignore")

    business_time: BusinessTimeSettings = Field(default_factory=BusinessTimeSettings)

    @model_validator(mode="before")
    @classmethod
    def allow_empty_section(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("business_time", ...) is None:
            return {**data, "business_time": {}}
        return data

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "BusinessTimeConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            BusinessTimeConfig instance

        Raises:
            ConfigurationError: If the file is missing or the config is invalid
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigurationError(
                f"Config file not found: {config_path}\n"
                f"Create a {DEFAULT_CONFIG_FILENAME} file with a 'business_time' section."
            )

        with open(config_path, "r", encoding="utf-8") as f:
            config = cls.load(f, source_name=str(config_path))

        logger.debug("Loaded business calendar from %s", config_path)
        return config

    @classmethod
    def load(cls, stream: Union[str, IO[str]], source_name: str = "<stream>") -> "BusinessTimeConfig":
        """
        Load configuration from a YAML string or open file.

        Raises:
            ConfigurationError: If the document is not valid YAML or fails validation
        """
        try:
            data = yaml.safe_load(stream) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {source_name}: {exc}") from exc

        if not isinstance(data, dict):
            raise ConfigurationError("Config file must contain a mapping at the root level.")

        try:
            return cls(**data)
        except (ValidationError, InvalidArgument) as exc:
            raise ConfigurationError(f"Invalid business time config in {source_name}: {exc}") from exc


def load_rules(source: Union[Path, str, IO[str]]) -> CalendarRules:
    """
    Load a calendar rule set from a YAML file path or an open stream.

    Args:
        source: Path to a YAML file, or a file-like object

    Returns:
        CalendarRules described by the document
    """
    if hasattr(source, "read"):
        config = BusinessTimeConfig.load(source, source_name=getattr(source, "name", "<stream>"))
    else:
        config = BusinessTimeConfig.load_from_yaml(Path(source))
    return config.business_time.to_rules()


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for businesstime.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / DEFAULT_CONFIG_FILENAME

    if not config_path.exists():
        # Try in the project root (parent of the package)
        project_root = Path(__file__).parent.parent
        config_path = project_root / DEFAULT_CONFIG_FILENAME

    return config_path
