import dataclasses
import re
from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum
from typing import ClassVar

from cadence.core.errors import InvalidFrequencyRule, InvalidTimezone
from cadence.lib.dates import get_zone

__all__ = [
    "ALL_DAYS",
    "Custom",
    "CustomSchedule",
    "Daily",
    "DateRange",
    "FrequencyRule",
    "Habit",
    "HabitSummary",
    "Streak",
    "StreakRun",
    "Timeframe",
    "Weekly",
]

ALL_DAYS: frozenset[int] = frozenset(range(7))
MAX_VALUE = 365
TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def _normalize_days(days: Iterable[int], field: str = "days") -> frozenset[int]:
    if isinstance(days, (str, bytes)) or not isinstance(days, Iterable):
        raise InvalidFrequencyRule(f"{field} must be a collection of weekday indices")
    items = list(days)
    for day in items:
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise InvalidFrequencyRule(f"{field} entries must be integers 0-6, got {day!r}")
    if len(set(items)) != len(items):
        raise InvalidFrequencyRule(f"{field} contains duplicate weekdays")
    return frozenset(items)


def _check_common(rule: "Daily | Weekly | Custom") -> None:
    value = rule.value
    if isinstance(value, bool) or not isinstance(value, int) or not 1 <= value <= MAX_VALUE:
        raise InvalidFrequencyRule(f"value must be an integer 1-{MAX_VALUE}, got {value!r}")
    try:
        get_zone(rule.timezone)
    except InvalidTimezone as e:
        raise InvalidFrequencyRule(str(e)) from e
    object.__setattr__(rule, "days", _normalize_days(rule.days))


@dataclasses.dataclass(frozen=True)
class CustomSchedule:
    time: str
    days: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        if not isinstance(self.time, str) or not TIME_PATTERN.match(self.time):
            raise InvalidFrequencyRule(f"time must be HH:MM (24h), got {self.time!r}")
        object.__setattr__(self, "days", _normalize_days(self.days, "customSchedule.days"))


@dataclasses.dataclass(frozen=True)
class Daily:
    kind: ClassVar[str] = "daily"

    value: int = 1
    days: frozenset[int] = ALL_DAYS
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        _check_common(self)


@dataclasses.dataclass(frozen=True)
class Weekly:
    kind: ClassVar[str] = "weekly"

    days: frozenset[int]
    value: int = 1
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        _check_common(self)


@dataclasses.dataclass(frozen=True)
class Custom:
    kind: ClassVar[str] = "custom"

    schedule: CustomSchedule | None = None
    value: int = 1
    days: frozenset[int] = frozenset()
    timezone: str = "UTC"

    def __post_init__(self) -> None:
        if self.schedule is None:
            raise InvalidFrequencyRule("custom rule requires a customSchedule")
        if not isinstance(self.schedule, CustomSchedule):
            raise InvalidFrequencyRule(f"customSchedule must be a CustomSchedule, got {self.schedule!r}")
        _check_common(self)


FrequencyRule = Daily | Weekly | Custom


@dataclasses.dataclass(frozen=True)
class Streak:
    length: int
    active: bool

    @property
    def display_length(self) -> int:
        """What to show as "current streak": a lapsed streak reads as zero."""
        return self.length if self.active else 0


@dataclasses.dataclass(frozen=True)
class StreakRun:
    start: date
    end: date
    length: int


@dataclasses.dataclass(frozen=True)
class DateRange:
    start: datetime
    end: datetime


class Timeframe(Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclasses.dataclass(frozen=True)
class Habit:
    name: str
    rule: FrequencyRule
    completions: tuple[datetime, ...] = dataclasses.field(default=(), hash=False)


@dataclasses.dataclass(frozen=True)
class HabitSummary:
    name: str
    streak: Streak
    longest: int
    next_due: date
