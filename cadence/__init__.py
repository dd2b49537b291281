"""Recurrence-rule evaluation and streak computation for habit tracking."""

from .core.errors import (
    CadenceError,
    InvalidFormat,
    InvalidFrequencyRule,
    InvalidInstant,
    InvalidTimeframe,
    InvalidTimezone,
)
from .core.models import (
    Custom,
    CustomSchedule,
    Daily,
    DateRange,
    FrequencyRule,
    Streak,
    StreakRun,
    Timeframe,
    Weekly,
)
from .lib.converters import rule_from_dict, rule_to_dict
from .lib.dates import format_instant, parse_instant, to_local
from .progress import completion_rate
from .ranges import resolve_range
from .rules import is_qualifying_date, next_qualifying_date
from .streaks import current_streak, longest_streak, streak_history

__all__ = [
    "CadenceError",
    "Custom",
    "CustomSchedule",
    "Daily",
    "DateRange",
    "FrequencyRule",
    "InvalidFormat",
    "InvalidFrequencyRule",
    "InvalidInstant",
    "InvalidTimeframe",
    "InvalidTimezone",
    "Streak",
    "StreakRun",
    "Timeframe",
    "Weekly",
    "completion_rate",
    "current_streak",
    "format_instant",
    "is_qualifying_date",
    "longest_streak",
    "next_qualifying_date",
    "parse_instant",
    "resolve_range",
    "rule_from_dict",
    "rule_to_dict",
    "streak_history",
    "to_local",
]
