from cadence.core.models import ALL_DAYS, Custom, Daily, DateRange, FrequencyRule, Streak, Weekly
from cadence.lib.dates import DATETIME_FORMAT

__all__ = ["DAY_NAMES", "describe_rule", "format_range", "format_streak"]

DAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def _day_list(days: frozenset[int]) -> str:
    return ", ".join(DAY_NAMES[d] for d in sorted(days))


def describe_rule(rule: FrequencyRule) -> str:
    """Human-readable recurrence, e.g. 'Every Monday, Friday' or 'Custom: Monday at 07:30'."""
    if isinstance(rule, Daily):
        text = "Every day" if rule.value == 1 else f"Every {rule.value} days"
        if rule.days != ALL_DAYS:
            text += f" ({_day_list(rule.days)})"
        return text
    if isinstance(rule, Weekly):
        if rule.days == ALL_DAYS:
            return "Every day of the week"
        if rule.value > 1:
            return f"Every {rule.value} weeks on {_day_list(rule.days)}"
        return f"Every {_day_list(rule.days)}"
    if isinstance(rule, Custom):
        return f"Custom: {_day_list(rule.schedule.days)} at {rule.schedule.time}"
    return "Invalid frequency"


def format_streak(streak: Streak) -> str:
    if streak.active:
        return f"{streak.display_length} (active)"
    if streak.length:
        return f"{streak.display_length} (lapsed after {streak.length})"
    return str(streak.display_length)


def format_range(window: DateRange) -> str:
    return f"{window.start.strftime(DATETIME_FORMAT)} → {window.end.strftime(DATETIME_FORMAT)}"
