from datetime import date, datetime
from pathlib import Path

import yaml

from .core.errors import NotFoundError, ValidationError
from .core.models import Habit, HabitSummary
from .lib.converters import coerce_completions, rule_from_dict
from .lib.dates import local_date
from .rules import next_qualifying_date
from .streaks import current_streak, longest_streak

__all__ = ["habit_from_dict", "load_habit", "summarize"]


def habit_from_dict(data: dict[str, object], name: str = "habit") -> Habit:
    """
    Builds a Habit from a mapping.
    Expected shape: {name, frequency: <tagged rule record>, completions: [instant, ...]}
    """
    if not isinstance(data, dict):
        raise ValidationError("habit must be a mapping")
    rule = rule_from_dict(data.get("frequency"))
    raw = data.get("completions") or []
    if not isinstance(raw, list):
        raise ValidationError("completions must be a list")
    # YAML hands back naive datetimes for unquoted timestamps
    values = [v.isoformat() if isinstance(v, datetime) and v.tzinfo is None else v for v in raw]
    completions = tuple(coerce_completions(values, rule.timezone))
    return Habit(name=str(data.get("name") or name), rule=rule, completions=completions)


def load_habit(path: str | Path) -> Habit:
    habit_path = Path(path).expanduser()
    if not habit_path.is_file():
        raise NotFoundError(f"no habit file at {habit_path}")
    try:
        data = yaml.safe_load(habit_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ValidationError(f"cannot read {habit_path}: {e}") from e
    return habit_from_dict(data, name=habit_path.stem)


def summarize(habit: Habit, now: datetime) -> HabitSummary:
    streak = current_streak(habit.completions, habit.rule, now)
    if habit.completions:
        next_due: date = next_qualifying_date(max(habit.completions), habit.rule)
    else:
        next_due = local_date(now, habit.rule.timezone)
    return HabitSummary(
        name=habit.name,
        streak=streak,
        longest=longest_streak(habit.completions, habit.rule),
        next_due=next_due,
    )
