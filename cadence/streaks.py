import logging
from collections.abc import Iterable
from datetime import date, datetime
from itertools import pairwise
from typing import assert_never

from .core.models import Custom, Daily, FrequencyRule, Streak, StreakRun, Weekly
from .lib.converters import coerce_completions
from .lib.dates import local_date, to_local, week_start
from .rules import is_within_window, next_qualifying_date

__all__ = ["current_streak", "is_consecutive", "longest_streak", "streak_history"]

logger = logging.getLogger(__name__)


def is_consecutive(current: datetime, older: datetime, rule: FrequencyRule) -> bool:
    """Whether `older` is the occurrence immediately before `current` under the rule."""
    cur = local_date(current, rule.timezone)
    prev = local_date(older, rule.timezone)
    if isinstance(rule, Daily):
        return (cur - prev).days == 1
    if isinstance(rule, Weekly):
        return (week_start(cur) - week_start(prev)).days == 7
    if isinstance(rule, Custom):
        return cur == next_qualifying_date(prev, rule)
    assert_never(rule)


def current_streak(completions: Iterable[object], rule: FrequencyRule, now: object) -> Streak:
    """Length of the unbroken run ending at the newest completion, and whether it is still alive."""
    to_local(now, rule.timezone)
    ordered = sorted(coerce_completions(completions, rule.timezone), reverse=True)
    if not ordered:
        return Streak(length=0, active=False)

    streak = 1
    for current, older in pairwise(ordered):
        if not is_consecutive(current, older, rule):
            break
        streak += 1

    active = is_within_window(ordered[0], rule, now)
    logger.debug(
        "%s streak: %d over %d completions (active=%s)", rule.kind, streak, len(ordered), active
    )
    return Streak(length=streak, active=active)


def streak_history(completions: Iterable[object], rule: FrequencyRule) -> list[StreakRun]:
    """Split the full history into maximal consecutive runs, oldest first."""
    ordered = sorted(coerce_completions(completions, rule.timezone))
    if not ordered:
        return []

    runs: list[StreakRun] = []
    start: date = ordered[0].date()
    length = 1
    for older, newer in pairwise(ordered):
        if is_consecutive(newer, older, rule):
            length += 1
            continue
        runs.append(StreakRun(start=start, end=older.date(), length=length))
        start = newer.date()
        length = 1
    runs.append(StreakRun(start=start, end=ordered[-1].date(), length=length))
    return runs


def longest_streak(completions: Iterable[object], rule: FrequencyRule) -> int:
    return max((run.length for run in streak_history(completions, rule)), default=0)
