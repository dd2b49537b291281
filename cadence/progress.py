import math
from collections.abc import Iterable
from datetime import date, timedelta
from typing import assert_never

from .core.models import Custom, Daily, FrequencyRule, Weekly
from .lib.converters import coerce_completions
from .lib.dates import local_date, weekday_index

__all__ = ["completion_rate", "expected_completions"]


def expected_completions(rule: FrequencyRule, start: date, end: date) -> int:
    """How many occurrences the rule asks for between two local dates, inclusive."""
    if end < start:
        return 0
    span = (end - start).days
    if isinstance(rule, Daily):
        return sum(1 for i in range(span + 1) if weekday_index(start + timedelta(days=i)) in rule.days)
    weeks = max(1, math.ceil(span / 7))
    if isinstance(rule, Weekly):
        return weeks * len(rule.days)
    if isinstance(rule, Custom):
        return weeks * len(rule.schedule.days)
    assert_never(rule)


def completion_rate(
    completions: Iterable[object], rule: FrequencyRule, since: object, now: object
) -> float:
    """Percentage of expected occurrences completed in [since, now], rounded to 2 places."""
    start = local_date(since, rule.timezone)
    end = local_date(now, rule.timezone)
    expected = expected_completions(rule, start, end)
    if expected == 0:
        return 0.0
    done = [c for c in coerce_completions(completions, rule.timezone) if start <= c.date() <= end]
    return round(len(done) / expected * 100, 2)
