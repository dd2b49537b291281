import logging
from collections.abc import Collection
from datetime import date, datetime, timedelta
from typing import assert_never

from .core.errors import CadenceError, InvalidFrequencyRule
from .core.models import Custom, Daily, FrequencyRule, Weekly
from .lib.dates import TIME_FORMAT, format_instant, local_date, week_start, weekday_index

__all__ = ["is_qualifying_date", "is_within_window", "next_qualifying_date"]

logger = logging.getLogger(__name__)

Instant = datetime | date | int | float | str


def _qualifies(value: Instant, rule: FrequencyRule, now: Instant) -> bool:
    if isinstance(rule, Daily):
        target = local_date(value, rule.timezone)
        today = local_date(now, rule.timezone)
        return target in (today, today - timedelta(days=1))
    if isinstance(rule, Weekly):
        target = local_date(value, rule.timezone)
        today = local_date(now, rule.timezone)
        return week_start(target) == week_start(today) and weekday_index(target) in rule.days
    if isinstance(rule, Custom):
        target = local_date(value, rule.timezone)
        at = format_instant(value, TIME_FORMAT, rule.timezone)
        return weekday_index(target) in rule.schedule.days and at == rule.schedule.time
    return False


def is_qualifying_date(value: Instant, rule: FrequencyRule, now: Instant) -> bool:
    """True when `value` is an occurrence of `rule` as seen from `now`.

    Daily: today or yesterday (one-day grace). Weekly: same Sunday-start week as
    `now` on one of the rule's weekdays. Custom: scheduled weekday at the exact
    scheduled HH:MM. Never raises; anything it cannot evaluate is not qualifying.
    """
    try:
        return _qualifies(value, rule, now)
    except (CadenceError, TypeError, ValueError, AttributeError) as e:
        logger.debug("qualification check failed for %r: %s", value, e)
        return False


def is_within_window(value: Instant, rule: FrequencyRule, now: Instant) -> bool:
    """Whether a completion at `value` keeps a streak alive at `now`."""
    return is_qualifying_date(value, rule, now)


def _next_weekday(ref: date, days: Collection[int]) -> date:
    if not days:
        raise InvalidFrequencyRule("rule has no weekdays to schedule")
    current = weekday_index(ref)
    later = [day for day in sorted(days) if day > current]
    if later:
        return ref + timedelta(days=later[0] - current)
    return ref + timedelta(days=7 - current + min(days))


def next_qualifying_date(after: Instant, rule: FrequencyRule) -> date:
    """Next calendar date after `after` that the rule schedules.

    Weekly and Custom pick the smallest remaining weekday this week, else the
    smallest weekday of the following week. Custom ignores the time of day.
    """
    ref = local_date(after, rule.timezone)
    if isinstance(rule, Daily):
        return ref + timedelta(days=1)
    if isinstance(rule, Weekly):
        return _next_weekday(ref, rule.days)
    if isinstance(rule, Custom):
        return _next_weekday(ref, rule.schedule.days)
    assert_never(rule)
