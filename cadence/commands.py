from datetime import datetime

from fncli import cli

from .config import get_timezone, set_timezone
from .core.errors import ValidationError
from .habits import load_habit, summarize
from .lib.dates import DATE_FORMAT, format_instant, get_zone, parse_instant
from .lib.errors import echo
from .lib.format import describe_rule, format_range, format_streak
from .ranges import resolve_range
from .rules import is_qualifying_date, next_qualifying_date


def _now(now: str | None, timezone: str) -> datetime:
    if now:
        return parse_instant(now, timezone)
    return datetime.now(get_zone(timezone))


@cli("cadence", flags={"now": ["-n", "--now"]})
def streak(path: str, now: str | None = None):
    """Show current and longest streak for a habit file"""
    habit = load_habit(path)
    summary = summarize(habit, _now(now, habit.rule.timezone))
    echo(f"{summary.name}: {describe_rule(habit.rule).lower()}")
    echo(f"  streak   {format_streak(summary.streak)}")
    echo(f"  length   {summary.streak.length}")
    echo(f"  active   {'yes' if summary.streak.active else 'no'}")
    echo(f"  longest  {summary.longest}")
    echo(f"  next     {summary.next_due.strftime(DATE_FORMAT)}")


@cli("cadence", name="next", flags={"after": ["-a", "--after"]})
def next_due(path: str, after: str | None = None):
    """Show the next date a habit is due"""
    habit = load_habit(path)
    ref = _now(after, habit.rule.timezone)
    echo(next_qualifying_date(ref, habit.rule).strftime(DATE_FORMAT))


@cli("cadence", flags={"now": ["-n", "--now"]})
def check(path: str, when: str, now: str | None = None):
    """Check whether a date or time counts as an occurrence"""
    habit = load_habit(path)
    tz = habit.rule.timezone
    target = parse_instant(when, tz)
    ok = is_qualifying_date(target, habit.rule, _now(now, tz))
    echo(f"{format_instant(target, DATE_FORMAT, tz)}  {'qualifies' if ok else 'does not qualify'}")


@cli("cadence", name="range", flags={"tz": ["-z", "--tz"], "now": ["-n", "--now"]})
def range_cmd(timeframe: str, tz: str | None = None, now: str | None = None):
    """Show the reporting window for daily, weekly or monthly"""
    zone = tz or get_timezone()
    if not zone:
        raise ValidationError("no timezone: pass --tz or run `cadence tz --set <zone>`")
    echo(format_range(resolve_range(timeframe, _now(now, zone), zone)))


@cli("cadence")
def describe(path: str):
    """Describe a habit's recurrence"""
    habit = load_habit(path)
    echo(f"{habit.name}: {describe_rule(habit.rule)} ({habit.rule.timezone})")


@cli("cadence", name="tz", flags={"zone": ["-s", "--set"]})
def timezone_cmd(zone: str | None = None):
    """Show or set the default timezone"""
    if zone is None:
        echo(get_timezone() or "unset")
        return
    set_timezone(zone)
    echo(f"timezone: {zone}")
