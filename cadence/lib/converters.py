from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

from cadence.core.errors import InvalidFrequencyRule, InvalidInstant
from cadence.core.models import ALL_DAYS, Custom, CustomSchedule, Daily, FrequencyRule, Weekly
from cadence.lib.dates import to_local

__all__ = ["coerce_completions", "rule_from_dict", "rule_to_dict"]


def _schedule_from_dict(data: object) -> CustomSchedule:
    if not isinstance(data, Mapping):
        raise InvalidFrequencyRule("customSchedule must be a mapping with time and days")
    return CustomSchedule(time=data.get("time"), days=data.get("days") or ())


def rule_from_dict(data: Mapping[str, Any]) -> FrequencyRule:
    """
    Builds a FrequencyRule from its tagged record.
    Expected shape: {kind, value, days, customSchedule: {time, days} | None, timezone}
    """
    if not isinstance(data, Mapping):
        raise InvalidFrequencyRule(f"frequency must be a mapping, got {type(data).__name__}")
    raw_kind = data.get("kind", data.get("type"))
    if not isinstance(raw_kind, str):
        raise InvalidFrequencyRule("frequency kind is required")
    kind = raw_kind.strip().lower()
    schedule = data.get("customSchedule", data.get("custom_schedule"))
    value = data.get("value", 1)
    timezone = data.get("timezone", "UTC")
    days = data.get("days")

    if kind == Custom.kind:
        if schedule is None:
            raise InvalidFrequencyRule("custom rule requires a customSchedule")
        return Custom(
            schedule=_schedule_from_dict(schedule),
            value=value,
            days=days or (),
            timezone=timezone,
        )
    if schedule is not None:
        raise InvalidFrequencyRule(f"customSchedule is only allowed on custom rules, not '{kind}'")
    if kind == Daily.kind:
        # stored daily records often carry an empty list
        return Daily(value=value, days=days or ALL_DAYS, timezone=timezone)
    if kind == Weekly.kind:
        if days is None:
            raise InvalidFrequencyRule("weekly rule requires days")
        return Weekly(days=days, value=value, timezone=timezone)
    raise InvalidFrequencyRule(f"unknown frequency kind '{raw_kind}'")


def rule_to_dict(rule: FrequencyRule) -> dict[str, Any]:
    schedule = None
    if isinstance(rule, Custom) and rule.schedule is not None:
        schedule = {"time": rule.schedule.time, "days": sorted(rule.schedule.days)}
    return {
        "kind": rule.kind,
        "value": rule.value,
        "days": sorted(rule.days),
        "customSchedule": schedule,
        "timezone": rule.timezone,
    }


def coerce_completions(values: Iterable[object], timezone: str) -> list[datetime]:
    """Normalize completion instants into aware datetimes in `timezone`. Order is preserved."""
    if values is None or isinstance(values, (str, bytes)):
        raise InvalidInstant("completions must be a list of instants")
    return [to_local(value, timezone) for value in values]
