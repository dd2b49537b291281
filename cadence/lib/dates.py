from datetime import date, datetime, time, timedelta, tzinfo

from dateutil import parser as dateutil_parser
from dateutil import tz

from cadence.core.errors import InvalidFormat, InvalidInstant, InvalidTimezone

__all__ = [
    "DATETIME_FORMAT",
    "DATE_FORMAT",
    "TIME_FORMAT",
    "end_of_day",
    "format_instant",
    "get_zone",
    "local_date",
    "parse_instant",
    "start_of_day",
    "to_local",
    "week_start",
    "weekday_index",
]

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name. Empty names are rejected rather than mapped to local time."""
    if not isinstance(name, str) or not name.strip():
        raise InvalidTimezone(name)
    zone = tz.gettz(name.strip())
    if zone is None:
        raise InvalidTimezone(name)
    return zone


def _attach_zone(parsed: datetime, zone: tzinfo) -> datetime:
    if parsed.tzinfo is not None and parsed.utcoffset() is not None:
        return parsed.astimezone(zone)
    return parsed.replace(tzinfo=zone)


def parse_instant(text: str, timezone: str, pattern: str | None = None) -> datetime:
    """Parse text into an aware datetime in `timezone`.

    With a pattern the text must match it exactly (strptime directives); without one
    only ISO 8601 text is accepted. Text without an offset is read as wall-clock
    time in `timezone`; text with an offset is converted into it.
    """
    if not isinstance(text, str) or not text.strip():
        raise InvalidInstant(f"cannot parse instant from {text!r}")
    zone = get_zone(timezone)
    if pattern is not None:
        if not isinstance(pattern, str) or not pattern:
            raise InvalidFormat(f"invalid pattern {pattern!r}")
        try:
            parsed = datetime.strptime(text.strip(), pattern)
        except ValueError as e:
            raise InvalidFormat(f"'{text}' does not match '{pattern}'") from e
        return _attach_zone(parsed, zone)
    try:
        parsed = dateutil_parser.isoparse(text.strip())
    except (ValueError, OverflowError) as e:
        raise InvalidInstant(f"cannot parse instant from '{text}'") from e
    return _attach_zone(parsed, zone)


def to_local(instant: datetime | date | int | float | str, timezone: str) -> datetime:
    """Normalize an instant into an aware datetime in `timezone`.

    Accepts aware datetimes, calendar dates (local midnight), epoch seconds and text.
    Naive datetimes carry no instant and are rejected.
    """
    if instant is None:
        raise InvalidInstant("missing instant")
    if isinstance(instant, str):
        return parse_instant(instant, timezone)
    zone = get_zone(timezone)
    if isinstance(instant, datetime):
        if instant.tzinfo is None or instant.utcoffset() is None:
            raise InvalidInstant(f"naive datetime {instant.isoformat()} has no timezone")
        return instant.astimezone(zone)
    if isinstance(instant, date):
        return datetime.combine(instant, time.min, tzinfo=zone)
    if isinstance(instant, (int, float)) and not isinstance(instant, bool):
        try:
            return datetime.fromtimestamp(instant, tz=zone)
        except (OverflowError, OSError, ValueError) as e:
            raise InvalidInstant(f"timestamp {instant} out of range") from e
    raise InvalidInstant(f"unsupported instant {instant!r}")


def local_date(instant: datetime | date | int | float | str, timezone: str) -> date:
    if isinstance(instant, date) and not isinstance(instant, datetime):
        get_zone(timezone)
        return instant
    return to_local(instant, timezone).date()


def format_instant(instant: datetime | date | int | float | str, pattern: str, timezone: str) -> str:
    if not isinstance(pattern, str) or "%" not in pattern:
        raise InvalidFormat(f"invalid pattern {pattern!r}")
    local = to_local(instant, timezone)
    try:
        return local.strftime(pattern)
    except ValueError as e:
        raise InvalidFormat(f"cannot render {local.isoformat()} with '{pattern}'") from e


def weekday_index(day: date) -> int:
    """Weekday with Sunday=0 .. Saturday=6."""
    return (day.weekday() + 1) % 7


def week_start(day: date) -> date:
    """Sunday that opens the calendar week containing `day`."""
    return day - timedelta(days=weekday_index(day))


def start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=23, minute=59, second=59, microsecond=999999)
