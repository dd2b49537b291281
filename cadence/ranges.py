import logging
from datetime import date, datetime

from dateutil.relativedelta import relativedelta

from .core.errors import InvalidTimeframe
from .core.models import DateRange, Timeframe
from .lib.dates import end_of_day, start_of_day, to_local

__all__ = ["resolve_range"]

logger = logging.getLogger(__name__)

_OFFSETS = {
    Timeframe.DAILY: relativedelta(days=1),
    Timeframe.WEEKLY: relativedelta(weeks=1),
    Timeframe.MONTHLY: relativedelta(months=1),
}


def _coerce_timeframe(timeframe: Timeframe | str) -> Timeframe:
    if isinstance(timeframe, Timeframe):
        return timeframe
    if isinstance(timeframe, str):
        try:
            return Timeframe(timeframe.strip().lower())
        except ValueError:
            raise InvalidTimeframe(timeframe) from None
    raise InvalidTimeframe(timeframe)


def resolve_range(
    timeframe: Timeframe | str, now: datetime | date | int | float | str, timezone: str
) -> DateRange:
    """Inclusive reporting window: start of day one timeframe back, through end of `now`'s day."""
    frame = _coerce_timeframe(timeframe)
    end = end_of_day(to_local(now, timezone))
    start = start_of_day(end - _OFFSETS[frame])
    logger.debug("%s range in %s: %s .. %s", frame.value, timezone, start, end)
    return DateRange(start=start, end=end)
