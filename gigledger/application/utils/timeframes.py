from __future__ import annotations

from datetime import datetime, tzinfo

from gigledger.application.exceptions import InvalidQueryError

TIMEFRAMES = (
    "all",
    "upcoming",
    "past",
    "thisMonth",
    "nextMonth",
    "lastMonth",
    "thisQuarter",
    "thisYear",
    "lastYear",
)


def start_of_month(moment: datetime, offset: int = 0) -> datetime:
    """First instant of the month `offset` months away from moment's month."""
    month_index = moment.year * 12 + (moment.month - 1) + offset
    year, month = divmod(month_index, 12)
    return moment.replace(year=year, month=month + 1, day=1, hour=0, minute=0, second=0, microsecond=0)


def timeframe_bounds(timeframe: str, now: datetime) -> tuple[datetime | None, datetime | None]:
    """
    Half-open [start, end) range for a named timeframe relative to now.
    None on either side means unbounded.
    """
    if timeframe == "all":
        return (None, None)
    if timeframe == "upcoming":
        return (now, None)
    if timeframe == "past":
        return (None, now)
    if timeframe == "thisMonth":
        return (start_of_month(now), start_of_month(now, 1))
    if timeframe == "nextMonth":
        return (start_of_month(now, 1), start_of_month(now, 2))
    if timeframe == "lastMonth":
        return (start_of_month(now, -1), start_of_month(now))
    if timeframe == "thisQuarter":
        quarter_start = start_of_month(now, -((now.month - 1) % 3))
        return (quarter_start, start_of_month(quarter_start, 3))
    if timeframe == "thisYear":
        year_start = start_of_month(now, -(now.month - 1))
        return (year_start, start_of_month(year_start, 12))
    if timeframe == "lastYear":
        year_start = start_of_month(now, -(now.month - 1))
        return (start_of_month(year_start, -12), year_start)
    raise InvalidQueryError(f"Unknown timeframe '{timeframe}'")


def localize(moment: datetime, tz: tzinfo) -> datetime:
    """Naive timestamps are wall-clock times in the business timezone."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=tz)
    return moment.astimezone(tz)


def in_timeframe(moment: datetime | None, timeframe: str, now: datetime) -> bool:
    start, end = timeframe_bounds(timeframe, now)
    if start is None and end is None:
        return True
    if moment is None:
        return False
    moment = localize(moment, now.tzinfo) if now.tzinfo else moment
    if start is not None and moment < start:
        return False
    if end is not None and moment >= end:
        return False
    return True
