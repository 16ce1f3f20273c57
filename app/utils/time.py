"""Time utilities (local calendar)."""

from datetime import date, datetime, time, tzinfo
from zoneinfo import ZoneInfo

from app.config import settings


def local_tz() -> ZoneInfo:
    """Timezone whose calendar days are used for bucketing."""
    return ZoneInfo(settings.TIMEZONE)


def now_local_naive() -> datetime:
    """
    Current local time, returned as naive datetime for DB comparison.
    """
    return datetime.now(local_tz()).replace(tzinfo=None)


def to_local_naive(dt: datetime, tz: tzinfo | None = None) -> datetime:
    """
    Convert an aware datetime to naive local time.

    Naive values are assumed to already be local (DB timestamps are stored
    naive) and are returned unchanged.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(tz or local_tz()).replace(tzinfo=None)


def to_local_date(dt: datetime | date, tz: tzinfo | None = None) -> date:
    """Truncate a timestamp to its local calendar date."""
    if not isinstance(dt, datetime):
        return dt
    return to_local_naive(dt, tz).date()


def start_of_day(value: datetime | date) -> datetime:
    """Midnight at the start of the given calendar day (naive)."""
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.min)


def end_of_day(value: datetime | date) -> datetime:
    """Last representable instant of the given calendar day (naive)."""
    day = value.date() if isinstance(value, datetime) else value
    return datetime.combine(day, time.max)


