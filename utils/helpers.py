"""Date helper functions shared by the stats and schedule services."""

from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from config.settings import settings
from models.schemas.enums import Weekday


def get_zone(tz: Optional[str] = None) -> ZoneInfo:
    """Resolve a timezone name, falling back to the configured default."""
    try:
        return ZoneInfo(tz or settings.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(settings.timezone)


def local_now(tz: Optional[str] = None) -> datetime:
    """Current time as an aware datetime in the member's zone."""
    return datetime.now(get_zone(tz))


def local_today(tz: Optional[str] = None) -> date:
    """Current calendar day in the member's zone."""
    return local_now(tz).date()


def to_local_date(value: Any, tz: Optional[str] = None) -> Optional[date]:
    """Reduce a date, datetime or ISO string to a calendar day.

    Aware datetimes are converted into the member's zone before the time of
    day is dropped; naive datetimes are taken as already local.

    Returns:
        The calendar day, or None when the value cannot be interpreted
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(get_zone(tz))
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            # Try parsing ISO format
            return to_local_date(datetime.fromisoformat(text.replace('Z', '+00:00')), tz)
        except ValueError:
            pass
        try:
            return datetime.strptime(text, "%Y-%m-%d").date()
        except ValueError:
            return None
    return None


def weekday_index(day: date) -> Weekday:
    """Day of week with Sunday = 0 and Saturday = 6."""
    return Weekday(day.isoweekday() % 7)


def start_of_week(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=weekday_index(day))


def start_of_month(day: date) -> date:
    """First day of ``day``'s month."""
    return day.replace(day=1)


def to_storage_datetime(day: date) -> datetime:
    """Midnight datetime for a calendar day, as BSON has no date type."""
    return datetime.combine(day, datetime.min.time())


def to_utc(value: datetime, tz: Optional[str] = None) -> datetime:
    """Aware UTC datetime for storage; naive values are taken as local to ``tz``."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=get_zone(tz))
    return value.astimezone(timezone.utc)
