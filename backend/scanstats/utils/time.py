"""Day boundary helpers for time-window filters."""

from datetime import datetime, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from scanstats.config import settings


def get_timezone(name: Optional[str] = None) -> tzinfo:
    """Resolve the configured statistics time zone."""
    name = name or settings.STATS_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def beginning_of_day(moment: datetime) -> datetime:
    """Return 00:00:00.000 of the moment's calendar day."""
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_day(moment: datetime) -> datetime:
    """Return 23:59:59.999 of the moment's calendar day.

    BSON dates keep millisecond precision, so the last representable
    instant of the day is .999 rather than .999999.
    """
    return moment.replace(hour=23, minute=59, second=59, microsecond=999000)
