# app/utils/time_utils.py
"""Helpers for HH:mm strings, calendar-date anchoring and vendor timezones"""
from datetime import date, datetime, time, timezone
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError
import logging

from app.config.settings import get_settings

logger = logging.getLogger(__name__)

TIME_FORMAT = "%H:%M"

# Keys of Vendor.operating_hours, indexed by date.weekday()
WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def parse_hhmm(value: Optional[str]) -> Optional[time]:
    """Parse an "HH:mm" string. Returns None for missing or malformed input."""
    if not value:
        return None
    try:
        return datetime.strptime(value.strip(), TIME_FORMAT).time()
    except (ValueError, AttributeError):
        return None


def format_hhmm(value: datetime) -> str:
    return value.strftime(TIME_FORMAT)


def anchor(day: date, t: time, tz: ZoneInfo) -> datetime:
    """Midnight of `day` plus hour:minute, zero seconds, in the vendor zone."""
    return datetime(day.year, day.month, day.day, t.hour, t.minute, tzinfo=tz)


def weekday_name(day: date) -> str:
    return WEEKDAY_NAMES[day.weekday()]


def sunday_based_weekday(day: date) -> int:
    """0=Sunday .. 6=Saturday, the convention of worker weekly templates"""
    return (day.weekday() + 1) % 7


def get_zone(name: Optional[str]) -> ZoneInfo:
    """Resolve a vendor timezone name, falling back to the configured default."""
    fallback = get_settings().DEFAULT_TIMEZONE
    try:
        return ZoneInfo(name or fallback)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {name!r}, using {fallback}")
        return ZoneInfo(fallback)


def aware(dt: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes (SQLite round-trips) as UTC."""
    if dt is None:
        return None
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)


def to_utc(dt: datetime) -> datetime:
    return aware(dt).astimezone(timezone.utc)
