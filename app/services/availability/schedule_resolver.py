# ===== app/services/availability/schedule_resolver.py =====
"""
Resolve the working window of one worker on one calendar date.

Resolution order, first applicable source wins:
1. date-specific override (a day off, or missing/malformed times, means off)
2. weekly template for that day of week (malformed times fall through to 3)
3. vendor operating hours for that weekday
"""
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from uuid import UUID
from zoneinfo import ZoneInfo
import logging

from app.models.vendor import Vendor
from app.services.availability.repository import AvailabilityRepository
from app.utils.time_utils import anchor, parse_hhmm, sunday_based_weekday, weekday_name

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EffectiveSchedule:
    open_time: datetime
    close_time: datetime


def _from_override(repo: AvailabilityRepository, worker_id: UUID, day: date, tz: ZoneInfo):
    """Returns (found, schedule)."""
    override = repo.get_worker_override(worker_id, day)
    if override is None:
        return False, None

    if override.is_day_off:
        logger.debug(f"Worker {worker_id} has a day off on {day}")
        return True, None

    start = parse_hhmm(override.start_time)
    end = parse_hhmm(override.end_time)
    if start is None or end is None:
        if override.start_time or override.end_time:
            logger.warning(
                f"Unparseable override times for worker {worker_id} on {day}: "
                f"{override.start_time!r}-{override.end_time!r}, treating as day off"
            )
        return True, None

    return True, EffectiveSchedule(anchor(day, start, tz), anchor(day, end, tz))


def _from_weekly_template(repo: AvailabilityRepository, worker_id: UUID, day: date, tz: ZoneInfo):
    """Returns (decided, schedule). Malformed times leave the day undecided."""
    template = repo.get_worker_weekly_availability(worker_id, sunday_based_weekday(day))
    if template is None:
        return False, None

    if not template.is_available or not template.start_time or not template.end_time:
        return True, None

    start = parse_hhmm(template.start_time)
    end = parse_hhmm(template.end_time)
    if start is None or end is None:
        logger.warning(
            f"Unparseable weekly template for worker {worker_id} "
            f"(day {template.day_of_week}): {template.start_time!r}-{template.end_time!r}, "
            f"falling back to vendor hours"
        )
        return False, None

    return True, EffectiveSchedule(anchor(day, start, tz), anchor(day, end, tz))


def vendor_hours_for(vendor: Vendor, day: date, tz: ZoneInfo) -> Optional[EffectiveSchedule]:
    hours = (vendor.operating_hours or {}).get(weekday_name(day))
    if not isinstance(hours, dict):
        return None

    if hours.get("isClosed") or not hours.get("open") or not hours.get("close"):
        return None

    open_t = parse_hhmm(hours.get("open"))
    close_t = parse_hhmm(hours.get("close"))
    if open_t is None or close_t is None:
        logger.warning(
            f"Unparseable operating hours for vendor {vendor.id} on {weekday_name(day)}: {hours}"
        )
        return None

    return EffectiveSchedule(anchor(day, open_t, tz), anchor(day, close_t, tz))


def resolve_effective_schedule(
        repo: AvailabilityRepository,
        worker_id: UUID,
        vendor: Vendor,
        day: date,
        tz: ZoneInfo
) -> Optional[EffectiveSchedule]:
    """Working window of the worker on `day`, or None when the worker is off."""
    found, schedule = _from_override(repo, worker_id, day, tz)
    if found:
        return schedule

    decided, schedule = _from_weekly_template(repo, worker_id, day, tz)
    if decided:
        return schedule

    return vendor_hours_for(vendor, day, tz)
