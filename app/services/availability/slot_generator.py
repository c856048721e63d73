# ===== app/services/availability/slot_generator.py =====
from datetime import datetime, timedelta
from typing import Iterable, List

from app.models.appointment import Appointment, BLOCKING_STATUSES
from app.services.availability.schedule_resolver import EffectiveSchedule
from app.utils.time_utils import aware, format_hhmm

DEFAULT_SLOT_INTERVAL_MINUTES = 15
DEFAULT_LEAD_MINUTES = 60


def overlaps(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open interval overlap: [start_a, end_a) and [start_b, end_b)"""
    return start_a < end_b and start_b < end_a


def has_conflict(slot_start: datetime, slot_end: datetime, appointments: Iterable[Appointment]) -> bool:
    for appointment in appointments:
        if appointment.status not in BLOCKING_STATUSES:
            continue
        if overlaps(slot_start, slot_end, aware(appointment.start_time), aware(appointment.end_time)):
            return True
    return False


def generate_worker_slots(
        schedule: EffectiveSchedule,
        duration_minutes: int,
        appointments: Iterable[Appointment],
        now: datetime,
        *,
        interval_minutes: int = DEFAULT_SLOT_INTERVAL_MINUTES,
        lead_minutes: int = DEFAULT_LEAD_MINUTES
) -> List[str]:
    """Ordered "HH:mm" start times at which one worker can take the service.

    Walks a fixed grid from open to close. A start is dropped when the
    service would run past closing, when it is inside the booking lead
    window, or when it overlaps one of the worker's blocking appointments.
    Every start on a past date is inside the lead window, so past dates
    yield nothing.
    """
    appointments = [a for a in appointments if a.status in BLOCKING_STATUSES]
    duration = timedelta(minutes=duration_minutes)
    step = timedelta(minutes=interval_minutes)
    min_booking_time = aware(now) + timedelta(minutes=lead_minutes)

    slots: List[str] = []
    cursor = schedule.open_time

    while cursor < schedule.close_time:
        slot_end = cursor + duration
        if slot_end > schedule.close_time:
            break

        if cursor >= min_booking_time and not has_conflict(cursor, slot_end, appointments):
            slots.append(format_hhmm(cursor))

        cursor += step

    return slots
