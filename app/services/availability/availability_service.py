# ===== app/services/availability/availability_service.py =====
from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta
from typing import Dict, List, Optional
from uuid import UUID
import enum
import logging

from app.config.settings import get_settings
from app.services.availability.repository import AvailabilityRepository
from app.services.availability.schedule_resolver import resolve_effective_schedule
from app.services.availability.slot_generator import generate_worker_slots
from app.utils.time_utils import get_zone

logger = logging.getLogger(__name__)

MSG_VENDOR_INACTIVE = "Vendor is not currently accepting bookings."
MSG_WORKER_UNAVAILABLE = "Selected worker does not exist or does not offer this service."
MSG_NO_WORKERS = "No workers offer this service."
MSG_NO_SLOTS = "No available slots for the selected date."


class AvailabilityStatus(str, enum.Enum):
    OK = "ok"
    SERVICE_NOT_FOUND = "service_not_found"
    VENDOR_NOT_FOUND = "vendor_not_found"


@dataclass
class AvailableWorker:
    id: UUID
    name: str


@dataclass
class Slot:
    time: str
    available_workers: List[AvailableWorker] = field(default_factory=list)


@dataclass
class AvailabilityResult:
    status: AvailabilityStatus = AvailabilityStatus.OK
    slots: List[Slot] = field(default_factory=list)
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status == AvailabilityStatus.OK


class AvailabilityService:
    """Computes bookable slots for a (service, vendor, date, worker?) query"""

    @staticmethod
    def get_available_slots(
            repo: AvailabilityRepository,
            service_id: UUID,
            vendor_id: UUID,
            day: date,
            worker_id: Optional[UUID] = None,
            now: Optional[datetime] = None,
            interval_minutes: Optional[int] = None,
            lead_minutes: Optional[int] = None
    ) -> AvailabilityResult:
        """
        Merge per-worker availability into a vendor-level slot list.

        Missing/inactive/foreign services and unknown vendors are reported
        through the result status; every other "nothing to book" case is an
        OK result with an empty slot list and a message.
        """
        settings = get_settings()
        interval_minutes = interval_minutes or settings.SLOT_INTERVAL_MINUTES
        if lead_minutes is None:
            lead_minutes = settings.MIN_BOOKING_LEAD_MINUTES

        if isinstance(day, datetime):
            day = day.date()

        service = repo.get_service(service_id)
        if not service or not service.active or service.vendor_id != vendor_id:
            logger.info(f"Service {service_id} not found for vendor {vendor_id}")
            return AvailabilityResult(status=AvailabilityStatus.SERVICE_NOT_FOUND)

        vendor = repo.get_vendor(vendor_id)
        if not vendor:
            logger.info(f"Vendor {vendor_id} not found")
            return AvailabilityResult(status=AvailabilityStatus.VENDOR_NOT_FOUND)

        if not vendor.is_active:
            return AvailabilityResult(message=MSG_VENDOR_INACTIVE)

        workers = repo.get_workers(vendor_id, service_id, worker_id)
        if not workers:
            return AvailabilityResult(
                message=MSG_WORKER_UNAVAILABLE if worker_id else MSG_NO_WORKERS
            )

        tz = get_zone(vendor.timezone)
        now = now or datetime.now(tz)
        day_start = datetime.combine(day, time.min, tzinfo=tz)
        day_end = day_start + timedelta(days=1)

        # One query for every eligible worker, then split per worker
        appointments_by_worker: Dict[UUID, list] = defaultdict(list)
        for appointment in repo.get_blocking_appointments(
                vendor_id, [w.id for w in workers], day_start, day_end
        ):
            appointments_by_worker[appointment.worker_id].append(appointment)

        merged: Dict[str, Slot] = {}
        for worker in workers:
            schedule = resolve_effective_schedule(repo, worker.id, vendor, day, tz)
            if schedule is None:
                logger.debug(f"Worker {worker.id} is off on {day}")
                continue

            times = generate_worker_slots(
                schedule,
                service.duration,
                appointments_by_worker.get(worker.id, []),
                now,
                interval_minutes=interval_minutes,
                lead_minutes=lead_minutes,
            )
            for slot_time in times:
                slot = merged.setdefault(slot_time, Slot(time=slot_time))
                slot.available_workers.append(AvailableWorker(id=worker.id, name=worker.name))

        # Zero-padded 24h strings sort chronologically
        slots = [merged[key] for key in sorted(merged)]
        logger.info(
            f"Computed {len(slots)} slots for service {service_id} at vendor {vendor_id} on {day}"
        )

        if not slots:
            return AvailabilityResult(message=MSG_NO_SLOTS)

        return AvailabilityResult(slots=slots)
