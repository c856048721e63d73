# ============================================================================
# app/services/appointment/appointment_service.py
# ============================================================================
"""Service for booking and managing appointments"""
from datetime import date, datetime, timedelta
from typing import Dict, FrozenSet, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from app.config.settings import get_settings
from app.core.exceptions import (
    BookingValidationError,
    DomainError,
    InvalidStatusTransitionError,
    ServiceNotFoundError,
    SlotUnavailableError,
    VendorNotFoundError,
)
from app.models.appointment import Appointment, AppointmentStatus, BLOCKING_STATUSES
from app.models.worker import Worker
from app.services.availability.availability_service import (
    MSG_NO_WORKERS,
    MSG_VENDOR_INACTIVE,
    MSG_WORKER_UNAVAILABLE,
)
from app.services.availability.repository import SQLAlchemyAvailabilityRepository
from app.services.availability.schedule_resolver import resolve_effective_schedule
from app.services.availability.slot_generator import has_conflict
from app.utils.time_utils import anchor, aware, get_zone, parse_hhmm, to_utc

logger = logging.getLogger(__name__)


# Vendor-side status changes
ALLOWED_TRANSITIONS: Dict[AppointmentStatus, FrozenSet[AppointmentStatus]] = {
    AppointmentStatus.PENDING: frozenset({
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.REJECTED,
        AppointmentStatus.CANCELLED_BY_VENDOR,
    }),
    AppointmentStatus.CONFIRMED: frozenset({
        AppointmentStatus.COMPLETED,
        AppointmentStatus.NO_SHOW,
        AppointmentStatus.CANCELLED_BY_VENDOR,
    }),
}


class AppointmentService:
    """Handles appointment write operations"""

    @staticmethod
    def _lock_worker(db: Session, worker_id: UUID) -> None:
        # Serializes concurrent bookings for the same worker until commit
        db.query(Worker).filter(Worker.id == worker_id).with_for_update().first()

    @staticmethod
    def _worker_has_conflict(
            db: Session,
            worker_id: UUID,
            start: datetime,
            end: datetime,
            exclude_id: Optional[UUID] = None
    ) -> bool:
        query = db.query(Appointment).filter(
            Appointment.worker_id == worker_id,
            Appointment.start_time < to_utc(end),
            Appointment.end_time > to_utc(start),
            Appointment.status.in_(BLOCKING_STATUSES)
        )
        if exclude_id is not None:
            query = query.filter(Appointment.id != exclude_id)
        return has_conflict(start, end, query.all())

    @staticmethod
    def create_appointment(
            db: Session,
            user_id: str,
            vendor_id: UUID,
            service_id: UUID,
            day: date,
            slot: str,
            worker_id: Optional[UUID] = None,
            notes: Optional[str] = None,
            now: Optional[datetime] = None
    ) -> Appointment:
        """
        Book a PENDING appointment at `slot` on `day`.

        Availability shown to the customer is advisory, so the slot is checked
        again here under a row lock on each candidate worker: the slot must lie
        inside the worker's effective schedule and must not overlap any of the
        worker's blocking appointments. Without a worker_id the first eligible
        worker (by name) who fits is assigned.
        """
        settings = get_settings()
        repo = SQLAlchemyAvailabilityRepository(db)

        service = repo.get_service(service_id)
        if not service or not service.active or service.vendor_id != vendor_id:
            raise ServiceNotFoundError("Service not found")

        vendor = repo.get_vendor(vendor_id)
        if not vendor:
            raise VendorNotFoundError("Vendor not found")
        if not vendor.is_active:
            raise BookingValidationError(MSG_VENDOR_INACTIVE)

        slot_time = parse_hhmm(slot)
        if slot_time is None:
            raise BookingValidationError("Invalid slot format, expected HH:mm")

        tz = get_zone(vendor.timezone)
        now = aware(now) if now else datetime.now(tz)
        start = anchor(day, slot_time, tz)
        end = start + timedelta(minutes=service.duration)

        lead = settings.MIN_BOOKING_LEAD_MINUTES
        if start < now + timedelta(minutes=lead):
            raise BookingValidationError(
                f"Appointments must be booked at least {lead} minutes in advance"
            )

        workers = repo.get_workers(vendor_id, service_id, worker_id)
        if not workers:
            raise BookingValidationError(MSG_WORKER_UNAVAILABLE if worker_id else MSG_NO_WORKERS)

        try:
            for worker in workers:
                AppointmentService._lock_worker(db, worker.id)

                schedule = resolve_effective_schedule(repo, worker.id, vendor, day, tz)
                if schedule is None or start < schedule.open_time or end > schedule.close_time:
                    continue

                if AppointmentService._worker_has_conflict(db, worker.id, start, end):
                    continue

                appointment = Appointment(
                    vendor_id=vendor_id,
                    worker_id=worker.id,
                    service_id=service_id,
                    user_id=user_id,
                    start_time=to_utc(start),
                    end_time=to_utc(end),
                    notes=notes,
                    status=AppointmentStatus.PENDING,
                )
                db.add(appointment)
                db.commit()
                db.refresh(appointment)

                logger.info(
                    f"Booked appointment {appointment.id} for user {user_id} "
                    f"with worker {worker.id} at {start.isoformat()}"
                )
                return appointment
        except Exception:
            db.rollback()
            raise

        db.rollback()
        logger.info(f"Slot {day} {slot} no longer available for service {service_id}")
        raise SlotUnavailableError("The selected slot is no longer available")

    @staticmethod
    def cancel_appointment(db: Session, appointment_id: UUID, user_id: str) -> Optional[Appointment]:
        """Customer cancellation. Returns None if the appointment is not the caller's."""
        appointment = db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.user_id == user_id
        ).first()
        if not appointment:
            return None

        if appointment.status not in BLOCKING_STATUSES:
            raise InvalidStatusTransitionError(
                f"Appointment with status {appointment.status.value} cannot be cancelled"
            )

        appointment.status = AppointmentStatus.CANCELLED_BY_USER
        db.commit()
        db.refresh(appointment)
        logger.info(f"Appointment {appointment_id} cancelled by user {user_id}")
        return appointment

    @staticmethod
    def update_status(
            db: Session,
            vendor_id: UUID,
            appointment_id: UUID,
            new_status: AppointmentStatus
    ) -> Optional[Appointment]:
        """Vendor-side status change (confirm, reject, complete, ...)."""
        appointment = db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.vendor_id == vendor_id
        ).first()
        if not appointment:
            return None

        allowed = ALLOWED_TRANSITIONS.get(appointment.status, frozenset())
        if new_status not in allowed:
            raise InvalidStatusTransitionError(
                f"Cannot change status from {appointment.status.value} to {new_status.value}"
            )

        appointment.status = new_status
        db.commit()
        db.refresh(appointment)
        logger.info(f"Appointment {appointment_id} moved to {new_status.value}")
        return appointment

    @staticmethod
    def assign_worker(
            db: Session,
            vendor_id: UUID,
            appointment_id: UUID,
            worker_id: Optional[UUID]
    ) -> Optional[Appointment]:
        """Assign (or with None, unassign) the worker of an appointment."""
        appointment = db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.vendor_id == vendor_id
        ).first()
        if not appointment:
            return None

        try:
            if worker_id is not None:
                worker = db.get(Worker, worker_id)
                if not worker or worker.vendor_id != vendor_id:
                    raise BookingValidationError("Worker does not exist or does not belong to this vendor")

                if appointment.is_blocking:
                    AppointmentService._lock_worker(db, worker_id)
                    if AppointmentService._worker_has_conflict(
                            db,
                            worker_id,
                            aware(appointment.start_time),
                            aware(appointment.end_time),
                            exclude_id=appointment.id
                    ):
                        raise SlotUnavailableError("Worker already has an appointment at this time")

            appointment.worker_id = worker_id
            db.commit()
        except DomainError:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(f"Appointment {appointment_id} assigned to worker {worker_id}")
        return appointment

    @staticmethod
    def update_duration(
            db: Session,
            vendor_id: UUID,
            appointment_id: UUID,
            duration_minutes: int
    ) -> Optional[Appointment]:
        """
        Change the length of an appointment, keeping its start.

        Lengthening a pending or confirmed appointment is re-checked against
        the assigned worker's other appointments under the worker lock.
        """
        if duration_minutes <= 0:
            raise BookingValidationError("Duration must be a positive number of minutes")

        appointment = db.query(Appointment).filter(
            Appointment.id == appointment_id,
            Appointment.vendor_id == vendor_id
        ).first()
        if not appointment:
            return None

        start = aware(appointment.start_time)
        new_end = start + timedelta(minutes=duration_minutes)

        try:
            if appointment.is_blocking and appointment.worker_id is not None:
                AppointmentService._lock_worker(db, appointment.worker_id)
                if AppointmentService._worker_has_conflict(
                        db,
                        appointment.worker_id,
                        start,
                        new_end,
                        exclude_id=appointment.id
                ):
                    raise SlotUnavailableError("New duration overlaps another appointment of the worker")

            appointment.end_time = to_utc(new_end)
            db.commit()
        except DomainError:
            db.rollback()
            raise

        db.refresh(appointment)
        logger.info(f"Appointment {appointment_id} duration set to {duration_minutes} minutes")
        return appointment
