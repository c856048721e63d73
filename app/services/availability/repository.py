# ===== app/services/availability/repository.py =====
"""
Read-only data access used by the availability engine.

The engine only talks to an AvailabilityRepository, so it can be driven by
the SQLAlchemy implementation below or by in-memory fixtures in tests.
"""
from datetime import date, datetime
from typing import List, Optional, Protocol, Sequence
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from app.models.appointment import Appointment, BLOCKING_STATUSES
from app.models.availability import WorkerAvailability, WorkerScheduleOverride
from app.models.service import Service
from app.models.vendor import Vendor
from app.models.worker import Worker
from app.utils.time_utils import to_utc


class AvailabilityRepository(Protocol):
    def get_service(self, service_id: UUID) -> Optional[Service]: ...

    def get_vendor(self, vendor_id: UUID) -> Optional[Vendor]: ...

    def get_workers(
            self,
            vendor_id: UUID,
            service_id: UUID,
            worker_id: Optional[UUID] = None
    ) -> List[Worker]: ...

    def get_worker_override(self, worker_id: UUID, day: date) -> Optional[WorkerScheduleOverride]: ...

    def get_worker_weekly_availability(self, worker_id: UUID, day_of_week: int) -> Optional[WorkerAvailability]: ...

    def get_blocking_appointments(
            self,
            vendor_id: UUID,
            worker_ids: Sequence[UUID],
            range_start: datetime,
            range_end: datetime
    ) -> List[Appointment]: ...


class SQLAlchemyAvailabilityRepository:
    """AvailabilityRepository backed by a SQLAlchemy session"""

    def __init__(self, db: Session):
        self.db = db

    def get_service(self, service_id: UUID) -> Optional[Service]:
        return self.db.get(Service, service_id)

    def get_vendor(self, vendor_id: UUID) -> Optional[Vendor]:
        return self.db.get(Vendor, vendor_id)

    def get_workers(
            self,
            vendor_id: UUID,
            service_id: UUID,
            worker_id: Optional[UUID] = None
    ) -> List[Worker]:
        """Workers of the vendor that perform the (active) service, by name.

        Passing worker_id narrows the result to that single worker, which is
        empty when the worker is unknown, belongs elsewhere or lacks the service.
        """
        query = (
            self.db.query(Worker)
            .join(Worker.services)
            .filter(
                Worker.vendor_id == vendor_id,
                Service.id == service_id,
                Service.active == True,  # noqa: E712
            )
        )
        if worker_id is not None:
            query = query.filter(Worker.id == worker_id)

        return query.order_by(Worker.name.asc(), Worker.id.asc()).all()

    def get_worker_override(self, worker_id: UUID, day: date) -> Optional[WorkerScheduleOverride]:
        return self.db.query(WorkerScheduleOverride).filter(
            WorkerScheduleOverride.worker_id == worker_id,
            WorkerScheduleOverride.date == day
        ).first()

    def get_worker_weekly_availability(self, worker_id: UUID, day_of_week: int) -> Optional[WorkerAvailability]:
        return self.db.query(WorkerAvailability).filter(
            WorkerAvailability.worker_id == worker_id,
            WorkerAvailability.day_of_week == day_of_week
        ).first()

    def get_blocking_appointments(
            self,
            vendor_id: UUID,
            worker_ids: Sequence[UUID],
            range_start: datetime,
            range_end: datetime
    ) -> List[Appointment]:
        if not worker_ids:
            return []

        return self.db.query(Appointment).filter(
            Appointment.vendor_id == vendor_id,
            Appointment.worker_id.in_(list(worker_ids)),
            Appointment.start_time < to_utc(range_end),
            Appointment.end_time > to_utc(range_start),
            Appointment.status.in_(BLOCKING_STATUSES)
        ).order_by(Appointment.start_time.asc()).all()

    def get_worker_with_schedule(self, worker_id: UUID) -> Optional[Worker]:
        return (
            self.db.query(Worker)
            .options(selectinload(Worker.availabilities), selectinload(Worker.schedule_overrides))
            .filter(Worker.id == worker_id)
            .first()
        )
