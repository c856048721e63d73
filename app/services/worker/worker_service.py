# app/services/worker/worker_service.py
"""Service for workers, the services they perform and their schedules"""
from typing import List, Optional
from uuid import UUID
import logging

from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import (
    ConflictError,
    InvalidRequestError,
    PermissionDeniedError,
    ServiceNotFoundError,
    VendorNotFoundError,
    WorkerNotFoundError,
)
from app.models.appointment import Appointment, BLOCKING_STATUSES
from app.models.availability import WorkerAvailability, WorkerScheduleOverride
from app.models.service import Service
from app.models.vendor import Vendor
from app.models.worker import Worker
from app.schemas.worker import WorkerCreate, WorkerUpdate
from app.schemas.worker_schedule import WorkerScheduleUpdate
from app.services.availability.repository import SQLAlchemyAvailabilityRepository

logger = logging.getLogger(__name__)


class WorkerService:
    """Handles worker-related operations"""

    @staticmethod
    def list_workers_for_service(db: Session, vendor_id: UUID, service_id: UUID) -> List[Worker]:
        """Workers of an active vendor who perform the given active service, by name"""
        vendor = db.get(Vendor, vendor_id)
        if not vendor or not vendor.is_active:
            raise VendorNotFoundError("Vendor not found or not active")

        service = db.get(Service, service_id)
        if not service or not service.active or service.vendor_id != vendor_id:
            raise ServiceNotFoundError("Service not found, not active, or not offered by this vendor")

        return SQLAlchemyAvailabilityRepository(db).get_workers(vendor_id, service_id)

    @staticmethod
    def list_workers(db: Session, vendor_id: UUID) -> List[Worker]:
        """Every worker of the vendor with their services, by name"""
        return (
            db.query(Worker)
            .options(selectinload(Worker.services))
            .filter(Worker.vendor_id == vendor_id)
            .order_by(Worker.name)
            .all()
        )

    @staticmethod
    def get_worker(db: Session, vendor_id: UUID, worker_id: UUID) -> Worker:
        """A worker of another vendor is reported as missing"""
        worker = db.get(Worker, worker_id)
        if not worker or worker.vendor_id != vendor_id:
            raise WorkerNotFoundError(f"Worker {worker_id} not found")
        return worker

    @staticmethod
    def _vendor_services(db: Session, vendor_id: UUID, service_ids: List[UUID]) -> List[Service]:
        wanted = list(dict.fromkeys(service_ids))
        if not wanted:
            return []
        services = db.query(Service).filter(
            Service.id.in_(wanted),
            Service.vendor_id == vendor_id
        ).all()
        found = {s.id for s in services}
        invalid = [str(sid) for sid in wanted if sid not in found]
        if invalid:
            raise InvalidRequestError(f"Invalid service IDs: {', '.join(invalid)}")
        return services

    @staticmethod
    def _check_unique(
            db: Session,
            vendor_id: UUID,
            user_id: Optional[str],
            email: Optional[str],
            exclude_id: Optional[UUID] = None
    ) -> None:
        if user_id:
            query = db.query(Worker).filter(Worker.vendor_id == vendor_id, Worker.user_id == user_id)
            if exclude_id is not None:
                query = query.filter(Worker.id != exclude_id)
            if query.first():
                raise ConflictError("This user is already a worker of this vendor")
        if email:
            query = db.query(Worker).filter(Worker.email == email)
            if exclude_id is not None:
                query = query.filter(Worker.id != exclude_id)
            if query.first():
                raise ConflictError(f"A worker with email {email} already exists")

    @staticmethod
    def create_worker(db: Session, vendor_id: UUID, payload: WorkerCreate) -> Worker:
        """
        Add a worker to a vendor.

        Without service_ids the worker performs every active service of the
        vendor. A user can be a worker of a given vendor only once.
        """
        if not db.get(Vendor, vendor_id):
            raise VendorNotFoundError(f"Vendor {vendor_id} not found")

        WorkerService._check_unique(db, vendor_id, payload.user_id, payload.email)

        if payload.service_ids is None:
            services = db.query(Service).filter(
                Service.vendor_id == vendor_id,
                Service.active.is_(True)
            ).all()
        else:
            services = WorkerService._vendor_services(db, vendor_id, payload.service_ids)

        worker = Worker(
            vendor_id=vendor_id,
            **payload.model_dump(exclude={"service_ids"})
        )
        worker.services = services
        db.add(worker)
        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error creating worker for vendor {vendor_id}: {e}", exc_info=True)
            db.rollback()
            raise

        db.refresh(worker)
        logger.info(f"Created worker {worker.id} ({worker.name}) for vendor {vendor_id} with {len(services)} services")
        return worker

    @staticmethod
    def update_worker(db: Session, vendor_id: UUID, worker_id: UUID, payload: WorkerUpdate) -> Worker:
        changes = payload.model_dump(exclude_unset=True)
        if not changes:
            raise InvalidRequestError("No fields provided for update")

        worker = WorkerService.get_worker(db, vendor_id, worker_id)
        if changes.get("name") is None:
            changes.pop("name", None)
        WorkerService._check_unique(db, vendor_id, None, changes.get("email"), exclude_id=worker_id)

        for field, value in changes.items():
            setattr(worker, field, value)

        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error updating worker {worker_id}: {e}", exc_info=True)
            db.rollback()
            raise

        db.refresh(worker)
        logger.info(f"Updated worker {worker_id}: {sorted(changes)}")
        return worker

    @staticmethod
    def delete_worker(db: Session, vendor_id: UUID, worker_id: UUID) -> None:
        """Refused while the worker holds pending or confirmed appointments"""
        worker = WorkerService.get_worker(db, vendor_id, worker_id)

        blocking = db.query(Appointment).filter(
            Appointment.worker_id == worker_id,
            Appointment.status.in_(BLOCKING_STATUSES)
        ).count()
        if blocking:
            raise ConflictError(
                f"Worker has {blocking} pending or confirmed appointments. Reassign or cancel them first."
            )

        db.delete(worker)
        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error deleting worker {worker_id}: {e}", exc_info=True)
            db.rollback()
            raise

        logger.info(f"Deleted worker {worker_id} of vendor {vendor_id}")

    @staticmethod
    def replace_worker_services(
            db: Session,
            vendor_id: UUID,
            worker_id: UUID,
            service_ids: List[UUID]
    ) -> Worker:
        """Replace the set of services a worker performs; every id must belong to the vendor"""
        worker = WorkerService.get_worker(db, vendor_id, worker_id)
        services = WorkerService._vendor_services(db, vendor_id, service_ids)

        worker.services = services
        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error replacing services of worker {worker_id}: {e}", exc_info=True)
            db.rollback()
            raise

        db.refresh(worker)
        logger.info(f"Worker {worker_id} now performs {len(services)} services")
        return worker

    @staticmethod
    def get_worker_schedule(db: Session, vendor_id: UUID, worker_id: UUID) -> Worker:
        worker = SQLAlchemyAvailabilityRepository(db).get_worker_with_schedule(worker_id)
        if not worker:
            raise WorkerNotFoundError(f"Worker {worker_id} not found")
        if worker.vendor_id != vendor_id:
            raise PermissionDeniedError(f"Worker {worker_id} does not belong to vendor {vendor_id}")
        return worker

    @staticmethod
    def replace_worker_schedule(
            db: Session,
            vendor_id: UUID,
            worker_id: UUID,
            payload: WorkerScheduleUpdate
    ) -> Worker:
        """
        Replace the weekly template and/or the date overrides of a worker.

        A list present in the payload replaces every stored row of that kind
        (an empty list clears them); an omitted list leaves them untouched.
        Both replacements happen in one transaction.
        """
        worker = WorkerService.get_worker_schedule(db, vendor_id, worker_id)

        try:
            if payload.availabilities is not None:
                db.query(WorkerAvailability).filter(
                    WorkerAvailability.worker_id == worker_id
                ).delete(synchronize_session=False)
                db.add_all([
                    WorkerAvailability(
                        worker_id=worker_id,
                        day_of_week=item.day_of_week,
                        start_time=item.start_time,
                        end_time=item.end_time,
                        is_available=item.is_available,
                    )
                    for item in payload.availabilities
                ])

            if payload.overrides is not None:
                db.query(WorkerScheduleOverride).filter(
                    WorkerScheduleOverride.worker_id == worker_id
                ).delete(synchronize_session=False)
                db.add_all([
                    WorkerScheduleOverride(
                        worker_id=worker_id,
                        date=item.override_date,
                        start_time=None if item.is_day_off else item.start_time,
                        end_time=None if item.is_day_off else item.end_time,
                        is_day_off=item.is_day_off,
                        notes=item.notes,
                    )
                    for item in payload.overrides
                ])

            db.commit()
        except Exception as e:
            logger.error(f"Error replacing schedule of worker {worker_id}: {e}", exc_info=True)
            db.rollback()
            raise

        db.expire(worker)
        logger.info(
            f"Updated schedule of worker {worker_id} "
            f"(availabilities={payload.availabilities is not None}, overrides={payload.overrides is not None})"
        )
        return WorkerService.get_worker_schedule(db, vendor_id, worker_id)


def schedule_to_response(worker: Worker) -> dict:
    """Plain dict for WorkerScheduleResponse, rows ordered by day / date"""
    return {
        "worker_id": worker.id,
        "name": worker.name,
        "availabilities": sorted(worker.availabilities, key=lambda a: a.day_of_week),
        "overrides": sorted(worker.schedule_overrides, key=lambda o: o.date),
    }

