# ============================================================================
# app/services/catalog/catalog_service.py
# ============================================================================
"""Service for the vendor's service catalog"""
from typing import List
from uuid import UUID
import logging

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, ServiceNotFoundError, VendorNotFoundError
from app.models.appointment import Appointment
from app.models.service import Service
from app.models.vendor import Vendor
from app.schemas.service import ServiceCreate, ServiceUpdate

logger = logging.getLogger(__name__)


class CatalogService:
    """Create, read, update and delete the services a vendor offers"""

    @staticmethod
    def list_services(db: Session, vendor_id: UUID, include_inactive: bool = True) -> List[Service]:
        query = db.query(Service).filter(Service.vendor_id == vendor_id)
        if not include_inactive:
            query = query.filter(Service.active.is_(True))
        return query.order_by(Service.name).all()

    @staticmethod
    def get_service(db: Session, vendor_id: UUID, service_id: UUID) -> Service:
        """A service of another vendor is reported as missing"""
        service = db.get(Service, service_id)
        if not service or service.vendor_id != vendor_id:
            raise ServiceNotFoundError(f"Service {service_id} not found")
        return service

    @staticmethod
    def create_service(db: Session, vendor_id: UUID, payload: ServiceCreate) -> Service:
        if not db.get(Vendor, vendor_id):
            raise VendorNotFoundError(f"Vendor {vendor_id} not found")

        service = Service(vendor_id=vendor_id, **payload.model_dump())
        db.add(service)
        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error creating service for vendor {vendor_id}: {e}", exc_info=True)
            db.rollback()
            raise

        db.refresh(service)
        logger.info(f"Created service {service.id} ({service.name}) for vendor {vendor_id}")
        return service

    @staticmethod
    def update_service(db: Session, vendor_id: UUID, service_id: UUID, payload: ServiceUpdate) -> Service:
        """
        Write the fields present in the body.

        Existing appointments keep their stored end time when the duration
        changes; only new bookings and slot queries use the new length.
        """
        service = CatalogService.get_service(db, vendor_id, service_id)

        changes = payload.model_dump(exclude_unset=True)
        for field, value in changes.items():
            if value is None and field in ("name", "duration", "active"):
                continue
            setattr(service, field, value)

        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error updating service {service_id}: {e}", exc_info=True)
            db.rollback()
            raise

        db.refresh(service)
        logger.info(f"Updated service {service_id}: {sorted(changes)}")
        return service

    @staticmethod
    def delete_service(db: Session, vendor_id: UUID, service_id: UUID, hard_delete: bool = False) -> dict:
        """
        Deactivate a service, or remove it for good with hard_delete.

        A deactivated service stops appearing in slot queries and bookings.
        Hard deletion is refused while any appointment references the service.
        """
        service = CatalogService.get_service(db, vendor_id, service_id)

        if not hard_delete:
            service.active = False
            db.commit()
            logger.info(f"Deactivated service {service_id}")
            return {"success": True, "message": "Service deactivated"}

        appointment_count = db.query(Appointment).filter(Appointment.service_id == service_id).count()
        if appointment_count:
            raise ConflictError(
                f"Cannot delete service with {appointment_count} appointments. Deactivate it instead."
            )

        db.delete(service)
        try:
            db.commit()
        except Exception as e:
            logger.error(f"Error deleting service {service_id}: {e}", exc_info=True)
            db.rollback()
            raise

        logger.info(f"Deleted service {service_id}")
        return {"success": True, "message": "Service permanently deleted"}
