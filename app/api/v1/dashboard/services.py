# ============================================================================
# FILE: app/api/v1/dashboard/services.py
# Service catalog management
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List
from uuid import UUID
import logging

from app.config.database import get_db
from app.core.exceptions import DomainError
from app.schemas.service import ServiceCreate, ServiceResponse, ServiceUpdate
from app.services.catalog.catalog_service import CatalogService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/vendors/{vendor_id}/services", tags=["dashboard-services"])


@router.get("", response_model=List[ServiceResponse])
def list_services(
        vendor_id: UUID,
        include_inactive: bool = Query(True, description="Include deactivated services"),
        db: Session = Depends(get_db)
):
    """Get all services of a vendor, by name."""
    return CatalogService.list_services(db, vendor_id, include_inactive=include_inactive)


@router.post("", response_model=ServiceResponse, status_code=201)
def create_service(
        vendor_id: UUID,
        payload: ServiceCreate,
        db: Session = Depends(get_db)
):
    """
    Create a new service.

    - **name**: shown to customers
    - **duration**: length in minutes, used as the slot length
    - **price**: optional
    """
    try:
        return CatalogService.create_service(db, vendor_id, payload)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error creating service: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create service")


@router.get("/{service_id}", response_model=ServiceResponse)
def get_service(
        vendor_id: UUID,
        service_id: UUID,
        db: Session = Depends(get_db)
):
    try:
        return CatalogService.get_service(db, vendor_id, service_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{service_id}", response_model=ServiceResponse)
def update_service(
        vendor_id: UUID,
        service_id: UUID,
        payload: ServiceUpdate,
        db: Session = Depends(get_db)
):
    """Update an existing service. Only fields present in the body change."""
    try:
        return CatalogService.update_service(db, vendor_id, service_id, payload)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating service {service_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update service")


@router.delete("/{service_id}")
def delete_service(
        vendor_id: UUID,
        service_id: UUID,
        hard_delete: bool = False,
        db: Session = Depends(get_db)
):
    """
    Delete a service

    Args:
        service_id: Service to delete
        hard_delete: If True, permanently delete (refused while appointments reference it).
            If False, deactivate it
    """
    try:
        return CatalogService.delete_service(db, vendor_id, service_id, hard_delete=hard_delete)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error deleting service {service_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to delete service")
