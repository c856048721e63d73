# ============================================================================
# FILE: app/api/v1/dashboard/vendors.py
# Vendor operating hours
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from app.config.database import get_db
from app.core.exceptions import DomainError
from app.schemas.vendor import OperatingHoursResponse, OperatingHoursUpdate
from app.services.vendor.vendor_service import VendorService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/vendors", tags=["dashboard-vendors"])


@router.get("/{vendor_id}/operating-hours", response_model=OperatingHoursResponse)
def get_operating_hours(vendor_id: UUID, db: Session = Depends(get_db)):
    try:
        return VendorService.get_operating_hours(db, vendor_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)


@router.put("/{vendor_id}/operating-hours", response_model=OperatingHoursResponse)
def update_operating_hours(
        vendor_id: UUID,
        payload: OperatingHoursUpdate,
        db: Session = Depends(get_db)
):
    """Replace the weekly operating hours. Weekdays left out are stored as closed."""
    try:
        return VendorService.replace_operating_hours(db, vendor_id, payload.operating_hours)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating operating hours of vendor {vendor_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update operating hours")
