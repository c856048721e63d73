# ============================================================================
# FILE: app/api/v1/public/availability.py
# Bookable slots for a service - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID
import logging

from app.config.database import get_db
from app.schemas.availability import AvailabilityResponse
from app.services.availability.availability_service import AvailabilityService, AvailabilityStatus
from app.services.availability.repository import SQLAlchemyAvailabilityRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["public-availability"])


def _parse_uuid(value: Optional[str], name: str) -> UUID:
    if not value:
        raise HTTPException(status_code=400, detail=f"Missing required parameter: {name}")
    try:
        return UUID(value)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {name}")


def _parse_date(value: Optional[str]) -> date:
    if not value:
        raise HTTPException(status_code=400, detail="Missing required parameter: date")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date format, expected YYYY-MM-DD")


@router.get("/available", response_model=AvailabilityResponse, response_model_exclude_none=True)
def get_available_slots(
        service_id: Optional[str] = Query(None, alias="serviceId"),
        vendor_id: Optional[str] = Query(None, alias="vendorId"),
        day: Optional[str] = Query(None, alias="date", description="Calendar day (YYYY-MM-DD)"),
        worker_id: Optional[str] = Query(None, alias="workerId"),
        db: Session = Depends(get_db)
):
    """
    Available start times for a service at a vendor on a date.
    Each slot lists the workers free to take it.
    """
    parsed_service_id = _parse_uuid(service_id, "serviceId")
    parsed_vendor_id = _parse_uuid(vendor_id, "vendorId")
    parsed_day = _parse_date(day)
    parsed_worker_id = _parse_uuid(worker_id, "workerId") if worker_id else None

    result = AvailabilityService.get_available_slots(
        SQLAlchemyAvailabilityRepository(db),
        service_id=parsed_service_id,
        vendor_id=parsed_vendor_id,
        day=parsed_day,
        worker_id=parsed_worker_id,
    )

    if result.status == AvailabilityStatus.SERVICE_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Service not found")
    if result.status == AvailabilityStatus.VENDOR_NOT_FOUND:
        raise HTTPException(status_code=404, detail="Vendor not found")

    return AvailabilityResponse(
        available_slots=[
            {
                "time": slot.time,
                "available_workers": [{"id": w.id, "name": w.name} for w in slot.available_workers],
            }
            for slot in result.slots
        ],
        message=result.message,
    )
