# ============================================================================
# FILE: app/api/v1/dashboard/appointments.py
# Vendor-side appointment endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Query, Path
from sqlalchemy.orm import Session
from datetime import date
from typing import Optional
from uuid import UUID
import logging

from app.config.database import get_db
from app.core.exceptions import DomainError
from app.models.appointment import AppointmentStatus
from app.schemas.appointment import (
    AppointmentDurationUpdate,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AssignWorkerRequest,
)
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.appointment.appointment_service import AppointmentService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/vendors/{vendor_id}/appointments", tags=["dashboard-appointments"])


@router.get("")
def list_appointments(
        vendor_id: UUID = Path(..., description="The vendor ID"),
        start_date: Optional[date] = Query(None, description="Filter appointments on or after this date"),
        end_date: Optional[date] = Query(None, description="Filter appointments on or before this date"),
        status: Optional[AppointmentStatus] = Query(None, description="Filter by status"),
        worker_id: Optional[UUID] = Query(None, description="Filter by worker"),
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(50, ge=1, le=100, description="Number of records to return"),
        db: Session = Depends(get_db)
):
    """
    Get a list of the vendor's appointments.
    Dates are calendar days in the vendor's timezone.
    """
    if start_date and end_date and end_date < start_date:
        raise HTTPException(status_code=400, detail="end_date must not be before start_date")

    result = AppointmentQueryService.list_vendor_appointments(
        db=db,
        vendor_id=vendor_id,
        start_date=start_date,
        end_date=end_date,
        status=status,
        worker_id=worker_id,
        skip=skip,
        limit=limit
    )
    if result is None:
        raise HTTPException(status_code=404, detail="Vendor not found")
    return result


@router.patch("/{appointment_id}/status", response_model=AppointmentResponse)
def update_appointment_status(
        payload: AppointmentStatusUpdate,
        vendor_id: UUID = Path(..., description="The vendor ID"),
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """Confirm, reject, complete or cancel an appointment."""
    try:
        appointment = AppointmentService.update_status(db, vendor_id, appointment_id, payload.status)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.put("/{appointment_id}/assign-worker", response_model=AppointmentResponse)
def assign_worker(
        payload: AssignWorkerRequest,
        vendor_id: UUID = Path(..., description="The vendor ID"),
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """Assign a worker to an appointment, or unassign with workerId null."""
    try:
        appointment = AppointmentService.assign_worker(db, vendor_id, appointment_id, payload.worker_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error assigning worker to appointment {appointment_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to assign worker")

    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment


@router.put("/{appointment_id}/duration", response_model=AppointmentResponse)
def update_appointment_duration(
        payload: AppointmentDurationUpdate,
        vendor_id: UUID = Path(..., description="The vendor ID"),
        appointment_id: UUID = Path(..., description="The appointment ID"),
        db: Session = Depends(get_db)
):
    """Set the length of an appointment in minutes; the start time is kept."""
    try:
        appointment = AppointmentService.update_duration(db, vendor_id, appointment_id, payload.new_duration)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error updating duration of appointment {appointment_id}: {e}", exc_info=True)
        db.rollback()
        raise HTTPException(status_code=500, detail="Failed to update duration")

    if not appointment:
        raise HTTPException(status_code=404, detail="Appointment not found")
    return appointment
