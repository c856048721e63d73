# ============================================================================
# FILE: app/api/v1/public/appointments.py
# Customer booking endpoints - thin HTTP layer
# ============================================================================
from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from sqlalchemy.orm import Session
from uuid import UUID
import logging

from app.api.dependencies import get_current_user_id
from app.config.database import get_db
from app.core.exceptions import DomainError
from app.schemas.appointment import AppointmentCreateRequest, AppointmentResponse
from app.services.appointment.appointment_query_service import AppointmentQueryService
from app.services.appointment.appointment_service import AppointmentService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/appointments", tags=["public-appointments"])


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
def create_appointment(
        payload: AppointmentCreateRequest,
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """
    Book an appointment. The slot is re-checked against the worker's
    schedule and existing bookings; a taken slot returns 409.
    """
    try:
        return AppointmentService.create_appointment(
            db,
            user_id=user_id,
            vendor_id=payload.vendor_id,
            service_id=payload.service_id,
            day=payload.booking_date,
            slot=payload.slot,
            worker_id=payload.worker_id,
            notes=payload.notes,
        )
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)
    except Exception as e:
        logger.error(f"Error creating appointment for user {user_id}: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to create appointment")


@router.get("/my")
def list_my_appointments(
        skip: int = Query(0, ge=0, description="Number of records to skip"),
        limit: int = Query(50, ge=1, le=100, description="Number of records to return"),
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """Appointments booked by the caller, most recent first."""
    return AppointmentQueryService.list_user_appointments(db, user_id=user_id, skip=skip, limit=limit)


@router.put("/{appointment_id}/cancel", response_model=AppointmentResponse)
def cancel_appointment(
        appointment_id: UUID = Path(..., description="The appointment ID"),
        user_id: str = Depends(get_current_user_id),
        db: Session = Depends(get_db)
):
    """Cancel one of the caller's pending or confirmed appointments."""
    try:
        appointment = AppointmentService.cancel_appointment(db, appointment_id, user_id)
    except DomainError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message)

    if not appointment:
        raise HTTPException(
            status_code=404,
            detail="Appointment not found or you don't have access to it"
        )
    return appointment
