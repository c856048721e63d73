# app/schemas/appointment.py
from datetime import date, datetime
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.models.appointment import AppointmentStatus
from app.schemas.base import CamelModel, HHMM_PATTERN


class AppointmentCreateRequest(CamelModel):
    """Appointment booking request"""
    vendor_id: UUID
    service_id: UUID
    booking_date: date = Field(..., alias="date", description="Calendar day (YYYY-MM-DD)")
    slot: str = Field(..., pattern=HHMM_PATTERN, description="Start time (HH:mm)")
    worker_id: Optional[UUID] = Field(None, description="Preferred worker, any eligible worker if omitted")
    notes: Optional[str] = Field(None, max_length=1000)


class AppointmentResponse(CamelModel):
    id: UUID
    vendor_id: UUID
    worker_id: Optional[UUID] = None
    service_id: UUID
    user_id: str
    start_time: datetime
    end_time: datetime
    status: AppointmentStatus
    notes: Optional[str] = None


class AppointmentStatusUpdate(CamelModel):
    status: AppointmentStatus


class AssignWorkerRequest(CamelModel):
    worker_id: Optional[UUID] = Field(None, description="null unassigns the worker")


class AppointmentDurationUpdate(CamelModel):
    new_duration: int = Field(..., gt=0, description="New length in minutes, counted from the start time")
