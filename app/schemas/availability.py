# app/schemas/availability.py
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel


class AvailableWorkerSchema(CamelModel):
    id: UUID
    name: str


class SlotSchema(CamelModel):
    """One start time of the day's grid and every worker free to take it"""
    time: str = Field(..., description="Slot start time (HH:mm, vendor local)")
    available_workers: List[AvailableWorkerSchema] = Field(default_factory=list)


class AvailabilityResponse(CamelModel):
    available_slots: List[SlotSchema] = Field(default_factory=list)
    message: Optional[str] = Field(None, description="Why the slot list is empty, if it is")
