# app/schemas/service.py
from typing import Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel


class ServiceCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    duration: int = Field(..., gt=0, description="Length in minutes")
    price: Optional[float] = Field(None, ge=0)
    active: bool = True


class ServiceUpdate(CamelModel):
    """Partial update; only fields present in the body are written."""
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0)
    price: Optional[float] = Field(None, ge=0)
    active: Optional[bool] = None


class ServiceResponse(CamelModel):
    id: UUID
    vendor_id: UUID
    name: str
    description: Optional[str] = None
    price: Optional[float] = None
    duration: int
    formatted_duration: str
    active: bool = True
