# app/schemas/worker.py
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from app.schemas.base import CamelModel


class WorkerCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    user_id: Optional[str] = Field(None, description="Account of the worker, at most one worker per vendor")
    email: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=20)
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    service_ids: Optional[List[UUID]] = Field(
        None, description="Services the worker performs, every active service of the vendor if omitted"
    )


class WorkerUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[str] = Field(None, max_length=255)
    phone_number: Optional[str] = Field(None, max_length=20)
    bio: Optional[str] = None
    photo_url: Optional[str] = None


class WorkerServicesUpdate(CamelModel):
    service_ids: List[UUID] = Field(default_factory=list)


class WorkerServiceItem(CamelModel):
    id: UUID
    name: str


class WorkerResponse(CamelModel):
    id: UUID
    vendor_id: UUID
    user_id: Optional[str] = None
    name: str
    email: Optional[str] = None
    phone_number: Optional[str] = None
    bio: Optional[str] = None
    photo_url: Optional[str] = None
    services: List[WorkerServiceItem] = Field(default_factory=list)
