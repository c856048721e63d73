# app/models/vendor.py
"""
Vendor Model - a salon tenant
Operating hours are kept as a JSON mapping keyed by lowercase weekday name:
{"monday": {"open": "09:00", "close": "17:00", "isClosed": false}, ...}
"""
from sqlalchemy import Column, String, DateTime, JSON, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
import enum
from app.models.base import Base


class VendorStatus(str, enum.Enum):
    PENDING_APPROVAL = "PENDING_APPROVAL"
    ACTIVE = "ACTIVE"
    SUSPENDED = "SUSPENDED"
    REJECTED = "REJECTED"


class Vendor(Base):
    __tablename__ = "vendors"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(200), nullable=False)
    description = Column(String, nullable=True)
    address = Column(String, nullable=True)
    phone_number = Column(String(20), nullable=True)

    status = Column(
        SQLEnum(VendorStatus),
        default=VendorStatus.ACTIVE,
        nullable=False,
        index=True
    )

    # IANA zone name; all HH:mm values of this vendor are local to it
    timezone = Column(String(50), nullable=True)
    operating_hours = Column(JSON, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    services = relationship("Service", back_populates="vendor", cascade="all, delete-orphan")
    workers = relationship("Worker", back_populates="vendor", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Vendor(id={self.id}, name={self.name}, status={self.status})>"

    @property
    def is_active(self) -> bool:
        return self.status == VendorStatus.ACTIVE
