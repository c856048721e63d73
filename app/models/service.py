# app/models/service.py
"""
Service Model - a bookable offering of one vendor
Duration is the source of truth for slot length.
"""
from sqlalchemy import Column, String, Numeric, Integer, ForeignKey, Boolean, DateTime, Text, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


class Service(Base):
    __tablename__ = "services"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    vendor_id = Column(
        UUID(as_uuid=True),
        ForeignKey("vendors.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=True)

    # Duration in minutes
    duration = Column(Integer, nullable=False)

    active = Column(Boolean, default=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now()
    )

    vendor = relationship("Vendor", back_populates="services")
    workers = relationship("Worker", secondary="worker_services", back_populates="services")

    __table_args__ = (
        CheckConstraint("duration > 0", name="ck_services_duration_positive"),
    )

    def __repr__(self):
        return f"<Service(id={self.id}, name={self.name}, vendor_id={self.vendor_id})>"

    @property
    def formatted_duration(self) -> str:
        """Return human-readable duration string"""
        if not self.duration:
            return "Duration varies"

        hours = self.duration // 60
        minutes = self.duration % 60

        if hours > 0 and minutes > 0:
            return f"{hours}h {minutes}m"
        elif hours > 0:
            return f"{hours}h"
        else:
            return f"{minutes}m"
