# ===== app/models/appointment.py =====
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Index, Enum as SQLEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.models.base import Base
import uuid
import enum


class AppointmentStatus(str, enum.Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED_BY_USER = "CANCELLED_BY_USER"
    CANCELLED_BY_VENDOR = "CANCELLED_BY_VENDOR"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"
    NO_SHOW = "NO_SHOW"


# Statuses that reserve worker time
BLOCKING_STATUSES = (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)

    # References
    vendor_id = Column(UUID(as_uuid=True), ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False)
    worker_id = Column(UUID(as_uuid=True), ForeignKey("workers.id", ondelete="SET NULL"), nullable=True)
    service_id = Column(UUID(as_uuid=True), ForeignKey("services.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(String(255), nullable=False)

    # Stored in UTC
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    notes = Column(Text, nullable=True)

    status = Column(
        SQLEnum(AppointmentStatus),
        default=AppointmentStatus.PENDING,
        nullable=False
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    worker = relationship("Worker")
    service = relationship("Service")

    __table_args__ = (
        Index("ix_appointments_vendor_start", "vendor_id", "start_time"),
        Index("ix_appointments_worker_start", "worker_id", "start_time"),
        Index("ix_appointments_user", "user_id"),
    )

    def __repr__(self):
        return f"<Appointment(id={self.id}, worker_id={self.worker_id}, status={self.status})>"

    @property
    def is_blocking(self) -> bool:
        return self.status in BLOCKING_STATUSES
