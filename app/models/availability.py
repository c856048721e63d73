# ===== app/models/availability.py =====
from sqlalchemy import Column, String, Integer, Boolean, Date, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from app.models.base import Base
import uuid


class WorkerAvailability(Base):
    """Weekly template of a worker, one row per day of week"""
    __tablename__ = "worker_availabilities"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    worker_id = Column(
        UUID(as_uuid=True),
        ForeignKey("workers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    day_of_week = Column(Integer, nullable=False)  # 0=Sunday, 6=Saturday
    start_time = Column(String(5), nullable=False)  # HH:MM format
    end_time = Column(String(5), nullable=False)  # HH:MM format
    is_available = Column(Boolean, default=True, nullable=False)

    worker = relationship("Worker", back_populates="availabilities")

    __table_args__ = (
        UniqueConstraint("worker_id", "day_of_week", name="uq_worker_availability_day"),
        CheckConstraint("day_of_week BETWEEN 0 AND 6", name="ck_worker_availability_day"),
    )


class WorkerScheduleOverride(Base):
    """Specific date overrides (day off, special hours)"""
    __tablename__ = "worker_schedule_overrides"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    worker_id = Column(
        UUID(as_uuid=True),
        ForeignKey("workers.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    date = Column(Date, nullable=False)
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(5), nullable=True)
    is_day_off = Column(Boolean, default=False, nullable=False)
    notes = Column(String, nullable=True)  # "Holiday", "Vacation", etc.

    worker = relationship("Worker", back_populates="schedule_overrides")

    __table_args__ = (
        UniqueConstraint("worker_id", "date", name="uq_worker_override_date"),
    )
