# app/models/worker.py
from sqlalchemy import Column, String, Text, DateTime, Table, ForeignKey, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid
from app.models.base import Base


# Which services a worker can perform
worker_services = Table(
    "worker_services",
    Base.metadata,
    Column("worker_id", UUID(as_uuid=True), ForeignKey("workers.id", ondelete="CASCADE"), primary_key=True),
    Column("service_id", UUID(as_uuid=True), ForeignKey("services.id", ondelete="CASCADE"), primary_key=True),
)


class Worker(Base):
    __tablename__ = "workers"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    vendor_id = Column(
        UUID(as_uuid=True),
        ForeignKey("vendors.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    # External identity of the worker, if they have an account
    user_id = Column(String(255), nullable=True, index=True)

    name = Column(String(200), nullable=False)
    email = Column(String(255), nullable=True, unique=True)
    phone_number = Column(String(20), nullable=True)
    bio = Column(Text, nullable=True)
    photo_url = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    vendor = relationship("Vendor", back_populates="workers")
    services = relationship("Service", secondary=worker_services, back_populates="workers")
    availabilities = relationship(
        "WorkerAvailability", back_populates="worker", cascade="all, delete-orphan"
    )
    schedule_overrides = relationship(
        "WorkerScheduleOverride", back_populates="worker", cascade="all, delete-orphan"
    )

    __table_args__ = (
        UniqueConstraint("vendor_id", "user_id", name="uq_worker_vendor_user"),
    )

    def __repr__(self):
        return f"<Worker(id={self.id}, name={self.name}, vendor_id={self.vendor_id})>"
