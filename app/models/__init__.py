# app/models/__init__.py
from .base import Base
from .vendor import Vendor, VendorStatus
from .service import Service
from .worker import Worker, worker_services
from .availability import WorkerAvailability, WorkerScheduleOverride
from .appointment import Appointment, AppointmentStatus, BLOCKING_STATUSES

__all__ = [
    "Base",
    "Vendor",
    "VendorStatus",
    "Service",
    "Worker",
    "worker_services",
    "WorkerAvailability",
    "WorkerScheduleOverride",
    "Appointment",
    "AppointmentStatus",
    "BLOCKING_STATUSES",
]
