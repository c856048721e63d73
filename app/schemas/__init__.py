# app/schemas/__init__.py
from .base import CamelModel, HHMM_PATTERN

from .availability import (
    AvailableWorkerSchema,
    SlotSchema,
    AvailabilityResponse
)

from .appointment import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AppointmentStatusUpdate,
    AssignWorkerRequest,
    AppointmentDurationUpdate
)

from .worker_schedule import (
    WorkerSummary,
    WeeklyAvailabilityItem,
    ScheduleOverrideItem,
    WeeklyAvailabilityRead,
    ScheduleOverrideRead,
    WorkerScheduleUpdate,
    WorkerScheduleResponse
)

from .vendor import (
    OperatingHoursDay,
    OperatingHoursUpdate,
    OperatingHoursResponse
)

from .service import (
    ServiceCreate,
    ServiceUpdate,
    ServiceResponse
)

from .worker import (
    WorkerCreate,
    WorkerUpdate,
    WorkerServicesUpdate,
    WorkerServiceItem,
    WorkerResponse
)
