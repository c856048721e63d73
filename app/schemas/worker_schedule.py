# app/schemas/worker_schedule.py
from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import Field, model_validator

from app.schemas.base import CamelModel, HHMM_PATTERN


class WorkerSummary(CamelModel):
    id: UUID
    name: str
    photo_url: Optional[str] = None
    bio: Optional[str] = None


class WeeklyAvailabilityItem(CamelModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0=Sunday .. 6=Saturday")
    start_time: str = Field(..., pattern=HHMM_PATTERN)
    end_time: str = Field(..., pattern=HHMM_PATTERN)
    is_available: bool = True

    @model_validator(mode="after")
    def end_after_start(self):
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class ScheduleOverrideItem(CamelModel):
    override_date: date = Field(..., alias="date")
    start_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    end_time: Optional[str] = Field(None, pattern=HHMM_PATTERN)
    is_day_off: bool = False
    notes: Optional[str] = None

    @model_validator(mode="after")
    def validate_window(self):
        if self.is_day_off:
            return self
        if not self.start_time or not self.end_time:
            raise ValueError("startTime and endTime are required unless isDayOff is set")
        if self.end_time <= self.start_time:
            raise ValueError("endTime must be after startTime")
        return self


class WorkerScheduleUpdate(CamelModel):
    """Each list given replaces the stored rows of that kind; omitted lists are kept."""
    availabilities: Optional[List[WeeklyAvailabilityItem]] = None
    overrides: Optional[List[ScheduleOverrideItem]] = None

    @model_validator(mode="after")
    def no_duplicates(self):
        if self.availabilities:
            days = [a.day_of_week for a in self.availabilities]
            if len(days) != len(set(days)):
                raise ValueError("Only one availability row per dayOfWeek is allowed")
        if self.overrides:
            dates = [o.override_date for o in self.overrides]
            if len(dates) != len(set(dates)):
                raise ValueError("Only one override per date is allowed")
        return self


class WeeklyAvailabilityRead(CamelModel):
    day_of_week: int
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_available: bool = True


class ScheduleOverrideRead(CamelModel):
    override_date: date = Field(..., alias="date")
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    is_day_off: bool = False
    notes: Optional[str] = None


class WorkerScheduleResponse(CamelModel):
    worker_id: UUID
    name: str
    availabilities: List[WeeklyAvailabilityRead] = Field(default_factory=list)
    overrides: List[ScheduleOverrideRead] = Field(default_factory=list)
