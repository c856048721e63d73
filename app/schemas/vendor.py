# app/schemas/vendor.py
from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from app.schemas.base import CamelModel, HHMM_PATTERN
from app.utils.time_utils import WEEKDAY_NAMES


class OperatingHoursDay(CamelModel):
    """Operating hours of one weekday"""
    open: Optional[str] = Field(None, pattern=HHMM_PATTERN, description="Opening time (HH:mm)")
    close: Optional[str] = Field(None, pattern=HHMM_PATTERN, description="Closing time (HH:mm)")
    is_closed: bool = Field(False, description="Whether the vendor is closed this day")

    @model_validator(mode="after")
    def validate_hours(self):
        if self.is_closed:
            return self
        if not self.open or not self.close:
            raise ValueError("open and close are required unless isClosed is set")
        if self.close <= self.open:
            raise ValueError("close must be after open")
        return self


class OperatingHoursUpdate(CamelModel):
    operating_hours: Dict[str, OperatingHoursDay]

    @field_validator("operating_hours")
    @classmethod
    def known_weekdays(cls, v: Dict[str, OperatingHoursDay]) -> Dict[str, OperatingHoursDay]:
        normalized = {}
        for key, hours in v.items():
            name = key.strip().lower()
            if name not in WEEKDAY_NAMES:
                raise ValueError(f"Unknown weekday: {key}")
            normalized[name] = hours
        return normalized


class OperatingHoursResponse(CamelModel):
    vendor_id: UUID
    timezone: str
    # Stored hours are returned as-is, including entries that fail validation
    operating_hours: Dict[str, Dict[str, Any]] = Field(default_factory=dict)
