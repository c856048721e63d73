# app/schemas/base.py
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# "HH:mm", 24-hour, zero padded
HHMM_PATTERN = r"^([01]\d|2[0-3]):([0-5]\d)$"


class CamelModel(BaseModel):
    """JSON bodies use camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )
