# --- File: app/schemas/common/base.py ---
"""
Schema base classes.

Request schemas strip whitespace and validate on assignment; response
schemas load straight from ORM rows and always carry id and timestamps.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

__all__ = [
    "BaseSchema",
    "TimestampMixin",
    "UUIDMixin",
    "BaseDBSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseResponseSchema",
    "BaseFilterSchema",
]


class BaseSchema(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class TimestampMixin(BaseModel):
    created_at: datetime = Field(..., description="When the row was created")
    updated_at: datetime = Field(..., description="When the row last changed")


class UUIDMixin(BaseModel):
    id: str = Field(..., description="UUID primary key")


class BaseDBSchema(BaseSchema, UUIDMixin, TimestampMixin):
    """A persisted row: id plus timestamps."""


class BaseCreateSchema(BaseSchema):
    """Payload of a create operation."""


class BaseUpdateSchema(BaseSchema):
    """Partial update payload; every field a subclass declares is optional."""


class BaseResponseSchema(BaseDBSchema):
    """Response body for a persisted row."""


class BaseFilterSchema(BaseSchema):
    """Query-string filters and paging."""
