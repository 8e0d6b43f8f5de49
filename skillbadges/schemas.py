"""Pydantic schemas for API requests and responses."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict


# Base schemas
class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    model_config = ConfigDict(from_attributes=True)


# Request schemas
class BadgeCreate(BaseSchema):
    """Schema for creating a badge.

    Required fields are optional here so that a missing ``student_id`` or
    ``badge_name`` reaches the store's presence check instead of failing
    request parsing. ``verified`` takes any JSON value and is stored by
    truthiness.
    """
    student_id: Optional[int] = None
    badge_name: Optional[str] = None
    badge_description: Optional[str] = None
    verified: Any = None


class BadgeUpdate(BaseSchema):
    """Schema for a partial badge update. Only fields sent are applied."""
    model_config = ConfigDict(from_attributes=True, extra="ignore")

    badge_name: Optional[str] = None
    badge_description: Optional[str] = None
    verified: Optional[bool] = None
    student_id: Optional[int] = None


class BadgeVerify(BaseSchema):
    """Body of the verify endpoint. Anything but a JSON boolean toggles."""
    verified: Any = None


# Response schemas
class Badge(BaseSchema):
    """Persisted badge row."""
    id: int
    student_id: int
    badge_name: str
    badge_description: Optional[str] = None
    verified: bool
    created_at: datetime
    updated_at: datetime


class Envelope(BaseSchema):
    """Common response envelope."""
    success: bool = True


class MessageResponse(Envelope):
    message: str


class BadgeResponse(Envelope):
    data: Badge


class BadgeListResponse(Envelope):
    data: List[Badge]


class BadgeDeletedResponse(Envelope):
    message: str
    data: Badge


class ErrorResponse(Envelope):
    """Failure envelope; ``error`` carries the underlying cause when known."""
    success: bool = False
    message: str
    error: Optional[str] = None
