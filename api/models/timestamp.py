"""Timestamp models for the Timestamp Microservice API."""
from typing import Optional

from pydantic import BaseModel, Field


class DateQuery(BaseModel):
    """Raw input to the date resolver."""
    raw_value: str = Field(..., description="Epoch milliseconds or free-form date text")
    timezone: Optional[str] = Field(None, description="IANA timezone identifier")


class DateResponse(BaseModel):
    """A resolved instant."""
    unix: int = Field(..., description="Milliseconds since 1970-01-01T00:00:00Z")
    utc: str = Field(..., description="RFC 1123 rendering in GMT")


class DiffResponse(BaseModel):
    """Absolute difference between two instants, broken down by unit."""
    days: int = Field(..., ge=0)
    hours: int = Field(..., ge=0, le=23)
    minutes: int = Field(..., ge=0, le=59)
    seconds: int = Field(..., ge=0, le=59)


class ErrorResponse(BaseModel):
    """Error payload. Returned with a 200 status; callers check for `error`."""
    error: str
