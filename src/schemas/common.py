"""Shared response schemas."""

from datetime import datetime

from pydantic import BaseModel


def blank_to_none(value):
    """Turn an empty or whitespace-only string into None (HTML forms send blanks)."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned on 4xx/5xx responses."""

    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    timestamp: datetime
    environment: str
