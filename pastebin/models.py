"""
Pydantic models for the paste entity and request/response bodies.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, StrictStr, field_validator


class Paste(BaseModel):
    """A stored text blob with expiry and view-count constraints."""
    id: str = Field(..., description="Unique paste ID")
    content: str = Field(..., description="Text content")
    created_at: datetime
    updated_at: datetime
    expires_at: Optional[datetime] = Field(None, description="Absolute expiry, None if no TTL")
    max_views: Optional[int] = Field(None, ge=1, description="View ceiling, None if unlimited")
    view_count: int = Field(0, ge=0)


class PasteCreate(BaseModel):
    """Schema for creating a new paste."""
    content: StrictStr = Field(..., description="Text content (required, non-empty)")
    ttl_seconds: Optional[int] = Field(None, ge=1, description="Optional TTL in seconds")
    max_views: Optional[int] = Field(None, ge=1, description="Optional view limit")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("content must contain non-whitespace characters")
        return value

    @field_validator("ttl_seconds", "max_views", mode="before")
    @classmethod
    def json_integer(cls, value: Any) -> Any:
        # Omitting a field means unconstrained; an explicit null, a boolean or
        # a numeric string is rejected. Integral floats such as 600.0 pass.
        if value is None or isinstance(value, (bool, str)):
            raise ValueError("must be an integer")
        return value


class PasteResponse(BaseModel):
    """Schema for paste creation response."""
    id: str = Field(..., description="Unique paste ID")
    url: str = Field(..., description="Shareable URL to view the paste")


class PasteView(BaseModel):
    """Schema for viewing/fetching a paste."""
    content: str = Field(..., description="Paste text content")
    remaining_views: Optional[int] = Field(None, description="Views left (null if unlimited)")
    expires_at: Optional[str] = Field(None, description="Expiry timestamp (ISO 8601, null if no TTL)")


class HealthCheck(BaseModel):
    """Schema for health check response."""
    ok: bool = Field(..., description="Is the application healthy?")


class ErrorResponse(BaseModel):
    """Schema for every error body."""
    error: str
