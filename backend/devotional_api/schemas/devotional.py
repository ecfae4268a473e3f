"""
Devotionals API - Pydantic Request/Response Schemas
===================================================

What:  Pydantic models defining the API contract for devotionals.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate OpenAPI documentation.

Field presence:
    Request bodies declare `verse` and `content` as optional so that FastAPI
    never answers 422 for a missing key; the service decides what is missing
    and raises ValidationError (400). For PATCH, `model_fields_set` tells a
    key that was absent apart from one that was sent as "" or null.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class DevotionalCreate(BaseModel):
    """Body of POST /api/devotionals. Both fields are required by the service."""
    verse: Optional[str] = Field(default=None, description="Scripture reference, e.g. 'John 3:16'")
    content: Optional[str] = Field(default=None, description="Devotional commentary text")


class DevotionalPatch(BaseModel):
    """
    Body of PATCH /api/devotionals/{id}.

    A field counts as supplied when its key appears in the JSON body,
    whatever the value. Supplied fields must be non-empty strings.
    """
    verse: Optional[str] = Field(default=None, description="Replacement verse")
    content: Optional[str] = Field(default=None, description="Replacement content")

    def supplied(self) -> dict:
        """Returns only the keys present in the request body."""
        return {name: getattr(self, name) for name in ("verse", "content") if name in self.model_fields_set}


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class DevotionalResponse(BaseModel):
    """
    Full representation of a stored devotional row.
    Returned by GET /api/devotionals (as array items) and GET /api/devotionals/{id}.
    """
    id: int = Field(description="Store-assigned identifier")
    verse: str = Field(description="Scripture reference")
    content: str = Field(description="Devotional commentary")
    created_at: datetime = Field(description="When the devotional was created")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When verse or content last changed (null if never updated)",
    )
    deleted_at: Optional[datetime] = Field(
        default=None,
        description="Always null for records served by the API",
    )

    model_config = {"from_attributes": True}


class DevotionalCreatedResponse(BaseModel):
    """Returned by POST /api/devotionals with HTTP 201 Created."""
    message: str = Field(default="Devotional created successfully")
    id: int = Field(description="Store-assigned identifier")
    verse: str
    content: str


class DevotionalUpdatedResponse(BaseModel):
    """Returned by PATCH /api/devotionals/{id}: the row's values after the update."""
    message: str = Field(default="Devotional updated successfully")
    id: int
    verse: str
    content: str
    updated_at: Optional[datetime] = None


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "devotional with ID '7' was not found",
            "request_id": "a1b2c3d4"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and load balancer probes."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
