"""
Maison Catalog API: Shared Response Schemas
=============================================

What:  Error, message, and health bodies shared by every router.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "Hero image not found",
            "request_id": "1f0c2a9b"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class MessageResponse(BaseModel):
    """Body returned by the delete endpoints."""
    message: str


class HealthResponse(BaseModel):
    """
    Health check response showing service and dependency status.

    status is `unhealthy` when the store is unreachable (nothing works without
    it) and `degraded` when only the image host is unavailable (reads still work).
    """
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    image_host: str = Field(description="Image host status: available, unavailable, unconfigured")
    uptime_seconds: float = Field(description="Seconds since service started")
