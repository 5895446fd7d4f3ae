"""
Student API — Shared Response Schemas
======================================
"""

from typing import Optional

from pydantic import BaseModel, Field


class CreatedResponse(BaseModel):
    """
    What:  Body of every 201 response.
    Who:   POST /auth/register, POST /students, POST /courses.
    """
    message: str = Field(description="Human-readable success message")
    id: str = Field(description="Hex ObjectId of the new document")


class ErrorResponse(BaseModel):
    """
    What:  Error body shared by all endpoints.

    `error` is only present on 500 responses and carries the raw failure
    detail.

    Example:
        {"message": "Student not found"}
    """
    message: str = Field(description="Human-readable error description")
    error: Optional[str] = Field(default=None, description="Raw error detail (500 only)")


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
