"""Health check response schemas."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness response."""

    status: str = Field(..., examples=["healthy"])
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    version: str
    environment: str


class ReadinessResponse(HealthResponse):
    """Readiness response with the status of each dependency."""

    dependencies: dict[str, str] = Field(default_factory=dict)
