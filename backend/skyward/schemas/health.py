"""
Skyward Notes — Health Schema
==============================

What:  JSON body returned by GET /health.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Service and database status for monitoring and container probes."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
