"""
Response schemas for the worker API.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ProcessJobResponse(BaseModel):
    """Acknowledgement returned as soon as a job is accepted."""

    success: bool = True
    message: str = "Job received and processing started"
    job_id: str


class CancelJobResponse(BaseModel):
    """
    Acknowledgement for a cancel request.

    The worker keeps no job registry, so this never reflects whether a job
    with that ID exists or was stopped.
    """

    success: bool = True
    message: str = "Cancel request acknowledged"
    job_id: Optional[str] = None


class ServiceInfoResponse(BaseModel):
    """Root endpoint response."""

    status: str = Field(..., description="Service status indicator")
    service: str = Field(..., description="Service name")
    timestamp: str = Field(..., description="Current server time (ISO 8601, UTC)")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
