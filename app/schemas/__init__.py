"""
Pydantic schemas for request/response models and webhook events.
"""

from app.schemas.events import (
    ClipAsset,
    JobAssets,
    JobStatus,
    JobStatusEvent,
    JobSummary,
)
from app.schemas.requests import ProcessJobRequest
from app.schemas.responses import (
    CancelJobResponse,
    HealthResponse,
    ProcessJobResponse,
    ServiceInfoResponse,
)

__all__ = [
    "ProcessJobRequest",
    "ProcessJobResponse",
    "CancelJobResponse",
    "HealthResponse",
    "ServiceInfoResponse",
    "JobStatus",
    "JobStatusEvent",
    "ClipAsset",
    "JobAssets",
    "JobSummary",
]
