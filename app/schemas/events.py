"""
Job status event schemas.

These define the JSON body POSTed to a job's webhook URL.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field


class JobStatus(str, Enum):
    """Status carried by a job status event."""

    RUNNING = "running"
    EXPORTING = "exporting"
    COMPLETED = "completed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.FAILED)


class ClipAsset(BaseModel):
    """A single produced clip."""

    url_mp4: str
    url_hls: str
    thumbs: list[str] = Field(default_factory=list)
    subtitle_vtt: Optional[str] = None
    duration_sec: float
    aspect: str
    filesize_bytes: int


class JobAssets(BaseModel):
    """Artifacts produced by a completed job."""

    clips: list[ClipAsset]


class JobSummary(BaseModel):
    """Summary metrics for a completed job."""

    processing_time_sec: float
    input_duration: float
    output_clips: int
    total_filesize: int


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class JobStatusEvent(BaseModel):
    """One entry in a job's ordered stream of status events."""

    job_id: str
    status: JobStatus
    progress: Optional[float] = Field(default=None, ge=0.0, le=1.0)
    message: str
    assets: Optional[JobAssets] = None
    summary: Optional[JobSummary] = None
    error: Optional[str] = None
    timestamp: str = Field(default_factory=_utc_now_iso)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready dict, omitting optional fields that are unset."""
        return self.model_dump(mode="json", exclude_none=True)
