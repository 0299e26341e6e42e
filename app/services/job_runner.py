"""
Job Runner - drives one accepted job through the processing stages.

Every stage transition is reported to the job's webhook. The runner owns the
job's state for the lifetime of its background task; nothing is stored once
it returns. There is no job registry, so a running job cannot be looked up or
cancelled.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Any, Optional

from app.schemas.events import JobAssets, JobStatus, JobStatusEvent, JobSummary
from app.services.video_pipeline import (
    COMPLETED_PROGRESS,
    EXPORTING_PROGRESS,
    STARTED_PROGRESS,
    VideoPipeline,
)
from app.services.webhook_service import WebhookNotifier

logger = logging.getLogger(__name__)


@dataclass
class JobRequest:
    """A validated job, as handed from the intake route to the runner."""

    job_id: str
    webhook_url: str
    webhook_secret: str = field(repr=False)
    parameters: dict[str, Any] = field(default_factory=dict)


class JobRunner:
    """
    Runs jobs against a pipeline and reports progress through a notifier.

    Runs share nothing but the (stateless) notifier and pipeline, so any
    number of them can be in flight at once.
    """

    def __init__(self, notifier: WebhookNotifier, pipeline: VideoPipeline):
        self.notifier = notifier
        self.pipeline = pipeline

    async def _emit(
        self,
        job: JobRequest,
        status: JobStatus,
        message: str,
        progress: Optional[float] = None,
        assets: Optional[JobAssets] = None,
        summary: Optional[JobSummary] = None,
        error: Optional[str] = None,
    ) -> None:
        event = JobStatusEvent(
            job_id=job.job_id,
            status=status,
            progress=progress,
            message=message,
            assets=assets,
            summary=summary,
            error=error,
        )
        await self.notifier.notify(job.webhook_url, job.webhook_secret, event)

    async def run(self, job: JobRequest) -> None:
        """
        Process a job end to end.

        Emits running (0.1), one running event per stage, exporting (0.95) and
        finally completed (1.0). If any step raises, a single failed event is
        sent instead and nothing further happens. Never raises.
        """
        started_at = time.monotonic()
        logger.info(f"Starting processing for job {job.job_id}")

        try:
            await self._emit(
                job,
                JobStatus.RUNNING,
                "Video processing started",
                progress=STARTED_PROGRESS,
            )

            for stage in self.pipeline.stages:
                await self.pipeline.process_stage(stage, job.parameters)
                await self._emit(
                    job, JobStatus.RUNNING, stage.message, progress=stage.progress
                )

            await self.pipeline.export(job.parameters)
            await self._emit(
                job,
                JobStatus.EXPORTING,
                "Finalizing and uploading...",
                progress=EXPORTING_PROGRESS,
            )

            output = await self.pipeline.finalize(job.parameters, started_at)
            await self._emit(
                job,
                JobStatus.COMPLETED,
                "Video processing completed successfully",
                progress=COMPLETED_PROGRESS,
                assets=output.assets,
                summary=output.summary,
            )

            logger.info(
                f"Job {job.job_id} completed successfully "
                f"in {time.monotonic() - started_at:.1f}s"
            )

        except Exception as e:
            logger.exception(f"Job {job.job_id} failed: {e}")
            await self._emit(
                job,
                JobStatus.FAILED,
                "Video processing failed",
                error=str(e) or e.__class__.__name__,
            )
