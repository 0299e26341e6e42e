"""
Services for the video worker.

Includes:
- Webhook delivery (best-effort status events)
- Video pipeline (simulated processing stages)
- Job runner (drives a job through the pipeline)
"""

from app.services.job_runner import JobRequest, JobRunner
from app.services.video_pipeline import SimulatedVideoPipeline, Stage
from app.services.webhook_service import WebhookNotifier, WebhookResult

__all__ = [
    "JobRequest",
    "JobRunner",
    "SimulatedVideoPipeline",
    "Stage",
    "WebhookNotifier",
    "WebhookResult",
]
