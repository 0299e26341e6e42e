"""
Job API Router - intake and cancel endpoints.

Both endpoints authenticate before the request body is read: the body is
parsed inside the handler rather than declared as a body parameter, so a bad
token is always answered with 401 whatever the body contains.
"""

import logging
from typing import Any, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from pydantic import ValidationError

from app.auth import verify_worker_secret
from app.errors import InternalIntakeError, RequestValidationFailed
from app.schemas.requests import ProcessJobRequest
from app.schemas.responses import CancelJobResponse, ProcessJobResponse
from app.services.job_runner import JobRequest, JobRunner

logger = logging.getLogger(__name__)

router = APIRouter()


def get_job_runner(request: Request) -> JobRunner:
    """Get the job runner from app state (built in create_app)."""
    return request.app.state.job_runner


async def _read_json(request: Request) -> Any:
    """Decoded JSON body; raises ValueError for empty or malformed bodies."""
    return await request.json()


async def parse_job_request(request: Request) -> ProcessJobRequest:
    """Parse the /process body, reporting any malformed body as a 400."""
    try:
        payload = await _read_json(request)
        return ProcessJobRequest.model_validate(payload)
    except (ValueError, ValidationError):
        raise RequestValidationFailed("Invalid request body")


def accept_job(
    body: ProcessJobRequest,
    background_tasks: BackgroundTasks,
    runner: JobRunner,
) -> ProcessJobResponse:
    """
    Validate a parsed job, build the acknowledgement and schedule the run.

    The run is only scheduled once the acknowledgement exists, so an intake
    fault never leaves a job running.
    """
    missing = body.missing_fields()
    if missing:
        logger.warning(f"Rejecting job: missing required fields {missing}")
        raise RequestValidationFailed()

    try:
        job = JobRequest(
            job_id=body.job_id,
            webhook_url=body.webhook_url,
            webhook_secret=body.webhook_secret.get_secret_value(),
            parameters=body.parameters,
        )
        response = ProcessJobResponse(job_id=job.job_id)
        background_tasks.add_task(runner.run, job)
    except Exception as e:
        logger.exception(f"Process endpoint error: {e}")
        raise InternalIntakeError(str(e))

    logger.info(f"Job {job.job_id} accepted")
    return response


@router.post(
    "/process",
    response_model=ProcessJobResponse,
    dependencies=[Depends(verify_worker_secret)],
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {
                "application/json": {"schema": ProcessJobRequest.model_json_schema()}
            },
        }
    },
)
async def submit_job(
    request: Request,
    background_tasks: BackgroundTasks,
    runner: JobRunner = Depends(get_job_runner),
) -> ProcessJobResponse:
    """
    Accept a video processing job.

    Responds immediately; the job runs in the background after the response
    has been sent and reports its progress to ``webhook_url``.
    """
    body = await parse_job_request(request)
    return accept_job(body, background_tasks, runner)


@router.post(
    "/cancel",
    response_model=CancelJobResponse,
    dependencies=[Depends(verify_worker_secret)],
)
async def cancel_job(request: Request) -> CancelJobResponse:
    """
    Acknowledge a cancel request.

    Note: The worker keeps no job registry, so this has no effect on a running
    job. It always succeeds, whatever the body holds and whether or not the
    job exists.
    """
    try:
        payload = await _read_json(request)
    except ValueError:
        payload = None

    raw_job_id = payload.get("job_id") if isinstance(payload, dict) else None
    job_id: Optional[str] = None if raw_job_id is None else str(raw_job_id)

    logger.info(f"Cancel request received for job {job_id}")
    return CancelJobResponse(job_id=job_id)
