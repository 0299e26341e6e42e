"""
Intake error taxonomy and the FastAPI handlers that render it.

Errors raised while handling an inbound request are turned into
``{"error": <message>}`` bodies. Faults inside a background job never reach
these handlers; the job runner reports them through the webhook instead.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class WorkerError(Exception):
    """Base exception for errors surfaced to HTTP callers."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class AuthorizationError(WorkerError):
    """Raised when the bearer token is missing or does not match."""

    def __init__(self, message: str = "Invalid authorization"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class RequestValidationFailed(WorkerError):
    """Raised when a required request field is missing or empty."""

    def __init__(self, message: str = "Missing required fields"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class InternalIntakeError(WorkerError):
    """Raised when an unexpected fault happens before a job is accepted."""

    def __init__(self, message: str):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


async def worker_error_handler(request: Request, exc: WorkerError) -> JSONResponse:
    """Render a WorkerError as an ``{"error": ...}`` body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.warning(
            f"{request.method} {request.url.path} rejected ({exc.status_code}): {exc.message}"
        )

    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
