"""
Health check endpoints for the video worker.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app.schemas.responses import HealthResponse, ServiceInfoResponse

router = APIRouter()


@router.get("/", response_model=ServiceInfoResponse)
async def root(request: Request):
    """Root endpoint with service name and current server time."""
    return ServiceInfoResponse(
        status="healthy",
        service=request.app.state.settings.app_name,
        timestamp=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Basic health check endpoint.

    Returns 200 if the service is running.
    """
    return HealthResponse(status="ok")
