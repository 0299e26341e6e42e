"""
FastAPI application entry point for the Cre8 Video Worker.

The worker accepts video processing jobs, acknowledges them immediately and
runs them in the background, reporting progress to each job's webhook.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import httpx
import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.auth import BearerAuthenticator
from app.config import Settings, get_settings
from app.errors import WorkerError, worker_error_handler
from app.routers import health, jobs
from app.services.job_runner import JobRunner
from app.services.video_pipeline import SimulatedVideoPipeline
from app.services.webhook_service import WebhookNotifier

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Log startup configuration and shutdown."""
    settings: Settings = app.state.settings
    logger.info(f"Starting {settings.app_name} on port {settings.port}...")

    if settings.worker_secret:
        logger.info("✓ WORKER_SECRET set")
    else:
        logger.error("✗ WORKER_SECRET missing - all authorized endpoints will reject requests")

    logger.info("Worker ready to accept jobs.")

    yield

    logger.info(f"Shutting down {settings.app_name}")


def create_app(
    settings: Optional[Settings] = None,
    webhook_transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Build the application.

    Settings are read once and injected into the authenticator, notifier,
    pipeline and runner, which are kept on ``app.state``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="""
Video worker that accepts processing jobs and reports progress via webhooks.

## Usage

1. Submit a job: `POST /process` with `job_id`, `webhook_url`, `webhook_secret`
2. Receive `running`, `exporting` and `completed`/`failed` events at `webhook_url`
        """,
        version="1.0.0",
        lifespan=lifespan,
    )

    notifier = WebhookNotifier.from_settings(settings, transport=webhook_transport)
    pipeline = SimulatedVideoPipeline.from_settings(settings)

    app.state.settings = settings
    app.state.authenticator = BearerAuthenticator(settings.worker_secret)
    app.state.job_runner = JobRunner(notifier=notifier, pipeline=pipeline)

    app.add_exception_handler(WorkerError, worker_error_handler)

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, tags=["Health"])
    app.include_router(jobs.router, tags=["Jobs"])

    return app


configure_logging(get_settings())

app = create_app()


def run() -> None:
    """Run the worker with uvicorn on the configured port."""
    settings = get_settings()
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
