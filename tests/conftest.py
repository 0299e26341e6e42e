"""
Pytest configuration and fixtures.
"""

import json
import os
import sys
from typing import Optional

import httpx
import pytest
from fastapi.testclient import TestClient

# Add app directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from app.config import Settings
from app.main import create_app
from app.services.job_runner import JobRequest, JobRunner
from app.services.video_pipeline import SimulatedVideoPipeline
from app.services.webhook_service import WebhookNotifier

WORKER_SECRET = "worker-test-secret"
WEBHOOK_URL = "https://cb.example/hook"
WEBHOOK_SECRET = "s3cr3t"


class WebhookRecorder:
    """Fake webhook receiver built on httpx.MockTransport."""

    def __init__(self, status_code: int = 200, fail_with: Optional[Exception] = None):
        self.status_code = status_code
        self.fail_with = fail_with
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail_with is not None:
            raise self.fail_with
        return httpx.Response(self.status_code, json={"received": True})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def events(self) -> list[dict]:
        return [json.loads(r.content) for r in self.requests]

    def events_for(self, job_id: str) -> list[dict]:
        return [e for e in self.events if e["job_id"] == job_id]


@pytest.fixture
def settings():
    """Settings with no simulated delays."""
    return Settings(
        worker_secret=WORKER_SECRET,
        stage_delay_seconds=0,
        export_delay_seconds=0,
        finalize_delay_seconds=0,
        _env_file=None,
    )


@pytest.fixture
def recorder():
    return WebhookRecorder()


@pytest.fixture
def notifier(recorder):
    return WebhookNotifier(timeout_seconds=1.0, transport=recorder.transport)


@pytest.fixture
def pipeline():
    return SimulatedVideoPipeline(
        stage_delay_seconds=0, export_delay_seconds=0, finalize_delay_seconds=0
    )


@pytest.fixture
def runner(notifier, pipeline):
    return JobRunner(notifier=notifier, pipeline=pipeline)


@pytest.fixture
def job():
    return JobRequest(
        job_id="abc",
        webhook_url=WEBHOOK_URL,
        webhook_secret=WEBHOOK_SECRET,
        parameters={"transform": {"layout": {"aspect": "16:9"}}},
    )


@pytest.fixture
def client(settings, recorder):
    """Test client whose outbound webhooks go to the recorder."""
    app = create_app(settings, webhook_transport=recorder.transport)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {WORKER_SECRET}"}


@pytest.fixture
def job_body():
    return {
        "job_id": "abc",
        "webhook_url": WEBHOOK_URL,
        "webhook_secret": WEBHOOK_SECRET,
        "transform": {"layout": {"aspect": "16:9"}},
    }


@pytest.fixture
def make_recorder():
    """Factory for webhook recorders with a given response or failure."""
    return WebhookRecorder
