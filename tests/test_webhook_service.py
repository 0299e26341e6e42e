"""
Unit tests for the webhook notifier.
"""

import hashlib
import hmac
import json

import httpx
import pytest

from app.schemas.events import JobStatus, JobStatusEvent
from app.services.webhook_service import WebhookNotifier


@pytest.fixture
def event():
    return JobStatusEvent(
        job_id="abc",
        status=JobStatus.RUNNING,
        progress=0.1,
        message="Video processing started",
    )


class TestWebhookNotifier:
    """Tests for WebhookNotifier.notify."""

    @pytest.mark.asyncio
    async def test_posts_event_with_bearer_secret(self, notifier, recorder, event):
        result = await notifier.notify("https://cb.example/hook", "s3cr3t", event)

        assert result.success is True
        assert result.status_code == 200
        assert len(recorder.requests) == 1

        request = recorder.requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://cb.example/hook"
        assert request.headers["Authorization"] == "Bearer s3cr3t"
        assert request.headers["Content-Type"] == "application/json"
        assert request.headers["X-Webhook-Event"] == "running"
        assert request.headers["X-Job-Id"] == "abc"
        assert "X-Webhook-Signature" not in request.headers

        body = json.loads(request.content)
        assert body["job_id"] == "abc"
        assert body["status"] == "running"
        assert body["progress"] == 0.1
        assert body["message"] == "Video processing started"
        assert "error" not in body
        assert "assets" not in body

    @pytest.mark.asyncio
    async def test_non_success_status_is_absorbed(self, make_recorder, event):
        recorder = make_recorder(status_code=500)
        notifier = WebhookNotifier(transport=recorder.transport)

        result = await notifier.notify("https://cb.example/hook", "s3cr3t", event)

        assert result.success is False
        assert result.status_code == 500
        assert "HTTP 500" in result.error
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_unreachable_endpoint_is_absorbed_without_retry(self, make_recorder, event):
        recorder = make_recorder(fail_with=httpx.ConnectError("connection refused"))
        notifier = WebhookNotifier(transport=recorder.transport)

        result = await notifier.notify("https://cb.example/hook", "s3cr3t", event)

        assert result.success is False
        assert result.error.startswith("Request error")
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_is_absorbed(self, make_recorder, event):
        recorder = make_recorder(fail_with=httpx.ReadTimeout("too slow"))
        notifier = WebhookNotifier(transport=recorder.transport)

        result = await notifier.notify("https://cb.example/hook", "s3cr3t", event)

        assert result.success is False
        assert result.error == "Request timed out"

    @pytest.mark.asyncio
    async def test_unexpected_error_is_absorbed(self, make_recorder, event):
        recorder = make_recorder(fail_with=RuntimeError("boom"))
        notifier = WebhookNotifier(transport=recorder.transport)

        result = await notifier.notify("https://cb.example/hook", "s3cr3t", event)

        assert result.success is False
        assert "boom" in result.error

    @pytest.mark.asyncio
    async def test_signs_body_when_signing_secret_set(self, recorder, event):
        notifier = WebhookNotifier(signing_secret="sign-me", transport=recorder.transport)

        await notifier.notify("https://cb.example/hook", "s3cr3t", event)

        request = recorder.requests[0]
        expected = hmac.new(b"sign-me", request.content, hashlib.sha256).hexdigest()
        assert request.headers["X-Webhook-Signature"] == f"sha256={expected}"

    @pytest.mark.asyncio
    async def test_non_ascii_job_id_is_still_delivered(self, notifier, recorder):
        event = JobStatusEvent(
            job_id="vidéo-1",
            status=JobStatus.RUNNING,
            progress=0.1,
            message="Video processing started",
        )

        result = await notifier.notify("https://cb.example/hook", "s3cr3t", event)

        assert result.success is True
        assert len(recorder.requests) == 1
        request = recorder.requests[0]
        assert "X-Job-Id" not in request.headers
        assert json.loads(request.content)["job_id"] == "vidéo-1"

    @pytest.mark.asyncio
    async def test_non_ascii_callback_secret_is_sent_as_utf8(self, notifier, recorder, event):
        result = await notifier.notify("https://cb.example/hook", "clé-secrète", event)

        assert result.success is True
        request = recorder.requests[0]
        authorization = [v for k, v in request.headers.raw if k.lower() == b"authorization"]
        assert authorization == ["Bearer clé-secrète".encode("utf-8")]

    def test_from_settings_uses_configured_timeout(self, settings):
        notifier = WebhookNotifier.from_settings(settings)
        assert notifier.timeout == 10.0
