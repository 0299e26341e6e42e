"""
Webhook Service - HTTP client for sending job status events to callback URLs.

Delivery is best-effort and at-most-once:
- One POST per event, no retries and no backoff
- Bounded request timeout
- Bearer authorization with the job's callback secret
- Optional HMAC-SHA256 body signature
- Failures are logged and absorbed, never raised to the caller
"""

import hashlib
import hmac
import json
import logging
from dataclasses import dataclass
from typing import Optional, Union

import httpx

from app.config import Settings
from app.schemas.events import JobStatusEvent

logger = logging.getLogger(__name__)


@dataclass
class WebhookResult:
    """Result of a webhook delivery attempt."""

    success: bool
    status_code: Optional[int] = None
    error: Optional[str] = None


class WebhookNotifier:
    """
    Sends job status events to a caller-supplied webhook.

    ``notify`` never raises: a failed delivery is recorded in the log and in
    the returned WebhookResult, and the job carries on as if it had succeeded.
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        signing_secret: Optional[str] = None,
        user_agent: str = "Cre8-Video-Worker/1.0",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the notifier.

        Args:
            timeout_seconds: HTTP request timeout
            signing_secret: If set, bodies are signed with HMAC-SHA256
            user_agent: User-Agent header for outgoing calls
            transport: Optional httpx transport (used to stub the network)
        """
        self.timeout = timeout_seconds
        self.user_agent = user_agent
        self._signing_secret = signing_secret
        self._transport = transport

        if self._signing_secret:
            logger.info("Webhook HMAC signing enabled")

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "WebhookNotifier":
        return cls(
            timeout_seconds=settings.webhook_timeout_seconds,
            signing_secret=settings.webhook_signing_secret,
            user_agent=settings.user_agent,
            transport=transport,
        )

    def _sign_payload(self, payload_json: str) -> str:
        """
        Generate HMAC-SHA256 signature for a webhook body.

        Returns:
            Signature string in format: sha256=<hex-signature>, or "" if unsigned
        """
        if not self._signing_secret:
            return ""

        signature = hmac.new(
            self._signing_secret.encode("utf-8"),
            payload_json.encode("utf-8"),
            hashlib.sha256,
        ).hexdigest()
        return f"sha256={signature}"

    def build_headers(
        self, callback_secret: str, event: JobStatusEvent, payload_json: str
    ) -> dict[str, Union[str, bytes]]:
        """
        Headers for one delivery.

        Header values go out as ASCII, so a non-ASCII callback secret is sent
        as UTF-8 bytes and X-Job-Id is only added for ASCII job IDs (the ID is
        always in the body).
        """
        authorization: Union[str, bytes] = f"Bearer {callback_secret}"
        if not authorization.isascii():
            authorization = authorization.encode("utf-8")

        headers: dict[str, Union[str, bytes]] = {
            "Content-Type": "application/json",
            "Authorization": authorization,
            "User-Agent": self.user_agent,
            "X-Webhook-Event": event.status.value,
        }
        if event.job_id.isascii():
            headers["X-Job-Id"] = event.job_id

        signature = self._sign_payload(payload_json)
        if signature:
            headers["X-Webhook-Signature"] = signature

        return headers

    async def notify(
        self,
        callback_url: str,
        callback_secret: str,
        event: JobStatusEvent,
    ) -> WebhookResult:
        """
        Send one status event to the callback URL.

        Args:
            callback_url: The webhook URL supplied with the job
            callback_secret: Bearer token supplied with the job
            event: The status event to deliver

        Returns:
            WebhookResult describing the outcome (for diagnostics only)
        """
        try:
            # Serialize once so the signature matches the bytes on the wire
            payload_json = json.dumps(event.to_payload(), separators=(",", ":"))
            headers = self.build_headers(callback_secret, event, payload_json)

            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    callback_url,
                    content=payload_json,
                    headers=headers,
                )

            if response.status_code < 300:
                logger.info(
                    f"Webhook sent: {event.status.value} for job {event.job_id} "
                    f"(status {response.status_code})"
                )
                return WebhookResult(success=True, status_code=response.status_code)

            error = f"HTTP {response.status_code}: {response.text[:200]}"
            logger.warning(
                f"Webhook send failed: {event.status.value} for job {event.job_id} ({error})"
            )
            return WebhookResult(
                success=False, status_code=response.status_code, error=error
            )

        except httpx.TimeoutException:
            error = "Request timed out"
            logger.warning(
                f"Webhook timeout: {event.status.value} for job {event.job_id} "
                f"after {self.timeout}s"
            )

        except httpx.RequestError as e:
            error = f"Request error: {str(e)}"
            logger.warning(
                f"Webhook send failed: {event.status.value} for job {event.job_id} ({error})"
            )

        except Exception as e:
            error = f"Unexpected error: {str(e)}"
            logger.exception(
                f"Webhook unexpected error: {event.status.value} for job {event.job_id}"
            )

        return WebhookResult(success=False, error=error)
