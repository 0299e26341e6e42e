"""
Bearer token authentication for the worker.

Provides the authenticator used to check inbound requests against the shared
worker secret, and the FastAPI dependency that enforces it on protected
endpoints.
"""

import hmac
import logging
from typing import Optional

from fastapi import Header, Request

from app.errors import AuthorizationError

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "


class BearerAuthenticator:
    """Checks ``Authorization: Bearer <token>`` headers against a shared secret."""

    def __init__(self, expected_secret: Optional[str]):
        self._expected_secret = expected_secret

    @property
    def configured(self) -> bool:
        return bool(self._expected_secret)

    def is_authorized(self, authorization: Optional[str]) -> bool:
        """
        Return True if the header carries the configured secret.

        Without a configured secret nothing is authorized.
        """
        if not self._expected_secret:
            return False
        if not authorization or not authorization.startswith(BEARER_PREFIX):
            return False

        token = authorization[len(BEARER_PREFIX):]
        return hmac.compare_digest(
            token.encode("utf-8"), self._expected_secret.encode("utf-8")
        )


async def verify_worker_secret(
    request: Request,
    authorization: Optional[str] = Header(None),
) -> None:
    """
    FastAPI dependency to verify the worker bearer token.

    Args:
        request: The incoming request (used to reach the app's authenticator)
        authorization: The Authorization header value

    Raises:
        AuthorizationError: 401 if the token is missing or invalid
    """
    authenticator: BearerAuthenticator = request.app.state.authenticator

    if not authenticator.configured:
        logger.error("WORKER_SECRET not configured, rejecting request")
        raise AuthorizationError()

    if not authenticator.is_authorized(authorization):
        logger.warning("Invalid or missing bearer token")
        raise AuthorizationError()

    logger.debug("Bearer token validated successfully")
