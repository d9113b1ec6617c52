"""
Bearer token providers for the Secret Manager REST API.

Tokens are requested on every call and never cached by this module.
"""

from __future__ import annotations

from typing import Protocol

import structlog

from gcsecretmanager.config.settings import Settings, get_settings
from gcsecretmanager.errors import SecretManagerError

logger = structlog.get_logger()

CLOUD_PLATFORM_SCOPES = ("https://www.googleapis.com/auth/cloud-platform",)


class TokenProvider(Protocol):
    """Anything that can hand out a current OAuth access token."""

    def get_token(self) -> str:
        """Return an access token suitable for an ``Authorization: Bearer`` header."""


class StaticTokenProvider:
    """Always returns the same token."""

    def __init__(self, token: str) -> None:
        if not token:
            raise SecretManagerError("Access token must not be empty")
        self._token = token

    def get_token(self) -> str:
        return self._token


class GoogleAuthTokenProvider:
    """Google Application Default Credentials, refreshed on every request."""

    def __init__(self, scopes: tuple[str, ...] = CLOUD_PLATFORM_SCOPES) -> None:
        self._scopes = scopes

    def get_token(self) -> str:
        import google.auth
        import google.auth.exceptions
        from google.auth.transport.requests import Request

        try:
            credentials, _ = google.auth.default(scopes=list(self._scopes))
            credentials.refresh(Request())
        except google.auth.exceptions.GoogleAuthError as exc:
            logger.error("access_token_unavailable", error=type(exc).__name__)
            raise SecretManagerError(f"Unable to obtain Google access token: {exc}") from exc

        if not credentials.token:
            raise SecretManagerError("Google credentials did not return an access token")
        return credentials.token


def default_token_provider(settings: Settings | None = None) -> TokenProvider:
    """Static token when GCSM_ACCESS_TOKEN is set, Google ADC otherwise."""
    settings = settings or get_settings()
    if settings.access_token:
        return StaticTokenProvider(settings.access_token)
    return GoogleAuthTokenProvider()


__all__ = [
    "TokenProvider",
    "StaticTokenProvider",
    "GoogleAuthTokenProvider",
    "default_token_provider",
    "CLOUD_PLATFORM_SCOPES",
]
