"""
Google Cloud Secret Manager REST client.

Implements the three primitive calls used by the handle:
- access a secret version (``versions/{version}:access``)
- create a secret with automatic replication (``secrets?secretId={key}``)
- add a secret version (``secrets/{key}:addVersion``)
"""

from __future__ import annotations

import base64
import binascii
import json

import httpx
import structlog

from gcsecretmanager.auth import TokenProvider, default_token_provider
from gcsecretmanager.clients.base import BaseHTTPClient, is_success_status
from gcsecretmanager.config.settings import Settings, get_settings
from gcsecretmanager.errors import PermissionDeniedError, UnexpectedResponseError
from gcsecretmanager.models import SecretReference

logger = structlog.get_logger()

AUTOMATIC_REPLICATION = {"replication": {"automatic": {}}}


def _sanitize_key(key: str) -> str:
    """Mask a secret key for logging."""
    if not key or len(key) < 3:
        return "***"
    return f"{key[:2]}***"


def encode_payload(value: str) -> str:
    """Base64-encode a secret value as required by ``SecretPayload.data``."""
    return base64.b64encode(value.encode("utf-8")).decode("ascii")


def decode_payload(data: str) -> str:
    """Decode ``SecretPayload.data`` back to text."""
    return base64.b64decode(data, validate=True).decode("utf-8")


class SecretManagerClient(BaseHTTPClient):
    """Secret Manager v1 REST API client."""

    def __init__(
        self,
        token_provider: TokenProvider | None = None,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        super().__init__(
            base_url or settings.api_base_url,
            timeout=timeout if timeout is not None else settings.http_timeout,
        )
        self._token_provider = token_provider or default_token_provider(settings)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token_provider.get_token()}",
            "Accept": "application/json",
        }

    def _write_headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json"}

    def fetch_secret(self, project: str, key: str, version: str | int = "latest") -> str | None:
        """Return the secret value, or None when the secret or version is absent.

        Raises:
            PermissionDeniedError: on HTTP 403
            UnexpectedResponseError: on any other non-2xx status or a malformed body
        """
        ref = SecretReference(project=project, key=key, version=version)
        logger.debug(
            "secret_fetch", project=project, key=_sanitize_key(key), version=str(version)
        )
        response = self.get(ref.access_path)

        if response.status_code == 403:
            raise PermissionDeniedError(project, key)
        if response.status_code == 404:
            logger.debug("secret_not_found", project=project, key=_sanitize_key(key))
            return None
        if not is_success_status(response.status_code):
            logger.warning("unexpected_response", operation="access", status=response.status_code)
            raise UnexpectedResponseError("access", response.status_code, response.text)

        return self._decode_access_response(response)

    def _decode_access_response(self, response: httpx.Response) -> str:
        try:
            data = response.json()["payload"]["data"]
            return decode_payload(data)
        except (json.JSONDecodeError, KeyError, TypeError) as exc:
            raise UnexpectedResponseError("access", response.status_code, response.text) from exc
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise UnexpectedResponseError("access", response.status_code, None) from exc

    def create_secret(self, project: str, key: str) -> httpx.Response:
        """Create an empty secret with automatic replication.

        The raw response is returned; 200 means created and 409 means the
        secret already exists.
        """
        ref = SecretReference(project=project, key=key)
        logger.debug("secret_create", project=project, key=_sanitize_key(key))
        return self.post(
            f"{ref.project_path}/secrets",
            params={"secretId": key},
            json=AUTOMATIC_REPLICATION,
            headers=self._write_headers(),
        )

    def create_secret_version(self, project: str, key: str, value: str) -> httpx.Response:
        """Add a new version holding ``value`` to an existing secret."""
        ref = SecretReference(project=project, key=key)
        logger.debug("secret_version_create", project=project, key=_sanitize_key(key))
        return self.post(
            ref.add_version_path,
            json={"payload": {"data": encode_payload(value)}},
            headers=self._write_headers(),
        )


__all__ = [
    "SecretManagerClient",
    "AUTOMATIC_REPLICATION",
    "encode_payload",
    "decode_payload",
]
