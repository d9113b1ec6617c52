from __future__ import annotations

from typing import Any

import httpx
import structlog

from gcsecretmanager.errors import TransportError

logger = structlog.get_logger()


def is_success_status(status_code: int) -> bool:
    """Determine if HTTP status code is a 2xx."""
    return 200 <= status_code < 300


class BaseHTTPClient:
    """Base HTTP client issuing one synchronous request per call.

    Non-2xx responses are handed back to the caller untouched so that status
    codes can be classified by the API-specific client.
    """

    def __init__(self, base_url: str, *, timeout: float = 30.0) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        return self._base_url

    def _headers(self) -> dict[str, str]:
        """Override to provide custom headers."""
        return {"Accept": "application/json"}

    def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute HTTP request without raising on HTTP error statuses."""
        url = f"{self._base_url}/{path.lstrip('/')}"
        req_headers = self._headers()
        if headers:
            req_headers.update(headers)

        try:
            with httpx.Client(timeout=self._timeout) as client:
                response = client.request(
                    method,
                    url,
                    params=params,
                    json=json,
                    headers=req_headers,
                )
        except httpx.RequestError as exc:
            logger.warning("http_network_error", method=method, url=url, error=str(exc))
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logger.debug("http_response", method=method, url=url, status=response.status_code)
        return response

    def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute GET request."""
        return self._request("GET", path, params=params, headers=headers)

    def post(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        """Execute POST request."""
        return self._request("POST", path, params=params, json=json, headers=headers)
