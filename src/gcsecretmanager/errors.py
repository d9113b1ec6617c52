"""Exception hierarchy for the Secret Manager client."""

from __future__ import annotations


class SecretManagerError(Exception):
    """Base class for all Secret Manager client errors."""


class ConfigurationError(SecretManagerError):
    """Effective configuration is missing a required field."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class PermissionDeniedError(SecretManagerError):
    """Secret Manager refused access to a secret (HTTP 403)."""

    def __init__(self, project: str, key: str, *, status_code: int = 403) -> None:
        super().__init__(f"Permission denied for secret '{key}' in project '{project}'")
        self.project = project
        self.key = key
        self.status_code = status_code


class UnexpectedResponseError(SecretManagerError):
    """Secret Manager answered with a status code the caller cannot handle."""

    def __init__(self, operation: str, status_code: int, body: str | None = None) -> None:
        super().__init__(
            f"Unexpected response code from the Secret Manager ({operation}): {status_code}"
        )
        self.operation = operation
        self.status_code = status_code
        self.body = body


class TransportError(SecretManagerError):
    """The HTTP request could not be completed."""

    pass


__all__ = [
    "SecretManagerError",
    "ConfigurationError",
    "PermissionDeniedError",
    "UnexpectedResponseError",
    "TransportError",
]
