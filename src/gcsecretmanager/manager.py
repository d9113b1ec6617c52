"""
Stateful Secret Manager handle.

A handle owns one mutable configuration. ``set_project`` and ``set_version``
change it in place and return the handle, so calls can be chained::

    manager = init().set_project("my-project").set_version(3)
    value = manager.get("db-password")

Overrides passed to ``get``/``set`` apply to that call only.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Mapping

import httpx
import structlog

from gcsecretmanager.clients.secretmanager import SecretManagerClient, _sanitize_key
from gcsecretmanager.config.resolver import (
    SecretManagerConfig,
    merge_layers,
    resolve_config,
)
from gcsecretmanager.errors import UnexpectedResponseError

logger = structlog.get_logger()

CREATE_SECRET_OK = frozenset({200, 409})


class SecretManager:
    """Chainable handle over a :class:`SecretManagerClient`."""

    def __init__(
        self,
        config: SecretManagerConfig | Mapping[str, Any] | None = None,
        *,
        client: SecretManagerClient | None = None,
    ) -> None:
        if isinstance(config, SecretManagerConfig):
            config = config.as_dict()
        self._config = SecretManagerConfig(**merge_layers(config))
        self._client = client

    def __repr__(self) -> str:
        return (
            f"SecretManager(project={self._config.project!r}, "
            f"version={self._config.version!r})"
        )

    @property
    def client(self) -> SecretManagerClient:
        # Built lazily so that a handle can be configured without credentials
        if self._client is None:
            self._client = SecretManagerClient()
        return self._client

    @property
    def config(self) -> SecretManagerConfig:
        """Snapshot of the handle's stored configuration."""
        return replace(self._config)

    def set_project(self, project: str) -> SecretManager:
        self._config.project = project
        return self

    def set_version(self, version: str | int) -> SecretManager:
        self._config.version = version
        return self

    def _resolve(self, project: str | None, version: str | int | None) -> SecretManagerConfig:
        return resolve_config(self._config, {"project": project, "version": version})

    def get(
        self,
        key: str,
        *,
        project: str | None = None,
        version: str | int | None = None,
    ) -> str | None:
        """Get the secret value for ``key``, or None if it does not exist.

        Raises:
            ConfigurationError: if no project is configured
            PermissionDeniedError: if access to the secret is denied
        """
        config = self._resolve(project, version)
        return self.get_secret(config.project, key, config.version)

    def set(
        self,
        key: str,
        value: str,
        *,
        project: str | None = None,
        version: str | int | None = None,
    ) -> None:
        """Store ``value`` as a new version of ``key``, creating the secret if needed.

        Not atomic: if adding the version fails the secret is left without
        the new version. Calling ``set`` again is safe.

        Raises:
            ConfigurationError: if no project is configured
            UnexpectedResponseError: if either request returns an unexpected status
        """
        config = self._resolve(project, version)

        response = self.create_secret(config.project, key)
        if response.status_code not in CREATE_SECRET_OK:
            raise UnexpectedResponseError("create_secret", response.status_code, response.text)
        if response.status_code == 409:
            logger.debug("secret_already_exists", project=config.project, key=_sanitize_key(key))
        else:
            logger.info("secret_created", project=config.project, key=_sanitize_key(key))

        response = self.create_secret_version(config.project, key, value)
        if response.status_code != 200:
            raise UnexpectedResponseError("add_version", response.status_code, response.text)
        logger.info("secret_version_created", project=config.project, key=_sanitize_key(key))

    def get_secret(self, project: str, key: str, version: str | int = "latest") -> str | None:
        return self.client.fetch_secret(project, key, version)

    def create_secret(self, project: str, key: str) -> httpx.Response:
        return self.client.create_secret(project, key)

    def create_secret_version(self, project: str, key: str, value: str) -> httpx.Response:
        return self.client.create_secret_version(project, key, value)


__all__ = ["SecretManager", "CREATE_SECRET_OK"]
