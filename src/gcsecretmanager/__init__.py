"""
Minimal client for Google Cloud Secret Manager.

Two equivalent surfaces are provided. Module-level functions resolve their
configuration per call::

    import gcsecretmanager

    value = gcsecretmanager.get("db-password", project="my-project")
    gcsecretmanager.set("db-password", "hunter2", project="my-project")

A handle keeps its configuration between calls::

    manager = gcsecretmanager.init(project="my-project")
    value = manager.set_version(3).get("db-password")
"""

from __future__ import annotations

from typing import Any, Mapping

import httpx

from gcsecretmanager.clients.secretmanager import SecretManagerClient
from gcsecretmanager.config.resolver import DEFAULT_CONFIG, SecretManagerConfig, merge_layers
from gcsecretmanager.errors import (
    ConfigurationError,
    PermissionDeniedError,
    SecretManagerError,
    TransportError,
    UnexpectedResponseError,
)
from gcsecretmanager.logging import configure_logging
from gcsecretmanager.manager import SecretManager
from gcsecretmanager.models import SecretReference

__version__ = "0.1.0"


def init(
    config: SecretManagerConfig | Mapping[str, Any] | None = None,
    *,
    project: str | None = None,
    version: str | int | None = None,
    client: SecretManagerClient | None = None,
) -> SecretManager:
    """Create a handle configured with ``config`` and the given keyword values."""
    if isinstance(config, SecretManagerConfig):
        config = config.as_dict()
    layer = merge_layers(config, {"project": project, "version": version})
    return SecretManager(layer, client=client)


def get(key: str, *, project: str | None = None, version: str | int | None = None) -> str | None:
    """Get the secret value for ``key``; None if the secret or version does not exist."""
    return init(project=project, version=version).get(key)


def set(
    key: str,
    value: str,
    *,
    project: str | None = None,
    version: str | int | None = None,
) -> None:
    """Store ``value`` as a new version of ``key``, creating the secret first if needed."""
    return init(project=project, version=version).set(key, value)


def get_secret(project: str, key: str, version: str | int = "latest") -> str | None:
    return init().get_secret(project, key, version)


def create_secret(project: str, key: str) -> httpx.Response:
    return init().create_secret(project, key)


def create_secret_version(project: str, key: str, value: str) -> httpx.Response:
    return init().create_secret_version(project, key, value)


def set_project(project: str) -> SecretManager:
    """Shortcut for ``init().set_project(project)``."""
    return init().set_project(project)


def set_version(version: str | int) -> SecretManager:
    """Shortcut for ``init().set_version(version)``."""
    return init().set_version(version)


__all__ = [
    "init",
    "get",
    "set",
    "get_secret",
    "create_secret",
    "create_secret_version",
    "set_project",
    "set_version",
    "SecretManager",
    "SecretManagerClient",
    "SecretManagerConfig",
    "SecretReference",
    "DEFAULT_CONFIG",
    "SecretManagerError",
    "ConfigurationError",
    "PermissionDeniedError",
    "UnexpectedResponseError",
    "TransportError",
    "configure_logging",
]
