"""Value types describing secrets addressed through the REST API."""

from __future__ import annotations

from dataclasses import dataclass

from gcsecretmanager.errors import ConfigurationError


@dataclass(frozen=True)
class SecretReference:
    """A single secret version, identified by project, key and version.

    Built per call from the effective configuration and never stored.
    """

    project: str
    key: str
    version: str | int = "latest"

    def __post_init__(self) -> None:
        if not self.project:
            raise ConfigurationError("Google Cloud project is required", field="project")
        if not self.key:
            raise ConfigurationError("Secret key is required", field="key")

    @property
    def project_path(self) -> str:
        return f"projects/{self.project}"

    @property
    def secret_path(self) -> str:
        return f"{self.project_path}/secrets/{self.key}"

    @property
    def version_path(self) -> str:
        return f"{self.secret_path}/versions/{self.version}"

    @property
    def access_path(self) -> str:
        """Path of the ``versions/{version}:access`` method."""
        return f"{self.version_path}:access"

    @property
    def add_version_path(self) -> str:
        """Path of the ``secrets/{key}:addVersion`` method."""
        return f"{self.secret_path}:addVersion"


__all__ = ["SecretReference"]
