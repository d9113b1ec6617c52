"""
Configuration resolution for secret operations.

Configuration is layered: library defaults, then the handle's own
configuration, then per-call overrides. Each layer is a partial mapping and
a field set to ``None`` in a layer leaves the value below it untouched.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from types import MappingProxyType
from typing import Any, Mapping

from gcsecretmanager.config.settings import Settings, get_settings
from gcsecretmanager.errors import ConfigurationError

ConfigLayer = Mapping[str, Any]


@dataclass
class SecretManagerConfig:
    """Project and version used to address secrets.

    Fields left as None are filled in from lower configuration layers.
    """

    project: str | None = None
    version: str | int | None = None

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_CONFIG: Mapping[str, Any] = MappingProxyType({"project": None, "version": "latest"})

CONFIG_FIELDS = frozenset(f.name for f in fields(SecretManagerConfig))


def merge_layers(*layers: ConfigLayer | None) -> dict[str, Any]:
    """Overlay partial configuration layers, right-most non-None value wins."""
    merged: dict[str, Any] = {}
    for layer in layers:
        if not layer:
            continue
        unknown = set(layer) - CONFIG_FIELDS
        if unknown:
            raise ConfigurationError(
                f"Unknown configuration option(s): {', '.join(sorted(unknown))}",
                field=sorted(unknown)[0],
            )
        for name, value in layer.items():
            if value is not None:
                merged[name] = value
    return merged


def default_layer(settings: Settings | None = None) -> dict[str, Any]:
    """Library defaults, taking GCSM_PROJECT / GCSM_VERSION into account."""
    settings = settings or get_settings()
    return merge_layers(
        DEFAULT_CONFIG,
        {"project": settings.project or None, "version": settings.version or None},
    )


def _as_layer(config: SecretManagerConfig | ConfigLayer | None) -> ConfigLayer | None:
    if isinstance(config, SecretManagerConfig):
        return config.as_dict()
    return config


def resolve_config(
    instance: SecretManagerConfig | ConfigLayer | None = None,
    overrides: ConfigLayer | None = None,
    *,
    defaults: ConfigLayer | None = None,
) -> SecretManagerConfig:
    """Produce the effective configuration and validate it.

    Raises:
        ConfigurationError: if no layer supplies a project or the version is empty
    """
    if defaults is None:
        defaults = default_layer()
    merged = merge_layers(defaults, _as_layer(instance), overrides)

    if not merged.get("project"):
        raise ConfigurationError("Google Cloud project is required", field="project")
    if str(merged.get("version", "")) == "":
        raise ConfigurationError("Secret version is required", field="version")

    return SecretManagerConfig(**merged)


__all__ = [
    "SecretManagerConfig",
    "DEFAULT_CONFIG",
    "merge_layers",
    "default_layer",
    "resolve_config",
]
