"""
Configuration for the Secret Manager client.

Provides:
- Pydantic-based settings (GCSM_ environment variables, .env files)
- Layered resolution of project and version (defaults < handle < call)
"""

from gcsecretmanager.config.resolver import (
    DEFAULT_CONFIG,
    SecretManagerConfig,
    default_layer,
    merge_layers,
    resolve_config,
)
from gcsecretmanager.config.settings import Settings, get_settings

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    # Resolution
    "SecretManagerConfig",
    "DEFAULT_CONFIG",
    "merge_layers",
    "default_layer",
    "resolve_config",
]
