"""Root test configuration."""

import logging

import pytest
import structlog
from gcsecretmanager.auth import StaticTokenProvider
from gcsecretmanager.clients.secretmanager import SecretManagerClient
from gcsecretmanager.config.settings import get_settings

TOKEN = "mock-oauth-token"


def pytest_configure(config):
    """Configure structlog for tests to suppress debug/info output."""
    logging.basicConfig(level=logging.WARNING, force=True)
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.processors.add_log_level,
            structlog.processors.format_exc_info,
            structlog.dev.ConsoleRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    """Keep GCSM_* variables and .env files from leaking into tests."""
    for name in ("GCSM_PROJECT", "GCSM_VERSION", "GCSM_ACCESS_TOKEN", "GCSM_API_BASE_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def static_token(monkeypatch):
    """Make default clients authenticate with a fixed token."""
    monkeypatch.setenv("GCSM_ACCESS_TOKEN", TOKEN)
    get_settings.cache_clear()
    return TOKEN


@pytest.fixture
def client():
    return SecretManagerClient(StaticTokenProvider(TOKEN))
