"""
Pytest fixtures for testing
"""
import os

import pytest

from finsched.config import Settings, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Isolate tests from FINSCHED_* variables and the cached settings."""
    for key in list(os.environ):
        if key.startswith("FINSCHED_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def strict_settings() -> Settings:
    return Settings(_env_file=None, STRICT_PRECONDITIONS=True)


@pytest.fixture
def lenient_settings() -> Settings:
    return Settings(_env_file=None, STRICT_PRECONDITIONS=False)
