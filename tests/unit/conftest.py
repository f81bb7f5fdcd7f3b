"""Unit test environment helpers."""

import pytest


@pytest.fixture(autouse=True)
def _minimal_env(monkeypatch):
    """Keep unit tests independent of the developer's shell and .env file."""
    for name in ("LLM_PROVIDER", "LLM_MODEL", "LLM_MAX_TOKENS", "DASHBOARD_CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    yield
