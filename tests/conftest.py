"""
Shared test fixtures: profile catalogs, default configs, test client.
"""

import pytest
from fastapi.testclient import TestClient

from ironforge.catalog import default_gate_catalog, default_window_catalog
from ironforge.config import settings
from ironforge.main import app
from ironforge.schemas import default_gate_config, default_window_config


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)


@pytest.fixture
def gate_catalog():
    return default_gate_catalog()


@pytest.fixture
def window_catalog():
    return default_window_catalog()


@pytest.fixture
def gate_config():
    """3000 x 1500 mm sliding gate, p26 frame, p7 bars every 100 mm."""
    return default_gate_config()


@pytest.fixture
def window_config():
    """2400 x 1200 mm, 1 x 3 grid: fixed, sliding, sliding."""
    return default_window_config()


@pytest.fixture
def no_ai_key(monkeypatch):
    """Run with suggestions disabled regardless of the local .env."""
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "")


@pytest.fixture
def ai_key(monkeypatch):
    monkeypatch.setattr(settings, "GEMINI_API_KEY", "test-key")
