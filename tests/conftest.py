"""
Pytest configuration for TrueCheck tests.

Forces search mock mode and keeps any local .env out of the settings.
"""
import os

os.environ["ENV_FILE"] = os.path.join(os.path.dirname(__file__), "missing.env")
os.environ["GOOGLE_SEARCH_API_KEY"] = ""
os.environ["GOOGLE_SEARCH_ENGINE_ID"] = ""

import pytest
from fastapi.testclient import TestClient

from truecheck.config import settings
from truecheck.main import app


@pytest.fixture
def client():
    """Create test client for FastAPI app."""
    return TestClient(app)


@pytest.fixture
def live_search(monkeypatch):
    """Pretend search credentials are configured."""
    monkeypatch.setattr(settings, "GOOGLE_SEARCH_API_KEY", "test-search-key")
    monkeypatch.setattr(settings, "GOOGLE_SEARCH_ENGINE_ID", "test-cx")
