"""
Shared fixtures: fresh settings, store and metrics for every test.
"""
import io

import pytest


@pytest.fixture(autouse=True)
def isolated_service(monkeypatch):
    """Configure a test API key, disable the request log file and clear all state."""
    monkeypatch.setenv("AI_API_KEY", "test-key")
    monkeypatch.setenv("FASHION_AI_LOGGING_ENABLED", "false")
    monkeypatch.setenv("FASHION_AI_ENV", "test")
    monkeypatch.delenv("OPENWEATHER_API_KEY", raising=False)
    monkeypatch.delenv("FASHION_AI_PROVIDER", raising=False)
    monkeypatch.delenv("FASHION_AI_FALLBACK_MODEL", raising=False)

    from fashion_ai.config import reload_settings, reset_llm_config
    from fashion_ai.llm import reset_llm_client
    from fashion_ai.llm.fashion_client import fashion_client
    from fashion_ai.db import store
    from fashion_ai.observability import reset_metrics

    reload_settings()
    reset_llm_config()
    reset_llm_client()
    fashion_client._llm = None
    store.clear_all()
    reset_metrics()

    yield store

    store.clear_all()


@pytest.fixture
def jpeg_bytes():
    """A small valid JPEG."""
    from PIL import Image

    img = Image.new("RGB", (100, 120), color="blue")
    buffer = io.BytesIO()
    img.save(buffer, format="JPEG")
    return buffer.getvalue()
