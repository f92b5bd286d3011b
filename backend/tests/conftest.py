"""
Test configuration and fixtures for Tinte tests.
"""
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from tinte.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def isolated_dirs(tmp_path, monkeypatch):
    """Point XDG config/cache lookups at a temporary directory."""
    config_home = tmp_path / "config"
    cache_home = tmp_path / "cache"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    monkeypatch.setenv("XDG_CACHE_HOME", str(cache_home))
    return tmp_path


@pytest.fixture
def make_image(tmp_path):
    """
    Factory writing a PNG made of vertical color bands.

    Usage: make_image([((255, 0, 0), 40), ((0, 0, 255), 20)]) where each
    entry is (rgb, band width in pixels).
    """
    counter = {"n": 0}

    def _make(bands, height: int = 40, name: str = None):
        width = sum(w for _, w in bands)
        image = Image.new("RGB", (width, height))
        x = 0
        for rgb, band_width in bands:
            image.paste(rgb, (x, 0, x + band_width, height))
            x += band_width
        counter["n"] += 1
        path = tmp_path / (name or f"image_{counter['n']}.png")
        image.save(path)
        return path

    return _make
