"""
API tests for the palette service.

Covers:
- Health and root endpoints
- Seed color and default palettes
- Image uploads, validation and caching
- Metrics summary
"""

import asyncio
import io

from PIL import Image


def png_bytes(bands, height: int = 30) -> bytes:
    """Encode an image made of (rgb, width) bands as PNG."""
    width = sum(w for _, w in bands)
    image = Image.new("RGB", (width, height))
    x = 0
    for rgb, band_width in bands:
        image.paste(rgb, (x, 0, x + band_width, height))
        x += band_width
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def assert_palette_shape(data):
    assert len(data["colors"]) == 16
    assert data["background"] == data["colors"][0]
    assert data["foreground"] == data["colors"][15]
    assert len(data["semantic"]) == 7
    assert data["request_id"].startswith("pal-")


class TestServiceEndpoints:
    """Test health and root endpoints"""

    def test_health_check(self, test_client):
        response = test_client.get("/healthz")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "ok"
        assert data["service"] == "tinte"
        assert "version" in data

    def test_root(self, test_client):
        data = test_client.get("/").json()
        assert data["docs"] == "/docs"


class TestColorPalette:
    """Test /v1/palette/color"""

    def test_seed_color(self, test_client):
        response = test_client.post("/v1/palette/color", json={"hex": "#7aa2f7"})
        assert response.status_code == 200
        data = response.json()
        assert_palette_shape(data)
        assert data["strategy"] == "seed"
        assert data["mode"] == "dark"
        assert data["from_cache"] is False

    def test_light_mode_without_hash(self, test_client):
        response = test_client.post("/v1/palette/color", json={"hex": "7aa2f7", "mode": "light"})
        assert response.status_code == 200
        assert response.json()["mode"] == "light"

    def test_invalid_hex(self, test_client):
        response = test_client.post("/v1/palette/color", json={"hex": "not-a-color"})
        assert response.status_code == 400
        assert "detail" in response.json()

    def test_invalid_mode(self, test_client):
        response = test_client.post("/v1/palette/color", json={"hex": "#7aa2f7", "mode": "sepia"})
        assert response.status_code == 422


class TestDefaultPalette:
    """Test /v1/palette/default"""

    def test_dark(self, test_client):
        data = test_client.get("/v1/palette/default").json()
        assert data["strategy"] == "default"
        assert data["colors"][0] == "#1a1b26"
        assert data["colors"][15] == "#c0caf5"

    def test_light(self, test_client):
        response = test_client.get("/v1/palette/default?mode=light")
        assert response.status_code == 200
        assert response.json()["mode"] == "light"

    def test_bad_mode(self, test_client):
        assert test_client.get("/v1/palette/default?mode=neon").status_code == 422


class TestImagePalette:
    """Test /v1/palette/image"""

    def upload(self, client, content, filename="wall.png", content_type="image/png", **params):
        query = {"sampler": "pillow", **params}
        return client.post(
            "/v1/palette/image",
            params=query,
            files={"file": (filename, content, content_type)},
        )

    def test_upload_and_cache(self, test_client):
        content = png_bytes([((190, 60, 70), 30), ((60, 170, 90), 30), ((70, 90, 200), 30), ((24, 26, 36), 60)])

        first = self.upload(test_client, content)
        assert first.status_code == 200
        data = first.json()
        assert_palette_shape(data)
        assert data["strategy"] in ("chromatic", "monochrome", "subtle")
        assert data["from_cache"] is False

        second = self.upload(test_client, content)
        assert second.status_code == 200
        assert second.json()["from_cache"] is True
        assert second.json()["colors"] == data["colors"]

    def test_mode_is_part_of_cache_key(self, test_client):
        content = png_bytes([((120, 130, 140), 40), ((15, 15, 18), 40)])
        assert self.upload(test_client, content).json()["from_cache"] is False
        light = self.upload(test_client, content, mode="light").json()
        assert light["from_cache"] is False
        assert light["mode"] == "light"

    def test_unsupported_media_type(self, test_client):
        response = self.upload(test_client, b"hello world, not an image", filename="notes.txt",
                               content_type="text/plain")
        assert response.status_code == 415

    def test_unsupported_extension(self, test_client):
        response = self.upload(test_client, png_bytes([((1, 2, 3), 10)]), filename="wall.gif")
        assert response.status_code == 415

    def test_bad_magic_bytes(self, test_client):
        response = self.upload(test_client, b"\x00" * 64)
        assert response.status_code == 400

    def test_too_small(self, test_client):
        response = self.upload(test_client, b"\x89PNG")
        assert response.status_code == 400

    def test_bad_sampler(self, test_client):
        response = self.upload(test_client, png_bytes([((1, 2, 3), 10)]), sampler="gimp")
        assert response.status_code == 422


class TestMetricsEndpoint:
    """Test /v1/metrics"""

    def test_counts_requests(self, test_client):
        test_client.post("/v1/palette/color", json={"hex": "#7aa2f7"})
        test_client.get("/v1/palette/default")

        data = test_client.get("/v1/metrics").json()
        assert data["counters"]["palette_requests_total"] == 2
        assert data["counters"]["palette_requests_total_color"] == 1
        assert data["counters"]["palette_strategy_total_seed"] == 1
        assert "uptime_seconds" in data


class TestImageSamplingOffLoop:
    """Image sampling must not run on the event loop thread"""

    def test_sampling_runs_in_worker_thread(self, test_client, monkeypatch):
        from tinte.api import v1

        seen = {}
        original = v1.orchestrator.from_image

        def recording_from_image(*args, **kwargs):
            try:
                asyncio.get_running_loop()
                seen["on_loop"] = True
            except RuntimeError:
                seen["on_loop"] = False
            return original(*args, **kwargs)

        monkeypatch.setattr(v1.orchestrator, "from_image", recording_from_image)
        response = test_client.post(
            "/v1/palette/image",
            params={"sampler": "pillow"},
            files={"file": ("wall.png", png_bytes([((210, 120, 40), 40), ((12, 14, 20), 40)]), "image/png")},
        )
        assert response.status_code == 200
        assert seen == {"on_loop": False}
