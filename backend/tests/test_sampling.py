"""
Tests for image sampling engines.
"""

import subprocess
from pathlib import Path

import pytest

from tinte.services import sampling
from tinte.services.colors.model import RGB
from tinte.services.sampling import (
    ImageMagickSampler, PillowSampler, SamplingError, get_sampler, parse_histogram, sample_image
)
from tinte.utils.metrics import get_metrics


HISTOGRAM_OUTPUT = """\
       120: ( 26, 27, 38) #1A1B26 srgb(26,27,38)
      4000: (247,118,142) #F7768E srgb(247,118,142)
        75: (122,162,247) #7AA2F7 srgb(122,162,247)
not a histogram line
      4000: (158,206,106) #9ECE6A srgb(158,206,106)
"""


class TestHistogramParsing:
    """Test ImageMagick histogram parsing"""

    def test_sorted_by_count_descending(self):
        colors = parse_histogram(HISTOGRAM_OUTPUT)
        assert colors == [
            RGB(247, 118, 142),
            RGB(158, 206, 106),
            RGB(26, 27, 38),
            RGB(122, 162, 247),
        ]

    def test_empty_output(self):
        assert parse_histogram("") == []


class TestImageMagickSampler:
    """Test the ImageMagick engine without invoking the binary"""

    def test_command(self):
        sampler = ImageMagickSampler(timeout=5, scale="800x600>")
        command = sampler.build_command("magick", Path("wall.png"), 24)
        assert command == [
            "magick", "wall.png", "-scale", "800x600>", "-colors", "24",
            "-depth", "8", "-format", "%c", "histogram:info:-",
        ]

    def test_falls_back_to_convert(self, monkeypatch):
        calls = []

        def fake_run(command, **kwargs):
            calls.append(command[0])
            if command[0] == "magick":
                raise FileNotFoundError(command[0])
            return subprocess.CompletedProcess(command, 0, stdout=HISTOGRAM_OUTPUT, stderr="")

        monkeypatch.setattr(sampling.subprocess, "run", fake_run)
        colors = ImageMagickSampler().sample("wall.png", 24)
        assert calls == ["magick", "convert"]
        assert colors[0] == RGB(247, 118, 142)

    def test_missing_binaries(self, monkeypatch):
        def fake_run(command, **kwargs):
            raise FileNotFoundError(command[0])

        monkeypatch.setattr(sampling.subprocess, "run", fake_run)
        with pytest.raises(SamplingError, match="not installed"):
            ImageMagickSampler().sample("wall.png", 24)

    def test_tool_failure(self, monkeypatch):
        def fake_run(command, **kwargs):
            return subprocess.CompletedProcess(command, 1, stdout="", stderr="no decode delegate")

        monkeypatch.setattr(sampling.subprocess, "run", fake_run)
        with pytest.raises(SamplingError, match="no decode delegate"):
            ImageMagickSampler().sample("wall.png", 24)

    def test_timeout(self, monkeypatch):
        def fake_run(command, **kwargs):
            raise subprocess.TimeoutExpired(command, kwargs.get("timeout"))

        monkeypatch.setattr(sampling.subprocess, "run", fake_run)
        with pytest.raises(SamplingError, match="timed out"):
            ImageMagickSampler(timeout=1).sample("wall.png", 24)

    def test_no_colors(self, monkeypatch):
        def fake_run(command, **kwargs):
            return subprocess.CompletedProcess(command, 0, stdout="garbage", stderr="")

        monkeypatch.setattr(sampling.subprocess, "run", fake_run)
        with pytest.raises(SamplingError):
            ImageMagickSampler().sample("wall.png", 24)


class TestPillowSampler:
    """Test the Pillow engine on generated images"""

    def test_most_frequent_first(self, make_image):
        path = make_image([((200, 30, 40), 40), ((20, 40, 200), 20)])
        colors = PillowSampler().sample(path, 24)
        assert 1 <= len(colors) <= 24
        first = colors[0]
        assert first.r > first.b
        assert any(c.b > c.r for c in colors)

    def test_returns_plain_ints(self, make_image):
        path = make_image([((10, 200, 30), 30)])
        for color in PillowSampler().sample(path, 8):
            assert type(color.r) is int

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image at all")
        with pytest.raises(SamplingError):
            PillowSampler().sample(path, 24)


class TestSampleImage:
    """Test the engine selection entry point"""

    def test_missing_file(self, tmp_path):
        with pytest.raises(SamplingError, match="not found"):
            sample_image(tmp_path / "missing.png")

    def test_unknown_engine(self, make_image):
        with pytest.raises(ValueError):
            sample_image(make_image([((1, 2, 3), 10)]), engine="bogus")
        with pytest.raises(ValueError):
            get_sampler("bogus")

    def test_color_count_validated(self, make_image):
        with pytest.raises(ValueError):
            sample_image(make_image([((1, 2, 3), 10)]), engine="pillow", colors=1)

    def test_auto_falls_back_to_pillow(self, make_image, monkeypatch):
        def broken(self, path, colors):
            raise SamplingError("ImageMagick is not installed")

        monkeypatch.setattr(ImageMagickSampler, "sample", broken)
        colors = sample_image(make_image([((200, 30, 40), 40)]), engine="auto")
        assert colors

        counters = get_metrics().get_counters()
        assert counters["sampler_fallback_total"] == 1
        assert counters["sampler_engine_used_total_pillow"] == 1

    def test_explicit_engine(self, make_image):
        sample_image(make_image([((200, 30, 40), 40)]), engine="pillow")
        assert get_metrics().get_counters()["sampler_engine_used_total_pillow"] == 1
        assert "sampling_duration_ms" in get_metrics().get_timing_stats()
