"""
Image Sampling

Reduces an image to its dominant colors, most frequent first. Two engines:
ImageMagick's histogram output (the `magick` binary, falling back to the
legacy `convert` name) and an in-process Pillow median-cut quantizer.
"""

import re
import subprocess
import time
from pathlib import Path
from typing import List, Optional, Tuple, Union

import numpy as np
from loguru import logger
from PIL import Image, UnidentifiedImageError

from ..config import config
from ..utils.metrics import get_metrics
from .colors.model import RGB, rgb_from_hex


HISTOGRAM_LINE = re.compile(r"^\s*(\d+):\s*\([^)]*\)\s*(#[0-9A-Fa-f]{6})")
IMAGEMAGICK_BINARIES = ("magick", "convert")
MAX_SAMPLE_SIZE = (800, 600)

PathLike = Union[str, Path]


class SamplingError(RuntimeError):
    """Raised when an image cannot be reduced to a color sample."""


def parse_histogram(output: str) -> List[RGB]:
    """
    Parse `histogram:info:-` output into colors sorted by pixel count.

    Lines look like `  1234: ( 26, 27, 38) #1A1B26 srgb(26,27,38)`; lines
    that do not match are ignored. Ties keep their output order.
    """
    entries: List[Tuple[int, RGB]] = []
    for line in output.splitlines():
        match = HISTOGRAM_LINE.match(line)
        if match is None:
            continue
        entries.append((int(match.group(1)), rgb_from_hex(match.group(2))))

    entries.sort(key=lambda entry: entry[0], reverse=True)
    return [color for _, color in entries]


class ImageMagickSampler:
    """Dominant colors via ImageMagick's quantizer and histogram."""

    name = "imagemagick"

    def __init__(self, timeout: Optional[float] = None, scale: Optional[str] = None):
        self.timeout = timeout if timeout is not None else config.SAMPLER_TIMEOUT_S
        self.scale = scale or config.SAMPLE_SCALE

    def build_command(self, binary: str, path: Path, colors: int) -> List[str]:
        return [
            binary, str(path),
            "-scale", self.scale,
            "-colors", str(colors),
            "-depth", str(config.SAMPLE_BIT_DEPTH),
            "-format", "%c",
            "histogram:info:-",
        ]

    def _run(self, path: Path, colors: int) -> subprocess.CompletedProcess:
        for binary in IMAGEMAGICK_BINARIES:
            try:
                return subprocess.run(
                    self.build_command(binary, path, colors),
                    capture_output=True,
                    text=True,
                    timeout=self.timeout,
                    check=False,
                )
            except FileNotFoundError:
                logger.debug(f"ImageMagick binary '{binary}' not found")
            except subprocess.TimeoutExpired as e:
                raise SamplingError(f"ImageMagick timed out after {self.timeout}s") from e

        raise SamplingError("ImageMagick is not installed (tried: magick, convert)")

    def sample(self, path: PathLike, colors: int) -> List[RGB]:
        path = Path(path)
        result = self._run(path, colors)
        if result.returncode != 0:
            raise SamplingError(f"ImageMagick failed: {result.stderr.strip()}")

        sampled = parse_histogram(result.stdout)
        if not sampled:
            raise SamplingError(f"ImageMagick returned no colors for {path}")
        return sampled


class PillowSampler:
    """Dominant colors via Pillow median-cut quantization."""

    name = "pillow"

    def __init__(self, max_size: Tuple[int, int] = MAX_SAMPLE_SIZE):
        self.max_size = max_size

    def sample(self, path: PathLike, colors: int) -> List[RGB]:
        try:
            with Image.open(path) as image:
                image = image.convert("RGB")
        except (OSError, UnidentifiedImageError) as e:
            raise SamplingError(f"Failed to decode image {path}: {e}") from e

        # Only shrinks, like ImageMagick's '800x600>'
        image.thumbnail(self.max_size)
        quantized = image.quantize(colors=colors, method=Image.Quantize.MEDIANCUT)

        palette = quantized.getpalette() or []
        indices = np.asarray(quantized).ravel()
        counts = np.bincount(indices, minlength=len(palette) // 3)

        order = np.argsort(-counts, kind="stable")
        sampled = []
        for idx in order:
            if counts[idx] == 0:
                break
            base = int(idx) * 3
            sampled.append(RGB(int(palette[base]), int(palette[base + 1]), int(palette[base + 2])))

        if not sampled:
            raise SamplingError(f"Pillow returned no colors for {path}")
        return sampled


SAMPLERS = {
    ImageMagickSampler.name: ImageMagickSampler,
    PillowSampler.name: PillowSampler,
}


def get_sampler(engine: str):
    """Instantiate a sampler engine by name."""
    if engine not in SAMPLERS:
        raise ValueError(f"Unknown sampler engine: {engine}")
    return SAMPLERS[engine]()


def sample_image(path: PathLike, engine: str = "auto", colors: Optional[int] = None) -> List[RGB]:
    """
    Sample the dominant colors of an image.

    Args:
        path: Image file path
        engine: 'imagemagick', 'pillow' or 'auto' (ImageMagick, then Pillow)
        colors: Number of colors to quantize to (default from config)

    Returns:
        Colors in descending frequency order

    Raises:
        SamplingError: If the image cannot be read or yields no colors
        ValueError: For an unknown engine name
    """
    if not config.validate_sampler(engine):
        raise ValueError(f"Unknown sampler engine: {engine}")
    if colors is None:
        colors = config.SAMPLE_COLORS
    if not config.validate_sample_colors(colors):
        raise ValueError(f"Sample color count out of range: {colors}")

    path = Path(path)
    if not path.is_file():
        raise SamplingError(f"Image not found: {path}")

    metrics = get_metrics()
    start_time = time.time()

    if engine == "auto":
        try:
            sampled = ImageMagickSampler().sample(path, colors)
            used_engine = ImageMagickSampler.name
        except SamplingError as e:
            logger.warning(f"ImageMagick sampling failed, falling back to Pillow: {e}")
            metrics.increment_fallback_count()
            sampled = PillowSampler().sample(path, colors)
            used_engine = PillowSampler.name
    else:
        sampler = get_sampler(engine)
        sampled = sampler.sample(path, colors)
        used_engine = sampler.name

    duration_ms = (time.time() - start_time) * 1000
    metrics.increment_sampler_count(used_engine)
    metrics.record_timing("sampling", duration_ms)
    logger.debug(f"Sampled {len(sampled)} colors from {path.name} with {used_engine} in {duration_ms:.1f}ms")

    return sampled
