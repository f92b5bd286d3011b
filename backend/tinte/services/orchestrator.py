"""
Tinte Orchestrator
Chains sampling, cache and synthesis into one palette request, shared by the
CLI and the HTTP API.
"""
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Union

from ..config import config
from ..utils.ids import generate_request_id
from ..utils.logging import get_logger
from ..utils.metrics import get_metrics
from .cache import PaletteCache
from .colors import Mode, Palette, default_palette, rgb_from_hex, synthesize_from_seed, synthesize_palette
from .sampling import SamplingError, sample_image


@dataclass
class PaletteResult:
    """A synthesized palette plus request bookkeeping."""
    palette: Palette
    mode: Mode
    request_id: str
    source: str
    from_cache: bool = False
    timings: Dict[str, float] = field(default_factory=dict)


class PaletteOrchestrator:
    """Entry point for image, seed-color and default palette requests."""

    def __init__(self, cache: Optional[PaletteCache] = None, sampler: Optional[str] = None):
        self.cache = cache
        self.sampler = sampler or config.SAMPLER_DEFAULT
        self.logger = get_logger()

    def from_image(
        self,
        path: Union[str, Path],
        mode: Mode = Mode.DARK,
        sampler: Optional[str] = None,
        use_cache: bool = True,
        cache_key: Optional[str] = None,
    ) -> PaletteResult:
        """
        Sample an image and synthesize its palette.

        Args:
            path: Image file
            mode: Palette mode
            sampler: Sampler engine override
            use_cache: Consult and update the palette cache
            cache_key: Explicit cache key; defaults to the path/mtime key

        Returns:
            PaletteResult with from_cache set on a cache hit

        Raises:
            SamplingError: If the image cannot be sampled
        """
        metrics = get_metrics()
        request_id = generate_request_id()
        engine = sampler or self.sampler
        start_time = time.time()
        metrics.increment_request_count("image")

        use_cache = use_cache and self.cache is not None
        if use_cache and cache_key is None:
            cache_key = self.cache.cache_key(path, mode)

        if use_cache:
            cached = self.cache.lookup(cache_key)
            if cached is not None:
                self.logger.info("Palette served from cache", extra={
                    "request_id": request_id,
                    "path": str(path),
                    "mode": mode.value,
                })
                return PaletteResult(cached, mode, request_id, "image", from_cache=True)

        try:
            samples = sample_image(path, engine=engine)
        except SamplingError:
            metrics.increment_failure_count("sampling")
            raise
        sample_ms = (time.time() - start_time) * 1000

        palette = synthesize_palette(samples, mode)
        total_ms = (time.time() - start_time) * 1000

        metrics.increment_strategy_count(palette.strategy)
        metrics.record_timing("total", total_ms)

        if use_cache:
            self.cache.store(cache_key, palette)

        self.logger.info("Palette synthesized from image", extra={
            "request_id": request_id,
            "path": str(path),
            "mode": mode.value,
            "samples": len(samples),
            "strategy": palette.strategy,
            "sampler": engine,
            "total_ms": round(total_ms, 2),
        })

        return PaletteResult(
            palette, mode, request_id, "image",
            timings={"sampling_ms": round(sample_ms, 2), "total_ms": round(total_ms, 2)},
        )

    def from_color(self, hex_color: str, mode: Mode = Mode.DARK) -> PaletteResult:
        """
        Synthesize a palette from a seed color.

        Raises:
            ColorParseError: If hex_color is not a #RRGGBB color
        """
        metrics = get_metrics()
        request_id = generate_request_id()
        start_time = time.time()
        metrics.increment_request_count("color")

        try:
            seed = rgb_from_hex(hex_color)
        except ValueError:
            metrics.increment_failure_count("invalid_color")
            raise

        palette = synthesize_from_seed(seed, mode)
        total_ms = (time.time() - start_time) * 1000
        metrics.increment_strategy_count(palette.strategy)
        metrics.record_timing("total", total_ms)

        self.logger.debug("Palette synthesized from seed", extra={
            "request_id": request_id,
            "seed": seed.to_hex(),
            "mode": mode.value,
        })

        return PaletteResult(palette, mode, request_id, "color", timings={"total_ms": round(total_ms, 2)})

    def default(self, mode: Mode = Mode.DARK) -> PaletteResult:
        """The built-in palette."""
        get_metrics().increment_request_count("default")
        return PaletteResult(default_palette(mode), mode, generate_request_id(), "default")
