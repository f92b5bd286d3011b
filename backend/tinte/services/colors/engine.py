"""
Palette Engine

Entry points of the synthesis core. Pure functions of (samples or seed, mode);
no I/O beyond debug logging.
"""

from typing import Sequence

from loguru import logger

from .accents import derive_semantic_colors
from .classifier import classify
from .model import RGB
from .palette import DEFAULT_COLORS, Mode, Palette
from .seed import synthesize_from_seed
from .strategies import get_strategy


__all__ = ["default_palette", "synthesize_palette", "synthesize_from_seed"]


def default_palette(mode: Mode = Mode.DARK) -> Palette:
    """
    The built-in palette returned when there is nothing to sample.

    The 16 colors are fixed; mode only orients the semantic accents.
    """
    semantic = derive_semantic_colors(DEFAULT_COLORS[0], DEFAULT_COLORS[15], DEFAULT_COLORS[1:7], mode)
    return Palette(colors=DEFAULT_COLORS, semantic=semantic, strategy="default")


def synthesize_palette(samples: Sequence[RGB], mode: Mode) -> Palette:
    """
    Build a palette from sampled colors.

    Samples are classified once and dispatched to the matching strategy.
    An empty sample list yields the default palette.

    Args:
        samples: Sampled colors in frequency order (duplicates allowed)
        mode: Palette mode

    Returns:
        Finished 16-slot palette
    """
    if not samples:
        logger.debug("No samples, using default palette")
        return default_palette(mode)

    colors = list(samples)
    hsl_samples = [c.to_hsl() for c in colors]

    kind = classify(hsl_samples)
    strategy = get_strategy(kind)
    logger.debug(f"Dispatching {len(colors)} samples ({kind.value}) to {strategy.name} strategy, mode={mode.value}")

    return strategy.generate(colors, hsl_samples, mode)
