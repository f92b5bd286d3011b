"""
Palette synthesis core: color model, classification, strategies and seed mode.
"""

from .classifier import SampleKind, classify
from .engine import default_palette, synthesize_from_seed, synthesize_palette
from .model import HSL, RGB, ColorParseError, hsl_to_rgb, rgb_from_hex, rgb_to_hex, rgb_to_hsl
from .palette import Mode, Palette, SemanticColors

__all__ = [
    "HSL",
    "RGB",
    "ColorParseError",
    "Mode",
    "Palette",
    "SampleKind",
    "SemanticColors",
    "classify",
    "default_palette",
    "hsl_to_rgb",
    "rgb_from_hex",
    "rgb_to_hex",
    "rgb_to_hsl",
    "synthesize_from_seed",
    "synthesize_palette",
]
