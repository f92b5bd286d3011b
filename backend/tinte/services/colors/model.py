"""
Tinte Color Model

RGB <-> HSL conversion, hex parsing and the string formats used by templates
and JSON output. HSL hue is expressed in degrees [0, 360), saturation and
lightness in [0, 1].
"""

import colorsys
import re
from dataclasses import dataclass
from typing import Tuple


HEX_PATTERN = re.compile(r"^#?([0-9A-Fa-f]{6})$")

# Channel spread under which a color is treated as achromatic
ACHROMATIC_EPSILON = 1e-9


class ColorParseError(ValueError):
    """Raised when a string is not a valid #RRGGBB color."""


def clamp(value: float, low: float, high: float) -> float:
    """Clamp value into [low, high]."""
    if value < low:
        return low
    if value > high:
        return high
    return value


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def _to_channel(value: float) -> int:
    """Scale a [0, 1] component to an 8-bit channel, rounding half up."""
    return int(clamp01(value) * 255.0 + 0.5)


@dataclass(frozen=True)
class RGB:
    """An 8-bit sRGB color."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValueError(f"Channel {name} out of range: {value!r}")

    @classmethod
    def from_hex(cls, hex_color: str) -> "RGB":
        return rgb_from_hex(hex_color)

    def to_hex(self) -> str:
        return rgb_to_hex(self)

    def to_hex_strip(self) -> str:
        return f"{self.r:02x}{self.g:02x}{self.b:02x}"

    def to_rgb_string(self) -> str:
        return f"{self.r}, {self.g}, {self.b}"

    def to_rgba_string(self, alpha: float = 1.0) -> str:
        return f"rgba({self.r}, {self.g}, {self.b}, {alpha:g})"

    def to_hsl(self) -> "HSL":
        return rgb_to_hsl(self)

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def __str__(self) -> str:
        return self.to_hex()


@dataclass(frozen=True)
class HSL:
    """A color in hue (degrees), saturation and lightness (fractions)."""
    h: float
    s: float
    l: float

    def to_rgb(self) -> RGB:
        return hsl_to_rgb(self)


def rgb_from_hex(hex_color: str) -> RGB:
    """
    Parse a hex color string.

    Args:
        hex_color: Color in format RRGGBB with an optional leading '#'

    Returns:
        Parsed RGB color

    Raises:
        ColorParseError: If the string is not exactly 6 hex digits
    """
    match = HEX_PATTERN.match(hex_color or "")
    if match is None:
        raise ColorParseError(f"Invalid hex color: {hex_color}")

    digits = match.group(1)
    return RGB(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(color: RGB) -> str:
    """Format a color as lowercase #rrggbb."""
    return f"#{color.r:02x}{color.g:02x}{color.b:02x}"


def rgb_to_hsl(color: RGB) -> HSL:
    """
    Convert an RGB color to HSL.

    Achromatic colors (max == min) get hue and saturation 0.
    """
    r, g, b = color.r / 255.0, color.g / 255.0, color.b / 255.0
    h, l, s = colorsys.rgb_to_hls(r, g, b)

    if max(r, g, b) - min(r, g, b) < ACHROMATIC_EPSILON:
        return HSL(0.0, 0.0, l)

    return HSL((h * 360.0) % 360.0, s, l)


def hsl_to_rgb(color: HSL) -> RGB:
    """
    Convert an HSL color to RGB.

    Saturation and lightness are clamped to [0, 1] before conversion and the
    hue wraps around the circle, so the result is always a valid 8-bit color.
    """
    h = (color.h % 360.0) / 360.0
    r, g, b = colorsys.hls_to_rgb(h, clamp01(color.l), clamp01(color.s))
    return RGB(_to_channel(r), _to_channel(g), _to_channel(b))


def hsl(h: float, s_pct: float, l_pct: float) -> RGB:
    """Build an RGB color from hue degrees and percentage saturation/lightness."""
    return hsl_to_rgb(HSL(h, clamp(s_pct, 0.0, 100.0) / 100.0, clamp(l_pct, 0.0, 100.0) / 100.0))


def hue_distance(h1: float, h2: float) -> float:
    """Shorter arc between two hues on the 360° circle."""
    diff = abs(h1 - h2) % 360.0
    return min(diff, 360.0 - diff)
