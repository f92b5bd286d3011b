"""
Brightness Normalizer

Keeps accent colors legible on very dark or very light backgrounds.
"""

from typing import List, Sequence

from .model import HSL, RGB, hsl_to_rgb
from .palette import Mode


MIN_L_ON_DARK_BG = 55.0
MAX_L_ON_LIGHT_BG = 45.0
VERY_DARK_BG = 20.0
VERY_LIGHT_BG = 80.0
# Adjustments smaller than this are skipped
MIN_ADJUSTMENT = 0.1


def normalize_brightness(colors: Sequence[RGB], background: RGB, mode: Mode) -> List[RGB]:
    """
    Raise dim accents on very dark backgrounds and lower bright accents on very
    light ones.

    Dark mode: when background lightness < 20, slots under 55 go to 55.
    Light mode: when background lightness > 80, slots over 45 go to 45.

    Args:
        colors: Base or bright accent colors (never background/foreground)
        background: Palette background
        mode: Palette mode

    Returns:
        New list with adjusted colors
    """
    bg_l = background.to_hsl().l * 100.0
    result: List[RGB] = []

    for color in colors:
        c = color.to_hsl()
        l = c.l * 100.0

        if not mode.is_light and bg_l < VERY_DARK_BG and l < MIN_L_ON_DARK_BG:
            new_l = MIN_L_ON_DARK_BG
        elif mode.is_light and bg_l > VERY_LIGHT_BG and l > MAX_L_ON_LIGHT_BG:
            new_l = MAX_L_ON_LIGHT_BG
        else:
            new_l = l

        if abs(new_l - l) > MIN_ADJUSTMENT:
            result.append(hsl_to_rgb(HSL(c.h, c.s, new_l / 100.0)))
        else:
            result.append(color)

    return result
