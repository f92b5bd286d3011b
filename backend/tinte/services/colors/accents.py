"""
Semantic Accents

Derives the seven named UI-role colors (accent, surface, ...) that travel with
every palette. They are independent colors, not aliases into the 16 slots.
"""

from typing import Optional, Sequence

from .model import RGB, clamp, hsl, hue_distance
from .palette import Mode, SemanticColors


ACCENT_DIM_SHIFT = 15.0
ACCENT_DIM_SAT_SCALE = 0.7
ACCENT_BRIGHT_SHIFT = 12.0
ACCENT_BRIGHT_SAT_SCALE = 1.15
SECONDARY_MIN_HUE_SEP = 30.0
SURFACE_SHIFT = 6.0
ON_COLOR_MAX_SAT = 0.1
ON_ACCENT_SWITCH_L = 55.0
ON_ACCENT_DARK_L = 10.0
ON_ACCENT_LIGHT_L = 95.0


def on_color(color: RGB) -> RGB:
    """Near-black or near-white text color readable on top of color."""
    c = color.to_hsl()
    l = ON_ACCENT_DARK_L if c.l * 100.0 >= ON_ACCENT_SWITCH_L else ON_ACCENT_LIGHT_L
    return hsl(c.h, min(c.s, ON_COLOR_MAX_SAT) * 100.0, l)


def surface_from(background: RGB, mode: Mode) -> RGB:
    """Background nudged toward the foreground for raised UI surfaces."""
    c = background.to_hsl()
    shift = -SURFACE_SHIFT if mode.is_light else SURFACE_SHIFT
    return hsl(c.h, c.s * 100.0, c.l * 100.0 + shift)


def _pick_secondary(base: Sequence[RGB], accent_idx: int) -> Optional[RGB]:
    accent_h = base[accent_idx].to_hsl().h
    best: Optional[RGB] = None
    best_s = -1.0
    for i, color in enumerate(base):
        if i == accent_idx:
            continue
        c = color.to_hsl()
        if hue_distance(c.h, accent_h) < SECONDARY_MIN_HUE_SEP:
            continue
        if c.s > best_s:
            best_s = c.s
            best = color
    return best


def derive_semantic_colors(background: RGB, foreground: RGB, base: Sequence[RGB], mode: Mode) -> SemanticColors:
    """
    Derive semantic colors from a finished background, foreground and the six
    base hue colors.

    The accent is the most saturated base color (first wins ties); dim/bright
    variants move its lightness toward/away from the background. The secondary
    is the most saturated base color at least 30° away from the accent, or the
    accent's complement when every base color shares its hue.
    """
    if not base:
        raise ValueError("Semantic colors need at least one base color")

    accent_idx = 0
    best_s = -1.0
    for i, color in enumerate(base):
        s = color.to_hsl().s
        if s > best_s:
            best_s = s
            accent_idx = i

    accent = base[accent_idx]
    a = accent.to_hsl()
    toward_bg = 1.0 if mode.is_light else -1.0

    accent_dim = hsl(
        a.h,
        a.s * ACCENT_DIM_SAT_SCALE * 100.0,
        clamp(a.l * 100.0 + toward_bg * ACCENT_DIM_SHIFT, 0.0, 100.0),
    )
    accent_bright = hsl(
        a.h,
        min(a.s * ACCENT_BRIGHT_SAT_SCALE, 1.0) * 100.0,
        clamp(a.l * 100.0 - toward_bg * ACCENT_BRIGHT_SHIFT, 0.0, 100.0),
    )

    secondary = _pick_secondary(base, accent_idx)
    if secondary is None:
        secondary = hsl((a.h + 180.0) % 360.0, a.s * 100.0, a.l * 100.0)

    return SemanticColors(
        accent=accent,
        accent_dim=accent_dim,
        accent_bright=accent_bright,
        secondary=secondary,
        surface=surface_from(background, mode),
        on_accent=on_color(accent),
        on_surface=foreground,
    )
