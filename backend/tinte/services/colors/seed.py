"""
Seed-Color Mode

Closed-form palette from a single color: every slot is derived from the seed's
hue through fixed saturation/lightness presets keyed by mode. No sampling,
classification or matching is involved.
"""

from dataclasses import dataclass

from .accents import on_color, surface_from
from .model import HSL, RGB, hsl_to_rgb
from .palette import ANSI_HUES, Mode, Palette, SemanticColors, assemble_palette


@dataclass(frozen=True)
class SeedPreset:
    """Lightness table for one mode (fractions)."""
    background_l: float
    foreground_l: float
    color_l: float
    bright_l: float
    bright_black_l: float


SEED_PRESETS = {
    Mode.DARK: SeedPreset(background_l=0.08, foreground_l=0.85, color_l=0.55, bright_l=0.65, bright_black_l=0.25),
    Mode.LIGHT: SeedPreset(background_l=0.92, foreground_l=0.15, color_l=0.45, bright_l=0.35, bright_black_l=0.75),
}

BACKGROUND_MAX_SAT = 0.15
FOREGROUND_MAX_SAT = 0.1
COLOR_SAT = 0.6
BRIGHT_SAT = 0.7

ACCENT_SAT = 0.65
ACCENT_DIM_SAT = 0.45
ACCENT_BRIGHT_SAT = 0.75
# How far accent_dim moves from the bright-black lightness toward 50%
ACCENT_DIM_TOWARD_MID = 0.1


def _seed_semantic(hue: float, background: RGB, foreground: RGB, preset: SeedPreset, mode: Mode) -> SemanticColors:
    accent = hsl_to_rgb(HSL(hue, ACCENT_SAT, preset.color_l))

    if preset.bright_black_l < 0.5:
        dim_l = preset.bright_black_l + ACCENT_DIM_TOWARD_MID
    else:
        dim_l = preset.bright_black_l - ACCENT_DIM_TOWARD_MID

    return SemanticColors(
        accent=accent,
        accent_dim=hsl_to_rgb(HSL(hue, ACCENT_DIM_SAT, dim_l)),
        accent_bright=hsl_to_rgb(HSL(hue, ACCENT_BRIGHT_SAT, preset.bright_l)),
        secondary=hsl_to_rgb(HSL((hue + 180.0) % 360.0, ACCENT_SAT, preset.color_l)),
        surface=surface_from(background, mode),
        on_accent=on_color(accent),
        on_surface=foreground,
    )


def synthesize_from_seed(color: RGB, mode: Mode) -> Palette:
    """
    Build a palette from a single seed color.

    The six base and bright slots take the seed hue plus the canonical ANSI
    offsets (0, 120, 60, 240, 300, 180); the background, foreground and bright
    black keep the seed hue with capped saturation. Slots 7 and 15 both hold
    the foreground.

    Args:
        color: Seed color
        mode: Palette mode

    Returns:
        Palette with strategy "seed"
    """
    seed = color.to_hsl()
    preset = SEED_PRESETS[mode]
    hue = seed.h

    background = hsl_to_rgb(HSL(hue, min(seed.s, BACKGROUND_MAX_SAT), preset.background_l))
    foreground = hsl_to_rgb(HSL(hue, min(seed.s, FOREGROUND_MAX_SAT), preset.foreground_l))
    bright_black = hsl_to_rgb(HSL(hue, min(seed.s, BACKGROUND_MAX_SAT), preset.bright_black_l))

    base = [hsl_to_rgb(HSL((hue + offset) % 360.0, COLOR_SAT, preset.color_l)) for offset in ANSI_HUES]
    bright = [hsl_to_rgb(HSL((hue + offset) % 360.0, BRIGHT_SAT, preset.bright_l)) for offset in ANSI_HUES]

    semantic = _seed_semantic(hue, background, foreground, preset, mode)
    return assemble_palette(
        background, base, foreground, bright_black, bright, foreground,
        semantic=semantic, strategy="seed",
    )
