"""
Extremes & Matchers

Selection helpers shared by the synthesis strategies: lightness extremes,
background/foreground pickers and the hue matcher that assigns samples to ANSI
slots. Indices already consumed are threaded through explicitly as a tuple
(`used`) and a new tuple is returned instead of mutating shared state.
"""

from typing import List, Optional, Sequence, Tuple

from loguru import logger

from .classifier import MONOCHROME_SAT_THRESHOLD
from .model import HSL, RGB, clamp, hsl, hue_distance
from .palette import ANSI_HUES, Mode


MIN_BG_LIGHTNESS_DARK = 8.0
MAX_BG_LIGHTNESS_LIGHT = 92.0
BG_BAND_WIDTH_DARK = 6.0
BG_BAND_WIDTH_LIGHT = 10.0
BG_MAX_SATURATION = 0.15

MIN_FG_CONTRAST = 40.0
FG_MAX_SATURATION = 0.1

# Lightness outside this window is penalized when matching hues
TOO_DARK = 20.0
TOO_BRIGHT = 85.0
HUE_WEIGHT = 3.0
GRAY_PENALTY = 50.0
LIGHTNESS_PENALTY = 10.0

FALLBACK_SATURATION = 50.0
FALLBACK_LIGHTNESS_LIGHT = 45.0
FALLBACK_LIGHTNESS_DARK = 55.0

Used = Tuple[int, ...]


def lightness_pct(color: RGB) -> float:
    return color.to_hsl().l * 100.0


def find_lightness_extremes(samples: Sequence[HSL]) -> Tuple[int, int]:
    """
    Return (darkest_index, lightest_index); the first sample wins ties.
    """
    darkest = 0
    lightest = 0
    min_l = float("inf")
    max_l = float("-inf")

    for i, c in enumerate(samples):
        if c.l < min_l:
            min_l = c.l
            darkest = i
        if c.l > max_l:
            max_l = c.l
            lightest = i

    return darkest, lightest


def clamp_background(color: RGB, mode: Mode) -> RGB:
    """
    Re-synthesize a background candidate as a usable near-black/near-white.

    Saturation is capped and lightness clamped into the mode's band
    (light: [82, 92], dark: [8, 14]).
    """
    c = color.to_hsl()
    if mode.is_light:
        l = clamp(c.l * 100.0, MAX_BG_LIGHTNESS_LIGHT - BG_BAND_WIDTH_LIGHT, MAX_BG_LIGHTNESS_LIGHT)
    else:
        l = clamp(c.l * 100.0, MIN_BG_LIGHTNESS_DARK, MIN_BG_LIGHTNESS_DARK + BG_BAND_WIDTH_DARK)
    return hsl(c.h, min(c.s, BG_MAX_SATURATION) * 100.0, l)


def find_background(colors: Sequence[RGB], samples: Sequence[HSL], mode: Mode) -> Tuple[int, RGB]:
    """
    Pick the background sample and re-synthesize it into the mode's band.

    Dark mode takes the darkest sample that is still at least 8% light, light
    mode the lightest sample at most 92% light. When nothing qualifies the
    first sample is used.

    Args:
        colors: Sampled RGB colors
        samples: HSL of each sampled color, same order
        mode: Palette mode

    Returns:
        Tuple of (sample_index, background_color)
    """
    best_idx = 0
    best_l = 0.0 if mode.is_light else 100.0

    for i, c in enumerate(samples):
        l = c.l * 100.0
        if mode.is_light:
            if l <= MAX_BG_LIGHTNESS_LIGHT and l > best_l:
                best_l = l
                best_idx = i
        elif l >= MIN_BG_LIGHTNESS_DARK and l < best_l:
            best_l = l
            best_idx = i

    return best_idx, clamp_background(colors[best_idx], mode)


def ensure_min_contrast(color: RGB, background: RGB, mode: Mode, min_contrast: float = MIN_FG_CONTRAST) -> RGB:
    """
    Return color unchanged when its lightness contrast against background is
    at least min_contrast points; otherwise re-synthesize it at the background
    lightness +/- min_contrast with saturation capped at 0.1.
    """
    bg_l = lightness_pct(background)
    c = color.to_hsl()
    if abs(c.l * 100.0 - bg_l) >= min_contrast:
        return color

    direction = -1.0 if mode.is_light else 1.0
    target = clamp(bg_l + direction * min_contrast, 0.0, 100.0)
    sat = min(c.s, FG_MAX_SATURATION) * 100.0
    result = hsl(c.h, sat, target)

    # 8-bit rounding can land a hair under the minimum
    while abs(lightness_pct(result) - bg_l) < min_contrast and 0.0 < target < 100.0:
        target = clamp(target + direction * 0.2, 0.0, 100.0)
        result = hsl(c.h, sat, target)

    return result


def find_foreground(
    colors: Sequence[RGB],
    samples: Sequence[HSL],
    background: RGB,
    mode: Mode,
    used: Used,
) -> Tuple[int, RGB]:
    """
    Pick the lightness extreme opposite the background among unused samples.

    Dark mode takes the lightest unused sample, light mode the darkest; the
    result always keeps at least MIN_FG_CONTRAST points of lightness contrast.

    Returns:
        Tuple of (sample_index, foreground_color)
    """
    best_idx = 0
    best_l = 100.0 if mode.is_light else 0.0

    for i, c in enumerate(samples):
        if i in used:
            continue
        l = c.l * 100.0
        if mode.is_light:
            if l < best_l:
                best_l = l
                best_idx = i
        elif l > best_l:
            best_l = l
            best_idx = i

    return best_idx, ensure_min_contrast(colors[best_idx], background, mode)


def match_score(sample: HSL, target_hue: float) -> float:
    """Lower is better: hue distance plus penalties for gray or extreme samples."""
    s = sample.s * 100.0
    l = sample.l * 100.0
    sat_penalty = GRAY_PENALTY if s < MONOCHROME_SAT_THRESHOLD else 0.0
    l_penalty = 0.0 if TOO_DARK <= l <= TOO_BRIGHT else LIGHTNESS_PENALTY
    return hue_distance(sample.h, target_hue) * HUE_WEIGHT + sat_penalty + l_penalty


def find_best_color_match(samples: Sequence[HSL], target_hue: float, used: Used) -> Optional[int]:
    """Index of the unused sample scoring best for target_hue, or None."""
    best_idx = None
    best_score = float("inf")

    for i, c in enumerate(samples):
        if i in used:
            continue
        score = match_score(c, target_hue)
        if score < best_score:
            best_score = score
            best_idx = i

    return best_idx


def match_ansi_hues(colors: Sequence[RGB], samples: Sequence[HSL], mode: Mode, used: Used) -> Tuple[List[RGB], Used]:
    """
    Assign a sample to each canonical ANSI hue.

    Slots with no unused sample left get a synthesized color at the canonical
    hue. Returns the six colors and the extended used-index tuple.
    """
    ansi: List[RGB] = []
    for target_hue in ANSI_HUES:
        idx = find_best_color_match(samples, target_hue, used)
        if idx is None:
            l = FALLBACK_LIGHTNESS_LIGHT if mode.is_light else FALLBACK_LIGHTNESS_DARK
            ansi.append(hsl(target_hue, FALLBACK_SATURATION, l))
            logger.debug(f"No sample left for hue {target_hue:.0f}, synthesized fallback")
        else:
            ansi.append(colors[idx])
            used = used + (idx,)
    return ansi, used
