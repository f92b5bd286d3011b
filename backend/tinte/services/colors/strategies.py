"""
Palette Synthesis Strategies

One strategy per sample classification. Each turns sampled colors into a full
16-slot palette with semantic accents:

- Chromatic: bg/fg picked with contrast guarantees, each ANSI hue matched to
  its own sample.
- Monochrome: an evenly spaced lightness ramp on the darkest sample's hue.
- Subtle (low diversity): canonical ANSI hues at muted saturation.

The six base and six bright colors of every strategy go through brightness
normalization before the palette is assembled.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Tuple

from .accents import derive_semantic_colors
from .classifier import SampleKind, chromatic_subset
from .matching import (
    clamp_background, ensure_min_contrast, find_background, find_foreground,
    find_lightness_extremes, match_ansi_hues
)
from .model import HSL, RGB, clamp, hsl
from .normalize import normalize_brightness
from .palette import ANSI_HUES, Mode, Palette, assemble_palette


BRIGHT_L_BOOST = 18.0
BRIGHT_S_BOOST = 1.25
BRIGHT_BLACK_SHIFT = 15.0

MONOCHROME_SAT = 5.0
MONOCHROME_MIN_RANGE = 15.0
MONOCHROME_BRIGHT_SHIFT = 10.0
MONOCHROME_BRIGHT_WHITE_SAT = 2.0

SUBTLE_SAT = 28.0
SUBTLE_BRIGHT_SAT = SUBTLE_SAT + 8.0
SUBTLE_BRIGHT_SHIFT = 8.0
SUBTLE_RAMP_CENTER = 50.0
SUBTLE_RAMP_STEP = 4.0


def make_bright(colors: Sequence[RGB], mode: Mode) -> List[RGB]:
    """Bright variants: lightness +/-18 (lighter in dark mode), saturation x1.25."""
    result = []
    for color in colors:
        c = color.to_hsl()
        shift = -BRIGHT_L_BOOST if mode.is_light else BRIGHT_L_BOOST
        l = clamp(c.l * 100.0 + shift, 0.0, 100.0)
        s = min(c.s * BRIGHT_S_BOOST, 1.0)
        result.append(hsl(c.h, s * 100.0, l))
    return result


class PaletteStrategy(ABC):
    """A way of turning a classified sample set into a palette."""

    name: str = ""

    @abstractmethod
    def generate(self, colors: Sequence[RGB], samples: Sequence[HSL], mode: Mode) -> Palette:
        """
        Build a palette.

        Args:
            colors: Sampled RGB colors in upstream frequency order
            samples: HSL of each sampled color, same order
            mode: Palette mode

        Returns:
            Finished palette
        """

    def _finish(
        self,
        background: RGB,
        foreground: RGB,
        base: Sequence[RGB],
        bright_black: RGB,
        bright: Sequence[RGB],
        bright_white: RGB,
        mode: Mode,
    ) -> Palette:
        base = normalize_brightness(base, background, mode)
        bright = normalize_brightness(bright, background, mode)
        semantic = derive_semantic_colors(background, foreground, base, mode)
        return assemble_palette(
            background, base, foreground, bright_black, bright, bright_white,
            semantic=semantic, strategy=self.name,
        )


class ChromaticStrategy(PaletteStrategy):
    """Map each ANSI hue to the best-fitting distinct sample."""

    name = "chromatic"

    def generate(self, colors: Sequence[RGB], samples: Sequence[HSL], mode: Mode) -> Palette:
        used: Tuple[int, ...] = ()

        bg_idx, background = find_background(colors, samples, mode)
        used = used + (bg_idx,)

        fg_idx, foreground = find_foreground(colors, samples, background, mode, used)
        used = used + (fg_idx,)

        ansi, used = match_ansi_hues(colors, samples, mode, used)
        # Bright variants derive from the normalized base colors
        ansi = normalize_brightness(ansi, background, mode)

        bg = background.to_hsl()
        shift = -BRIGHT_BLACK_SHIFT if mode.is_light else BRIGHT_BLACK_SHIFT
        bright_black = hsl(bg.h, bg.s * 0.5 * 100.0, clamp(bg.l * 100.0 + shift, 0.0, 100.0))

        bright = make_bright(ansi, mode)

        return self._finish(background, foreground, ansi, bright_black, bright, foreground, mode)


class MonochromeStrategy(PaletteStrategy):
    """Lightness ramp on a single near-gray hue."""

    name = "monochrome"

    def generate(self, colors: Sequence[RGB], samples: Sequence[HSL], mode: Mode) -> Palette:
        darkest_idx, lightest_idx = find_lightness_extremes(samples)
        darkest = samples[darkest_idx]
        lightest = samples[lightest_idx]
        dl = darkest.l * 100.0
        ll = lightest.l * 100.0
        base_hue = darkest.h

        if mode.is_light:
            bg_raw, fg_raw = colors[lightest_idx], colors[darkest_idx]
        else:
            bg_raw, fg_raw = colors[darkest_idx], colors[lightest_idx]
        background = clamp_background(bg_raw, mode)
        foreground = ensure_min_contrast(fg_raw, background, mode)

        start_l, end_l = self._ramp_window(dl, ll, mode)
        step = max(end_l - start_l, MONOCHROME_MIN_RANGE) / 5.0
        ramp = [start_l + i * step for i in range(6)]

        base = [hsl(base_hue, MONOCHROME_SAT, clamp(l, 0.0, 100.0)) for l in ramp]

        bright_shift = -MONOCHROME_BRIGHT_SHIFT if mode.is_light else MONOCHROME_BRIGHT_SHIFT
        bright = [hsl(base_hue, MONOCHROME_SAT, clamp(l + bright_shift, 0.0, 100.0)) for l in ramp]

        if mode.is_light:
            bright_black_l = dl + 5.0
            bright_white_l = dl - 5.0
        else:
            bright_black_l = ll - 25.0
            bright_white_l = ll + 5.0
        bright_black = hsl(base_hue, MONOCHROME_SAT / 2.0, clamp(bright_black_l, 0.0, 100.0))
        bright_white = hsl(base_hue, MONOCHROME_BRIGHT_WHITE_SAT, clamp(bright_white_l, 0.0, 100.0))

        return self._finish(background, foreground, base, bright_black, bright, bright_white, mode)

    @staticmethod
    def _ramp_window(dl: float, ll: float, mode: Mode) -> Tuple[float, float]:
        """Start/end lightness of the base ramp from the sample extremes."""
        if mode.is_light:
            start = min(dl + 10.0, ll - 10.0)
            end = min(dl + 40.0, ll - 10.0)
            if end <= start:
                return dl, ll
        else:
            start = max(dl + 30.0, ll - 40.0)
            end = ll - 10.0
            if end <= start:
                return dl + 10.0, ll
        return start, end


class SubtleStrategy(PaletteStrategy):
    """Canonical hues at muted saturation for low-diversity images."""

    name = "subtle"

    def generate(self, colors: Sequence[RGB], samples: Sequence[HSL], mode: Mode) -> Palette:
        darkest_idx, lightest_idx = find_lightness_extremes(samples)
        dl = samples[darkest_idx].l * 100.0
        ll = samples[lightest_idx].l * 100.0

        chromatic = chromatic_subset(samples)
        if chromatic:
            avg_hue = sum(c.h for c in chromatic) / len(chromatic)
        else:
            avg_hue = samples[darkest_idx].h

        if mode.is_light:
            background, foreground = colors[lightest_idx], colors[darkest_idx]
        else:
            background, foreground = colors[darkest_idx], colors[lightest_idx]

        ramp = [SUBTLE_RAMP_CENTER + (i - 2.5) * SUBTLE_RAMP_STEP for i in range(6)]
        base = [hsl(hue, SUBTLE_SAT, l) for hue, l in zip(ANSI_HUES, ramp)]

        bright_shift = -SUBTLE_BRIGHT_SHIFT if mode.is_light else SUBTLE_BRIGHT_SHIFT
        bright = [
            hsl(hue, SUBTLE_BRIGHT_SAT, clamp(l + bright_shift, 0.0, 100.0))
            for hue, l in zip(ANSI_HUES, ramp)
        ]

        if mode.is_light:
            bright_black_l = ll - 15.0
            bright_white_l = dl - 5.0
        else:
            bright_black_l = dl + 15.0
            bright_white_l = ll + 5.0
        bright_black = hsl(avg_hue, SUBTLE_SAT / 2.0, clamp(bright_black_l, 0.0, 100.0))
        bright_white = hsl(avg_hue, SUBTLE_SAT * 0.3, clamp(bright_white_l, 0.0, 100.0))

        return self._finish(background, foreground, base, bright_black, bright, bright_white, mode)


STRATEGIES: Dict[SampleKind, PaletteStrategy] = {
    SampleKind.MONOCHROME: MonochromeStrategy(),
    SampleKind.LOW_DIVERSITY: SubtleStrategy(),
    SampleKind.CHROMATIC: ChromaticStrategy(),
}


def get_strategy(kind: SampleKind) -> PaletteStrategy:
    """Strategy registered for a sample classification."""
    return STRATEGIES[kind]
