"""
Tinte Palette Types

The finished 16-slot terminal palette plus its seven semantic UI colors.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Iterable, List, Tuple

from .model import RGB, rgb_from_hex


PALETTE_SIZE = 16

# Canonical hues for the red, green, yellow, blue, magenta and cyan slots
ANSI_HUES: Tuple[float, ...] = (0.0, 120.0, 60.0, 240.0, 300.0, 180.0)

SLOT_LABELS = (
    "background", "red", "green", "yellow", "blue", "magenta", "cyan", "white",
    "brblack", "brred", "brgreen", "bryellow", "brblue", "brmagenta", "brcyan", "brwhite",
)


class Mode(str, Enum):
    """Global light/dark orientation of a palette."""
    DARK = "dark"
    LIGHT = "light"

    @property
    def is_light(self) -> bool:
        return self is Mode.LIGHT


@dataclass(frozen=True)
class SemanticColors:
    """Named UI-role colors derived once per palette."""
    accent: RGB
    accent_dim: RGB
    accent_bright: RGB
    secondary: RGB
    surface: RGB
    on_accent: RGB
    on_surface: RGB

    def as_dict(self) -> Dict[str, RGB]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


SEMANTIC_NAMES: Tuple[str, ...] = tuple(f.name for f in fields(SemanticColors))


@dataclass(frozen=True)
class Palette:
    """
    Sixteen ordered terminal colors plus semantic accents.

    Slot 0 is the background, 1-6 the ANSI hues, 7 the foreground, 8 bright
    black, 9-14 the bright hues and 15 bright white / foreground.
    """
    colors: Tuple[RGB, ...]
    semantic: SemanticColors
    strategy: str = "default"

    def __post_init__(self):
        if len(self.colors) != PALETTE_SIZE:
            raise ValueError(f"Palette needs {PALETTE_SIZE} colors, got {len(self.colors)}")
        object.__setattr__(self, "colors", tuple(self.colors))

    @property
    def background(self) -> RGB:
        return self.colors[0]

    @property
    def foreground(self) -> RGB:
        return self.colors[15]

    def named_colors(self) -> Dict[str, RGB]:
        """Ordered name -> color mapping used for templates and JSON output."""
        named: Dict[str, RGB] = {
            "background": self.background,
            "foreground": self.foreground,
        }
        for i, color in enumerate(self.colors):
            named[f"color{i}"] = color
        named.update(self.semantic.as_dict())
        return named

    def to_hex_list(self) -> List[str]:
        return [c.to_hex() for c in self.colors]


def assemble_palette(
    background: RGB,
    base: Iterable[RGB],
    foreground: RGB,
    bright_black: RGB,
    bright: Iterable[RGB],
    bright_white: RGB,
    semantic: SemanticColors,
    strategy: str,
) -> Palette:
    """Lay generated components out in terminal slot order."""
    base = list(base)
    bright = list(bright)
    if len(base) != 6 or len(bright) != 6:
        raise ValueError("Expected six base and six bright colors")

    colors = [background, *base, foreground, bright_black, *bright, bright_white]
    return Palette(colors=tuple(colors), semantic=semantic, strategy=strategy)


DEFAULT_COLORS: Tuple[RGB, ...] = tuple(rgb_from_hex(h) for h in (
    "#1a1b26", "#f7768e", "#9ece6a", "#e0af68",
    "#7aa2f7", "#bb9af7", "#7dcfff", "#a9b1d6",
    "#414868", "#f7768e", "#9ece6a", "#e0af68",
    "#7aa2f7", "#bb9af7", "#7dcfff", "#c0caf5",
))
