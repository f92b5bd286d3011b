"""
Tinte command line interface.

    tinte [options] image PATH
    tinte [options] color HEX
"""

import argparse
import json
import sys
from typing import Dict, List, Optional

from . import __version__
from .config import config
from .services.cache import FileCache, PaletteCache
from .services.colors import ColorParseError, Mode, Palette
from .services.colors.palette import SEMANTIC_NAMES, SLOT_LABELS
from .services.orchestrator import PaletteOrchestrator
from .services.sampling import SamplingError
from .services.templates import TemplateError, process_templates, run_hook
from .services.user_config import ConfigError, expand_path, load_config
from .utils.logging import get_logger


JSON_FORMATS = ("hex", "rgb", "strip")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tinte",
        description="16-color palette generator for terminal and desktop apps",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", help="Config file (default: $XDG_CONFIG_HOME/tinte/config.toml)")
    parser.add_argument("-m", "--mode", choices=[m.value for m in Mode], default=Mode.DARK.value,
                        help="Palette mode (default: dark)")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only warnings and errors")
    parser.add_argument("--dry-run", action="store_true", help="Render templates without writing or running hooks")
    parser.add_argument("--show-colors", action="store_true", help="Print the palette with color swatches")
    parser.add_argument("-j", "--json", choices=JSON_FORMATS, help="Print the palette as JSON")
    parser.add_argument("--no-cache", action="store_true", help="Ignore the palette cache")
    parser.add_argument("--sampler", choices=["auto", "imagemagick", "pillow"], default=config.SAMPLER_DEFAULT,
                        help="Image sampling engine (default: %(default)s)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    image_parser = subparsers.add_parser("image", help="Generate a palette from an image")
    image_parser.add_argument("path", help="Wallpaper image")

    color_parser = subparsers.add_parser("color", help="Generate a palette from a seed color")
    color_parser.add_argument("hex", help="Seed color as #RRGGBB")

    return parser


def format_color(color, fmt: str) -> str:
    if fmt == "strip":
        return color.to_hex_strip()
    if fmt == "rgb":
        return color.to_rgb_string()
    return color.to_hex()


def palette_json(palette: Palette, fmt: str = "hex") -> Dict[str, str]:
    """Ordered mapping printed by --json: background, color1-14, foreground, semantic."""
    data: Dict[str, str] = {}
    for i, color in enumerate(palette.colors):
        if i == 0:
            key = "background"
        elif i == 15:
            key = "foreground"
        else:
            key = f"color{i}"
        data[key] = format_color(color, fmt)

    semantic = palette.semantic.as_dict()
    for name in SEMANTIC_NAMES:
        data[name] = format_color(semantic[name], fmt)
    return data


def print_json(palette: Palette, fmt: str = "hex"):
    print(json.dumps(palette_json(palette, fmt), indent=2))


def print_palette(palette: Palette):
    """Palette slots with truecolor swatches."""
    print("\nPalette:")
    for i, color in enumerate(palette.colors):
        print(f"  {i:2} {SLOT_LABELS[i]:<10} {color.to_hex()} \x1b[48;2;{color.r};{color.g};{color.b}m    \x1b[0m")
    print()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logger = get_logger()
    if args.verbose:
        logger.set_level("DEBUG")
    elif args.quiet:
        logger.set_level("WARNING")

    mode = Mode(args.mode)

    try:
        user_config = load_config(args.config or config.CONFIG_PATH)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    cache = None
    if config.CACHE_ENABLED and not args.no_cache:
        cache = PaletteCache(FileCache(config.CACHE_DIR))
    orchestrator = PaletteOrchestrator(cache=cache, sampler=args.sampler)

    image_path = None
    try:
        if args.command == "image":
            image_path = expand_path(args.path)
            logger.info(f"Extracting colors from: {image_path}")
            result = orchestrator.from_image(image_path, mode)
        else:
            logger.info(f"Generating palette from: {args.hex}")
            result = orchestrator.from_color(args.hex, mode)
    except ColorParseError:
        print(f"Invalid hex color: {args.hex}", file=sys.stderr)
        return 1
    except SamplingError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    palette = result.palette
    logger.debug("Palette ready", extra={"strategy": palette.strategy, "request_id": result.request_id})

    if args.show_colors:
        print_palette(palette)

    if args.json:
        print_json(palette, args.json)

    if user_config.templates:
        try:
            process_templates(user_config, palette, dry_run=args.dry_run)
        except (OSError, TemplateError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if image_path is not None and not args.dry_run and user_config.config.wallpaper_cmd:
        command = user_config.config.wallpaper_cmd.replace("{path}", str(image_path))
        logger.debug(f"Setting wallpaper: {command}")
        run_hook(command)

    return 0


if __name__ == "__main__":
    sys.exit(main())
