"""
Templates & Hooks

Renders user templates by substituting palette placeholders, writes the
results and runs the configured shell hooks.

Placeholders, for every name in Palette.named_colors():
    {name}              #rrggbb
    {name.strip}        rrggbb
    {name.rgb}          r, g, b
    {name.rgba}         rgba(r, g, b, 1)
    {name.rgba:0.8}     rgba(r, g, b, 0.8)
"""

import re
import subprocess
from pathlib import Path
from typing import List, Mapping, Optional

from loguru import logger

from .colors.model import RGB
from .colors.palette import Palette
from .user_config import UserConfig, expand_path


PLACEHOLDER = re.compile(r"\{([a-z_][a-z0-9_]*)(?:\.(strip|rgb|rgba)(?::([^{}]*))?)?\}")


class TemplateError(ValueError):
    """Raised when a template file is not valid UTF-8 text."""


def _format_color(color: RGB, fmt: Optional[str], alpha: Optional[str]) -> str:
    if fmt == "strip":
        return color.to_hex_strip()
    if fmt == "rgb":
        return color.to_rgb_string()
    if fmt == "rgba":
        if alpha is None:
            return color.to_rgba_string(1.0)
        return color.to_rgba_string(float(alpha.strip()))
    return color.to_hex()


def render_template(content: str, colors: Mapping[str, RGB]) -> str:
    """
    Substitute color placeholders in a template.

    Unknown names and alpha values that are not numbers are left as-is.
    """
    def replace(match: re.Match) -> str:
        name, fmt, alpha = match.group(1), match.group(2), match.group(3)
        color = colors.get(name)
        if color is None:
            return match.group(0)
        if alpha is not None and fmt != "rgba":
            return match.group(0)
        try:
            return _format_color(color, fmt, alpha)
        except ValueError:
            return match.group(0)

    return PLACEHOLDER.sub(replace, content)


def run_hook(command: str) -> int:
    """
    Run a hook through `sh -c`.

    Returns:
        The hook's exit status; failures are logged, not raised
    """
    logger.info(f"Running hook: {command}")
    try:
        result = subprocess.run(["sh", "-c", command], check=False)
    except OSError as e:
        logger.error(f"Failed to run hook '{command}': {e}")
        return 127

    if result.returncode != 0:
        logger.warning(f"Hook '{command}' exited with status {result.returncode}")
    return result.returncode


def process_templates(config: UserConfig, palette: Palette, dry_run: bool = False) -> List[Path]:
    """
    Render every configured template for a palette.

    Templates are processed in name order. A missing input file is logged and
    skipped. In dry-run mode nothing is written and no hook runs.

    Args:
        config: Parsed user config
        palette: Palette to substitute
        dry_run: Only report what would be written

    Returns:
        Output paths written (or that would be written in dry-run mode)

    Raises:
        TemplateError: If a template is not valid UTF-8
        OSError: If a template cannot be read or its output cannot be written
    """
    colors = palette.named_colors()
    outputs: List[Path] = []

    for name in sorted(config.templates):
        template = config.templates[name]
        input_path = expand_path(template.input_path)
        output_path = expand_path(template.output_path)

        if not input_path.exists():
            logger.warning(f"Template not found: {name} ({input_path})")
            continue

        try:
            content = input_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise TemplateError(f"Failed to read template {name}: {input_path}: {e}") from e
        rendered = render_template(content, colors)

        if dry_run:
            logger.info(f"[dry-run] Would write: {output_path}")
            outputs.append(output_path)
            continue

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered, encoding="utf-8")
        logger.info(f"Wrote: {output_path}")
        outputs.append(output_path)

        if template.post_hook:
            run_hook(template.post_hook)

    if not dry_run and config.config.post_hook:
        run_hook(config.config.post_hook)

    return outputs
