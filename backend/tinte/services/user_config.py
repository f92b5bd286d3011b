"""
User Config File

TOML file describing templates to render and shell hooks to run after a
palette is generated:

    [config]
    wallpaper_cmd = "swww img {path}"
    post_hook = "pkill -USR1 kitty"

    [templates.kitty]
    input_path = "~/.config/tinte/templates/kitty.conf"
    output_path = "~/.config/kitty/colors.conf"
    post_hook = "kitty @ set-colors -a ~/.config/kitty/colors.conf"
"""

import os
import tomllib
from pathlib import Path
from typing import Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError


class ConfigError(ValueError):
    """Raised when the user config file cannot be read or is invalid."""


class GlobalSettings(BaseModel):
    """The [config] table."""
    wallpaper_cmd: Optional[str] = Field(None, description="Command setting the wallpaper; {path} is replaced")
    post_hook: Optional[str] = Field(None, description="Command run after all templates are written")


class TemplateSettings(BaseModel):
    """One [templates.<name>] table."""
    input_path: str = Field(..., min_length=1, description="Template file with {color} placeholders")
    output_path: str = Field(..., min_length=1, description="Where the rendered file is written")
    post_hook: Optional[str] = Field(None, description="Command run after this template is written")


class UserConfig(BaseModel):
    """Parsed user config file."""
    config: GlobalSettings = Field(default_factory=GlobalSettings)
    templates: Dict[str, TemplateSettings] = Field(default_factory=dict)


def default_config_path() -> Path:
    """$XDG_CONFIG_HOME/tinte/config.toml (~/.config when unset)."""
    base = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(base) / "tinte" / "config.toml"


def expand_path(path: str) -> Path:
    """Expand a leading '~/' to the home directory."""
    if path.startswith("~/"):
        return Path(os.path.expanduser("~")) / path[2:]
    return Path(path)


def load_config(path: Optional[Union[str, Path]] = None) -> UserConfig:
    """
    Load the user config file.

    Args:
        path: Explicit file path; defaults to default_config_path()

    Returns:
        Parsed config, or an empty config when the file does not exist

    Raises:
        ConfigError: If the file cannot be read, is not valid TOML or does
            not match the expected schema
    """
    config_path = Path(path) if path else default_config_path()

    if not config_path.exists():
        return UserConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Failed to read config: {config_path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Failed to parse config: {config_path}: {e}") from e

    try:
        return UserConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {config_path}: {e}") from e
