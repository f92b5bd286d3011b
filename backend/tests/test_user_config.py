"""
Tests for the user config file loader.
"""

from pathlib import Path

import pytest

from tinte.services.user_config import ConfigError, default_config_path, expand_path, load_config


VALID_CONFIG = """
[config]
wallpaper_cmd = "swww img {path}"
post_hook = "pkill -USR1 kitty"

[templates.kitty]
input_path = "~/.config/tinte/templates/kitty.conf"
output_path = "~/.config/kitty/colors.conf"
post_hook = "kitty @ set-colors -a ~/.config/kitty/colors.conf"

[templates.waybar]
input_path = "/etc/tinte/waybar.css"
output_path = "/tmp/waybar.css"
"""


class TestLoadConfig:
    """Test parsing and validation"""

    def test_missing_file_is_empty_config(self, tmp_path):
        config = load_config(tmp_path / "nope.toml")
        assert config.templates == {}
        assert config.config.wallpaper_cmd is None
        assert config.config.post_hook is None

    def test_valid_config(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(VALID_CONFIG)
        config = load_config(path)
        assert config.config.wallpaper_cmd == "swww img {path}"
        assert set(config.templates) == {"kitty", "waybar"}
        assert config.templates["kitty"].post_hook.startswith("kitty @")
        assert config.templates["waybar"].post_hook is None

    def test_default_path_used(self, isolated_dirs):
        path = isolated_dirs / "config" / "tinte" / "config.toml"
        path.parent.mkdir(parents=True)
        path.write_text('[config]\npost_hook = "true"\n')
        assert default_config_path() == path
        assert load_config().config.post_hook == "true"

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[config\nbroken = ")
        with pytest.raises(ConfigError, match="Failed to parse config"):
            load_config(path)

    def test_missing_required_field(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[templates.kitty]\ninput_path = "a"\n')
        with pytest.raises(ConfigError, match="Invalid config"):
            load_config(path)

    def test_config_error_is_value_error(self):
        assert issubclass(ConfigError, ValueError)


class TestExpandPath:
    """Test home directory expansion"""

    def test_tilde_prefix(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert expand_path("~/themes/a.conf") == tmp_path / "themes" / "a.conf"

    def test_other_paths_untouched(self):
        assert expand_path("/etc/x") == Path("/etc/x")
        assert expand_path("relative/x") == Path("relative/x")
        assert expand_path("~user/x") == Path("~user/x")
