"""
Unit tests for the color model.

Tests hex parsing/formatting, RGB <-> HSL conversion and hue arithmetic.
"""

import pytest

from tinte.services.colors.model import (
    HSL, RGB, ColorParseError, clamp, hsl, hsl_to_rgb, hue_distance, rgb_from_hex, rgb_to_hex, rgb_to_hsl
)


class TestHexParsing:
    """Test hex string parsing"""

    def test_parse_with_hash(self):
        assert rgb_from_hex("#ABCDEF") == RGB(171, 205, 239)

    def test_parse_without_hash(self):
        assert rgb_from_hex("abcdef") == RGB(171, 205, 239)

    def test_classmethod_matches_function(self):
        assert RGB.from_hex("#7aa2f7") == rgb_from_hex("#7aa2f7")

    @pytest.mark.parametrize("bad", ["zzzzzz", "#abc", "", "#abcdefg", "12345", "#12 456"])
    def test_parse_rejects_malformed(self, bad):
        with pytest.raises(ColorParseError):
            rgb_from_hex(bad)

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError, match="Invalid hex color: zzzzzz"):
            rgb_from_hex("zzzzzz")

    def test_hex_round_trip(self):
        for color in [RGB(0, 0, 0), RGB(255, 255, 255), RGB(1, 128, 254), RGB(171, 205, 239)]:
            assert rgb_from_hex(rgb_to_hex(color)) == color


class TestFormatting:
    """Test string formats used by templates and JSON output"""

    def setup_method(self):
        self.color = RGB(171, 205, 239)

    def test_to_hex_is_lowercase(self):
        assert self.color.to_hex() == "#abcdef"
        assert str(self.color) == "#abcdef"

    def test_to_hex_strip(self):
        assert self.color.to_hex_strip() == "abcdef"

    def test_to_rgb_string(self):
        assert self.color.to_rgb_string() == "171, 205, 239"

    def test_to_rgba_string_default_alpha(self):
        assert self.color.to_rgba_string() == "rgba(171, 205, 239, 1)"

    def test_to_rgba_string_fractional_alpha(self):
        assert self.color.to_rgba_string(0.5) == "rgba(171, 205, 239, 0.5)"

    def test_as_tuple(self):
        assert self.color.as_tuple() == (171, 205, 239)


class TestRgbValidation:
    """Test channel range validation"""

    @pytest.mark.parametrize("channels", [(256, 0, 0), (0, -1, 0), (0, 0, 300)])
    def test_out_of_range_channels_rejected(self, channels):
        with pytest.raises(ValueError):
            RGB(*channels)

    def test_non_int_channels_rejected(self):
        with pytest.raises(ValueError):
            RGB(1.5, 0, 0)


class TestRgbToHsl:
    """Test RGB to HSL conversion"""

    def test_primary_hues(self):
        red = rgb_to_hsl(RGB(255, 0, 0))
        assert red.h == pytest.approx(0.0)
        assert red.s == pytest.approx(1.0)
        assert red.l == pytest.approx(0.5)

        assert rgb_to_hsl(RGB(0, 255, 0)).h == pytest.approx(120.0)
        assert rgb_to_hsl(RGB(0, 0, 255)).h == pytest.approx(240.0)

    def test_achromatic_has_zero_hue_and_saturation(self):
        gray = rgb_to_hsl(RGB(128, 128, 128))
        assert gray.h == 0.0
        assert gray.s == 0.0
        assert gray.l == pytest.approx(128 / 255)

    def test_black_and_white(self):
        assert rgb_to_hsl(RGB(0, 0, 0)) == HSL(0.0, 0.0, 0.0)
        assert rgb_to_hsl(RGB(255, 255, 255)).l == pytest.approx(1.0)

    def test_hue_in_range(self):
        for color in [RGB(255, 0, 1), RGB(200, 10, 120), RGB(3, 7, 250)]:
            assert 0.0 <= color.to_hsl().h < 360.0


class TestHslToRgb:
    """Test HSL to RGB conversion"""

    def test_round_trip_within_one(self):
        colors = [RGB(r, g, b) for r in (0, 37, 128, 200, 255) for g in (0, 90, 255) for b in (12, 160, 255)]
        for color in colors:
            back = hsl_to_rgb(rgb_to_hsl(color))
            assert abs(back.r - color.r) <= 1
            assert abs(back.g - color.g) <= 1
            assert abs(back.b - color.b) <= 1

    def test_method_matches_function(self):
        value = HSL(210.0, 0.6, 0.4)
        assert value.to_rgb() == hsl_to_rgb(value)

    def test_out_of_range_inputs_are_clamped(self):
        assert hsl_to_rgb(HSL(0.0, 1.5, 0.5)) == RGB(255, 0, 0)
        assert hsl_to_rgb(HSL(0.0, 0.0, 2.0)) == RGB(255, 255, 255)
        assert hsl_to_rgb(HSL(0.0, -1.0, -0.5)) == RGB(0, 0, 0)

    def test_hue_wraps(self):
        assert hsl_to_rgb(HSL(480.0, 1.0, 0.5)) == hsl_to_rgb(HSL(120.0, 1.0, 0.5))
        assert hsl_to_rgb(HSL(-120.0, 1.0, 0.5)) == hsl_to_rgb(HSL(240.0, 1.0, 0.5))

    def test_percent_helper(self):
        assert hsl(0.0, 100.0, 50.0) == RGB(255, 0, 0)
        assert hsl(0.0, 0.0, 150.0) == RGB(255, 255, 255)


class TestHelpers:
    """Test numeric helpers"""

    def test_hue_distance_wraps(self):
        assert hue_distance(350.0, 10.0) == pytest.approx(20.0)
        assert hue_distance(10.0, 350.0) == pytest.approx(20.0)
        assert hue_distance(0.0, 180.0) == pytest.approx(180.0)
        assert hue_distance(90.0, 90.0) == 0.0

    def test_clamp(self):
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0
        assert clamp(0.3, 0.0, 1.0) == 0.3
