"""
Unit tests for color formatting helpers.
"""

import pytest

from chromapick.services.colors.formatting import (
    DARK_TEXT, LIGHT_TEXT, choose_text_color, format_rgb, hex_to_rgb,
    linearize_channel, relative_luminance, rgb_to_hex
)


class TestRgbToHex:
    """Test RGB to hex conversion"""

    def test_extremes(self):
        assert rgb_to_hex(0, 0, 0) == "#000000"
        assert rgb_to_hex(255, 255, 255) == "#FFFFFF"

    def test_uppercase_zero_padded(self):
        assert rgb_to_hex(10, 171, 205) == "#0AABCD"
        assert rgb_to_hex(96, 144, 192) == "#6090C0"

    @pytest.mark.parametrize("rgb", [(0, 0, 0), (1, 2, 3), (240, 24, 120), (255, 0, 255)])
    def test_always_seven_characters(self, rgb):
        value = rgb_to_hex(*rgb)
        assert len(value) == 7
        assert value[1:] == value[1:].upper()


class TestHexToRgb:

    def test_parses_with_and_without_hash(self):
        assert hex_to_rgb("#6090C0") == (96, 144, 192)
        assert hex_to_rgb("6090c0") == (96, 144, 192)

    @pytest.mark.parametrize("bad", ["#FFF", "#GGGGGG", ""])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            hex_to_rgb(bad)


def test_format_rgb():
    assert format_rgb(96, 144, 192) == "rgb(96, 144, 192)"


class TestLuminance:
    """Test relative luminance and text color choice"""

    def test_linearize_low_segment(self):
        assert linearize_channel(10) == pytest.approx((10 / 255) / 12.92)

    def test_linearize_high_segment(self):
        assert linearize_channel(128) == pytest.approx(((128 / 255 + 0.055) / 1.055) ** 2.4)

    def test_luminance_bounds(self):
        assert relative_luminance(0, 0, 0) == 0.0
        assert relative_luminance(255, 255, 255) == pytest.approx(1.0)

    def test_green_weighted_most(self):
        assert relative_luminance(0, 255, 0) > relative_luminance(255, 0, 0) > relative_luminance(0, 0, 255)

    def test_text_color_choice(self):
        assert choose_text_color(255, 255, 255) == DARK_TEXT
        assert choose_text_color(240, 216, 96) == DARK_TEXT
        assert choose_text_color(0, 0, 0) == LIGHT_TEXT
        assert choose_text_color(0, 0, 192) == LIGHT_TEXT
