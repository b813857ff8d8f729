"""Tests for sRGB, HSL and WCAG contrast math."""

import math

import numpy as np
import pytest

from contrastwheel.colorspace import (
    RGB,
    contrast_ratio,
    hex_to_rgb,
    hsl_to_rgb,
    hsl_to_rgb_channels,
    luminance_from_channels,
    parse_hex_color,
    passes_thresholds,
    relative_luminance,
    rgb_to_hex,
    srgb_to_linear,
)
from contrastwheel.errors import ColorError, InvalidHexColorError


class TestHexText:
    """Parsing and formatting of #RRGGBB text."""

    def test_parse_lowercase(self):
        assert hex_to_rgb("#1a2b3c") == RGB(0x1A, 0x2B, 0x3C)

    def test_parse_is_case_insensitive(self):
        assert hex_to_rgb("#FaFaFa") == RGB(250, 250, 250)

    def test_surrounding_whitespace_ignored(self):
        assert hex_to_rgb("  #abcdef ") == RGB(0xAB, 0xCD, 0xEF)

    @pytest.mark.parametrize("text", [
        "fafafa", "#fff", "#ggg000", "#1234567", "", "#12345", "rgb(1,2,3)", None, 0xFAFAFA,
    ])
    def test_invalid_returns_none(self, text):
        assert hex_to_rgb(text) is None

    def test_parse_hex_color_raises(self):
        with pytest.raises(InvalidHexColorError):
            parse_hex_color("#12345")

    def test_invalid_hex_is_a_color_error(self):
        with pytest.raises(ColorError):
            parse_hex_color("blue")

    def test_format_is_lowercase_and_padded(self):
        assert rgb_to_hex((0, 15, 255)) == "#000fff"
        assert rgb_to_hex(RGB(171, 205, 239)) == "#abcdef"

    def test_round_trip(self):
        rng = np.random.default_rng(7)
        for r, g, b in rng.integers(0, 256, size=(50, 3)):
            rgb = RGB(int(r), int(g), int(b))
            assert hex_to_rgb(rgb_to_hex(rgb)) == rgb


class TestLuminance:
    """Relative luminance."""

    def test_black_and_white(self):
        assert relative_luminance((0, 0, 0)) == 0.0
        assert relative_luminance((255, 255, 255)) == pytest.approx(1.0)

    def test_linear_segment_below_threshold(self):
        # 10/255 is below 0.04045, so the linear branch applies
        np.testing.assert_allclose(srgb_to_linear(10), (10 / 255) / 12.92)

    def test_gamma_segment(self):
        expected = ((128 / 255 + 0.055) / 1.055) ** 2.4
        np.testing.assert_allclose(srgb_to_linear(128), expected)

    def test_channel_weights(self):
        assert relative_luminance((255, 0, 0)) == pytest.approx(0.2126)
        assert relative_luminance((0, 255, 0)) == pytest.approx(0.7152)
        assert relative_luminance((0, 0, 255)) == pytest.approx(0.0722)

    def test_vectorized_matches_scalar(self):
        colors = [(0, 0, 0), (12, 200, 99), (250, 250, 250), (128, 128, 128)]
        r, g, b = (np.array(ch) for ch in zip(*colors))
        lum = luminance_from_channels(r, g, b)
        for value, color in zip(lum, colors):
            assert value == pytest.approx(relative_luminance(color), rel=1e-12)


class TestContrastRatio:
    """WCAG contrast ratio."""

    def test_black_on_white_is_21(self):
        assert contrast_ratio((0, 0, 0), (255, 255, 255)) == pytest.approx(21.0)

    def test_self_contrast_is_one(self):
        for color in [(0, 0, 0), (250, 250, 250), (12, 34, 56)]:
            assert contrast_ratio(color, color) == 1.0

    def test_symmetric(self):
        rng = np.random.default_rng(3)
        for _ in range(20):
            c1 = tuple(int(v) for v in rng.integers(0, 256, size=3))
            c2 = tuple(int(v) for v in rng.integers(0, 256, size=3))
            assert contrast_ratio(c1, c2) == contrast_ratio(c2, c1)

    def test_range(self):
        rng = np.random.default_rng(11)
        for _ in range(20):
            c1 = tuple(int(v) for v in rng.integers(0, 256, size=3))
            c2 = tuple(int(v) for v in rng.integers(0, 256, size=3))
            assert 1.0 <= contrast_ratio(c1, c2) <= 21.0 + 1e-9

    def test_mid_gray_on_black(self):
        assert contrast_ratio((128, 128, 128), (0, 0, 0)) == pytest.approx(5.317, abs=1e-3)

    def test_passes_thresholds(self):
        assert passes_thresholds(5.317) == {3.0: True, 4.5: True, 7.0: False}

    def test_passes_thresholds_is_inclusive(self):
        assert passes_thresholds(4.5) == {3.0: True, 4.5: True, 7.0: False}

    def test_passes_custom_levels(self):
        assert passes_thresholds(2.5, (2.0, 3.0)) == {2.0: True, 3.0: False}


class TestHSL:
    """HSL -> RGB conversion."""

    @pytest.mark.parametrize("lightness", [0.0, 0.2, 0.5, 0.73, 1.0])
    @pytest.mark.parametrize("hue", [0.0, 95.0, 250.0])
    def test_zero_saturation_is_gray(self, hue, lightness):
        expected = int(math.floor(lightness * 255 + 0.5))
        assert hsl_to_rgb(hue, 0.0, lightness) == RGB(expected, expected, expected)

    def test_mid_lightness_gray_is_128(self):
        assert hsl_to_rgb(0.0, 0.0, 0.5) == RGB(128, 128, 128)

    @pytest.mark.parametrize("hue,expected", [
        (0.0, (255, 0, 0)),
        (60.0, (255, 255, 0)),
        (120.0, (0, 255, 0)),
        (180.0, (0, 255, 255)),
        (240.0, (0, 0, 255)),
        (300.0, (255, 0, 255)),
    ])
    def test_primaries_and_secondaries(self, hue, expected):
        assert hsl_to_rgb(hue, 1.0, 0.5) == RGB(*expected)

    def test_hue_wraps(self):
        assert hsl_to_rgb(360.0, 1.0, 0.5) == hsl_to_rgb(0.0, 1.0, 0.5)
        assert hsl_to_rgb(-120.0, 1.0, 0.5) == hsl_to_rgb(240.0, 1.0, 0.5)
        assert hsl_to_rgb(480.0, 1.0, 0.5) == hsl_to_rgb(120.0, 1.0, 0.5)

    def test_lightness_extremes(self):
        assert hsl_to_rgb(200.0, 1.0, 0.0) == RGB(0, 0, 0)
        assert hsl_to_rgb(200.0, 1.0, 1.0) == RGB(255, 255, 255)

    def test_vectorized_matches_scalar(self):
        rng = np.random.default_rng(5)
        h = rng.uniform(0.0, 360.0, size=40)
        s = rng.uniform(0.0, 1.0, size=40)
        l = rng.uniform(0.0, 1.0, size=40)
        r, g, b = hsl_to_rgb_channels(h, s, l)
        for i in range(40):
            assert (r[i], g[i], b[i]) == tuple(hsl_to_rgb(h[i], s[i], l[i]))

    def test_channels_in_range(self):
        h, s = np.meshgrid(np.linspace(0, 359, 30), np.linspace(0, 1, 30))
        for l in (0.0, 0.3, 0.5, 0.9, 1.0):
            for channel in hsl_to_rgb_channels(h, s, l):
                assert channel.min() >= 0
                assert channel.max() <= 255
