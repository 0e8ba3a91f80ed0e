"""Tests for RGB/HSL conversion."""

import pytest

from spritekit.core.color import hsl_to_rgb, rgb_to_hsl, round_half_up


class TestRgbToHsl:
    """Tests for rgb_to_hsl()."""

    @pytest.mark.parametrize("rgb,hue", [
        ((255, 0, 0), 0.0),
        ((0, 255, 0), 120.0),
        ((0, 0, 255), 240.0),
        ((255, 0, 255), 300.0),
    ])
    def test_primary_hues(self, rgb, hue):
        assert rgb_to_hsl(*rgb)[0] == pytest.approx(hue)

    def test_achromatic(self):
        """Greys have no hue or saturation."""
        assert rgb_to_hsl(20, 20, 20) == (0.0, 0.0, pytest.approx(20 / 255))
        assert rgb_to_hsl(255, 255, 255) == (0.0, 0.0, 1.0)

    def test_saturation_and_lightness(self):
        h, s, l = rgb_to_hsl(0, 200, 0)
        assert h == pytest.approx(120.0)
        assert s == pytest.approx(1.0)
        assert l == pytest.approx(100 / 255)

    def test_hue_in_range(self):
        h, _, _ = rgb_to_hsl(255, 0, 1)
        assert 0 <= h < 360


class TestHslToRgb:
    """Tests for hsl_to_rgb()."""

    def test_pure_hues(self):
        assert hsl_to_rgb(0, 1, 0.5) == (255, 0, 0)
        assert hsl_to_rgb(120, 1, 0.5) == (0, 255, 0)
        assert hsl_to_rgb(240, 1, 0.5) == (0, 0, 255)

    def test_grey(self):
        assert hsl_to_rgb(77, 0, 0.5) == (128, 128, 128)

    def test_hue_wraps(self):
        assert hsl_to_rgb(360, 1, 0.5) == hsl_to_rgb(0, 1, 0.5)

    @pytest.mark.parametrize("rgb", [(40, 160, 40), (20, 90, 20), (200, 0, 0), (123, 45, 67)])
    def test_inverse(self, rgb):
        assert hsl_to_rgb(*rgb_to_hsl(*rgb)) == rgb


def test_round_half_up():
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.49) == 2
