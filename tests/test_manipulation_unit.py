"""
Unit tests for HSL-based color adjustments.
"""

from palette_core.services.colors.color import BLACK, WHITE, ColorValue
from palette_core.services.colors.manipulation import (
    darken, desaturate, grayscale, invert, lighten, mix, rotate, saturate,
    with_hue, with_lightness, with_saturation
)

RED = ColorValue(255, 0, 0)
MID_GRAY = ColorValue(128, 128, 128)


class TestLightness:

    def test_lighten_and_darken(self):
        assert lighten(BLACK, 0.5) == MID_GRAY
        assert darken(WHITE, 1.0) == BLACK

    def test_clamped(self):
        """Test that overshooting stays inside the RGB cube"""
        assert lighten(WHITE, 0.2) == WHITE
        assert darken(BLACK, 0.3) == BLACK

    def test_with_lightness(self):
        assert with_lightness(RED, 1.0) == WHITE
        assert with_lightness(RED, 0.0) == BLACK


class TestSaturation:

    def test_saturate_gray(self):
        assert saturate(MID_GRAY, 0.5) == ColorValue(191, 64, 64)

    def test_desaturate_to_gray(self):
        assert desaturate(RED, 1.0) == MID_GRAY
        assert with_saturation(RED, 0) == MID_GRAY
        assert grayscale(RED) == MID_GRAY


class TestHue:

    def test_rotate(self):
        assert rotate(RED, 120) == ColorValue(0, 255, 0)
        assert rotate(RED, -120) == ColorValue(0, 0, 255)
        assert rotate(RED, 360) == RED

    def test_with_hue(self):
        assert with_hue(RED, 240) == ColorValue(0, 0, 255)


class TestBlending:

    def test_mix(self):
        assert mix(BLACK, WHITE) == MID_GRAY
        assert mix(RED, WHITE, weight=1.0) == RED
        assert mix(RED, WHITE, weight=0.0) == WHITE

    def test_mix_weight_clamped(self):
        assert mix(RED, WHITE, weight=2.0) == RED
        assert mix(RED, WHITE, weight=-1.0) == WHITE

    def test_invert(self):
        assert invert(RED) == ColorValue(0, 255, 255)
        assert invert(invert(MID_GRAY)) == MID_GRAY
