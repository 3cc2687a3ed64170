"""
Unit tests for the ColorValue primitive.

Tests construction-time validation, parsing helpers and immutability.
"""

import dataclasses

import numpy as np
import pytest

from palette_core.services.colors.color import (
    BLACK, WHITE, ColorValidationError, ColorValue, round_half_up
)


class TestConstruction:
    """Test channel validation"""

    def test_valid_channels(self):
        """Test that boundary values are accepted"""
        color = ColorValue(0, 128, 255)
        assert (color.r, color.g, color.b) == (0, 128, 255)

    @pytest.mark.parametrize("channels", [(256, 0, 0), (0, -1, 0), (0, 0, 300)])
    def test_out_of_range_rejected(self, channels):
        """Test that channels outside 0-255 raise"""
        with pytest.raises(ColorValidationError):
            ColorValue(*channels)

    def test_validation_error_is_value_error(self):
        """Test the error hierarchy callers can rely on"""
        with pytest.raises(ValueError):
            ColorValue(0, 0, 999)

    def test_non_integer_rejected(self):
        """Test that floats and booleans are not silently truncated"""
        with pytest.raises(ColorValidationError):
            ColorValue(1.5, 0, 0)
        with pytest.raises(ColorValidationError):
            ColorValue(True, 0, 0)

    def test_numpy_integers_normalised(self):
        """Test that numpy channel types become plain ints"""
        color = ColorValue(np.uint8(10), np.int64(20), np.int32(30))
        assert type(color.r) is int
        assert color == ColorValue(10, 20, 30)


class TestImmutability:
    """Test value semantics"""

    def test_frozen(self):
        color = ColorValue(1, 2, 3)
        with pytest.raises(dataclasses.FrozenInstanceError):
            color.r = 10

    def test_equality_and_hash(self):
        assert ColorValue(1, 2, 3) == ColorValue(1, 2, 3)
        assert len({ColorValue(1, 2, 3), ColorValue(1, 2, 3), ColorValue(3, 2, 1)}) == 2


class TestParsing:
    """Test hex and rgb helpers"""

    def test_from_hex_with_and_without_hash(self):
        assert ColorValue.from_hex("#1F4E79") == ColorValue(31, 78, 121)
        assert ColorValue.from_hex("d3b58f") == ColorValue(211, 181, 143)

    @pytest.mark.parametrize("bad", ["#FFF", "#GGGGGG", "12345", "#1234567", ""])
    def test_from_hex_invalid(self, bad):
        with pytest.raises(ColorValidationError):
            ColorValue.from_hex(bad)

    def test_to_hex_is_uppercase(self):
        assert ColorValue(45, 117, 96).to_hex() == "#2D7560"
        assert str(WHITE) == "#FFFFFF"
        assert BLACK.to_hex() == "#000000"

    def test_from_rgb_mapping_and_sequence(self):
        assert ColorValue.from_rgb({"r": 10, "g": 42, "b": 67}) == ColorValue(10, 42, 67)
        assert ColorValue.from_rgb([10, 42, 67]) == ColorValue(10, 42, 67)
        assert ColorValue.from_rgb((10, 42, 67)).to_rgb() == {"r": 10, "g": 42, "b": 67}

    def test_from_rgb_invalid_shapes(self):
        with pytest.raises(ColorValidationError):
            ColorValue.from_rgb({"r": 1, "g": 2})
        with pytest.raises(ColorValidationError):
            ColorValue.from_rgb([1, 2])
        with pytest.raises(ColorValidationError):
            ColorValue.from_rgb("abc")


class TestDerivedRepresentations:
    """Test on-demand delegation to conversions and metrics"""

    def test_delegates(self):
        red = ColorValue(255, 0, 0)
        assert red.to_hsl() == {"h": 0, "s": 100, "l": 50}
        assert red.to_hsv() == {"h": 0, "s": 100, "v": 100}
        assert red.to_cmyk() == {"c": 0, "m": 100, "y": 100, "k": 0}
        assert red.as_tuple() == (255, 0, 0)

    def test_metrics_shortcuts(self):
        assert WHITE.is_light()
        assert BLACK.is_dark()
        assert BLACK.contrast_ratio(WHITE) == pytest.approx(21.0, abs=0.01)
        assert WHITE.luminance() == pytest.approx(1.0)
        assert WHITE.brightness() == pytest.approx(255.0)


class TestRoundHalfUp:
    """Test the rounding helper"""

    def test_halves_round_away_from_zero(self):
        assert round_half_up(0.5) == 1
        assert round_half_up(2.5) == 3
        assert round_half_up(-2.5) == -3
        assert round_half_up(1.49) == 1
        assert round_half_up(-0.4) == 0
