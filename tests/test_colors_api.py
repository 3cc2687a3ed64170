"""
Tests for the color services API: structured conversion, metric dispatch
and the extraction wrapper.
"""

import pytest
from pydantic import ValidationError

import palette_core
from palette_core.schemas import ColorSpace, CmykColor, HexColor, HsvColor, LabColor, RgbColor
from palette_core.services.colors.api import (
    METRIC_NAMES, as_color, color_metric, convert_color, extract_dominant_colors
)
from palette_core.services.colors.color import ColorValidationError, ColorValue
from palette_core.utils.metrics import get_metrics


class TestAsColor:

    def test_accepted_inputs(self):
        expected = ColorValue(10, 42, 67)
        assert as_color(expected) is expected
        assert as_color("#0A2A43") == expected
        assert as_color([10, 42, 67]) == expected
        assert as_color({"r": 10, "g": 42, "b": 67}) == expected

    def test_invalid_input(self):
        with pytest.raises(ColorValidationError):
            as_color("not-a-color")


class TestConvertColor:

    def test_records_per_space(self):
        red = ColorValue(255, 0, 0)
        assert convert_color(red, "rgb") == RgbColor(r=255, g=0, b=0)
        assert convert_color(red, ColorSpace.HEX) == HexColor(hex="#FF0000")
        assert convert_color(red, "cmyk") == CmykColor(c=0, m=100, y=100, k=0)
        assert convert_color(red, "lab") == LabColor(l=53, a=80, b=67)

    def test_hsb_is_hsv(self):
        assert convert_color("#FF0000", "hsb") == HsvColor(h=0, s=100, v=100)

    def test_space_is_case_insensitive(self):
        assert convert_color("#FF0000", "HSL").model_dump() == {"h": 0, "s": 100, "l": 50}

    def test_unknown_space(self):
        with pytest.raises(ValueError, match="Unknown color space"):
            convert_color("#FF0000", "xyz")

    def test_records_are_frozen(self):
        record = convert_color("#FF0000", "rgb")
        with pytest.raises(ValidationError):
            record.r = 0

    def test_counts_conversions(self):
        convert_color("#FF0000", "hsl")
        convert_color("#00FF00", "hsl")
        assert get_metrics().get_counter("conversion_total_hsl") == 2


class TestColorMetric:

    def test_single_color_metrics(self):
        assert color_metric("brightness", "#FF0000") == pytest.approx(76.245)
        assert color_metric("is_vibrant", "#FF0000") is True
        assert color_metric("is_vibrant", "#808080", threshold=0) is True

    def test_pairwise_metrics(self):
        assert color_metric("contrast_ratio", "#000000", "#FFFFFF") == pytest.approx(21.0, abs=0.1)
        assert color_metric("meets_wcag_aa", "#808080", "#FFFFFF", large_text=True) is True

    def test_missing_second_color(self):
        with pytest.raises(ValueError, match="requires two colors"):
            color_metric("delta_e", "#FF0000")

    def test_extra_color(self):
        with pytest.raises(ValueError, match="single color"):
            color_metric("luminance", "#FF0000", "#00FF00")

    def test_unknown_metric(self):
        with pytest.raises(ValueError, match="Unknown metric"):
            color_metric("vividness", "#FF0000")

    def test_metric_names(self):
        assert "delta_e" in METRIC_NAMES
        assert "is_cool" in METRIC_NAMES


class TestPackageSurface:

    def test_top_level_exports(self, rgb_samples):
        palette = palette_core.extract_dominant_colors(rgb_samples, 3, palette_core.SeededRandom(42))
        assert isinstance(palette, palette_core.ColorPalette)
        assert palette_core.convert_color("#FFFFFF", "hex").hex == "#FFFFFF"

    def test_wrapper_passes_options(self, rgb_samples):
        palette = extract_dominant_colors(rgb_samples, 3, palette_core.SeededRandom(42), order="weight")
        assert palette[0] == ColorValue(0, 0, 255)
