"""
Color Services API

Entry points that coordinate the conversion, analysis and extraction
modules: structured conversion records, metric lookup by name and dominant
color extraction with configured defaults.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Union

from palette_core.schemas import (
    ColorSpace, CmykColor, ConvertedColor, HexColor, HslColor, HsvColor, LabColor, RgbColor
)
from palette_core.utils.metrics import get_metrics

from . import analysis, conversions
from .color import ColorValue
from .extraction import PixelInput, RandomSource
from .extraction import extract_dominant_colors as _extract
from .palette import ColorPalette

ColorInput = Union[ColorValue, str, Sequence[int], Mapping[str, Any]]


def as_color(color: ColorInput) -> ColorValue:
    """Coerce a ColorValue, hex string, 3-sequence or r/g/b mapping."""
    if isinstance(color, ColorValue):
        return color
    if isinstance(color, str):
        return ColorValue.from_hex(color)
    return ColorValue.from_rgb(color)


_CONVERTERS: Dict[ColorSpace, Callable[[ColorValue], ConvertedColor]] = {
    ColorSpace.RGB: lambda c: RgbColor(**c.to_rgb()),
    ColorSpace.HEX: lambda c: HexColor(hex=c.to_hex()),
    ColorSpace.HSL: lambda c: HslColor(**conversions.to_hsl(c)),
    ColorSpace.HSV: lambda c: HsvColor(**conversions.to_hsv(c)),
    ColorSpace.HSB: lambda c: HsvColor(**conversions.to_hsv(c)),
    ColorSpace.CMYK: lambda c: CmykColor(**conversions.to_cmyk(c)),
    ColorSpace.LAB: lambda c: LabColor(**conversions.to_lab(c)),
}


def convert_color(color: ColorInput, target_space: Union[ColorSpace, str]) -> ConvertedColor:
    """
    Convert a color into a structured record for the target space.

    Raises:
        ValueError: If the target space is unknown or the color is invalid
    """
    try:
        space = ColorSpace(target_space.lower() if isinstance(target_space, str) else target_space)
    except ValueError:
        supported = ", ".join(s.value for s in ColorSpace)
        raise ValueError(f"Unknown color space '{target_space}'. Supported: {supported}") from None

    record = _CONVERTERS[space](as_color(color))
    get_metrics().increment_conversion_count(space.value)
    return record


# name -> (function, needs second color)
_METRICS: Dict[str, Any] = {
    "brightness": (analysis.brightness, False),
    "luminance": (analysis.luminance, False),
    "contrast_ratio": (analysis.contrast_ratio, True),
    "rgb_distance": (analysis.rgb_distance, True),
    "delta_e": (analysis.delta_e, True),
    "meets_wcag_aa": (analysis.meets_wcag_aa, True),
    "meets_wcag_aaa": (analysis.meets_wcag_aaa, True),
    "is_light": (analysis.is_light, False),
    "is_dark": (analysis.is_dark, False),
    "is_vibrant": (analysis.is_vibrant, False),
    "is_muted": (analysis.is_muted, False),
    "is_warm": (analysis.is_warm, False),
    "is_cool": (analysis.is_cool, False),
}

METRIC_NAMES = tuple(_METRICS)


def color_metric(name: str, color_a: ColorInput, color_b: Optional[ColorInput] = None,
                 **options: Any) -> Union[float, bool]:
    """
    Evaluate a named metric or predicate.

    Args:
        name: One of METRIC_NAMES
        color_a: Subject color
        color_b: Second color for pairwise metrics
        **options: Passed through (e.g. `threshold`, `large_text`)

    Raises:
        ValueError: For an unknown metric or a missing second color
    """
    if name not in _METRICS:
        raise ValueError(f"Unknown metric '{name}'. Supported: {', '.join(METRIC_NAMES)}")

    func, pairwise = _METRICS[name]
    if pairwise:
        if color_b is None:
            raise ValueError(f"Metric '{name}' requires two colors")
        return func(as_color(color_a), as_color(color_b), **options)

    if color_b is not None:
        raise ValueError(f"Metric '{name}' takes a single color")
    return func(as_color(color_a), **options)


def extract_dominant_colors(pixel_source: Iterable[PixelInput], k: Optional[int] = None,
                            rng: Optional[RandomSource] = None, **options: Any) -> ColorPalette:
    """Extract dominant colors; see `extraction.extract_dominant_colors`."""
    return _extract(pixel_source, k, rng, **options)
