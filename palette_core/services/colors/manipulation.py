"""
HSL-based color adjustments.

Amounts and target levels are fractions in [0, 1]; adjusted lightness and
saturation are clamped into [0, 100] before converting back to RGB.
"""

from .color import ColorValue, MAX_RGB_VALUE, round_half_up
from .conversions import from_hsl, to_hsl


def _clamp_percent(value: float) -> float:
    return max(0.0, min(100.0, value))


def lighten(color: ColorValue, amount: float) -> ColorValue:
    hsl = to_hsl(color)
    return from_hsl(hsl["h"], hsl["s"], _clamp_percent(hsl["l"] + amount * 100))


def darken(color: ColorValue, amount: float) -> ColorValue:
    hsl = to_hsl(color)
    return from_hsl(hsl["h"], hsl["s"], _clamp_percent(hsl["l"] - amount * 100))


def saturate(color: ColorValue, amount: float) -> ColorValue:
    hsl = to_hsl(color)
    return from_hsl(hsl["h"], _clamp_percent(hsl["s"] + amount * 100), hsl["l"])


def desaturate(color: ColorValue, amount: float) -> ColorValue:
    hsl = to_hsl(color)
    return from_hsl(hsl["h"], _clamp_percent(hsl["s"] - amount * 100), hsl["l"])


def rotate(color: ColorValue, degrees: float) -> ColorValue:
    """Rotate hue by `degrees` (negative values rotate backwards)."""
    hsl = to_hsl(color)
    return from_hsl((hsl["h"] + degrees) % 360, hsl["s"], hsl["l"])


def with_lightness(color: ColorValue, lightness: float) -> ColorValue:
    hsl = to_hsl(color)
    return from_hsl(hsl["h"], hsl["s"], _clamp_percent(lightness * 100))


def with_saturation(color: ColorValue, saturation: float) -> ColorValue:
    hsl = to_hsl(color)
    return from_hsl(hsl["h"], _clamp_percent(saturation * 100), hsl["l"])


def with_hue(color: ColorValue, hue: float) -> ColorValue:
    hsl = to_hsl(color)
    return from_hsl(hue, hsl["s"], hsl["l"])


def mix(color_a: ColorValue, color_b: ColorValue, weight: float = 0.5) -> ColorValue:
    """
    Linear blend in RGB.

    Args:
        color_a: First color
        color_b: Second color
        weight: Share of `color_a` in the result, clamped to [0, 1]
    """
    weight = max(0.0, min(1.0, weight))
    return ColorValue(
        round_half_up(color_a.r * weight + color_b.r * (1 - weight)),
        round_half_up(color_a.g * weight + color_b.g * (1 - weight)),
        round_half_up(color_a.b * weight + color_b.b * (1 - weight)),
    )


def invert(color: ColorValue) -> ColorValue:
    return ColorValue(MAX_RGB_VALUE - color.r, MAX_RGB_VALUE - color.g, MAX_RGB_VALUE - color.b)


def grayscale(color: ColorValue) -> ColorValue:
    """Drop HSL saturation, keeping hue and lightness."""
    hsl = to_hsl(color)
    return from_hsl(hsl["h"], 0, hsl["l"])
