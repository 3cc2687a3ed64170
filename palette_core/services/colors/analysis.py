"""
Color Analysis Module

Perceptual and accessibility metrics built on the conversion functions:
BT.601 brightness, WCAG relative luminance and contrast, RGB and CIE76
distances, and simple classification predicates.
"""

import math

from .color import ColorValue, MAX_RGB_VALUE
from .conversions import rgb_to_lab_float, to_hsl

# ITU-R BT.601 perceived brightness, scaled to [0, 255]
BRIGHTNESS_COEFFICIENTS = (299, 587, 114)
BRIGHTNESS_DIVISOR = 1000
BRIGHTNESS_THRESHOLD = 128

# WCAG 2.x relative luminance
LUMINANCE_COEFFICIENTS = (0.2126, 0.7152, 0.0722)
LUMINANCE_GAMMA_THRESHOLD = 0.03928
LUMINANCE_GAMMA_DIVISOR = 12.92
LUMINANCE_GAMMA_OFFSET = 0.055
LUMINANCE_GAMMA_MULTIPLIER = 1.055
LUMINANCE_GAMMA_POWER = 2.4
CONTRAST_LUMINANCE_OFFSET = 0.05

WCAG_AA_NORMAL_TEXT_RATIO = 4.5
WCAG_AA_LARGE_TEXT_RATIO = 3.0
WCAG_AAA_NORMAL_TEXT_RATIO = 7.0
WCAG_AAA_LARGE_TEXT_RATIO = 4.5

VIBRANT_SATURATION = 70
MUTED_SATURATION = 30
WARM_HUE_RANGE = (0, 60)
COOL_HUE_RANGE = (120, 300)


def brightness(color: ColorValue) -> float:
    """Perceived brightness in [0, 255]."""
    r_coef, g_coef, b_coef = BRIGHTNESS_COEFFICIENTS
    return (color.r * r_coef + color.g * g_coef + color.b * b_coef) / BRIGHTNESS_DIVISOR


def _linear_channel(value: int) -> float:
    v = value / MAX_RGB_VALUE
    if v <= LUMINANCE_GAMMA_THRESHOLD:
        return v / LUMINANCE_GAMMA_DIVISOR
    return ((v + LUMINANCE_GAMMA_OFFSET) / LUMINANCE_GAMMA_MULTIPLIER) ** LUMINANCE_GAMMA_POWER


def luminance(color: ColorValue) -> float:
    """WCAG relative luminance in [0, 1]."""
    channels = (_linear_channel(color.r), _linear_channel(color.g), _linear_channel(color.b))
    return sum(coef * c for coef, c in zip(LUMINANCE_COEFFICIENTS, channels))


def contrast_ratio(color_a: ColorValue, color_b: ColorValue) -> float:
    """WCAG contrast ratio in [1, 21]; symmetric in its arguments."""
    l1 = luminance(color_a) + CONTRAST_LUMINANCE_OFFSET
    l2 = luminance(color_b) + CONTRAST_LUMINANCE_OFFSET
    return max(l1, l2) / min(l1, l2)


def meets_wcag_aa(color_a: ColorValue, color_b: ColorValue, large_text: bool = False) -> bool:
    required = WCAG_AA_LARGE_TEXT_RATIO if large_text else WCAG_AA_NORMAL_TEXT_RATIO
    return contrast_ratio(color_a, color_b) >= required


def meets_wcag_aaa(color_a: ColorValue, color_b: ColorValue, large_text: bool = False) -> bool:
    required = WCAG_AAA_LARGE_TEXT_RATIO if large_text else WCAG_AAA_NORMAL_TEXT_RATIO
    return contrast_ratio(color_a, color_b) >= required


def rgb_distance(color_a: ColorValue, color_b: ColorValue) -> float:
    """Euclidean distance in the RGB cube, at most sqrt(3 * 255^2)."""
    return math.sqrt(
        (color_a.r - color_b.r) ** 2
        + (color_a.g - color_b.g) ** 2
        + (color_a.b - color_b.b) ** 2
    )


def delta_e(color_a: ColorValue, color_b: ColorValue) -> float:
    """
    CIE76 color difference.

    Uses unrounded Lab coordinates so that small differences are not lost
    to integer rounding of the public `to_lab` record.
    """
    lab_a = rgb_to_lab_float(color_a)
    lab_b = rgb_to_lab_float(color_b)
    return math.sqrt(sum((p - q) ** 2 for p, q in zip(lab_a, lab_b)))


def is_light(color: ColorValue) -> bool:
    return brightness(color) > BRIGHTNESS_THRESHOLD


def is_dark(color: ColorValue) -> bool:
    return not is_light(color)


def is_vibrant(color: ColorValue, threshold: int = VIBRANT_SATURATION) -> bool:
    """True when HSL saturation is at least `threshold` percent."""
    return to_hsl(color)["s"] >= threshold


def is_muted(color: ColorValue, threshold: int = MUTED_SATURATION) -> bool:
    """True when HSL saturation is at most `threshold` percent."""
    return to_hsl(color)["s"] <= threshold


def is_warm(color: ColorValue) -> bool:
    # red to yellow
    return WARM_HUE_RANGE[0] <= to_hsl(color)["h"] <= WARM_HUE_RANGE[1]


def is_cool(color: ColorValue) -> bool:
    # green to purple
    return COOL_HUE_RANGE[0] <= to_hsl(color)["h"] <= COOL_HUE_RANGE[1]
