"""
Color space conversions between sRGB and HSL, HSV/HSB, CMYK and CIE L*a*b*.

Every function here is pure. Integer outputs are rounded half away from zero
to the documented precision; the strict constructors (`from_hsv`,
`from_cmyk`, `from_lab`) reject out-of-range input with
`ColorValidationError` instead of correcting it.
"""

import math
from typing import Dict, Tuple

from .color import (
    ColorValue, ColorValidationError, FLOAT_EPSILON, MAX_RGB_VALUE, round_half_up
)

HUE_MAX = 360
PERCENTAGE_MAX = 100

LAB_L_RANGE = (0, 100)
LAB_AB_RANGE = (-128, 127)

# D65 reference white (XYZ tristimulus)
D65_WHITE = (0.95047, 1.00000, 1.08883)

# CIE L*a*b* constants
LAB_EPSILON = 0.008856  # (6/29)^3
LAB_KAPPA = 903.3  # (29/3)^3
LAB_INVERSE_KAPPA = 7.787037037037037  # (29/6)^2 / 3
LAB_OFFSET = 16
LAB_MULTIPLIER = 116

# sRGB companding
SRGB_GAMMA_THRESHOLD = 0.04045
SRGB_INVERSE_GAMMA_THRESHOLD = 0.0031308
SRGB_GAMMA_LINEAR_DIVISOR = 12.92
SRGB_GAMMA_OFFSET = 0.055
SRGB_GAMMA_MULTIPLIER = 1.055
SRGB_GAMMA_POWER = 2.4

# sRGB (D65) <-> XYZ, rows are X, Y, Z / R, G, B
RGB_TO_XYZ = (
    (0.4124564390896921, 0.357576077643909, 0.18043748326639894),
    (0.21267285140562253, 0.715152155287818, 0.07217499330655958),
    (0.019333895582329317, 0.119192025881303, 0.9503040785363677),
)
XYZ_TO_RGB = (
    (3.2404542361916533, -1.5371385127253989, -0.4985314095560161),
    (-0.969266030505187, 1.8760108454795392, 0.04155601753034983),
    (0.05564343095911469, -0.2040259135167538, 1.0572251882231791),
)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Format 8-bit channels as an uppercase `#RRGGBB` string."""
    return f"#{int(r):02X}{int(g):02X}{int(b):02X}"


def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Parse a `#RRGGBB` string into an (r, g, b) tuple."""
    return ColorValue.from_hex(hex_color).as_tuple()


def _normalized(color: ColorValue) -> Tuple[float, float, float]:
    return (color.r / MAX_RGB_VALUE, color.g / MAX_RGB_VALUE, color.b / MAX_RGB_VALUE)


def _hue_sector(r: float, g: float, b: float, max_c: float, delta: float) -> float:
    """Hue in sixths of the color wheel, selected by the dominant channel."""
    if max_c == r:
        return (g - b) / delta + (6 if g < b else 0)
    if max_c == g:
        return (b - r) / delta + 2
    return (r - g) / delta + 4


def _wrap_degrees(hue: int) -> int:
    if hue < 0:
        hue += HUE_MAX
    return hue % HUE_MAX


def to_hsl(color: ColorValue) -> Dict[str, int]:
    """
    Convert an RGB color to HSL.

    Returns:
        {"h": 0-359, "s": 0-100, "l": 0-100}
    """
    r, g, b = _normalized(color)
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    lightness = (max_c + min_c) / 2

    if abs(max_c - min_c) < FLOAT_EPSILON:
        return {"h": 0, "s": 0, "l": round_half_up(lightness * PERCENTAGE_MAX)}

    delta = max_c - min_c
    if lightness > 0.5:
        saturation = delta / (2 - max_c - min_c)
    else:
        saturation = delta / (max_c + min_c)

    hue = _wrap_degrees(round_half_up(_hue_sector(r, g, b, max_c, delta) * 60))

    return {
        "h": hue,
        "s": round_half_up(saturation * PERCENTAGE_MAX),
        "l": round_half_up(lightness * PERCENTAGE_MAX),
    }


def _hue_to_rgb(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def from_hsl(hue: float, saturation: float, lightness: float) -> ColorValue:
    """
    Build a color from HSL.

    Hue wraps modulo 360. Saturation and lightness are not clamped, so
    values outside 0-100 surface as a ColorValidationError from ColorValue.
    """
    h = (hue % HUE_MAX) / HUE_MAX
    s = saturation / PERCENTAGE_MAX
    l = lightness / PERCENTAGE_MAX

    if abs(s) < FLOAT_EPSILON:
        gray = round_half_up(l * MAX_RGB_VALUE)
        return ColorValue(gray, gray, gray)

    q = l * (1 + s) if l < 0.5 else l + s - l * s
    p = 2 * l - q

    return ColorValue(
        round_half_up(_hue_to_rgb(p, q, h + 1 / 3) * MAX_RGB_VALUE),
        round_half_up(_hue_to_rgb(p, q, h) * MAX_RGB_VALUE),
        round_half_up(_hue_to_rgb(p, q, h - 1 / 3) * MAX_RGB_VALUE),
    )


def rgb_to_hsb(r: int, g: int, b: int) -> Dict[str, float]:
    """
    Unrounded HSB (HSV) for raw channels.

    Returns:
        {"h": degrees [0, 360), "s": [0, 1], "b": [0, 1]}
    """
    rn, gn, bn = r / MAX_RGB_VALUE, g / MAX_RGB_VALUE, b / MAX_RGB_VALUE
    max_c = max(rn, gn, bn)
    min_c = min(rn, gn, bn)
    delta = max_c - min_c

    saturation = 0.0 if abs(max_c) < FLOAT_EPSILON else delta / max_c

    hue = 0.0
    if abs(delta) > FLOAT_EPSILON:
        if abs(max_c - rn) < FLOAT_EPSILON:
            hue = (gn - bn) / delta + (6 if gn < bn else 0)
        elif abs(max_c - gn) < FLOAT_EPSILON:
            hue = (bn - rn) / delta + 2
        else:
            hue = (rn - gn) / delta + 4
        hue *= 60

    return {"h": hue, "s": saturation, "b": max_c}


def to_hsv(color: ColorValue) -> Dict[str, int]:
    """
    Convert an RGB color to HSV.

    Returns:
        {"h": 0-359, "s": 0-100, "v": 0-100}
    """
    r, g, b = _normalized(color)
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c
    saturation = 0 if abs(max_c) < FLOAT_EPSILON else delta / max_c

    if abs(delta) < FLOAT_EPSILON:
        hue = 0
    else:
        hue = _wrap_degrees(round_half_up(_hue_sector(r, g, b, max_c, delta) * 60))

    return {
        "h": hue,
        "s": round_half_up(saturation * PERCENTAGE_MAX),
        "v": round_half_up(max_c * PERCENTAGE_MAX),
    }


def from_hsv(hue: float, saturation: float, value: float) -> ColorValue:
    """
    Build a color from HSV.

    Raises:
        ColorValidationError: If hue is outside [0, 360) or saturation/value
            are outside [0, 100]
    """
    if not 0 <= hue < HUE_MAX:
        raise ColorValidationError("Hue must be between 0 and 360")
    if not 0 <= saturation <= PERCENTAGE_MAX:
        raise ColorValidationError("Saturation must be between 0 and 100")
    if not 0 <= value <= PERCENTAGE_MAX:
        raise ColorValidationError("Value must be between 0 and 100")

    s = saturation / PERCENTAGE_MAX
    v = value / PERCENTAGE_MAX

    if abs(s) < FLOAT_EPSILON:
        gray = round_half_up(v * MAX_RGB_VALUE)
        return ColorValue(gray, gray, gray)

    h = hue / HUE_MAX * 6
    sector = math.floor(h)
    f = h - sector
    p = v * (1 - s)
    q = v * (1 - s * f)
    t = v * (1 - s * (1 - f))

    r, g, b = {
        0: (v, t, p),
        1: (q, v, p),
        2: (p, v, t),
        3: (p, q, v),
        4: (t, p, v),
        5: (v, p, q),
    }[sector % 6]

    return ColorValue(
        round_half_up(r * MAX_RGB_VALUE),
        round_half_up(g * MAX_RGB_VALUE),
        round_half_up(b * MAX_RGB_VALUE),
    )


def to_cmyk(color: ColorValue) -> Dict[str, int]:
    """
    Convert an RGB color to CMYK.

    Returns:
        {"c", "m", "y", "k"} each 0-100. Pure black is (0, 0, 0, 100).
    """
    r, g, b = _normalized(color)
    k = 1 - max(r, g, b)

    if abs(k - 1) < FLOAT_EPSILON:
        return {"c": 0, "m": 0, "y": 0, "k": PERCENTAGE_MAX}

    return {
        "c": round_half_up((1 - r - k) / (1 - k) * PERCENTAGE_MAX),
        "m": round_half_up((1 - g - k) / (1 - k) * PERCENTAGE_MAX),
        "y": round_half_up((1 - b - k) / (1 - k) * PERCENTAGE_MAX),
        "k": round_half_up(k * PERCENTAGE_MAX),
    }


def from_cmyk(cyan: float, magenta: float, yellow: float, key: float) -> ColorValue:
    """
    Build a color from CMYK percentages.

    Raises:
        ColorValidationError: If any component is outside [0, 100]
    """
    for component in (cyan, magenta, yellow, key):
        if not 0 <= component <= PERCENTAGE_MAX:
            raise ColorValidationError("CMYK values must be between 0 and 100")

    k = key / PERCENTAGE_MAX

    def channel(ink: float) -> int:
        level = 1 - min(1, ink / PERCENTAGE_MAX * (1 - k) + k)
        return round_half_up(level * MAX_RGB_VALUE)

    return ColorValue(channel(cyan), channel(magenta), channel(yellow))


def _linearize(channel: float) -> float:
    if channel > SRGB_GAMMA_THRESHOLD:
        return ((channel + SRGB_GAMMA_OFFSET) / SRGB_GAMMA_MULTIPLIER) ** SRGB_GAMMA_POWER
    return channel / SRGB_GAMMA_LINEAR_DIVISOR


def _compand(channel: float) -> float:
    if channel > SRGB_INVERSE_GAMMA_THRESHOLD:
        return SRGB_GAMMA_MULTIPLIER * channel ** (1 / SRGB_GAMMA_POWER) - SRGB_GAMMA_OFFSET
    return SRGB_GAMMA_LINEAR_DIVISOR * channel


def _lab_f(t: float) -> float:
    if t > LAB_EPSILON:
        return t ** (1 / 3)
    return (LAB_KAPPA * t + LAB_OFFSET) / LAB_MULTIPLIER


def _lab_f_inverse(t: float) -> float:
    cubed = t ** 3
    if cubed > LAB_EPSILON:
        return cubed
    return (t - LAB_OFFSET / LAB_MULTIPLIER) / LAB_INVERSE_KAPPA


def rgb_to_lab_float(color: ColorValue) -> Tuple[float, float, float]:
    """Unrounded CIE L*a*b* (D65) for a color."""
    linear = [_linearize(c) for c in _normalized(color)]
    x, y, z = (
        sum(coef * c for coef, c in zip(row, linear)) / white
        for row, white in zip(RGB_TO_XYZ, D65_WHITE)
    )

    fx, fy, fz = _lab_f(x), _lab_f(y), _lab_f(z)
    return (LAB_MULTIPLIER * fy - LAB_OFFSET, 500 * (fx - fy), 200 * (fy - fz))


def to_lab(color: ColorValue) -> Dict[str, int]:
    """
    Convert an RGB color to CIE L*a*b*.

    sRGB is linearised, mapped to XYZ through the D65 matrix, normalised by
    the D65 white point and passed through the CIE 1976 transfer function.

    Returns:
        {"l": 0-100, "a": about -128..127, "b": about -128..127}
    """
    l, a, b = rgb_to_lab_float(color)
    return {"l": round_half_up(l), "a": round_half_up(a), "b": round_half_up(b)}


def from_lab(lightness: float, a: float, b: float) -> ColorValue:
    """
    Build a color from CIE L*a*b*.

    Out-of-gamut results are clamped into [0, 255] rather than rejected.

    Raises:
        ColorValidationError: If L is outside [0, 100] or a/b are outside
            [-128, 127]
    """
    if not LAB_L_RANGE[0] <= lightness <= LAB_L_RANGE[1]:
        raise ColorValidationError("Lightness must be between 0 and 100")
    if not LAB_AB_RANGE[0] <= a <= LAB_AB_RANGE[1]:
        raise ColorValidationError("A value must be between -128 and 127")
    if not LAB_AB_RANGE[0] <= b <= LAB_AB_RANGE[1]:
        raise ColorValidationError("B value must be between -128 and 127")

    fy = (lightness + LAB_OFFSET) / LAB_MULTIPLIER
    fx = a / 500 + fy
    fz = fy - b / 200

    xyz = [
        _lab_f_inverse(f) * white
        for f, white in zip((fx, fy, fz), D65_WHITE)
    ]

    channels = []
    for row in XYZ_TO_RGB:
        linear = sum(coef * c for coef, c in zip(row, xyz))
        srgb = _compand(linear)
        channels.append(round_half_up(max(0.0, min(1.0, srgb)) * MAX_RGB_VALUE))

    return ColorValue(*channels)
