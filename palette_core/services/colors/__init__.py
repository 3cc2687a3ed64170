"""
Palette Core Colors Module

Provides color space conversion, perceptual and accessibility metrics,
palette handling and dominant color extraction for raw pixel populations.
"""

from .color import ColorValue, ColorValidationError
from .extraction import InvalidArgumentError, SeededRandom, WeightedSample
from .palette import ColorPalette, PaletteRole

__all__ = [
    "ColorValue",
    "ColorValidationError",
    "ColorPalette",
    "PaletteRole",
    "InvalidArgumentError",
    "SeededRandom",
    "WeightedSample",
]
