"""
palette-core: color space conversion, color metrics and dominant color
extraction via weighted k-means.
"""

from palette_core.schemas import ColorSpace
from palette_core.services.colors import (
    ColorPalette,
    ColorValidationError,
    ColorValue,
    InvalidArgumentError,
    PaletteRole,
    SeededRandom,
    WeightedSample,
)
from palette_core.services.colors.api import color_metric, convert_color, extract_dominant_colors

__version__ = "1.0.0"

__all__ = [
    "ColorPalette",
    "ColorSpace",
    "ColorValidationError",
    "ColorValue",
    "InvalidArgumentError",
    "PaletteRole",
    "SeededRandom",
    "WeightedSample",
    "color_metric",
    "convert_color",
    "extract_dominant_colors",
]
