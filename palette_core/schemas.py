"""
Palette Core Schemas
Pydantic records returned by color space conversion.
"""
from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class ColorSpace(str, Enum):
    """Target representations accepted by convert_color."""
    RGB = "rgb"
    HEX = "hex"
    HSL = "hsl"
    HSV = "hsv"
    HSB = "hsb"
    CMYK = "cmyk"
    LAB = "lab"


class ColorRecord(BaseModel):
    """Base class for converted color records."""
    model_config = ConfigDict(frozen=True)


class RgbColor(ColorRecord):
    """sRGB channels."""
    r: int = Field(..., ge=0, le=255, description="Red channel")
    g: int = Field(..., ge=0, le=255, description="Green channel")
    b: int = Field(..., ge=0, le=255, description="Blue channel")


class HexColor(ColorRecord):
    """Hex notation."""
    hex: str = Field(..., pattern=r"^#[0-9A-F]{6}$", description="Uppercase #RRGGBB")


class HslColor(ColorRecord):
    """Hue, saturation, lightness."""
    h: int = Field(..., ge=0, lt=360, description="Hue in degrees")
    s: int = Field(..., ge=0, le=100, description="Saturation percentage")
    l: int = Field(..., ge=0, le=100, description="Lightness percentage")


class HsvColor(ColorRecord):
    """Hue, saturation, value (also served for HSB)."""
    h: int = Field(..., ge=0, lt=360, description="Hue in degrees")
    s: int = Field(..., ge=0, le=100, description="Saturation percentage")
    v: int = Field(..., ge=0, le=100, description="Value/brightness percentage")


class CmykColor(ColorRecord):
    """Subtractive print components."""
    c: int = Field(..., ge=0, le=100, description="Cyan percentage")
    m: int = Field(..., ge=0, le=100, description="Magenta percentage")
    y: int = Field(..., ge=0, le=100, description="Yellow percentage")
    k: int = Field(..., ge=0, le=100, description="Key (black) percentage")


class LabColor(ColorRecord):
    """CIE L*a*b* under D65."""
    l: int = Field(..., ge=0, le=100, description="Lightness L*")
    a: int = Field(..., description="Green-red axis a*")
    b: int = Field(..., description="Blue-yellow axis b*")


ConvertedColor = Union[RgbColor, HexColor, HslColor, HsvColor, CmykColor, LabColor]
