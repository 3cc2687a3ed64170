"""
ColorValue: the immutable RGB triple every other color service consumes.

Derived representations (HSL, HSV, CMYK, Lab) and metrics are computed on
demand by delegating to the conversion and analysis modules; nothing is
cached on the instance.
"""

import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Sequence, Tuple, Union

MIN_RGB_VALUE = 0
MAX_RGB_VALUE = 255
FLOAT_EPSILON = 1e-6

_HEX_PATTERN = re.compile(r"^[0-9A-Fa-f]{6}$")


class ColorValidationError(ValueError):
    """Raised when an explicit color component is outside its valid range."""


def round_half_up(value: float) -> int:
    """Round half away from zero (Python's round() rounds half to even)."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class ColorValue:
    """An sRGB color with 8-bit integer channels."""
    r: int
    g: int
    b: int

    def __post_init__(self):
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Integral):
                raise ColorValidationError(
                    f"Invalid {name} color component. Must be an integer, got {value!r}"
                )
            if value < MIN_RGB_VALUE or value > MAX_RGB_VALUE:
                raise ColorValidationError(
                    f"Invalid {name} color component. Must be between "
                    f"{MIN_RGB_VALUE} and {MAX_RGB_VALUE}, got {value}"
                )
            # numpy integers are normalised so equality and hashing stay plain-int
            object.__setattr__(self, name, int(value))

    @classmethod
    def from_hex(cls, hex_color: str) -> "ColorValue":
        """Parse `#RRGGBB` or `RRGGBB` (case-insensitive)."""
        hex_clean = hex_color.lstrip("#")
        if not _HEX_PATTERN.match(hex_clean):
            raise ColorValidationError(f"Invalid hex color format: {hex_color}")
        return cls(int(hex_clean[0:2], 16), int(hex_clean[2:4], 16), int(hex_clean[4:6], 16))

    @classmethod
    def from_rgb(cls, rgb: Union[Mapping[str, Any], Sequence[Any]]) -> "ColorValue":
        """Build from a mapping with r/g/b keys or a 3-item sequence."""
        if isinstance(rgb, Mapping):
            if not all(key in rgb for key in ("r", "g", "b")):
                raise ColorValidationError(
                    f"RGB mapping must have keys r, g, b. Got keys: {', '.join(map(str, rgb.keys()))}"
                )
            return cls(int(rgb["r"]), int(rgb["g"]), int(rgb["b"]))

        if isinstance(rgb, (str, bytes)) or len(rgb) != 3:
            raise ColorValidationError(f"RGB sequence must have exactly 3 items, got {rgb!r}")
        return cls(int(rgb[0]), int(rgb[1]), int(rgb[2]))

    def to_hex(self) -> str:
        return f"#{self.r:02X}{self.g:02X}{self.b:02X}"

    def to_rgb(self) -> Dict[str, int]:
        return {"r": self.r, "g": self.g, "b": self.b}

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hsl(self) -> Dict[str, int]:
        from .conversions import to_hsl
        return to_hsl(self)

    def to_hsv(self) -> Dict[str, int]:
        from .conversions import to_hsv
        return to_hsv(self)

    def to_cmyk(self) -> Dict[str, int]:
        from .conversions import to_cmyk
        return to_cmyk(self)

    def to_lab(self) -> Dict[str, int]:
        from .conversions import to_lab
        return to_lab(self)

    def brightness(self) -> float:
        from .analysis import brightness
        return brightness(self)

    def luminance(self) -> float:
        from .analysis import luminance
        return luminance(self)

    def contrast_ratio(self, other: "ColorValue") -> float:
        from .analysis import contrast_ratio
        return contrast_ratio(self, other)

    def is_light(self) -> bool:
        from .analysis import is_light
        return is_light(self)

    def is_dark(self) -> bool:
        return not self.is_light()

    def __str__(self) -> str:
        return self.to_hex()


BLACK = ColorValue(0, 0, 0)
WHITE = ColorValue(255, 255, 255)
