"""
Ordered color palettes with positional and role-based addressing.

A palette keeps insertion order and duplicates. Entries may optionally carry
a PaletteRole so that `palette[0]` and `palette[PaletteRole.ACCENT]` (or
`palette["accent"]`) address the same structure.
"""

from enum import Enum
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Union

from .analysis import brightness, contrast_ratio, is_light
from .color import BLACK, WHITE, ColorValue, MAX_RGB_VALUE, round_half_up

ACCENT_MIN_CONTRAST = 3.0
SURFACE_VARIANT_ADJUSTMENT = 10  # percent


class PaletteRole(str, Enum):
    """Named slots of a UI surface palette."""
    SURFACE = "surface"
    BACKGROUND = "background"
    ACCENT = "accent"
    SURFACE_VARIANT = "surface_variant"


PaletteKey = Union[int, PaletteRole, str]


class ColorPalette:
    """An ordered sequence of ColorValue, optionally keyed by role."""

    def __init__(self, colors: Union[Sequence[ColorValue], Mapping[Union[PaletteRole, str], ColorValue]] = ()):
        self._entries: List[Tuple[Optional[PaletteRole], ColorValue]] = []

        if isinstance(colors, Mapping):
            items = [(PaletteRole(role), color) for role, color in colors.items()]
        else:
            items = [(None, color) for color in colors]

        for role, color in items:
            if not isinstance(color, ColorValue):
                raise TypeError(f"Palette entries must be ColorValue instances, got {type(color).__name__}")
            self._entries.append((role, color))

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[ColorValue]:
        return (color for _, color in self._entries)

    def __getitem__(self, key: PaletteKey) -> ColorValue:
        if isinstance(key, int) and not isinstance(key, bool):
            try:
                return self._entries[key][1]
            except IndexError:
                raise IndexError(f"Color at offset {key} does not exist in palette") from None

        try:
            role = PaletteRole(key)
        except ValueError:
            raise KeyError(f"Unknown palette role: {key!r}") from None

        for entry_role, color in self._entries:
            if entry_role is role:
                return color
        raise KeyError(f"Palette has no color for role '{role.value}'")

    def __contains__(self, key: object) -> bool:
        if isinstance(key, ColorValue):
            return any(color == key for _, color in self._entries)
        try:
            self[key]  # type: ignore[index]
        except (IndexError, KeyError):
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ColorPalette):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ColorPalette({self.to_dict()!r})"

    def colors(self) -> List[ColorValue]:
        return [color for _, color in self._entries]

    def roles(self) -> List[PaletteRole]:
        return [role for role, _ in self._entries if role is not None]

    def to_hex_list(self) -> List[str]:
        return [color.to_hex() for _, color in self._entries]

    def to_dict(self) -> Dict[Union[int, str], str]:
        """Hex values keyed by role name, or by position for unnamed entries."""
        return {
            (role.value if role is not None else index): color.to_hex()
            for index, (role, color) in enumerate(self._entries)
        }

    @staticmethod
    def suggested_text_color(background: ColorValue) -> ColorValue:
        """White or black, whichever contrasts more with `background`."""
        if contrast_ratio(background, WHITE) > contrast_ratio(background, BLACK):
            return WHITE
        return BLACK

    def suggested_surface_colors(self) -> "ColorPalette":
        """
        Derive UI surface roles from the palette.

        Returns:
            Role-keyed palette with SURFACE (brightest), BACKGROUND (second
            brightest), ACCENT and SURFACE_VARIANT; empty when this palette is
            empty.
        """
        if not self._entries:
            return ColorPalette()

        by_brightness = sorted(self.colors(), key=brightness, reverse=True)
        surface = by_brightness[0]
        background = by_brightness[1] if len(by_brightness) > 1 else surface
        adjustment = -SURFACE_VARIANT_ADJUSTMENT if is_light(surface) else SURFACE_VARIANT_ADJUSTMENT

        return ColorPalette({
            PaletteRole.SURFACE: surface,
            PaletteRole.BACKGROUND: background,
            PaletteRole.ACCENT: _find_accent(by_brightness),
            PaletteRole.SURFACE_VARIANT: _scale(surface, adjustment),
        })


def _find_accent(colors: List[ColorValue]) -> ColorValue:
    # first color readable against both white and black text
    for color in colors:
        if (contrast_ratio(color, WHITE) >= ACCENT_MIN_CONTRAST
                and contrast_ratio(color, BLACK) >= ACCENT_MIN_CONTRAST):
            return color
    return colors[len(colors) // 2]


def _scale(color: ColorValue, adjustment: int) -> ColorValue:
    factor = 1 + adjustment / 100
    return ColorValue(*(
        min(MAX_RGB_VALUE, max(0, round_half_up(channel * factor)))
        for channel in color.as_tuple()
    ))
