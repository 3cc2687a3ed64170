"""
Unit tests for ColorPalette and surface role derivation.
"""

import pytest

from palette_core.services.colors.color import BLACK, WHITE, ColorValue
from palette_core.services.colors.extraction import fallback_palette
from palette_core.services.colors.palette import ColorPalette, PaletteRole


@pytest.fixture
def palette():
    return ColorPalette([
        ColorValue(255, 0, 0),
        ColorValue(0, 255, 0),
        ColorValue(255, 0, 0),
    ])


class TestPositionalAccess:
    """Test sequence behaviour"""

    def test_order_and_duplicates_preserved(self, palette):
        assert len(palette) == 3
        assert palette.to_hex_list() == ["#FF0000", "#00FF00", "#FF0000"]

    def test_index_access(self, palette):
        assert palette[1] == ColorValue(0, 255, 0)
        assert palette[-1] == ColorValue(255, 0, 0)

    def test_index_out_of_range(self, palette):
        with pytest.raises(IndexError):
            palette[3]

    def test_iteration_and_membership(self, palette):
        assert list(palette) == palette.colors()
        assert ColorValue(0, 255, 0) in palette
        assert ColorValue(0, 0, 255) not in palette
        assert 2 in palette
        assert 7 not in palette

    def test_rejects_non_colors(self):
        with pytest.raises(TypeError):
            ColorPalette(["#FF0000"])

    def test_to_dict_uses_positions(self, palette):
        assert palette.to_dict() == {0: "#FF0000", 1: "#00FF00", 2: "#FF0000"}


class TestRoleAccess:
    """Test role-keyed palettes"""

    def test_role_and_string_keys(self):
        palette = ColorPalette({PaletteRole.SURFACE: WHITE, "accent": BLACK})
        assert palette[PaletteRole.SURFACE] == WHITE
        assert palette["accent"] == BLACK
        assert palette[1] == BLACK
        assert palette.roles() == [PaletteRole.SURFACE, PaletteRole.ACCENT]

    def test_missing_role(self):
        palette = ColorPalette({PaletteRole.SURFACE: WHITE})
        with pytest.raises(KeyError):
            palette[PaletteRole.ACCENT]
        assert PaletteRole.ACCENT not in palette
        assert PaletteRole.SURFACE in palette

    def test_unknown_role(self):
        palette = ColorPalette({PaletteRole.SURFACE: WHITE})
        with pytest.raises(KeyError):
            palette["sidebar"]

    def test_unknown_role_in_mapping(self):
        with pytest.raises(ValueError):
            ColorPalette({"sidebar": WHITE})

    def test_unnamed_palette_has_no_roles(self, palette):
        assert palette.roles() == []
        with pytest.raises(KeyError):
            palette[PaletteRole.SURFACE]


class TestSuggestions:
    """Test text color and surface role helpers"""

    def test_text_color(self):
        assert ColorPalette.suggested_text_color(WHITE) == BLACK
        assert ColorPalette.suggested_text_color(ColorValue(0, 0, 128)) == WHITE

    def test_surface_colors_from_fallback(self):
        roles = fallback_palette().suggested_surface_colors()
        assert roles.to_dict() == {
            "surface": "#FFFFFF",
            "background": "#C7C7C7",
            "accent": "#8F8F8F",
            "surface_variant": "#E6E6E6",
        }

    def test_dark_surface_is_lightened(self):
        roles = ColorPalette([ColorValue(100, 100, 100)]).suggested_surface_colors()
        assert roles[PaletteRole.SURFACE] == ColorValue(100, 100, 100)
        assert roles[PaletteRole.BACKGROUND] == ColorValue(100, 100, 100)
        assert roles[PaletteRole.SURFACE_VARIANT] == ColorValue(110, 110, 110)

    def test_accent_falls_back_to_middle(self):
        """Test the middle color is used when none contrasts with both"""
        colors = [WHITE, ColorValue(250, 250, 250), BLACK]
        roles = ColorPalette(colors).suggested_surface_colors()
        assert roles[PaletteRole.ACCENT] == ColorValue(250, 250, 250)

    def test_empty_palette(self):
        assert len(ColorPalette().suggested_surface_colors()) == 0
