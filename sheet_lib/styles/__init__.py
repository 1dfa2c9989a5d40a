"""Glyph style calculation.

The module exports:
    GlyphStyle: Declarative glyph style value.
    character_style: Style of the model glyph in a cell.
    overlay_style: Faded ghost variant of a style.
    styles_for_settings: Both styles for a LayoutSettings bundle.
"""

from .glyph import (
    HORIZONTAL_TB,
    VERTICAL_RL,
    GlyphStyle,
    character_style,
    overlay_style,
    styles_for_settings,
)

__all__ = [
    'GlyphStyle', 'character_style', 'overlay_style', 'styles_for_settings',
    'HORIZONTAL_TB', 'VERTICAL_RL',
]
