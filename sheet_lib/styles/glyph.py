"""Glyph style calculation.

Computes the declarative style for the character drawn in a practice
cell, and the faded ghost variant used in the repetition cells.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Dict

from ..domain.geometry import Point
from ..domain.settings import DEFAULT_FONT_FAMILY, LayoutSettings, LayoutType

HORIZONTAL_TB = 'horizontal-tb'
VERTICAL_RL = 'vertical-rl'


def _non_negative(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return max(0.0, number)


def _finite(value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


@dataclass(frozen=True)
class GlyphStyle:
    """Declarative style for a glyph centered in its cell.

    Attributes:
        font_family: CSS-style font family list.
        font_size_px: Computed pixel font size.
        color: Glyph color.
        opacity: 0.0 to 1.0.
        anchor: Cell-relative center point the glyph is centered on.
        vertical_offset: Signed vertical nudge in px applied after centering.
        writing_mode: 'horizontal-tb' or 'vertical-rl'.
    """
    font_family: str
    font_size_px: float
    color: str
    opacity: float
    anchor: Point
    vertical_offset: float = 0.0
    writing_mode: str = HORIZONTAL_TB

    @property
    def is_vertical(self) -> bool:
        return self.writing_mode == VERTICAL_RL

    def to_css(self) -> Dict[str, str]:
        """CSS declarations placing the glyph at the cell center."""
        return {
            'font-family': self.font_family,
            'font-size': f'{self.font_size_px:g}px',
            'color': self.color,
            'opacity': f'{self.opacity:g}',
            'position': 'absolute',
            'top': '50%',
            'left': '50%',
            'transform': f'translate(-50%, -50%) translateY({self.vertical_offset:g}px)',
            'writing-mode': self.writing_mode,
        }

    def to_dict(self) -> dict:
        return {
            'font_family': self.font_family,
            'font_size_px': self.font_size_px,
            'color': self.color,
            'opacity': self.opacity,
            'anchor': self.anchor.to_list(),
            'vertical_offset': self.vertical_offset,
            'writing_mode': self.writing_mode,
        }


def character_style(
    grid_size: float,
    font_size: float,
    vertical_offset: float = 0.0,
    layout_type=LayoutType.GRID,
    font_family: str = DEFAULT_FONT_FAMILY,
    color: str = 'black',
) -> GlyphStyle:
    """Compute the style of the model glyph in a cell.

    The font size is a percentage of the cell: ``font_size * grid_size / 100``.
    The anchor is always the cell center; vertical layout only changes the
    writing mode. Negative or non-finite sizes are clamped to 0, so this
    never raises.

    Args:
        grid_size: Cell side in px.
        font_size: Glyph size as a percentage of the cell.
        vertical_offset: Signed vertical nudge in px.
        layout_type: 'grid' or 'vertical'.
        font_family: Font family list.
        color: Glyph color.

    Returns:
        GlyphStyle with full opacity.
    """
    size = _non_negative(grid_size)
    pct = _non_negative(font_size)
    writing_mode = VERTICAL_RL if LayoutType.parse(layout_type) is LayoutType.VERTICAL else HORIZONTAL_TB
    return GlyphStyle(
        font_family=font_family,
        font_size_px=pct * size / 100,
        color=color,
        opacity=1.0,
        anchor=Point(size / 2, size / 2),
        vertical_offset=_finite(vertical_offset),
        writing_mode=writing_mode,
    )


def overlay_style(base: GlyphStyle, overlay_color: str, overlay_opacity_percent: float) -> GlyphStyle:
    """Derive the faded reference (ghost) glyph style from a base style.

    Opacity is ``overlay_opacity_percent / 100`` clamped to [0, 1].
    """
    opacity = min(1.0, _non_negative(overlay_opacity_percent) / 100)
    return replace(base, color=overlay_color, opacity=opacity)


def styles_for_settings(settings: LayoutSettings) -> tuple[GlyphStyle, GlyphStyle]:
    """Base and overlay glyph styles for a settings bundle."""
    base = character_style(
        settings.grid_size,
        settings.font_size,
        settings.vertical_offset,
        settings.layout_type,
        font_family=settings.font_family,
        color=settings.font_color,
    )
    return base, overlay_style(base, settings.overlay_color, settings.overlay_opacity)
