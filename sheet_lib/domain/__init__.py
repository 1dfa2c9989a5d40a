"""Domain objects for practice sheet layout.

This module provides the value objects shared by the guide generator, the
glyph style calculator and the pagination engine. Every object here is an
immutable value, recomputed from settings on each call.

Geometry classes:
    Point: Immutable 2D point.
    LineSegment, Arc, Rectangle: Typed guide primitives.
    GuideDescriptor: The list of primitives drawn inside one cell.

Settings classes:
    GridType, LayoutType, LineStyle, PaperSize, Orientation: Enumerations.
    PageMargins: Page margins in millimeters.
    LayoutSettings: The full settings bundle.

Layout output:
    PracticeCell: One practice slot.
    Page: An ordered sequence of cells.

Example usage:
    Working with settings::

        from sheet_lib.domain import LayoutSettings, GridType

        settings = LayoutSettings(grid_type=GridType.MI, repeat_count=3)
        settings.validate()
"""

from .cells import BLANK_CHARACTERS, Page, PracticeCell
from .geometry import Arc, GuideDescriptor, LineSegment, Point, Rectangle
from .settings import (
    GridType,
    LayoutSettings,
    LayoutType,
    LineStyle,
    Orientation,
    PageMargins,
    PaperSize,
)

__all__ = [
    'Point', 'LineSegment', 'Arc', 'Rectangle', 'GuideDescriptor',
    'GridType', 'LayoutType', 'LineStyle', 'PaperSize', 'Orientation',
    'PageMargins', 'LayoutSettings',
    'PracticeCell', 'Page', 'BLANK_CHARACTERS',
]
