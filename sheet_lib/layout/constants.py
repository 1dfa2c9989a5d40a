"""Physical page geometry.

Page dimensions are pixel equivalents at a 96 DPI reference resolution.
A4 keeps the measured 795 x 1133 px of the print preview rather than the
exact 793.7 x 1122.5 px conversion, so page capacity matches what the
printed sheet actually holds. The other sizes are converted from
millimeters.

Attributes:
    DPI (int): Reference resolution for mm -> px conversion (96).
    MM_PER_INCH (float): 25.4.
    PAPER_DIMENSIONS_PX (dict): PaperSize -> (width_px, height_px), portrait.
    GRID_PADDING_TOP (int): Top padding of the grid container in px (20).
    GRID_ROW_GAP (int): Gap between practice rows in grid layout in px (30).
    VERTICAL_PADDING_TOP (int): Top padding of the vertical container (10).
    VERTICAL_SIDE_MARGIN (int): Left/right padding of the vertical
        container in px (20).
    ROW_OVERFLOW_SLACK (int): Extra rows granted beyond the geometric fit
        in grid layout (3). Trailing rows may clip instead of reserving a
        full gap; tune freely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..domain.settings import Orientation, PaperSize

DPI = 96
MM_PER_INCH = 25.4

GRID_PADDING_TOP = 20
GRID_ROW_GAP = 30
VERTICAL_PADDING_TOP = 10
VERTICAL_SIDE_MARGIN = 20
ROW_OVERFLOW_SLACK = 3


def mm_to_px(mm: float, dpi: float = DPI) -> float:
    """Convert millimeters to pixels at the given DPI."""
    return mm / MM_PER_INCH * dpi


def px_to_mm(px: float, dpi: float = DPI) -> float:
    """Convert pixels at the given DPI back to millimeters."""
    return px / dpi * MM_PER_INCH


PAPER_DIMENSIONS_MM: Dict[PaperSize, Tuple[float, float]] = {
    PaperSize.A4: (210.0, 297.0),
    PaperSize.A5: (148.0, 210.0),
    PaperSize.A3: (297.0, 420.0),
    PaperSize.B5: (176.0, 250.0),
    PaperSize.LETTER: (215.9, 279.4),
}

PAPER_DIMENSIONS_PX: Dict[PaperSize, Tuple[int, int]] = {
    size: (round(mm_to_px(w)), round(mm_to_px(h)))
    for size, (w, h) in PAPER_DIMENSIONS_MM.items()
}
PAPER_DIMENSIONS_PX[PaperSize.A4] = (795, 1133)

A4_WIDTH_PX, A4_HEIGHT_PX = PAPER_DIMENSIONS_PX[PaperSize.A4]


@dataclass(frozen=True)
class PageGeometry:
    """Pixel dimensions of one sheet of paper."""
    width_px: float
    height_px: float

    @classmethod
    def for_paper(
        cls,
        paper: PaperSize = PaperSize.A4,
        orientation: Orientation = Orientation.PORTRAIT,
    ) -> PageGeometry:
        """Geometry of a standard paper size in the given orientation."""
        w, h = PAPER_DIMENSIONS_PX[PaperSize.parse(paper)]
        if Orientation.parse(orientation) is Orientation.LANDSCAPE:
            w, h = h, w
        return cls(float(w), float(h))

    @classmethod
    def a4(cls) -> PageGeometry:
        return cls(float(A4_WIDTH_PX), float(A4_HEIGHT_PX))

    def to_dict(self) -> dict:
        return {'width_px': self.width_px, 'height_px': self.height_px}
