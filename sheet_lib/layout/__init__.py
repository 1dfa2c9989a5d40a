"""Page geometry and pagination.

The module exports:
    paginate: Partition characters into pages of practice cells.
    paginate_settings: Same, driven by a LayoutSettings bundle.
    compute_capacity: Page capacity for a layout.
    PageCapacity: Capacity value object.
    PageGeometry: Pixel dimensions of a sheet of paper.
    container_layout / ContainerLayout: Cell arrangement for renderers.
    split_characters: Split raw text into grapheme clusters.
    mm_to_px: Millimeter to pixel conversion at 96 DPI.
"""

from .constants import DPI, PageGeometry, mm_to_px, px_to_mm
from .container import ContainerLayout, cell_css, container_layout
from .pagination import (
    PageCapacity,
    coerce_repeat_count,
    compute_capacity,
    paginate,
    paginate_settings,
)
from .text import split_characters

__all__ = [
    'DPI', 'PageGeometry', 'mm_to_px', 'px_to_mm',
    'ContainerLayout', 'container_layout', 'cell_css',
    'PageCapacity', 'compute_capacity', 'coerce_repeat_count',
    'paginate', 'paginate_settings',
    'split_characters',
]
