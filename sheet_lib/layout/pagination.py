"""Pagination of practice characters into fixed-size pages.

This module partitions a character sequence into page-sized batches of
practice cells. Each source character becomes a group of ``repeat``
consecutive cells: the first is the model glyph, the rest are practice
repetitions.

Two layouts are supported:
    grid: Rows read left to right. A page holds ``rows * columns`` cells
        and a character's repeat run is never split across pages.
    vertical: Traditional columns read top to bottom. Each column holds
        one character's full repeat run and a page holds as many columns
        as fit across the paper.

Capacity is computed from the page geometry and margins with the
constants in ``sheet_lib.layout.constants``. Degenerate geometry (a cell
larger than the page) is clamped to one row / one column so pagination
always terminates.

Example usage:
    Paginate a short text::

        from sheet_lib.layout import paginate, split_characters
        from sheet_lib.domain import PageMargins

        pages = paginate(split_characters('永和九年'), 'grid',
                         repeat_count=3, grid_size=64,
                         margins=PageMargins())
        assert len(pages) == 1 and len(pages[0]) == 12
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence

from ..domain.cells import Page, PracticeCell
from ..domain.settings import LayoutSettings, LayoutType, PageMargins
from ..errors import InvalidDimension
from .constants import (
    DPI,
    GRID_PADDING_TOP,
    GRID_ROW_GAP,
    ROW_OVERFLOW_SLACK,
    VERTICAL_SIDE_MARGIN,
    PageGeometry,
)
from .text import split_characters

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageCapacity:
    """How many practice cells fit on one page.

    Attributes:
        layout_type: Layout the capacity was computed for.
        columns: Cells per row (grid) or columns per page (vertical).
        rows: Rows per page (grid) or cells per column (vertical).
        cells_per_page: Total cells one page can hold.
        usable_width: Width available to cells in px.
        usable_height: Height available to cells in px.
        clamped: True if columns or rows had to be raised to 1.
    """
    layout_type: LayoutType
    columns: int
    rows: int
    cells_per_page: int
    usable_width: float
    usable_height: float
    clamped: bool = False

    def to_dict(self) -> dict:
        return {
            'layout_type': self.layout_type.value,
            'columns': self.columns,
            'rows': self.rows,
            'cells_per_page': self.cells_per_page,
            'usable_width': self.usable_width,
            'usable_height': self.usable_height,
            'clamped': self.clamped,
        }


def _validate_grid_size(grid_size) -> float:
    try:
        size = float(grid_size)
    except (TypeError, ValueError):
        raise InvalidDimension('grid_size', grid_size, 'must be a number') from None
    if not math.isfinite(size) or size <= 0:
        raise InvalidDimension('grid_size', grid_size)
    return size


def coerce_repeat_count(repeat_count) -> int:
    """Repeat counts below 1, or not a finite number, become 1."""
    try:
        value = float(repeat_count)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(value):
        return 1
    return max(1, int(value))


def compute_capacity(
    layout_type,
    repeat_count,
    grid_size: float,
    margins: PageMargins,
    page: PageGeometry | None = None,
) -> PageCapacity:
    """Compute page capacity for the given layout.

    Args:
        layout_type: 'grid' or 'vertical' (LayoutType or string).
        repeat_count: Practice cells per character.
        grid_size: Cell side in px. Must be positive and finite.
        margins: Page margins in millimeters.
        page: Page geometry; defaults to A4 portrait.

    Returns:
        PageCapacity with columns and rows clamped to at least 1.

    Raises:
        InvalidDimension: On a non-positive grid size or negative margins.
    """
    layout = LayoutType.parse(layout_type)
    size = _validate_grid_size(grid_size)
    margins_px = margins.validate().to_px(DPI)
    page = page or PageGeometry.a4()
    repeat = coerce_repeat_count(repeat_count)

    available_width = page.width_px - margins_px.left - margins_px.right
    available_height = page.height_px - margins_px.top - margins_px.bottom

    if layout is LayoutType.VERTICAL:
        usable_width = available_width - VERTICAL_SIDE_MARGIN * 2
        raw_columns = math.floor(usable_width / size)
        columns = max(1, raw_columns)
        clamped = raw_columns < 1
        if clamped:
            logger.debug("Vertical layout: grid_size=%s leaves no full column, clamping to 1", size)
        return PageCapacity(
            layout_type=layout,
            columns=columns,
            rows=repeat,
            cells_per_page=columns * repeat,
            usable_width=usable_width,
            usable_height=available_height,
            clamped=clamped,
        )

    usable_height = available_height - GRID_PADDING_TOP
    raw_rows = math.floor(usable_height / (size + GRID_ROW_GAP)) + ROW_OVERFLOW_SLACK
    raw_columns = math.floor(available_width / size)
    rows = max(1, raw_rows)
    columns = max(1, raw_columns)
    clamped = raw_rows < 1 or raw_columns < 1
    if clamped:
        logger.debug("Grid layout: degenerate geometry (rows=%s, columns=%s), clamping to 1",
                     raw_rows, raw_columns)
    return PageCapacity(
        layout_type=layout,
        columns=columns,
        rows=rows,
        cells_per_page=rows * columns,
        usable_width=available_width,
        usable_height=usable_height,
        clamped=clamped,
    )


def _group(character: str, group_index: int, repeat: int) -> List[PracticeCell]:
    return [
        PracticeCell(character=character, group_index=group_index, is_first_in_group=(j == 0))
        for j in range(repeat)
    ]


def _paginate_grid(characters: Sequence[str], repeat: int, cells_per_page: int) -> List[List[PracticeCell]]:
    pages: List[List[PracticeCell]] = []
    current: List[PracticeCell] = []

    for group_index, character in enumerate(characters):
        if current and repeat > cells_per_page - len(current):
            pages.append(current)
            current = []
        # A run longer than a whole page still goes on its own page.
        current.extend(_group(character, group_index, repeat))

    if current:
        pages.append(current)
    return pages


def _paginate_vertical(characters: Sequence[str], repeat: int, columns_per_page: int) -> List[List[PracticeCell]]:
    pages: List[List[PracticeCell]] = []
    for start in range(0, len(characters), columns_per_page):
        cells: List[PracticeCell] = []
        for offset, character in enumerate(characters[start:start + columns_per_page]):
            cells.extend(_group(character, start + offset, repeat))
        pages.append(cells)
    return pages


def paginate(
    characters: Iterable[str] | str,
    layout_type,
    repeat_count,
    grid_size: float,
    margins: PageMargins | None = None,
    page: PageGeometry | None = None,
) -> List[Page]:
    """Partition characters into pages of practice cells.

    Args:
        characters: Sequence of grapheme clusters, one per practice unit.
            A plain string is split with split_characters first.
        layout_type: 'grid' or 'vertical'. Unknown values mean grid.
        repeat_count: Practice cells per character; values below 1 mean 1.
        grid_size: Cell side in px.
        margins: Page margins in millimeters; defaults to PageMargins().
        page: Page geometry; defaults to A4 portrait.

    Returns:
        Non-empty list of Page objects. Empty input gives one empty page.

    Raises:
        InvalidDimension: On a non-positive or non-finite grid size, or a
            negative or non-finite margin.
    """
    if isinstance(characters, str):
        chars = split_characters(characters)
    else:
        chars = list(characters)

    margins = margins if margins is not None else PageMargins()
    capacity = compute_capacity(layout_type, repeat_count, grid_size, margins, page)
    repeat = coerce_repeat_count(repeat_count)

    if not chars:
        return [Page(cells=(), index=0)]

    if capacity.layout_type is LayoutType.VERTICAL:
        raw_pages = _paginate_vertical(chars, repeat, capacity.columns)
    else:
        raw_pages = _paginate_grid(chars, repeat, capacity.cells_per_page)

    logger.debug("Paginated %d characters x%d into %d %s page(s) (capacity %d)",
                 len(chars), repeat, len(raw_pages), capacity.layout_type.value,
                 capacity.cells_per_page)
    return [Page(cells=tuple(cells), index=i) for i, cells in enumerate(raw_pages)] or [Page()]


def paginate_settings(characters: Iterable[str] | str, settings: LayoutSettings) -> List[Page]:
    """Paginate using a LayoutSettings bundle (paper size and orientation included)."""
    return paginate(
        characters,
        settings.layout_type,
        settings.repeat_count,
        settings.grid_size,
        settings.margins,
        PageGeometry.for_paper(settings.paper_size, settings.orientation),
    )
