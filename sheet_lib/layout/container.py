"""Container and cell layout descriptors for the presentation layer.

The pagination engine decides which cells go on which page; this module
describes how a renderer should arrange those cells on the page: the grid
template, paddings, row gap and flow direction.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from ..domain.settings import LayoutType, PageMargins
from .constants import (
    GRID_PADDING_TOP,
    GRID_ROW_GAP,
    VERTICAL_PADDING_TOP,
    VERTICAL_SIDE_MARGIN,
    PageGeometry,
)
from .pagination import coerce_repeat_count, compute_capacity


@dataclass(frozen=True)
class ContainerLayout:
    """Arrangement of practice cells on one page.

    Attributes:
        layout_type: Grid rows or vertical columns.
        cell_size: Cell side in px.
        columns: Number of template columns.
        rows: Number of template rows, or None when rows auto-flow (grid).
        row_gap: Vertical gap between rows in px.
        padding_top: Top padding in px.
        padding_side: Left and right padding in px.
        flow: 'row' or 'column' auto-flow.
    """
    layout_type: LayoutType
    cell_size: float
    columns: int
    rows: int | None
    row_gap: float
    padding_top: float
    padding_side: float
    flow: str

    def to_css(self) -> Dict[str, str]:
        """CSS declarations for a CSS grid container."""
        css = {
            'display': 'grid',
            'box-sizing': 'border-box',
            'width': '100%',
            'justify-content': 'center',
            'padding-top': f'{_fmt(self.padding_top)}px',
            'grid-template-columns': f'repeat({self.columns}, {_fmt(self.cell_size)}px)',
            'grid-auto-flow': self.flow,
        }
        if self.rows is not None:
            css['grid-template-rows'] = f'repeat({self.rows}, {_fmt(self.cell_size)}px)'
            css['grid-auto-columns'] = f'{_fmt(self.cell_size)}px'
        else:
            css['grid-auto-rows'] = f'{_fmt(self.cell_size)}px'
        if self.row_gap:
            css['row-gap'] = f'{_fmt(self.row_gap)}px'
        if self.padding_side:
            css['padding-left'] = f'{_fmt(self.padding_side)}px'
            css['padding-right'] = f'{_fmt(self.padding_side)}px'
        return css

    def to_dict(self) -> dict:
        return {
            'layout_type': self.layout_type.value,
            'cell_size': self.cell_size,
            'columns': self.columns,
            'rows': self.rows,
            'row_gap': self.row_gap,
            'padding_top': self.padding_top,
            'padding_side': self.padding_side,
            'flow': self.flow,
        }


def _fmt(v: float) -> str:
    return f"{v:.3f}".rstrip("0").rstrip(".")


def container_layout(
    layout_type,
    grid_size: float,
    repeat_count,
    margins: PageMargins | None = None,
    page: PageGeometry | None = None,
) -> ContainerLayout:
    """Describe how a page's cells are arranged.

    Column counts come from the same capacity computation the pagination
    engine uses, so a rendered page always has room for its cells.
    """
    capacity = compute_capacity(layout_type, repeat_count, grid_size,
                                margins if margins is not None else PageMargins(), page)
    if capacity.layout_type is LayoutType.VERTICAL:
        return ContainerLayout(
            layout_type=LayoutType.VERTICAL,
            cell_size=float(grid_size),
            columns=capacity.columns,
            rows=coerce_repeat_count(repeat_count),
            row_gap=0.0,
            padding_top=float(VERTICAL_PADDING_TOP),
            padding_side=float(VERTICAL_SIDE_MARGIN),
            flow='column',
        )
    return ContainerLayout(
        layout_type=LayoutType.GRID,
        cell_size=float(grid_size),
        columns=capacity.columns,
        rows=None,
        row_gap=float(GRID_ROW_GAP),
        padding_top=float(GRID_PADDING_TOP),
        padding_side=0.0,
        flow='row',
    )


def cell_css(grid_size: float) -> Dict[str, str]:
    """CSS declarations for a single practice cell box."""
    return {
        'width': f'{_fmt(grid_size)}px',
        'height': f'{_fmt(grid_size)}px',
        'position': 'relative',
    }
