"""Layout settings value objects.

This module provides the immutable settings bundle that drives guide
generation, glyph styling and pagination. Settings are plain frozen
dataclasses: callers never mutate them, they derive a new instance with
``replace`` whenever something changes.

The module provides the following classes:
    GridType: Named guide pattern drawn inside each practice cell.
    LayoutType: Grid (rows, left to right) or vertical (columns).
    LineStyle: Border dash style.
    PaperSize: Supported paper sizes.
    Orientation: Portrait or landscape.
    PageMargins: Page margins in millimeters.
    LayoutSettings: The full settings bundle.

Example usage:
    Building settings from persisted JSON::

        from sheet_lib.domain.settings import LayoutSettings

        settings = LayoutSettings.from_dict({'gridType': 'mi', 'gridSize': 72})
        bigger = settings.replace(grid_size=96)
"""

from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field, fields, replace as dc_replace
from enum import Enum
from typing import Any, Dict

from ..errors import InvalidDimension, SheetError


class GridType(str, Enum):
    """Grid styles (字格) supported by the guide generator."""
    TIAN = 'tian'      # 田字格
    MI = 'mi'          # 米字格
    HUI = 'hui'        # 回宫格
    JIU = 'jiu'        # 九宫格
    GOU = 'gou'        # 钩线格
    FANG = 'fang'      # 方格
    HENG = 'heng'      # 横线格
    ZHONG = 'zhong'    # 中线格
    MITIAN = 'mitian'  # 米田格
    SI = 'si'          # 四线格

    @classmethod
    def parse(cls, value) -> GridType:
        """Parse a grid type, falling back to TIAN for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.TIAN


class LayoutType(str, Enum):
    """Layout orientation."""
    GRID = 'grid'
    VERTICAL = 'vertical'

    @classmethod
    def parse(cls, value) -> LayoutType:
        """Parse a layout type, falling back to GRID for unknown values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.GRID


class LineStyle(str, Enum):
    SOLID = 'solid'
    DASHED = 'dashed'
    DOTTED = 'dotted'

    @classmethod
    def parse(cls, value) -> LineStyle:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.SOLID


class PaperSize(str, Enum):
    A4 = 'a4'
    A5 = 'a5'
    A3 = 'a3'
    B5 = 'b5'
    LETTER = 'letter'

    @classmethod
    def parse(cls, value) -> PaperSize:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise SheetError(f"Unknown paper size: {value!r}") from None


class Orientation(str, Enum):
    PORTRAIT = 'portrait'
    LANDSCAPE = 'landscape'

    @classmethod
    def parse(cls, value) -> Orientation:
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise SheetError(f"Unknown orientation: {value!r}") from None


def _check_finite_number(name: str, value) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDimension(name, value, 'must be a number') from None
    if not math.isfinite(number):
        raise InvalidDimension(name, value, 'must be finite')
    return number


@dataclass(frozen=True)
class PageMargins:
    """Page margins in millimeters."""
    top: float = 5.0
    right: float = 10.0
    bottom: float = 12.0
    left: float = 10.0

    def validate(self) -> PageMargins:
        """Reject negative or non-finite margins.

        Returns:
            self, so the call can be chained.

        Raises:
            InvalidDimension: If any side is negative or not finite.
        """
        for f in fields(self):
            value = _check_finite_number(f'margin.{f.name}', getattr(self, f.name))
            if value < 0:
                raise InvalidDimension(f'margin.{f.name}', value, 'must not be negative')
        return self

    def to_px(self, dpi: float = 96.0) -> PageMargins:
        """Return the same margins converted to pixels."""
        from ..layout.constants import mm_to_px
        return PageMargins(
            top=mm_to_px(self.top, dpi),
            right=mm_to_px(self.right, dpi),
            bottom=mm_to_px(self.bottom, dpi),
            left=mm_to_px(self.left, dpi),
        )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any] | None) -> PageMargins:
        """Create from a dictionary; missing sides keep their defaults."""
        if not d:
            return cls()
        defaults = cls()
        return cls(**{
            f.name: _check_finite_number(f'margin.{f.name}', d.get(f.name, getattr(defaults, f.name)))
            for f in fields(cls)
        })


DEFAULT_FONT_FAMILY = '楷体, KaiTi, STKaiti, serif'
DEFAULT_GRID_SIZE = 64
DEFAULT_FONT_SIZE = 80
DEFAULT_REPEAT_COUNT = 10


@dataclass(frozen=True)
class LayoutSettings:
    """Everything needed to lay out and decorate one practice sheet.

    Attributes:
        grid_type: Guide pattern drawn in every cell.
        grid_size: Cell side length in pixels. Must be positive.
        repeat_count: Practice cells per source character. Values below 1
            are treated as 1 when laying out.
        layout_type: Grid rows or vertical columns.
        font_size: Glyph size as a percentage of the cell.
        vertical_offset: Signed vertical nudge of the glyph in pixels.
        overlay_opacity: Ghost glyph opacity in percent (0-100).
        show_reference: Draw ghost glyphs in the repeat cells.
        show_pinyin: Print pinyin above the model glyph of each group.
        with_tone: Print pinyin with tone marks (yǒng) rather than without
            (yong).
        margins: Page margins in millimeters.
    """
    grid_type: GridType = GridType.TIAN
    grid_size: float = DEFAULT_GRID_SIZE
    repeat_count: int = DEFAULT_REPEAT_COUNT
    layout_type: LayoutType = LayoutType.GRID
    font_family: str = DEFAULT_FONT_FAMILY
    font_size: float = DEFAULT_FONT_SIZE
    font_color: str = 'black'
    vertical_offset: float = 0.0
    guide_color: str = '#cccccc'
    guide_width: float = 1.0
    border_color: str = '#aaaaaa'
    border_width: float = 1.5
    border_style: LineStyle = LineStyle.SOLID
    show_sublines: bool = True
    overlay_color: str = 'lightgray'
    overlay_opacity: float = 10.0
    show_reference: bool = True
    show_pinyin: bool = True
    with_tone: bool = True
    paper_size: PaperSize = PaperSize.A4
    orientation: Orientation = Orientation.PORTRAIT
    margins: PageMargins = field(default_factory=PageMargins)

    @property
    def effective_repeat_count(self) -> int:
        return max(1, int(self.repeat_count))

    def validate(self) -> LayoutSettings:
        """Check the geometric invariants.

        Raises:
            InvalidDimension: If grid_size is not a positive finite number
                or a margin is negative or non-finite.
        """
        size = _check_finite_number('grid_size', self.grid_size)
        if size <= 0:
            raise InvalidDimension('grid_size', self.grid_size)
        self.margins.validate()
        return self

    def replace(self, **changes) -> LayoutSettings:
        """Return a copy with the given fields changed."""
        return dc_replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        d = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, PageMargins):
                value = value.to_dict()
            d[f.name] = value
        return d

    @classmethod
    def from_dict(cls, d: Dict[str, Any] | None) -> LayoutSettings:
        """Build settings from a snake_case or camelCase dictionary.

        Unknown keys are ignored. ``chars_per_row`` / ``charsPerRow`` is
        accepted as an alias of ``repeat_count``.

        Raises:
            InvalidDimension: If a numeric field is not a finite number.
            SheetError: If the input is not a mapping, or names an unknown
                paper size or orientation.
        """
        if d is None:
            return cls()
        if not isinstance(d, dict):
            raise SheetError(f"Settings must be an object, got {type(d).__name__}")

        data = {_snake_case(k): v for k, v in d.items()}
        if 'repeat_count' not in data and 'chars_per_row' in data:
            data['repeat_count'] = data['chars_per_row']
        if 'overlay_opacity' not in data and 'guide_opacity' in data:
            data['overlay_opacity'] = data['guide_opacity']

        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.name == 'grid_type':
                value = GridType.parse(value)
            elif f.name == 'layout_type':
                value = LayoutType.parse(value)
            elif f.name == 'border_style':
                value = LineStyle.parse(value)
            elif f.name == 'paper_size':
                value = PaperSize.parse(value)
            elif f.name == 'orientation':
                value = Orientation.parse(value)
            elif f.name == 'margins':
                value = PageMargins.from_dict(value)
            elif f.name == 'repeat_count':
                value = int(_check_finite_number(f.name, value))
            elif f.name in _NUMERIC_FIELDS:
                value = _check_finite_number(f.name, value)
            elif f.name in _BOOL_FIELDS:
                value = _parse_bool(value)
            else:
                value = str(value)
            kwargs[f.name] = value
        return cls(**kwargs)


_NUMERIC_FIELDS = {
    'grid_size', 'font_size', 'vertical_offset', 'guide_width',
    'border_width', 'overlay_opacity',
}
_BOOL_FIELDS = {'show_sublines', 'show_reference', 'show_pinyin', 'with_tone'}


def _snake_case(key: str) -> str:
    out = []
    for ch in str(key):
        if ch.isupper():
            out.append('_')
            out.append(ch.lower())
        else:
            out.append(ch)
    return ''.join(out).lstrip('_')


def _parse_bool(value) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)
