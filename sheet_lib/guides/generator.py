"""Grid guide generation.

This module maps a grid style and its numeric style parameters to a
GuideDescriptor: an explicit list of typed primitives (line segments,
arcs, rectangles) to draw inside one practice cell. There is no cap on
the number of primitives a style may emit.

Style rules (all start from a bordered square of side ``size`` unless
noted otherwise):

    ======  ==========================================================
    tian    center cross, only when show_sublines
    mi      tian guides + both diagonals
    hui     inner square at 20%-80% + center cross when show_sublines
    jiu     interior lines at 1/3 and 2/3 on both axes
    gou     25% tick marks at the top and left edges
    fang    border only
    heng    bottom border only
    zhong   heng + center horizontal line at half the border weight
    mitian  mi guides + inscribed circle of radius 30% of the side
    si      rules at 25/50/75% height, middle at 1.5x, no border
    ======  ==========================================================

Unknown style names fall back to tian.

Example usage:
    Generating a guide::

        from sheet_lib.guides import GuideParams, generate_guide

        guide = generate_guide('mi', GuideParams(size=64))
        for primitive in guide:
            print(primitive.to_dict())
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List

from ..domain.geometry import Arc, GuideDescriptor, LineSegment, Point, Primitive, Rectangle
from ..domain.settings import GridType, LayoutSettings, LineStyle
from ..errors import InvalidDimension

logger = logging.getLogger(__name__)

HUI_INSET = 0.2
GOU_TICK = 0.25
MITIAN_RADIUS = 0.3
SI_RULES = (0.25, 0.5, 0.75)
SI_MIDDLE_WEIGHT = 1.5
ZHONG_WEIGHT = 0.5


@dataclass(frozen=True)
class GuideParams:
    """Style parameters for one cell's guide.

    Colors and widths are passed through to the primitives verbatim.
    """
    size: float
    border_color: str = '#aaaaaa'
    border_width: float = 1.5
    border_style: LineStyle = LineStyle.SOLID
    guide_color: str = '#cccccc'
    guide_width: float = 1.0
    show_sublines: bool = True

    @classmethod
    def from_settings(cls, settings: LayoutSettings) -> GuideParams:
        return cls(
            size=settings.grid_size,
            border_color=settings.border_color,
            border_width=settings.border_width,
            border_style=settings.border_style,
            guide_color=settings.guide_color,
            guide_width=settings.guide_width,
            show_sublines=settings.show_sublines,
        )


GuideBuilder = Callable[[GuideParams], List[Primitive]]


class GuideRegistry:
    """Registry mapping grid style names to guide builders.

    Builders receive validated GuideParams and return the primitive list
    for one cell. Lookups for unregistered names return the fallback
    style's builder.

    Example:
        >>> registry = GuideRegistry(fallback='tian')
        >>> registry.register('tian', build_tian)
        >>> registry.list_styles()
        ['tian']
    """

    def __init__(self, fallback: str = GridType.TIAN.value):
        self._builders: Dict[str, GuideBuilder] = {}
        self.fallback = fallback

    def register(self, name: str, builder: GuideBuilder) -> None:
        self._builders[str(name)] = builder

    def has(self, name: str) -> bool:
        return str(name) in self._builders

    def resolve(self, name) -> str:
        """Name of the style that will actually be drawn for ``name``."""
        key = name.value if isinstance(name, GridType) else str(name).strip().lower()
        if key in self._builders:
            return key
        logger.debug("Unknown grid style %r, falling back to %s", name, self.fallback)
        return self.fallback

    def get(self, name) -> GuideBuilder:
        return self._builders[self.resolve(name)]

    def list_styles(self) -> List[str]:
        return sorted(self._builders)


def _border(p: GuideParams) -> Rectangle:
    return Rectangle(0.0, 0.0, p.size, p.size, p.border_color, p.border_width,
                     dash=p.border_style.value, role='border')


def _guide_line(p: GuideParams, x1: float, y1: float, x2: float, y2: float,
                width: float | None = None) -> LineSegment:
    return LineSegment(Point(x1, y1), Point(x2, y2), p.guide_color,
                       p.guide_width if width is None else width)


def _cross(p: GuideParams) -> List[Primitive]:
    half = p.size / 2
    return [
        _guide_line(p, 0.0, half, p.size, half),
        _guide_line(p, half, 0.0, half, p.size),
    ]


def _diagonals(p: GuideParams) -> List[Primitive]:
    s = p.size
    return [
        _guide_line(p, 0.0, 0.0, s, s),
        _guide_line(p, s, 0.0, 0.0, s),
    ]


def _bottom_border(p: GuideParams) -> LineSegment:
    return LineSegment(Point(0.0, p.size), Point(p.size, p.size), p.border_color,
                       p.border_width, dash=p.border_style.value, role='border')


def build_tian(p: GuideParams) -> List[Primitive]:
    prims: List[Primitive] = [_border(p)]
    if p.show_sublines:
        prims.extend(_cross(p))
    return prims


def build_mi(p: GuideParams) -> List[Primitive]:
    prims = build_tian(p)
    if p.show_sublines:
        prims.extend(_diagonals(p))
    return prims


def build_hui(p: GuideParams) -> List[Primitive]:
    inset = p.size * HUI_INSET
    inner = Rectangle(inset, inset, p.size - 2 * inset, p.size - 2 * inset,
                      p.guide_color, p.guide_width)
    prims: List[Primitive] = [_border(p), inner]
    if p.show_sublines:
        prims.extend(_cross(p))
    return prims


def build_jiu(p: GuideParams) -> List[Primitive]:
    s = p.size
    prims: List[Primitive] = [_border(p)]
    for frac in (1 / 3, 2 / 3):
        prims.append(_guide_line(p, s * frac, 0.0, s * frac, s))
    for frac in (1 / 3, 2 / 3):
        prims.append(_guide_line(p, 0.0, s * frac, s, s * frac))
    return prims


def build_gou(p: GuideParams) -> List[Primitive]:
    tick = p.size * GOU_TICK
    return [
        _border(p),
        _guide_line(p, tick, 0.0, tick, tick),
        _guide_line(p, 0.0, tick, tick, tick),
    ]


def build_fang(p: GuideParams) -> List[Primitive]:
    return [_border(p)]


def build_heng(p: GuideParams) -> List[Primitive]:
    return [_bottom_border(p)]


def build_zhong(p: GuideParams) -> List[Primitive]:
    half = p.size / 2
    return [
        _bottom_border(p),
        LineSegment(Point(0.0, half), Point(p.size, half), p.border_color,
                    max(1.0, p.border_width * ZHONG_WEIGHT)),
    ]


def build_mitian(p: GuideParams) -> List[Primitive]:
    prims = build_mi(p)
    half = p.size / 2
    prims.append(Arc(Point(half, half), p.size * MITIAN_RADIUS, p.guide_color, p.guide_width))
    return prims


def build_si(p: GuideParams) -> List[Primitive]:
    prims: List[Primitive] = []
    for frac in SI_RULES:
        width = p.guide_width * SI_MIDDLE_WEIGHT if frac == 0.5 else p.guide_width
        y = p.size * frac
        prims.append(_guide_line(p, 0.0, y, p.size, y, width=width))
    return prims


def default_registry() -> GuideRegistry:
    """Create a registry with every built-in grid style."""
    registry = GuideRegistry(fallback=GridType.TIAN.value)
    builders = {
        GridType.TIAN: build_tian,
        GridType.MI: build_mi,
        GridType.HUI: build_hui,
        GridType.JIU: build_jiu,
        GridType.GOU: build_gou,
        GridType.FANG: build_fang,
        GridType.HENG: build_heng,
        GridType.ZHONG: build_zhong,
        GridType.MITIAN: build_mitian,
        GridType.SI: build_si,
    }
    for grid_type, builder in builders.items():
        registry.register(grid_type.value, builder)
    return registry


DEFAULT_REGISTRY = default_registry()


def generate_guide(grid_type, params: GuideParams, registry: GuideRegistry | None = None) -> GuideDescriptor:
    """Generate the guide descriptor for one practice cell.

    Args:
        grid_type: Style name or GridType. Unknown names fall back to tian.
        params: Cell size and colors/widths.
        registry: Style registry; defaults to the built-in styles.

    Returns:
        GuideDescriptor whose grid_type is the style actually drawn.

    Raises:
        InvalidDimension: If params.size is not a positive finite number.
    """
    try:
        size = float(params.size)
    except (TypeError, ValueError):
        raise InvalidDimension('size', params.size, 'must be a number') from None
    if not math.isfinite(size) or size <= 0:
        raise InvalidDimension('size', params.size)

    registry = registry or DEFAULT_REGISTRY
    name = registry.resolve(grid_type)
    primitives = registry.get(name)(params)
    return GuideDescriptor(grid_type=name, size=size, primitives=tuple(primitives))
