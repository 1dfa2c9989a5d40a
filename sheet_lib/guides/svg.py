"""SVG serialization of guide descriptors.

Renderers that work with SVG or CSS backgrounds can use these helpers
instead of walking the primitive list themselves.
"""

from __future__ import annotations

from typing import List
from urllib.parse import quote
from xml.sax.saxutils import quoteattr

from ..domain.geometry import Arc, GuideDescriptor, LineSegment, Rectangle

_DASH_ARRAYS = {
    'dashed': '4 2',
    'dotted': '1 2',
}


def f(v: float) -> str:
    return f"{v:.3f}".rstrip("0").rstrip(".")


def _stroke_attrs(color: str, width: float, dash: str) -> str:
    attrs = f'stroke={quoteattr(str(color))} stroke-width="{f(width)}"'
    dash_array = _DASH_ARRAYS.get(dash)
    if dash_array:
        attrs += f' stroke-dasharray="{dash_array}"'
    return attrs


def _arc_path(arc: Arc) -> str:
    start = arc.point_at(arc.start_angle)
    end = arc.point_at(arc.start_angle + arc.sweep)
    large = 1 if abs(arc.sweep) > 180 else 0
    sweep_flag = 1 if arc.sweep > 0 else 0
    return (f'M{f(start.x)},{f(start.y)} '
            f'A{f(arc.radius)},{f(arc.radius)} 0 {large} {sweep_flag} {f(end.x)},{f(end.y)}')


def primitive_to_svg(primitive) -> str:
    """Serialize one primitive as an SVG element."""
    if isinstance(primitive, LineSegment):
        return (f'<line x1="{f(primitive.start.x)}" y1="{f(primitive.start.y)}" '
                f'x2="{f(primitive.end.x)}" y2="{f(primitive.end.y)}" '
                f'{_stroke_attrs(primitive.color, primitive.width, primitive.dash)} />')
    if isinstance(primitive, Rectangle):
        return (f'<rect x="{f(primitive.x)}" y="{f(primitive.y)}" '
                f'width="{f(primitive.width)}" height="{f(primitive.height)}" fill="none" '
                f'{_stroke_attrs(primitive.color, primitive.stroke_width, primitive.dash)} />')
    if isinstance(primitive, Arc):
        stroke = _stroke_attrs(primitive.color, primitive.width, primitive.dash)
        if primitive.is_full_circle:
            return (f'<circle cx="{f(primitive.center.x)}" cy="{f(primitive.center.y)}" '
                    f'r="{f(primitive.radius)}" fill="none" {stroke} />')
        return f'<path d="{_arc_path(primitive)}" fill="none" {stroke} />'
    raise TypeError(f"Unsupported guide primitive: {type(primitive).__name__}")


def guide_to_svg(descriptor: GuideDescriptor, background: str | None = None) -> str:
    """Serialize a guide as a standalone SVG document.

    Args:
        descriptor: Guide to serialize.
        background: Optional fill color drawn under the guide.

    Returns:
        SVG markup with one element per primitive, in primitive order.
    """
    s = f(descriptor.size)
    parts: List[str] = [
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{s}" height="{s}" viewBox="0 0 {s} {s}">'
    ]
    if background and background.lower() != 'none':
        parts.append(f'  <rect x="0" y="0" width="{s}" height="{s}" fill={quoteattr(background)} />')
    for primitive in descriptor.primitives:
        parts.append('  ' + primitive_to_svg(primitive))
    parts.append('</svg>')
    return '\n'.join(parts)


def guide_to_path_data(descriptor: GuideDescriptor) -> str:
    """All primitives as one SVG path ``d`` string (geometry only)."""
    segments: List[str] = []
    for p in descriptor.primitives:
        if isinstance(p, LineSegment):
            segments.append(f'M{f(p.start.x)},{f(p.start.y)} L{f(p.end.x)},{f(p.end.y)}')
        elif isinstance(p, Rectangle):
            segments.append(f'M{f(p.x)},{f(p.y)} H{f(p.x + p.width)} '
                            f'V{f(p.y + p.height)} H{f(p.x)} Z')
        elif isinstance(p, Arc):
            if p.is_full_circle:
                # Two half arcs; a single 360 degree arc command draws nothing.
                left = p.point_at(180.0)
                right = p.point_at(0.0)
                r = f(p.radius)
                segments.append(f'M{f(right.x)},{f(right.y)} A{r},{r} 0 1 1 {f(left.x)},{f(left.y)} '
                                f'A{r},{r} 0 1 1 {f(right.x)},{f(right.y)}')
            else:
                segments.append(_arc_path(p))
    return ' '.join(segments)


def guide_background_css(descriptor: GuideDescriptor, background: str = 'white') -> str:
    """CSS declarations drawing the guide as a cell background image."""
    encoded = quote(guide_to_svg(descriptor, background=background), safe='')
    return (f'background-image: url("data:image/svg+xml,{encoded}"); '
            'background-repeat: no-repeat; background-size: 100% 100%;')
