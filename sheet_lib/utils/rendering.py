"""Raster preview of guide descriptors.

A debugging aid for the HTTP preview route: the layout engine itself only
produces descriptors. Dash styles are drawn solid.
"""

from __future__ import annotations

import io
from typing import Optional

from PIL import Image, ImageColor, ImageDraw

from ..domain.geometry import Arc, GuideDescriptor, LineSegment, Rectangle


def _color(value: str, fallback: str = 'black'):
    try:
        return ImageColor.getrgb(value)
    except ValueError:
        return ImageColor.getrgb(fallback)


def render_guide_image(
    descriptor: GuideDescriptor,
    scale: float = 4.0,
    background: Optional[str] = 'white',
) -> Image.Image:
    """Rasterize a guide descriptor.

    Args:
        descriptor: Guide to draw.
        scale: Pixels per descriptor unit. Default is 4.
        background: Fill color, or None for a transparent image.

    Returns:
        RGBA PIL image of side ``ceil(size * scale) + 1``.
    """
    side = int(descriptor.size * scale) + 1
    fill = (0, 0, 0, 0) if background is None else _color(background, 'white')[:3] + (255,)
    img = Image.new('RGBA', (side, side), fill)
    draw = ImageDraw.Draw(img)

    for p in descriptor.primitives:
        if isinstance(p, LineSegment):
            draw.line(
                [(p.start.x * scale, p.start.y * scale), (p.end.x * scale, p.end.y * scale)],
                fill=_color(p.color), width=max(1, round(p.width * scale)),
            )
        elif isinstance(p, Rectangle):
            draw.rectangle(
                [p.x * scale, p.y * scale, (p.x + p.width) * scale, (p.y + p.height) * scale],
                outline=_color(p.color), width=max(1, round(p.stroke_width * scale)),
            )
        elif isinstance(p, Arc):
            pts = p.to_polyline(96) * scale
            draw.line([tuple(pt) for pt in pts.tolist()], fill=_color(p.color),
                      width=max(1, round(p.width * scale)))
    return img


def render_guide_png(descriptor: GuideDescriptor, scale: float = 4.0,
                     background: Optional[str] = 'white') -> bytes:
    """PNG bytes of render_guide_image."""
    buf = io.BytesIO()
    render_guide_image(descriptor, scale, background).save(buf, format='PNG')
    return buf.getvalue()
