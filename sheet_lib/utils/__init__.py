"""Preview utilities.

The module exports:
    render_guide_image: Rasterize a GuideDescriptor with Pillow.
    render_guide_png: Same, as PNG bytes.
"""

from .rendering import render_guide_image, render_guide_png

__all__ = ['render_guide_image', 'render_guide_png']
