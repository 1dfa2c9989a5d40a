"""Grid guide generation and serialization.

The module exports:
    GuideParams: Cell size plus border/guide colors and widths.
    generate_guide: Style name + params -> GuideDescriptor.
    GuideRegistry: Style name -> builder registry.
    DEFAULT_REGISTRY: Registry holding all built-in styles.
    guide_to_svg, guide_to_path_data, guide_background_css: Serializers.

Example usage:
    Render a 米字格 as SVG::

        from sheet_lib.guides import GuideParams, generate_guide, guide_to_svg

        svg = guide_to_svg(generate_guide('mi', GuideParams(size=64)))
"""

from .generator import (
    DEFAULT_REGISTRY,
    GuideParams,
    GuideRegistry,
    default_registry,
    generate_guide,
)
from .svg import guide_background_css, guide_to_path_data, guide_to_svg, primitive_to_svg

__all__ = [
    'GuideParams', 'GuideRegistry', 'DEFAULT_REGISTRY', 'default_registry',
    'generate_guide',
    'guide_to_svg', 'guide_to_path_data', 'guide_background_css', 'primitive_to_svg',
]
