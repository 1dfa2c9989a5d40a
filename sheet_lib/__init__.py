"""Practice Sheet Layout Package.

Lays out Chinese handwriting practice sheets (字帖): splits input text
into practice units, paginates them into fixed-size pages, and describes
the guide drawn in each cell and the style of each glyph. Everything here
is a pure function of its inputs; nothing is rasterized or persisted.

Architecture Overview:
    - sheet_lib.domain provides typed value objects (settings, cells,
      pages, guide primitives)
    - sheet_lib.guides generates per-style guide descriptors and
      serializes them to SVG
    - sheet_lib.styles computes glyph styles
    - sheet_lib.layout computes page capacity and paginates
    - sheet_lib.annotations adapts the external pinyin / stroke provider
    - sheet_lib.api offers a high-level SheetService for the web layer

Example usage:
    Paginating text::

        from sheet_lib import LayoutSettings, SheetService

        sheet = SheetService().build_sheet('永和九年', LayoutSettings(repeat_count=3))
        assert sheet.page_count == 1

    Generating a guide::

        from sheet_lib import GuideParams, generate_guide

        guide = generate_guide('mitian', GuideParams(size=64))
        print(len(guide.primitives))

Attributes:
    __version__ (str): Package version string.
    __all__ (list): List of public symbols exported by this package.
"""

from .annotations import (
    Annotation,
    AnnotationCache,
    MappingAnnotationProvider,
    SqliteAnnotationProvider,
)
from .api import Sheet, SheetService
from .domain import (
    GridType,
    GuideDescriptor,
    LayoutSettings,
    LayoutType,
    Page,
    PageMargins,
    PracticeCell,
)
from .errors import AnnotationLookupError, InvalidDimension, SheetError
from .guides import GuideParams, generate_guide, guide_to_svg
from .layout import compute_capacity, paginate, split_characters
from .styles import GlyphStyle, character_style, overlay_style

__all__ = [
    # Domain objects
    'GridType', 'LayoutType', 'LayoutSettings', 'PageMargins',
    'PracticeCell', 'Page', 'GuideDescriptor', 'GlyphStyle',
    # Core functions
    'generate_guide', 'GuideParams', 'guide_to_svg',
    'character_style', 'overlay_style',
    'paginate', 'compute_capacity', 'split_characters',
    # Annotations
    'Annotation', 'AnnotationCache', 'MappingAnnotationProvider', 'SqliteAnnotationProvider',
    # Services
    'SheetService', 'Sheet',
    # Errors
    'SheetError', 'InvalidDimension', 'AnnotationLookupError',
]

__version__ = '1.0.0'
