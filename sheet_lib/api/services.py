"""Service layer for building practice sheets.

This module ties the pieces together the way a presentation layer needs
them: split the input text, paginate it, and decorate every cell with the
shared guide descriptor, a glyph style and optional annotation data. All
results serialize to plain dictionaries suitable for JSON responses.

The module contains:
    RenderedCell: A practice cell with its glyph style and annotation.
    Sheet: All pages of a sheet plus the shared guide and layout.
    SheetService: Builds sheets and guides from LayoutSettings.

Example usage:
    Building a sheet::

        from sheet_lib.api import SheetService
        from sheet_lib.domain import LayoutSettings

        service = SheetService()
        sheet = service.build_sheet('永和九年', LayoutSettings(repeat_count=3))
        print(sheet.page_count, sheet.to_dict()['pages'][0][0])
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..annotations.provider import Annotation, AnnotationProvider, annotate
from ..domain.cells import Page, PracticeCell
from ..domain.geometry import GuideDescriptor
from ..domain.settings import LayoutSettings
from ..guides.generator import GuideParams, GuideRegistry, generate_guide
from ..layout.constants import PageGeometry
from ..layout.container import ContainerLayout, container_layout
from ..layout.pagination import PageCapacity, compute_capacity, paginate
from ..layout.text import split_characters
from ..styles.glyph import GlyphStyle, styles_for_settings

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderedCell:
    """A practice cell decorated for rendering.

    Attributes:
        cell: The underlying practice cell.
        style: Glyph style; the model style for the first cell of a
            group, the ghost style for repetitions.
        annotation: Pinyin / stroke data, or None when unavailable.
    """
    cell: PracticeCell
    style: Optional[GlyphStyle]
    annotation: Optional[Annotation] = None

    def to_dict(self, with_tone: bool = True, show_pinyin: bool = True) -> dict:
        d = self.cell.to_dict()
        d['style'] = self.style.to_dict() if self.style else None
        if self.annotation:
            if not show_pinyin:
                d['pinyin'] = ''
            elif with_tone:
                d['pinyin'] = self.annotation.pinyin_with_tone
            else:
                d['pinyin'] = self.annotation.pinyin_without_tone
            d['annotation'] = self.annotation.to_dict()
        else:
            d['pinyin'] = ''
            d['annotation'] = None
        return d


@dataclass
class Sheet:
    """A fully laid out practice sheet."""
    settings: LayoutSettings
    guide: GuideDescriptor
    layout: ContainerLayout
    capacity: PageCapacity
    pages: List[List[RenderedCell]] = field(default_factory=list)

    @property
    def page_count(self) -> int:
        return len(self.pages)

    @property
    def cell_count(self) -> int:
        return sum(len(p) for p in self.pages)

    def to_dict(self) -> dict:
        return {
            'settings': self.settings.to_dict(),
            'guide': self.guide.to_dict(),
            'layout': self.layout.to_dict(),
            'capacity': self.capacity.to_dict(),
            'page_count': self.page_count,
            'pages': [[c.to_dict(self.settings.with_tone, self.settings.show_pinyin) for c in page]
                      for page in self.pages],
        }


class SheetService:
    """Builds practice sheets from text and settings.

    Attributes:
        registry: Optional guide style registry; the built-in styles are
            used when None.
    """

    def __init__(self, registry: GuideRegistry | None = None):
        self.registry = registry

    def guide(self, settings: LayoutSettings, grid_type=None) -> GuideDescriptor:
        """Guide descriptor for the settings' grid style (or an override)."""
        return generate_guide(grid_type if grid_type is not None else settings.grid_type,
                              GuideParams.from_settings(settings), self.registry)

    def capacity(self, settings: LayoutSettings) -> PageCapacity:
        return compute_capacity(
            settings.layout_type, settings.repeat_count, settings.grid_size,
            settings.margins, PageGeometry.for_paper(settings.paper_size, settings.orientation),
        )

    def paginate(self, text: str, settings: LayoutSettings) -> List[Page]:
        return paginate(
            split_characters(text),
            settings.layout_type,
            settings.repeat_count,
            settings.grid_size,
            settings.margins,
            PageGeometry.for_paper(settings.paper_size, settings.orientation),
        )

    def build_sheet(
        self,
        text: str,
        settings: LayoutSettings,
        provider: AnnotationProvider | None = None,
    ) -> Sheet:
        """Lay out text and decorate every cell.

        Args:
            text: Raw input text.
            settings: Layout settings; validated here.
            provider: Optional annotation provider. Wrap it in an
                AnnotationCache to avoid repeated lookups.

        Returns:
            Sheet with at least one (possibly empty) page.

        Raises:
            InvalidDimension: If the settings hold invalid geometry.
        """
        settings.validate()
        page_geometry = PageGeometry.for_paper(settings.paper_size, settings.orientation)
        guide = self.guide(settings)
        base_style, ghost_style = styles_for_settings(settings)
        pages = self.paginate(text, settings)

        rendered: List[List[RenderedCell]] = []
        for page in pages:
            cells = []
            for cell in page:
                if cell.is_first_in_group:
                    style = base_style
                else:
                    style = ghost_style if settings.show_reference else None
                # Annotations only decorate the model glyph of each group.
                annotation = annotate(cell, provider) if cell.is_first_in_group else None
                cells.append(RenderedCell(cell=cell, style=style, annotation=annotation))
            rendered.append(cells)

        sheet = Sheet(
            settings=settings,
            guide=guide,
            layout=container_layout(settings.layout_type, settings.grid_size,
                                    settings.repeat_count, settings.margins, page_geometry),
            capacity=self.capacity(settings),
            pages=rendered,
        )
        _logger.info("Built sheet: %d page(s), %d cell(s), grid=%s layout=%s",
                     sheet.page_count, sheet.cell_count, guide.grid_type,
                     settings.layout_type.value)
        return sheet
