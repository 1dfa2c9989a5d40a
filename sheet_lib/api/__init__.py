"""Service layer for practice sheet generation.

The module exports:
    SheetService: Builds decorated sheets and guides from settings.
    Sheet: A laid out sheet.
    RenderedCell: A cell with its glyph style and annotation.

Example usage:
    Build a sheet and serialize it::

        from sheet_lib.api import SheetService
        from sheet_lib.domain import LayoutSettings

        sheet = SheetService().build_sheet('永', LayoutSettings())
        payload = sheet.to_dict()
"""

from .services import RenderedCell, Sheet, SheetService

__all__ = ['SheetService', 'Sheet', 'RenderedCell']
