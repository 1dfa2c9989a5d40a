"""Unit tests for SheetService."""

import unittest

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sheet_lib.annotations import Annotation, AnnotationCache, MappingAnnotationProvider
from sheet_lib.api import SheetService
from sheet_lib.domain.settings import GridType, LayoutSettings, LayoutType
from sheet_lib.errors import InvalidDimension


class TestBuildSheet(unittest.TestCase):
    """Tests for SheetService.build_sheet."""

    def setUp(self):
        self.service = SheetService()
        self.provider = MappingAnnotationProvider([
            Annotation('永', 'yǒng', 'yong', stroke_count=5),
            Annotation('和', 'hé', 'he', stroke_count=8),
        ])

    def test_scenario_a(self):
        sheet = self.service.build_sheet('永和九年', LayoutSettings(repeat_count=3))
        self.assertEqual(sheet.page_count, 1)
        self.assertEqual(sheet.cell_count, 12)
        self.assertEqual(sheet.capacity.cells_per_page, 154)

    def test_empty_text_one_empty_page(self):
        sheet = self.service.build_sheet('', LayoutSettings())
        self.assertEqual(sheet.page_count, 1)
        self.assertEqual(sheet.pages[0], [])

    def test_model_and_ghost_styles(self):
        sheet = self.service.build_sheet('永', LayoutSettings(repeat_count=3))
        first, second, third = sheet.pages[0]
        self.assertEqual(first.style.opacity, 1.0)
        self.assertAlmostEqual(second.style.opacity, 0.1)
        self.assertEqual(second.style, third.style)

    def test_no_reference_hides_ghosts(self):
        sheet = self.service.build_sheet('永', LayoutSettings(repeat_count=2, show_reference=False))
        first, second = sheet.pages[0]
        self.assertIsNotNone(first.style)
        self.assertIsNone(second.style)

    def test_annotations_on_first_cells_only(self):
        sheet = self.service.build_sheet('永和九', LayoutSettings(repeat_count=2), self.provider)
        cells = sheet.pages[0]
        self.assertEqual(cells[0].annotation.pinyin_with_tone, 'yǒng')
        self.assertIsNone(cells[1].annotation)
        self.assertEqual(cells[2].annotation.pinyin_with_tone, 'hé')
        self.assertIsNone(cells[4].annotation)

    def test_cache_shared_across_sheets(self):
        cache = AnnotationCache(self.provider)
        self.service.build_sheet('永永', LayoutSettings(repeat_count=1), cache)
        self.service.build_sheet('永', LayoutSettings(repeat_count=1), cache)
        self.assertEqual(cache.misses, 1)
        self.assertEqual(cache.hits, 2)

    def test_guide_follows_settings(self):
        sheet = self.service.build_sheet('永', LayoutSettings(grid_type=GridType.MITIAN, grid_size=80))
        self.assertEqual(sheet.guide.grid_type, 'mitian')
        self.assertEqual(sheet.guide.size, 80)
        self.assertEqual(len(sheet.guide.arcs()), 1)

    def test_vertical_layout(self):
        sheet = self.service.build_sheet('永和', LayoutSettings(layout_type=LayoutType.VERTICAL,
                                                                 repeat_count=4))
        self.assertEqual(sheet.layout.rows, 4)
        self.assertTrue(sheet.pages[0][0].style.is_vertical)

    def test_invalid_settings_raise(self):
        with self.assertRaises(InvalidDimension):
            self.service.build_sheet('永', LayoutSettings(grid_size=-1))

    def test_to_dict(self):
        d = self.service.build_sheet('永和', LayoutSettings(repeat_count=2), self.provider).to_dict()
        self.assertEqual(d['page_count'], 1)
        first = d['pages'][0][0]
        self.assertEqual(first['character'], '永')
        self.assertEqual(first['pinyin'], 'yǒng')
        self.assertEqual(first['style']['opacity'], 1.0)
        self.assertEqual(d['pages'][0][1]['pinyin'], '')
        self.assertEqual(d['guide']['grid_type'], 'tian')
        self.assertEqual(d['layout']['columns'], 11)

    def test_to_dict_without_tone(self):
        settings = LayoutSettings(repeat_count=2, with_tone=False)
        d = self.service.build_sheet('永和', settings, self.provider).to_dict()
        self.assertEqual([c['pinyin'] for c in d['pages'][0]], ['yong', '', 'he', ''])

    def test_to_dict_pinyin_hidden(self):
        settings = LayoutSettings(repeat_count=2, show_pinyin=False)
        d = self.service.build_sheet('永和', settings, self.provider).to_dict()
        first = d['pages'][0][0]
        self.assertEqual(first['pinyin'], '')
        self.assertEqual(first['annotation']['stroke_count'], 5)

    def test_guide_override(self):
        guide = self.service.guide(LayoutSettings(), grid_type='heng')
        self.assertEqual(guide.grid_type, 'heng')
        self.assertEqual(len(guide), 1)

    def test_service_paginate(self):
        pages = self.service.paginate('永和', LayoutSettings(repeat_count=5))
        self.assertEqual(len(pages[0]), 10)


if __name__ == '__main__':
    unittest.main()
