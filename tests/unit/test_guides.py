"""Unit tests for sheet_lib.guides.generator.

Tests the per-style guide rules, fallback for unknown styles, and the
registry.
"""

import math
import unittest

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sheet_lib.domain.geometry import Arc, LineSegment, Rectangle
from sheet_lib.domain.settings import GridType, LayoutSettings, LineStyle
from sheet_lib.errors import InvalidDimension
from sheet_lib.guides.generator import (
    DEFAULT_REGISTRY,
    GuideParams,
    GuideRegistry,
    build_fang,
    generate_guide,
)


def _params(size=64, **kw):
    return GuideParams(size=size, **kw)


class TestBorderedStyles(unittest.TestCase):
    """Tests for styles drawn inside a bordered square."""

    def _border(self, guide):
        borders = guide.by_role('border')
        self.assertEqual(len(borders), 1)
        return borders[0]

    def test_tian_border_and_cross(self):
        guide = generate_guide('tian', _params())
        border = self._border(guide)
        self.assertIsInstance(border, Rectangle)
        self.assertEqual((border.x, border.y, border.width, border.height), (0, 0, 64, 64))
        lines = guide.lines()
        self.assertEqual(len(lines), 2)
        self.assertTrue(any(l.is_horizontal and l.start.y == 32 for l in lines))
        self.assertTrue(any(l.is_vertical and l.start.x == 32 for l in lines))

    def test_tian_without_sublines_is_border_only(self):
        guide = generate_guide('tian', _params(show_sublines=False))
        self.assertEqual(len(guide), 1)
        self.assertIsInstance(guide.primitives[0], Rectangle)

    def test_mi_adds_diagonals(self):
        guide = generate_guide('mi', _params(size=100))
        lines = guide.lines()
        self.assertEqual(len(lines), 4)
        diagonals = [l for l in lines if not l.is_horizontal and not l.is_vertical]
        self.assertEqual(len(diagonals), 2)
        for d in diagonals:
            self.assertAlmostEqual(d.length, 100 * math.sqrt(2))

    def test_mi_without_sublines_is_border_only(self):
        guide = generate_guide('mi', _params(show_sublines=False))
        self.assertEqual(len(guide), 1)

    def test_hui_inner_square(self):
        guide = generate_guide('hui', _params(size=100, guide_color='red', guide_width=2))
        rects = guide.rectangles()
        self.assertEqual(len(rects), 2)
        inner = [r for r in rects if r.role != 'border'][0]
        self.assertAlmostEqual(inner.x, 20)
        self.assertAlmostEqual(inner.y, 20)
        self.assertAlmostEqual(inner.width, 60)
        self.assertAlmostEqual(inner.height, 60)
        self.assertEqual(inner.color, 'red')
        self.assertEqual(inner.stroke_width, 2)
        self.assertEqual(len(guide.lines()), 2)

    def test_hui_inner_square_stays_solid(self):
        guide = generate_guide('hui', _params(border_style=LineStyle.DASHED))
        border, inner = guide.rectangles()
        self.assertEqual(border.dash, 'dashed')
        self.assertEqual(inner.dash, 'solid')

    def test_hui_without_sublines_keeps_inner_square(self):
        guide = generate_guide('hui', _params(show_sublines=False))
        self.assertEqual(len(guide.rectangles()), 2)
        self.assertEqual(guide.lines(), [])

    def test_jiu_thirds(self):
        guide = generate_guide('jiu', _params(size=90))
        lines = guide.lines()
        self.assertEqual(len(lines), 4)
        xs = sorted(l.start.x for l in lines if l.is_vertical)
        ys = sorted(l.start.y for l in lines if l.is_horizontal)
        for got, want in zip(xs + ys, [30, 60, 30, 60]):
            self.assertAlmostEqual(got, want)

    def test_gou_ticks(self):
        guide = generate_guide('gou', _params(size=80))
        lines = guide.lines()
        self.assertEqual(len(lines), 2)
        for line in lines:
            self.assertAlmostEqual(line.length, 20)
        self.assertEqual(len(guide.rectangles()), 1)

    def test_fang_border_only(self):
        guide = generate_guide('fang', _params())
        self.assertEqual(len(guide), 1)
        self.assertEqual(guide.primitives[0].role, 'border')

    def test_mitian_circle(self):
        guide = generate_guide('mitian', _params(size=100))
        arcs = guide.arcs()
        self.assertEqual(len(arcs), 1)
        circle = arcs[0]
        self.assertAlmostEqual(circle.radius, 30)
        self.assertEqual(circle.center.to_tuple(), (50, 50))
        self.assertTrue(circle.is_full_circle)
        self.assertEqual(len(guide.lines()), 4)


class TestLineStyles(unittest.TestCase):
    """Tests for styles without a full border."""

    def test_heng_only_bottom_segment(self):
        """Scenario C: heng produces exactly the bottom border line."""
        guide = generate_guide('heng', _params(size=64, border_color='#333', border_width=2))
        self.assertEqual(len(guide), 1)
        line = guide.primitives[0]
        self.assertIsInstance(line, LineSegment)
        self.assertEqual(line.start.to_tuple(), (0, 64))
        self.assertEqual(line.end.to_tuple(), (64, 64))
        self.assertEqual(line.color, '#333')
        self.assertEqual(line.width, 2)
        self.assertEqual(line.role, 'border')

    def test_zhong_center_line_half_weight(self):
        guide = generate_guide('zhong', _params(size=64, border_width=3, border_color='#333'))
        self.assertEqual(len(guide), 2)
        center = [l for l in guide.lines() if l.role == 'guide'][0]
        self.assertEqual(center.start.y, 32)
        self.assertAlmostEqual(center.width, 1.5)
        self.assertEqual(center.color, '#333')

    def test_zhong_center_line_at_least_one_unit(self):
        guide = generate_guide('zhong', _params(border_width=1))
        center = [l for l in guide.lines() if l.role == 'guide'][0]
        self.assertEqual(center.width, 1.0)

    def test_si_rules(self):
        guide = generate_guide('si', _params(size=80, guide_width=2))
        self.assertEqual(guide.rectangles(), [])
        self.assertEqual(guide.by_role('border'), [])
        ys = [l.start.y for l in guide.lines()]
        self.assertEqual(ys, [20, 40, 60])
        widths = [l.width for l in guide.lines()]
        self.assertEqual(widths, [2, 3, 2])


class TestGenerateGuide(unittest.TestCase):
    """Tests for generate_guide dispatch and validation."""

    def test_unknown_style_falls_back_to_tian(self):
        guide = generate_guide('sparkle', _params())
        self.assertEqual(guide.grid_type, 'tian')
        self.assertEqual(guide, generate_guide('tian', _params()))

    def test_accepts_enum(self):
        guide = generate_guide(GridType.MI, _params())
        self.assertEqual(guide.grid_type, 'mi')

    def test_style_name_is_case_insensitive(self):
        self.assertEqual(generate_guide(' MiTian ', _params()).grid_type, 'mitian')

    def test_idempotent(self):
        for style in DEFAULT_REGISTRY.list_styles():
            with self.subTest(style=style):
                self.assertEqual(generate_guide(style, _params()), generate_guide(style, _params()))

    def test_all_primitives_inside_cell(self):
        for style in DEFAULT_REGISTRY.list_styles():
            guide = generate_guide(style, _params(size=50))
            for p in guide:
                with self.subTest(style=style, primitive=p):
                    if isinstance(p, LineSegment):
                        for pt in (p.start, p.end):
                            self.assertTrue(0 <= pt.x <= 50 and 0 <= pt.y <= 50)
                    elif isinstance(p, Rectangle):
                        self.assertLessEqual(p.x + p.width, 50)
                        self.assertLessEqual(p.y + p.height, 50)
                    elif isinstance(p, Arc):
                        self.assertLessEqual(p.center.x + p.radius, 50)

    def test_colors_and_widths_pass_through(self):
        guide = generate_guide('tian', _params(border_color='#111', border_width=4,
                                               guide_color='#222', guide_width=0.5))
        border = guide.by_role('border')[0]
        self.assertEqual((border.color, border.stroke_width), ('#111', 4))
        for line in guide.lines():
            self.assertEqual((line.color, line.width), ('#222', 0.5))

    def test_border_style_applies_to_border(self):
        guide = generate_guide('tian', _params(border_style=LineStyle.DASHED))
        self.assertEqual(guide.by_role('border')[0].dash, 'dashed')
        for line in guide.lines():
            self.assertEqual(line.dash, 'solid')

    def test_zero_size_raises(self):
        with self.assertRaises(InvalidDimension):
            generate_guide('tian', _params(size=0))

    def test_negative_size_raises(self):
        with self.assertRaises(InvalidDimension) as ctx:
            generate_guide('mi', _params(size=-4))
        self.assertEqual(ctx.exception.name, 'size')

    def test_nan_size_raises(self):
        with self.assertRaises(InvalidDimension):
            generate_guide('mi', _params(size=float('nan')))

    def test_invalid_dimension_is_value_error(self):
        with self.assertRaises(ValueError):
            generate_guide('tian', _params(size=-1))

    def test_from_settings(self):
        settings = LayoutSettings(grid_size=72, guide_color='blue', show_sublines=False)
        params = GuideParams.from_settings(settings)
        self.assertEqual(params.size, 72)
        self.assertEqual(params.guide_color, 'blue')
        self.assertFalse(params.show_sublines)


class TestGuideRegistry(unittest.TestCase):
    """Tests for GuideRegistry."""

    def test_default_registry_has_all_styles(self):
        self.assertEqual(set(DEFAULT_REGISTRY.list_styles()), {g.value for g in GridType})

    def test_custom_registry(self):
        registry = GuideRegistry(fallback='fang')
        registry.register('fang', build_fang)
        guide = generate_guide('tian', _params(), registry=registry)
        self.assertEqual(guide.grid_type, 'fang')
        self.assertEqual(len(guide), 1)

    def test_resolve_known(self):
        self.assertEqual(DEFAULT_REGISTRY.resolve('jiu'), 'jiu')
        self.assertTrue(DEFAULT_REGISTRY.has('jiu'))
        self.assertFalse(DEFAULT_REGISTRY.has('sparkle'))


if __name__ == '__main__':
    unittest.main()
