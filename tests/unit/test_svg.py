"""Unit tests for guide serialization (SVG, path data, CSS backgrounds)."""

import unittest
from urllib.parse import unquote
from xml.etree import ElementTree

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from sheet_lib.domain.geometry import Arc, GuideDescriptor, Point
from sheet_lib.guides import GuideParams, generate_guide
from sheet_lib.guides.svg import (
    f,
    guide_background_css,
    guide_to_path_data,
    guide_to_svg,
    primitive_to_svg,
)
from sheet_lib.domain.settings import LineStyle

SVG_NS = '{http://www.w3.org/2000/svg}'


class TestNumberFormat(unittest.TestCase):

    def test_trims_trailing_zeros(self):
        self.assertEqual(f(32.0), '32')
        self.assertEqual(f(1.5), '1.5')
        self.assertEqual(f(1 / 3), '0.333')


class TestGuideToSvg(unittest.TestCase):
    """Tests for guide_to_svg."""

    def test_parses_as_xml(self):
        svg = guide_to_svg(generate_guide('mitian', GuideParams(size=64)))
        root = ElementTree.fromstring(svg)
        self.assertEqual(root.tag, SVG_NS + 'svg')
        self.assertEqual(root.get('viewBox'), '0 0 64 64')

    def test_one_element_per_primitive(self):
        guide = generate_guide('mitian', GuideParams(size=64))
        root = ElementTree.fromstring(guide_to_svg(guide))
        self.assertEqual(len(list(root)), len(guide))
        tags = [child.tag.replace(SVG_NS, '') for child in root]
        self.assertEqual(tags.count('rect'), 1)
        self.assertEqual(tags.count('line'), 4)
        self.assertEqual(tags.count('circle'), 1)

    def test_background_rect_first(self):
        guide = generate_guide('fang', GuideParams(size=40))
        root = ElementTree.fromstring(guide_to_svg(guide, background='white'))
        children = list(root)
        self.assertEqual(len(children), 2)
        self.assertEqual(children[0].get('fill'), 'white')

    def test_colors_are_escaped(self):
        color = 'red" onload="alert(1)'
        guide = generate_guide('fang', GuideParams(size=40, border_color=color))
        svg = guide_to_svg(guide, background='<b>&')
        root = ElementTree.fromstring(svg)
        bg, border = list(root)
        self.assertEqual(bg.get('fill'), '<b>&')
        self.assertEqual(border.get('stroke'), color)
        self.assertIsNone(border.get('onload'))

    def test_dashed_border(self):
        guide = generate_guide('fang', GuideParams(size=40, border_style=LineStyle.DASHED))
        self.assertIn('stroke-dasharray', guide_to_svg(guide))

    def test_solid_has_no_dasharray(self):
        guide = generate_guide('tian', GuideParams(size=40))
        self.assertNotIn('stroke-dasharray', guide_to_svg(guide))

    def test_partial_arc_is_path(self):
        arc = Arc(Point(10, 10), 5, 'red', 1, start_angle=0, sweep=90)
        element = primitive_to_svg(arc)
        self.assertTrue(element.startswith('<path'))
        self.assertIn('A5,5 0 0 1', element)

    def test_unknown_primitive_raises(self):
        with self.assertRaises(TypeError):
            primitive_to_svg(object())


class TestPathData(unittest.TestCase):
    """Tests for guide_to_path_data."""

    def test_heng_single_move_line(self):
        guide = generate_guide('heng', GuideParams(size=64))
        self.assertEqual(guide_to_path_data(guide), 'M0,64 L64,64')

    def test_full_circle_two_arcs(self):
        guide = GuideDescriptor('custom', 20, (Arc(Point(10, 10), 5, 'black', 1),))
        data = guide_to_path_data(guide)
        self.assertEqual(data.count('A5,5'), 2)
        self.assertTrue(data.startswith('M15,10'))

    def test_rectangle_closed(self):
        guide = generate_guide('fang', GuideParams(size=10))
        self.assertEqual(guide_to_path_data(guide), 'M0,0 H10 V10 H0 Z')


class TestBackgroundCss(unittest.TestCase):

    def test_data_uri(self):
        guide = generate_guide('mi', GuideParams(size=64))
        css = guide_background_css(guide)
        self.assertIn('background-image: url("data:image/svg+xml,', css)
        self.assertIn('background-size: 100% 100%', css)
        start = css.index('svg+xml,') + len('svg+xml,')
        end = css.index('")', start)
        self.assertEqual(unquote(css[start:end]), guide_to_svg(guide, background='white'))


if __name__ == '__main__':
    unittest.main()
