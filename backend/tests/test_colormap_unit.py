"""
Unit tests for color map lookups.
"""

import numpy as np
import pytest

from palettecut.services.colors.mmcq import quantize


@pytest.fixture
def red_blue_map(red_blue_pixels):
    return quantize(red_blue_pixels, 2)


@pytest.fixture
def three_color_map():
    pixels = [(255, 0, 0)] * 600 + [(0, 255, 0)] * 300 + [(0, 0, 255)] * 100
    return quantize(pixels, 3)


class TestPalette:
    """Test palette extraction"""

    def test_palette_in_map_order(self, three_color_map):
        """Test one color per box, in box order"""
        palette = three_color_map.palette()
        assert palette == [box.average for box in three_color_map.boxes]
        assert len(palette) == three_color_map.size() == len(three_color_map)

    def test_boxes_are_read_only(self, three_color_map):
        """Test the box sequence cannot be modified"""
        assert isinstance(three_color_map.boxes, tuple)


class TestMap:
    """Test pixel classification"""

    def test_map_uses_containing_box(self, three_color_map):
        """Test pixels inside a box map to its average"""
        assert three_color_map.map((255, 0, 0)) == (252, 4, 4)
        assert three_color_map.map((0, 255, 0)) == (4, 190, 66)
        assert three_color_map.map((200, 100, 50)) == (188, 132, 128)

    def test_map_matches_geometric_check(self, three_color_map):
        """Test map agrees with a direct containment check"""
        rng = np.random.default_rng(5)
        for pixel in rng.integers(0, 256, size=(200, 3)):
            containing = [box for box in three_color_map if box.contains(pixel)]
            if containing:
                assert three_color_map.map(pixel) == containing[0].average

    def test_map_falls_back_to_nearest(self, red_blue_map):
        """Test pixels outside every box use the nearest color"""
        # g=200 lies outside the root box, which only spans g bucket 0
        assert not any(box.contains((250, 200, 10)) for box in red_blue_map)
        assert red_blue_map.map((250, 200, 10)) == (252, 4, 4)


class TestNearest:
    """Test nearest color lookup"""

    def test_nearest_returns_palette_color(self, three_color_map):
        """Test the result is always one of the palette colors"""
        palette = three_color_map.palette()
        rng = np.random.default_rng(11)
        for pixel in rng.integers(0, 256, size=(100, 3)):
            assert three_color_map.nearest(pixel) in palette

    def test_nearest_picks_closest(self, red_blue_map):
        """Test the closest color by RGB distance wins"""
        assert red_blue_map.nearest((250, 10, 10)) == (252, 4, 4)
        assert red_blue_map.nearest((10, 10, 250)) == (4, 4, 252)

    def test_nearest_ties_keep_first(self, red_blue_map):
        """Test equidistant colors resolve to the first in map order"""
        # (10, 200, 10) is equally far from (252, 4, 4) and (4, 4, 252)
        assert red_blue_map.palette()[0] == (252, 4, 4)
        assert red_blue_map.nearest((10, 200, 10)) == (252, 4, 4)
