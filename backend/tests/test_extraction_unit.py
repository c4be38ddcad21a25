"""
Unit tests for the palette extraction service.

Tests pixel sampling, image loading, the palette entry points and
swatch rendering without going through the HTTP layer.
"""

import base64
import io

import numpy as np
import pytest
from PIL import Image

from palettecut.services.colors.extraction import (
    get_color_map, get_dominant_color, get_palette, hex_to_rgb,
    palette_entries, rgb_to_hex
)
from palettecut.services.colors.mmcq import quantize
from palettecut.services.colors.swatches import render_swatch_array, render_swatch_strip
from palettecut.services.imaging import get_pixels, load_image, resize_long_edge


def png_bytes(rgb: np.ndarray) -> bytes:
    buf = io.BytesIO()
    Image.fromarray(rgb).save(buf, format="PNG")
    return buf.getvalue()


class TestGetPixels:
    """Test pixel sampling"""

    def test_quality_one_keeps_every_pixel(self, red_blue_image):
        """Test step 1 samples the whole image"""
        pixels = get_pixels(red_blue_image, quality=1, ignore_white=False)
        assert pixels.shape == (800, 3)
        assert pixels.dtype == np.uint8

    def test_quality_is_a_row_major_step(self):
        """Test every n-th pixel is taken"""
        rgb = np.arange(12, dtype=np.uint8).reshape(2, 2, 3)
        pixels = get_pixels(rgb, quality=2, ignore_white=False)

        assert pixels.tolist() == [[0, 1, 2], [6, 7, 8]]

    def test_ignore_white_threshold(self):
        """Test only pixels above 250 on every channel are dropped"""
        rgb = np.array([[[251, 251, 251], [250, 255, 255], [255, 255, 255], [10, 20, 30]]],
                       dtype=np.uint8)

        kept = get_pixels(rgb, quality=1, ignore_white=True)
        assert kept.tolist() == [[250, 255, 255], [10, 20, 30]]
        assert len(get_pixels(rgb, quality=1, ignore_white=False)) == 4

    def test_bad_quality(self, red_blue_image):
        """Test quality below 1 is rejected"""
        with pytest.raises(ValueError):
            get_pixels(red_blue_image, quality=0)


class TestLoadImage:
    """Test image decoding"""

    def test_load_from_bytes(self, red_blue_image):
        """Test encoded PNG bytes decode to the same pixels"""
        rgb = load_image(png_bytes(red_blue_image))
        assert rgb.shape == (20, 40, 3)
        assert np.array_equal(rgb, red_blue_image)

    def test_load_from_path(self, red_blue_image, tmp_path):
        """Test a file path is opened and decoded"""
        path = tmp_path / "red_blue.png"
        path.write_bytes(png_bytes(red_blue_image))

        assert np.array_equal(load_image(path), red_blue_image)
        assert np.array_equal(load_image(str(path)), red_blue_image)

    def test_load_converts_to_rgb(self):
        """Test non-RGB images are converted"""
        rgba = Image.new("RGBA", (4, 3), (10, 20, 30, 128))
        rgb = load_image(rgba)

        assert rgb.shape == (3, 4, 3)
        assert rgb[0, 0].tolist() == [10, 20, 30]

    def test_load_rejects_bad_array(self):
        """Test arrays without three channels are rejected"""
        with pytest.raises(ValueError):
            load_image(np.zeros((4, 4), dtype=np.uint8))

    @pytest.mark.parametrize("array", [
        np.full((10, 10, 3), 0.8),
        np.full((10, 10, 3), 200.0, dtype=np.float32),
        np.full((10, 10, 3), 300),
        np.full((10, 10, 3), -1),
    ])
    def test_load_rejects_unrepresentable_values(self, array):
        """Test float arrays and values outside 0-255 are rejected, not wrapped"""
        with pytest.raises(ValueError):
            load_image(array)
        with pytest.raises(ValueError):
            get_palette(array, 2, quality=1)

    def test_load_accepts_wide_integer_arrays(self):
        """Test in-range int64 arrays are cast without changing values"""
        rgb = np.full((4, 4, 3), 200, dtype=np.int64)
        loaded = load_image(rgb)

        assert loaded.dtype == np.uint8
        assert np.array_equal(loaded, rgb)
        assert get_palette(rgb, 2, quality=1) == [(204, 204, 204)]

    def test_resize_long_edge(self):
        """Test only oversized images are scaled down"""
        big = Image.new("RGB", (200, 100))
        small = Image.new("RGB", (50, 20))

        assert resize_long_edge(big, max_edge=100).size == (100, 50)
        assert resize_long_edge(small, max_edge=100) is small


class TestPaletteEntryPoints:
    """Test get_color_map, get_palette and get_dominant_color"""

    def test_get_palette(self, red_blue_image):
        """Test the red and blue halves come back as two colors"""
        palette = get_palette(red_blue_image, color_count=2, quality=1)
        assert palette == [(252, 4, 4), (4, 4, 252)]

    def test_get_palette_default_quality(self, red_blue_image):
        """Test the default sampling step still sees both halves"""
        palette = get_palette(red_blue_image, color_count=2)
        assert sorted(palette) == [(4, 4, 252), (252, 4, 4)]

    def test_get_color_map(self, red_blue_image):
        """Test the color map covers every sampled pixel"""
        color_map = get_color_map(red_blue_image, color_count=4, quality=1)
        assert sum(color_map.populations()) == 800

    def test_dominant_is_first_of_five(self):
        """Test the dominant color is the first five-color palette entry"""
        img = np.zeros((10, 10, 3), dtype=np.uint8)
        img[:7] = (255, 0, 0)
        img[7:] = (0, 0, 255)

        dominant = get_dominant_color(img, quality=1)
        assert dominant == get_palette(img, 5, quality=1)[0]
        assert dominant == (4, 4, 252)

    def test_all_white_gives_no_result(self):
        """Test filtered-out images return None instead of raising"""
        white = np.full((8, 8, 3), 255, dtype=np.uint8)

        assert get_color_map(white, 4, quality=1) is None
        assert get_palette(white, 4, quality=1) is None
        assert get_dominant_color(white, quality=1) is None

    def test_white_kept_when_not_ignored(self):
        """Test white is quantized when filtering is off"""
        white = np.full((8, 8, 3), 255, dtype=np.uint8)
        palette = get_palette(white, 4, quality=1, ignore_white=False)

        assert set(palette) == {(252, 252, 252)}

    @pytest.mark.parametrize("color_count,quality", [(1, 10), (257, 10), (5, 0), (5, -1)])
    def test_invalid_arguments(self, red_blue_image, color_count, quality):
        """Test out-of-range arguments are rejected before decoding"""
        with pytest.raises(ValueError):
            get_palette(red_blue_image, color_count=color_count, quality=quality)


class TestPaletteEntries:
    """Test palette descriptions"""

    def test_entries(self, red_blue_pixels):
        """Test hex, rgb, population and ratio per box"""
        entries = palette_entries(quantize(red_blue_pixels, 2))

        assert [e["hex"] for e in entries] == ["#FC0404", "#0404FC"]
        assert entries[0]["rgb"] == [252, 4, 4]
        assert [e["population"] for e in entries] == [1000, 1000]
        assert [e["ratio"] for e in entries] == [0.5, 0.5]

    def test_hex_helpers(self):
        """Test hex conversion both ways"""
        assert rgb_to_hex((252, 4, 4)) == "#FC0404"
        assert hex_to_rgb("#FC0404") == (252, 4, 4)
        assert hex_to_rgb("0404fc") == (4, 4, 252)

        with pytest.raises(ValueError):
            hex_to_rgb("#abc")


class TestSwatches:
    """Test swatch rendering"""

    def test_swatch_array(self):
        """Test one solid chip per color"""
        img = render_swatch_array(["#FF0000", "#0000FF"], chip_size=10)

        assert img.shape == (10, 20, 3)
        assert img[5, 5].tolist() == [255, 0, 0]
        assert img[5, 15].tolist() == [0, 0, 255]

    def test_swatch_highlight(self):
        """Test the highlighted chip gets an outline"""
        img = render_swatch_array(["#FF0000", "#0000FF"], chip_size=10, highlight_index=0)

        assert img[0, 0].tolist() == [0, 0, 0]
        assert img[5, 5].tolist() == [255, 0, 0]
        assert img[0, 15].tolist() == [0, 0, 255]

    def test_swatch_errors(self):
        """Test empty palettes and bad chip sizes"""
        with pytest.raises(ValueError):
            render_swatch_array([])
        with pytest.raises(ValueError):
            render_swatch_array(["#FF0000"], chip_size=0)

    def test_swatch_strip_is_png(self):
        """Test the strip decodes as a PNG of the expected size"""
        b64 = render_swatch_strip(["#FF0000", "#00FF00", "#0000FF"], chip_size=8)
        image = Image.open(io.BytesIO(base64.b64decode(b64)))

        assert image.format == "PNG"
        assert image.size == (24, 8)
        assert image.convert("RGB").getpixel((12, 4)) == (0, 255, 0)
