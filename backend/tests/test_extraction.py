"""
Unit tests for palette extraction from images.

Tests decoding, pixel sampling, MiniBatchKMeans clustering and single
pixel picking.
"""

import numpy as np
import pytest

from palette_studio.errors import ImageLoadFailure
from palette_studio.services.colors.extraction import (
    cluster_palette, extract_palette, load_image, pick_pixel, rgb_to_hex, sample_pixels
)
from palette_studio.services.colors.model import is_valid


class TestRgbToHex:
    """Test RGB to hex conversion utility"""

    def test_rgb_to_hex_basic_colors(self):
        assert rgb_to_hex(np.array([255, 0, 0])) == "#FF0000"
        assert rgb_to_hex(np.array([0, 0, 0])) == "#000000"
        assert rgb_to_hex(np.array([31, 78, 121])) == "#1F4E79"


class TestLoadImage:
    """Test image decoding"""

    def test_load_png(self, two_block_png):
        image = load_image(two_block_png)
        assert image.size == (10, 10)
        assert image.mode == "RGBA"

    @pytest.mark.parametrize("data", [b"", b"not an image at all"])
    def test_load_invalid(self, data):
        with pytest.raises(ImageLoadFailure):
            load_image(data)


class TestSamplePixels:
    """Test opaque pixel sampling"""

    def test_sample_all_opaque(self, two_block_png):
        pixels = sample_pixels(load_image(two_block_png))
        assert pixels.shape == (100, 3)
        assert pixels.dtype == np.uint8

    def test_transparent_pixels_dropped(self, png_encoder):
        rgba = np.zeros((4, 4, 4), dtype=np.uint8)
        rgba[:, :2] = (255, 0, 0, 255)
        rgba[:, 2:] = (0, 255, 0, 0)
        pixels = sample_pixels(load_image(png_encoder(rgba)))
        assert pixels.shape == (8, 3)
        assert np.all(pixels == [255, 0, 0])

    def test_fully_transparent_fails(self, png_encoder):
        rgba = np.zeros((4, 4, 4), dtype=np.uint8)
        with pytest.raises(ImageLoadFailure):
            sample_pixels(load_image(png_encoder(rgba)))

    def test_subsampling_is_bounded(self, gradient_png):
        pixels = sample_pixels(load_image(gradient_png), max_samples=100)
        assert pixels.shape == (100, 3)


class TestClusterPalette:
    """Test MiniBatchKMeans clustering"""

    def test_few_distinct_colors_ordered_by_dominance(self):
        pixels = np.array([[0, 0, 255]] * 30 + [[255, 0, 0]] * 70, dtype=np.uint8)
        palette = cluster_palette(pixels, k=6)
        assert [hex_code for hex_code, _ in palette] == ["#FF0000", "#0000FF"]
        assert abs(palette[0][1] - 0.7) < 1e-9

    def test_clusters_at_most_k(self, gradient_png):
        pixels = sample_pixels(load_image(gradient_png))
        palette = cluster_palette(pixels, k=4)
        assert 1 <= len(palette) <= 4
        ratios = [ratio for _, ratio in palette]
        assert ratios == sorted(ratios, reverse=True)
        assert 0.5 < sum(ratios) <= 1.0 + 1e-6

    def test_deterministic(self, gradient_png):
        pixels = sample_pixels(load_image(gradient_png))
        assert cluster_palette(pixels, k=4) == cluster_palette(pixels, k=4)


class TestExtractPalette:
    """Test the full extraction"""

    def test_two_blocks(self, two_block_png):
        assert extract_palette(two_block_png, count=2) == ["#FF0000", "#0000FF"]

    def test_default_count_upper_bound(self, gradient_png):
        colors = extract_palette(gradient_png)
        assert 1 <= len(colors) <= 6
        assert all(is_valid(c) for c in colors)
        assert len(set(colors)) == len(colors)

    def test_invalid_count(self, two_block_png):
        with pytest.raises(ValueError):
            extract_palette(two_block_png, count=50)

    def test_invalid_image(self):
        with pytest.raises(ImageLoadFailure):
            extract_palette(b"\x89PNG\r\n\x1a\nbroken")


class TestPickPixel:
    """Test single pixel picking"""

    def test_pick(self, two_block_png):
        assert pick_pixel(two_block_png, 0, 0) == "#FF0000"
        assert pick_pixel(two_block_png, 9, 9) == "#0000FF"

    @pytest.mark.parametrize("x,y", [(10, 0), (0, 10), (-1, 0)])
    def test_pick_outside(self, two_block_png, x, y):
        with pytest.raises(ValueError):
            pick_pixel(two_block_png, x, y)
