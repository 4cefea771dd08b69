# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""Tests for pixel grids: opaque extraction, downsampling, fingerprints, decoding."""

import io

import numpy as np
import pytest

from clipsense import analyze_distribution, average_color, extract_dominant_colors
from clipsense.measure.pixels import (
    PixelGrid,
    decode_image,
    downsample_pixels,
    extract_pixels,
    image_fingerprint,
)


def _grid(rgba, height=4, width=5):
    samples = np.tile(np.asarray(rgba, dtype=np.float64), (height, width, 1))
    return PixelGrid(width=width, height=height, samples=samples)


class TestPixelGrid:

    def test_image_shaped_samples(self):
        grid = _grid([1.0, 0.0, 0.0, 1.0])
        assert grid.is_well_formed
        assert grid.rgba().shape == (20, 4)

    def test_flat_samples(self):
        grid = PixelGrid(width=2, height=2, samples=np.ones(16))
        assert grid.is_well_formed
        assert grid.rgba().shape == (4, 4)

    def test_length_mismatch_is_malformed(self):
        grid = PixelGrid(width=3, height=3, samples=np.ones(16))
        assert not grid.is_well_formed
        assert grid.rgba().shape == (0, 4)

    def test_zero_size_is_malformed(self):
        grid = PixelGrid(width=0, height=10, samples=np.empty(0))
        assert not grid.is_well_formed


class TestExtractPixels:

    def test_opaque_pixels_kept(self):
        pixels = extract_pixels(_grid([0.2, 0.4, 0.6, 1.0]))
        assert pixels.shape == (20, 3)
        np.testing.assert_allclose(pixels[0], [0.2, 0.4, 0.6])

    def test_transparent_pixels_dropped(self):
        assert extract_pixels(_grid([0.2, 0.4, 0.6, 0.0])).shape == (0, 3)

    def test_half_alpha_is_transparent(self):
        assert len(extract_pixels(_grid([1.0, 1.0, 1.0, 0.5]))) == 0
        assert len(extract_pixels(_grid([1.0, 1.0, 1.0, 0.51]))) == 20

    def test_order_preserved(self):
        samples = np.array([
            [1.0, 0.0, 0.0, 1.0],
            [0.0, 1.0, 0.0, 0.0],
            [0.0, 0.0, 1.0, 1.0],
            [0.5, 0.5, 0.5, 1.0],
        ])
        pixels = extract_pixels(PixelGrid(width=2, height=2, samples=samples))
        np.testing.assert_allclose(pixels, [[1, 0, 0], [0, 0, 1], [0.5, 0.5, 0.5]])

    def test_malformed_grid_gives_no_pixels(self):
        grid = PixelGrid(width=10, height=10, samples=np.ones(12))
        assert extract_pixels(grid).shape == (0, 3)

    def test_custom_threshold(self):
        grid = _grid([1.0, 1.0, 1.0, 0.3])
        assert len(extract_pixels(grid, alpha_threshold=0.2)) == 20

    def test_non_finite_samples_dropped(self):
        samples = np.array([
            [np.nan, 0.0, 0.0, 1.0],
            [0.0, np.inf, 0.0, 1.0],
            [0.0, 0.0, 1.0, np.nan],
            [0.5, 0.5, 0.5, 1.0],
        ])
        pixels = extract_pixels(PixelGrid(width=2, height=2, samples=samples))
        np.testing.assert_allclose(pixels, [[0.5, 0.5, 0.5]])

    def test_non_finite_grid_degrades_quietly(self):
        samples = np.full((2, 2, 4), 1.0)
        samples[..., 0] = np.nan
        grid = PixelGrid(width=2, height=2, samples=samples)
        assert extract_pixels(grid).shape == (0, 3)
        assert extract_dominant_colors(grid) == ()
        assert average_color(grid) is None
        assert analyze_distribution(grid).total_pixels == 0

    def test_one_nan_pixel_does_not_poison_palette(self):
        samples = np.full((2, 2, 4), [1.0, 0.0, 0.0, 1.0])
        samples[0, 0, 0] = np.nan
        grid = PixelGrid(width=2, height=2, samples=samples)
        colors = extract_dominant_colors(grid)
        assert [c.hex for c in colors] == ["#FF0000"]
        assert average_color(grid).hex == "#FF0000"
        dist = analyze_distribution(grid)
        assert dist.total_pixels == 3
        assert np.isfinite(dist.color_variance)


class TestDownsample:

    def test_small_input_untouched(self):
        pixels = np.random.RandomState(0).random((5000, 3))
        assert downsample_pixels(pixels) is pixels

    def test_uniform_stride(self):
        pixels = np.arange(12000 * 3, dtype=np.float64).reshape(12000, 3)
        sampled = downsample_pixels(pixels)
        # 12000 // 5000 = 2
        assert len(sampled) == 6000
        np.testing.assert_array_equal(sampled, pixels[::2])

    def test_stride_floor(self):
        pixels = np.zeros((9999, 3))
        # 9999 // 5000 = 1, so nothing is dropped
        assert len(downsample_pixels(pixels)) == 9999

    def test_custom_budget(self):
        pixels = np.zeros((100, 3))
        assert len(downsample_pixels(pixels, max_samples=10)) == 10


class TestFingerprint:

    def test_same_content_same_fingerprint(self):
        a = _grid([0.1, 0.2, 0.3, 1.0])
        b = _grid([0.1, 0.2, 0.3, 1.0])
        assert a is not b
        assert image_fingerprint(a) == image_fingerprint(b)

    def test_content_changes_fingerprint(self):
        a = _grid([0.1, 0.2, 0.3, 1.0])
        b = _grid([0.1, 0.2, 0.4, 1.0])
        assert image_fingerprint(a) != image_fingerprint(b)

    def test_dimensions_change_fingerprint(self):
        samples = np.ones(24)
        a = PixelGrid(width=2, height=3, samples=samples)
        b = PixelGrid(width=3, height=2, samples=samples)
        assert image_fingerprint(a) != image_fingerprint(b)

    def test_format(self):
        fp = image_fingerprint(_grid([0.0, 0.0, 0.0, 1.0]))
        assert fp.startswith("sha256:")
        assert len(fp) == len("sha256:") + 16


class TestDecodeImage:

    def _png_bytes(self, color, size=(4, 3)):
        Image = pytest.importorskip("PIL.Image")
        buffer = io.BytesIO()
        Image.new("RGBA", size, color).save(buffer, format="PNG")
        return buffer.getvalue()

    def test_decodes_png(self):
        grid = decode_image(self._png_bytes((255, 0, 0, 255)))
        assert (grid.width, grid.height) == (4, 3)
        assert grid.is_well_formed
        np.testing.assert_allclose(grid.rgba()[0], [1.0, 0.0, 0.0, 1.0])

    def test_keeps_alpha(self):
        grid = decode_image(self._png_bytes((0, 0, 255, 0)))
        assert len(extract_pixels(grid)) == 0

    def test_undecodable_raises(self):
        pytest.importorskip("PIL.Image")
        with pytest.raises(ValueError, match="Cannot decode"):
            decode_image(b"definitely not an image")
