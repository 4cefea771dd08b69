# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Pixel grid handling: opaque-pixel extraction, downsampling, fingerprinting.

Decoding image bytes into a grid is the caller's job; decode_image() is a
Pillow-backed default for callers that have Pillow installed.
"""

from __future__ import annotations

import hashlib
import io
import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class PixelGrid:
    """
    A decoded image as RGBA samples.

    Attributes:
        width: Image width in pixels
        height: Image height in pixels
        samples: RGBA floats in [0, 1], either flat (W*H*4,), (W*H, 4)
            or (H, W, 4). Row-major, top row first.
    """
    width: int
    height: int
    samples: NDArray[np.float64]

    @property
    def is_well_formed(self) -> bool:
        """True if the buffer holds exactly width * height RGBA samples."""
        if self.width <= 0 or self.height <= 0:
            return False
        return np.asarray(self.samples).size == self.width * self.height * 4

    def rgba(self) -> NDArray[np.float64]:
        """
        Samples as an (N, 4) float array.

        Returns an empty (0, 4) array for malformed grids instead of
        reading past the buffer.
        """
        if not self.is_well_formed:
            return np.empty((0, 4), dtype=np.float64)
        return np.asarray(self.samples, dtype=np.float64).reshape(-1, 4)


def extract_pixels(
    grid: PixelGrid,
    alpha_threshold: float = 0.5,
) -> NDArray[np.float64]:
    """
    Collect the opaque pixels of a grid.

    Pixels with alpha <= alpha_threshold are treated as background and
    dropped. Pixels with any non-finite sample are dropped as well.

    Args:
        grid: Decoded image
        alpha_threshold: Alpha at or below which a pixel is discarded

    Returns:
        (N, 3) array of RGB values in original order. Empty for zero-size,
        malformed, non-finite or fully transparent grids.
    """
    if not grid.is_well_formed:
        LOGGER.debug(
            "Rejecting malformed pixel grid %dx%d with %d values",
            grid.width, grid.height, np.asarray(grid.samples).size,
        )
        return np.empty((0, 3), dtype=np.float64)

    rgba = grid.rgba()
    # Non-finite samples go out with the background
    keep = (rgba[:, 3] > alpha_threshold) & np.isfinite(rgba).all(axis=1)
    return np.ascontiguousarray(rgba[keep, :3])


def downsample_pixels(
    pixels: NDArray[np.float64],
    max_samples: int = 5000,
) -> NDArray[np.float64]:
    """
    Uniform-stride downsampling.

    Above max_samples, every (count // max_samples)-th pixel is kept,
    preserving order. The result can hold up to 2 * max_samples - 1 pixels.
    """
    count = len(pixels)
    if count <= max_samples:
        return pixels

    step = count // max_samples
    LOGGER.debug("Downsampling %d pixels with stride %d", count, step)
    return pixels[::step]


def image_fingerprint(grid: PixelGrid) -> str:
    """
    Content-derived cache key for a grid.

    Two decodes of the same bytes give the same fingerprint; object
    identity plays no part.

    Returns:
        String like "sha256:1f2e3d4c5b6a7980"
    """
    digest = hashlib.sha256()
    digest.update(f"{grid.width}x{grid.height}:".encode("ascii"))
    digest.update(np.ascontiguousarray(grid.samples, dtype=np.float64).tobytes())
    return f"sha256:{digest.hexdigest()[:16]}"


def decode_image(data: bytes) -> PixelGrid:
    """
    Decode image bytes into an RGBA PixelGrid with Pillow.

    Applies ICC profile conversion to sRGB when the image embeds a profile,
    so extracted colors match what color pickers show.

    Raises:
        ImportError: If Pillow is not installed.
        ValueError: If the bytes are not a decodable image.
    """
    try:
        from PIL import Image, UnidentifiedImageError
    except ImportError as e:
        raise ImportError(
            "Pillow is required for image decoding. "
            "Install with: pip install clipsense[image]"
        ) from e

    try:
        img = Image.open(io.BytesIO(data))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Cannot decode image data ({len(data)} bytes)") from e

    rgba = img.convert("RGBA")

    if "icc_profile" in img.info:
        rgba = _to_srgb(rgba, img.info["icc_profile"])

    pixels = np.asarray(rgba, dtype=np.float64) / 255.0
    height, width = pixels.shape[:2]
    return PixelGrid(width=width, height=height, samples=pixels)


def _to_srgb(rgba, icc_profile: bytes):
    """Remap RGB channels from an embedded profile to sRGB, keeping alpha."""
    from PIL import Image, ImageCms

    try:
        embedded_profile = ImageCms.ImageCmsProfile(io.BytesIO(icc_profile))
        srgb_profile = ImageCms.createProfile("sRGB")
        rgb = ImageCms.profileToProfile(
            rgba.convert("RGB"), embedded_profile, srgb_profile
        )
    except (ImageCms.PyCMSError, OSError) as e:
        LOGGER.debug("ICC conversion failed, using untagged RGB: %s", e)
        return rgba

    r, g, b = rgb.split()
    return Image.merge("RGBA", (r, g, b, rgba.getchannel("A")))
