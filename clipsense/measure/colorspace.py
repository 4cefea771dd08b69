# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Color space conversions and the perceptual distance metric.

Conversions: sRGB [0,1] → hex, HSB (hue in turns), CMYK.

All array functions accept shape (..., 3) and are pure NumPy so they
work on a single color or a whole pixel buffer alike.
"""

from __future__ import annotations

import re

import numpy as np
from numpy.typing import NDArray


# Per-channel weights of the distance metric (green counts most)
CHANNEL_WEIGHTS = np.array([2.0, 4.0, 3.0], dtype=np.float64)

_TRUNCATION_EPSILON = 1e-9

_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")


# =============================================================================
# Hex
# =============================================================================


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """
    Convert normalized RGB to an uppercase hex string.

    Each channel is scaled by 255 and truncated (not rounded).

    Returns:
        Hex string like "#3941C8"
    """
    channels = np.clip(np.array([r, g, b], dtype=np.float64), 0.0, 1.0)
    # Epsilon absorbs float noise such as (51 / 255) * 255 == 50.999...
    ri, gi, bi = np.floor(channels * 255 + _TRUNCATION_EPSILON).astype(int)
    return f"#{ri:02X}{gi:02X}{bi:02X}"


def hex_to_rgb(hex_color: str) -> tuple[float, float, float]:
    """
    Parse a hex color into normalized RGB.

    Accepts "RGB", "RRGGBB" and "AARRGGBB", with or without a leading "#".
    The alpha byte of the 8-digit form is discarded.

    Raises:
        ValueError: If the string is not 3, 6 or 8 hex digits.
    """
    digits = hex_color.strip().lstrip("#")
    if not _HEX_RE.match(digits) or len(digits) not in (3, 6, 8):
        raise ValueError(f"Invalid hex color: {hex_color!r}")

    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    elif len(digits) == 8:
        digits = digits[2:]

    r = int(digits[0:2], 16)
    g = int(digits[2:4], 16)
    b = int(digits[4:6], 16)
    return r / 255.0, g / 255.0, b / 255.0


# =============================================================================
# HSB
# =============================================================================


def rgb_to_hsb(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert RGB to hue/saturation/brightness.

    Args:
        rgb: Array of shape (..., 3) with values [0, 1]

    Returns:
        Array of shape (..., 3) with (H, S, B); H in turns [0, 1).
        Achromatic colors get H = 0 and black gets S = 0.
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]

    maxc = np.max(rgb, axis=-1)
    minc = np.min(rgb, axis=-1)
    delta = maxc - minc

    safe_max = np.where(maxc > 0.0, maxc, 1.0)
    saturation = np.where(maxc > 0.0, delta / safe_max, 0.0)

    safe_delta = np.where(delta > 0.0, delta, 1.0)
    rc = (maxc - r) / safe_delta
    gc = (maxc - g) / safe_delta
    bc = (maxc - b) / safe_delta

    hue = np.where(
        r == maxc,
        bc - gc,
        np.where(g == maxc, 2.0 + rc - bc, 4.0 + gc - rc),
    )
    hue = (hue / 6.0) % 1.0
    # A tiny negative hue wraps to exactly 1.0; keep the range half-open
    hue = np.where((delta > 0.0) & (hue < 1.0), hue, 0.0)

    return np.stack([hue, saturation, maxc], axis=-1)


# =============================================================================
# CMYK
# =============================================================================


def rgb_to_cmyk(rgb: NDArray[np.float64]) -> NDArray[np.float64]:
    """
    Convert RGB to CMYK.

    k = 1 - max(r, g, b). When k == 1 (pure black) c, m and y are 0.

    Args:
        rgb: Array of shape (..., 3) with values [0, 1]

    Returns:
        Array of shape (..., 4) with (C, M, Y, K) in [0, 1]
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    k = 1.0 - np.max(rgb, axis=-1)

    ink = 1.0 - k
    safe_ink = np.where(k < 1.0, ink, 1.0)
    cmy = (1.0 - rgb - k[..., np.newaxis]) / safe_ink[..., np.newaxis]
    cmy = np.where((k < 1.0)[..., np.newaxis], cmy, 0.0)

    return np.clip(np.concatenate([cmy, k[..., np.newaxis]], axis=-1), 0.0, 1.0)


# =============================================================================
# Distance
# =============================================================================


def weighted_distance(
    a: NDArray[np.float64],
    b: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Perceptually weighted Euclidean distance sqrt(2Δr² + 4Δg² + 3Δb²).

    Broadcasts over leading dimensions; two (3,) inputs give a scalar.
    """
    delta = np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)
    return np.sqrt(np.sum(CHANNEL_WEIGHTS * delta ** 2, axis=-1))


def pairwise_distances(
    pixels: NDArray[np.float64],
    centroids: NDArray[np.float64],
) -> NDArray[np.float64]:
    """
    Weighted distance from every pixel to every centroid.

    Args:
        pixels: (N, 3) array
        centroids: (k, 3) array

    Returns:
        (N, k) array of distances
    """
    return weighted_distance(
        pixels[:, np.newaxis, :],
        centroids[np.newaxis, :, :],
    )
