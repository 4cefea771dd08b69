# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Whole-image color distribution statistics.

Works on every opaque pixel (no downsampling) and reports HSB means plus
a saturation/brightness variance on a percent scale.
"""

from __future__ import annotations

from typing import Optional

import numpy as np

from clipsense.schema import ColorDistribution
from clipsense.measure.clustering import ExtractionConfig
from clipsense.measure.colorspace import rgb_to_hsb
from clipsense.measure.pixels import PixelGrid, extract_pixels


def analyze_distribution(
    grid: PixelGrid,
    config: Optional[ExtractionConfig] = None,
) -> ColorDistribution:
    """
    Compute hue/saturation/brightness statistics for an image.

    variance = Σ((s - s̄)² + (b - b̄)²) / n, with s and b in percent.

    Args:
        grid: Decoded RGBA image
        config: Supplies the alpha threshold (uses defaults if None)

    Returns:
        ColorDistribution; all zeros when there are no opaque pixels.
    """
    cfg = config or ExtractionConfig()
    pixels = extract_pixels(grid, alpha_threshold=cfg.alpha_threshold)

    if len(pixels) == 0:
        return ColorDistribution(
            total_pixels=0,
            dominant_hue=0.0,
            average_saturation=0.0,
            average_brightness=0.0,
            color_variance=0.0,
        )

    hsb = rgb_to_hsb(pixels)
    hue = hsb[:, 0] * 360.0
    saturation = hsb[:, 1] * 100.0
    brightness = hsb[:, 2] * 100.0

    mean_s = saturation.mean()
    mean_b = brightness.mean()
    variance = np.mean((saturation - mean_s) ** 2 + (brightness - mean_b) ** 2)

    return ColorDistribution(
        total_pixels=len(pixels),
        dominant_hue=float(hue.mean()),
        average_saturation=float(mean_s),
        average_brightness=float(mean_b),
        color_variance=float(variance),
    )
