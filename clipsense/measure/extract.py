# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Dominant color extraction API.

Pipeline: opaque pixels → stride downsampling → clustering → ranked
ColorInfo tuple. Degenerate input never raises; it yields no colors.
"""

from __future__ import annotations

import numbers
from typing import Optional

from clipsense.schema import ColorCluster, ColorInfo, RGBColor
from clipsense.measure.clustering import ExtractionConfig, cluster_pixels, compute_centroid
from clipsense.measure.pixels import PixelGrid, downsample_pixels, extract_pixels


AVERAGE_COLOR_NAME = "Average"


def extract_dominant_colors(
    grid: PixelGrid,
    max_colors: Optional[int] = None,
    config: Optional[ExtractionConfig] = None,
) -> tuple[ColorInfo, ...]:
    """
    Reduce an image to its most representative colors.

    Args:
        grid: Decoded RGBA image
        max_colors: Upper bound on the number of colors (default from
            config, normally 6). Zero or negative returns no colors.
        config: Extraction settings (uses defaults if None)

    Returns:
        Tuple of ColorInfo ordered by percentage descending. Every
        percentage is > 0 and they sum to at most 1.0.

    Raises:
        TypeError: If max_colors is not an integer.

    Example:
        >>> colors = extract_dominant_colors(grid, max_colors=3)
        >>> colors[0].hex
        '#F6C767'
    """
    cfg = config or ExtractionConfig()
    k = resolve_max_colors(max_colors, cfg)
    if k <= 0:
        return ()

    pixels = extract_pixels(grid, alpha_threshold=cfg.alpha_threshold)
    if len(pixels) == 0:
        return ()

    sampled = downsample_pixels(pixels, max_samples=cfg.max_samples)
    clusters = cluster_pixels(sampled, k, cfg)
    return finalize_clusters(clusters, total=len(sampled))


def finalize_clusters(
    clusters: list[ColorCluster],
    total: int,
) -> tuple[ColorInfo, ...]:
    """
    Turn clusters into ranked ColorInfo entries.

    Empty clusters are dropped. percentage = cluster size / total.
    """
    if total <= 0:
        return ()

    colors = [
        ColorInfo.from_rgb(cluster.centroid, percentage=cluster.size / total)
        for cluster in clusters
        if not cluster.is_empty
    ]

    # Stable sort: equal shares keep seeding order
    colors.sort(key=lambda c: c.percentage, reverse=True)
    return tuple(colors)


def average_color(
    grid: PixelGrid,
    config: Optional[ExtractionConfig] = None,
) -> Optional[ColorInfo]:
    """
    Mean of all opaque pixels, without clustering or downsampling.

    Returns:
        ColorInfo with percentage 1.0, or None if the image has no opaque
        pixels.
    """
    cfg = config or ExtractionConfig()
    pixels = extract_pixels(grid, alpha_threshold=cfg.alpha_threshold)
    if len(pixels) == 0:
        return None

    centroid = RGBColor.from_array(compute_centroid(pixels))
    return ColorInfo.from_rgb(centroid, percentage=1.0, name=AVERAGE_COLOR_NAME)


def resolve_max_colors(max_colors: Optional[int], config: ExtractionConfig) -> int:
    """Validate max_colors, substituting the configured default for None."""
    if max_colors is None:
        return config.default_max_colors
    if isinstance(max_colors, bool) or not isinstance(max_colors, numbers.Integral):
        raise TypeError(
            f"max_colors must be an integer, got {type(max_colors).__name__}"
        )
    return int(max_colors)
