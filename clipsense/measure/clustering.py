# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Color clustering: farthest-point seeding followed by Lloyd refinement.

Seeding is deterministic. The first centroid is the first sampled pixel;
each further centroid is the pixel whose distance to its nearest chosen
centroid is largest. Same pixels in, same clusters out.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from clipsense.schema import ColorCluster, RGBColor
from clipsense.measure.colorspace import pairwise_distances, weighted_distance

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for dominant-color extraction."""

    # Pixel budget for clustering; larger inputs are stride-sampled
    max_samples: int = 5000

    # Pixels with alpha at or below this are treated as background
    alpha_threshold: float = 0.5

    # Hard cap on Lloyd iterations
    max_iterations: int = 20

    # Stop once no centroid moves further than this (weighted metric).
    # Coarse on a [0, 1] scale, so runs usually stop after a few passes.
    convergence_threshold: float = 1.0

    # Palette size when the caller does not ask for one
    default_max_colors: int = 6


def compute_centroid(points: NDArray[np.float64]) -> NDArray[np.float64]:
    """Component-wise mean of (N, 3) points; black for an empty set."""
    if len(points) == 0:
        return np.zeros(3, dtype=np.float64)
    return points.mean(axis=0)


def seed_centroids(
    pixels: NDArray[np.float64],
    k: int,
) -> NDArray[np.float64]:
    """
    Farthest-point initialization.

    Args:
        pixels: (N, 3) sampled pixels, N >= 1
        k: Number of centroids to pick

    Returns:
        (k, 3) array of centroids. Duplicates are possible when the image
        has fewer than k distinct colors; the extra clusters end up empty.
    """
    centroids = np.empty((k, 3), dtype=np.float64)
    centroids[0] = pixels[0]

    # Distance from every pixel to its nearest chosen centroid
    nearest = weighted_distance(pixels, centroids[0])

    for i in range(1, k):
        # argmax returns the first maximum, so ties keep original order
        idx = int(np.argmax(nearest))
        centroids[i] = pixels[idx]
        nearest = np.minimum(nearest, weighted_distance(pixels, centroids[i]))

    return centroids


def assign_pixels(
    pixels: NDArray[np.float64],
    centroids: NDArray[np.float64],
) -> NDArray[np.int64]:
    """Index of the nearest centroid for every pixel (first one on ties)."""
    return np.argmin(pairwise_distances(pixels, centroids), axis=1)


def cluster_pixels(
    pixels: NDArray[np.float64],
    k: int,
    config: ExtractionConfig | None = None,
) -> list[ColorCluster]:
    """
    Cluster pixels into at most k colors.

    Each iteration clears and reassigns every cluster's points, then moves
    each non-empty centroid to the mean of its points. Stops when no
    centroid moved more than the convergence threshold, or after
    max_iterations.

    Args:
        pixels: (N, 3) RGB array in [0, 1]
        k: Number of clusters
        config: Extraction settings (uses defaults if None)

    Returns:
        k clusters holding their final points. Empty clusters are kept;
        the caller decides what to do with them. Empty list for no pixels
        or k <= 0.
    """
    if len(pixels) == 0 or k <= 0:
        return []

    cfg = config or ExtractionConfig()

    centroids = seed_centroids(pixels, k)
    labels = np.zeros(len(pixels), dtype=np.int64)

    for iteration in range(cfg.max_iterations):
        labels = assign_pixels(pixels, centroids)

        converged = True
        for j in range(k):
            members = pixels[labels == j]
            if len(members) == 0:
                continue
            new_centroid = compute_centroid(members)
            if weighted_distance(centroids[j], new_centroid) > cfg.convergence_threshold:
                converged = False
            centroids[j] = new_centroid

        if converged:
            LOGGER.debug("Clustering converged after %d iteration(s)", iteration + 1)
            break

    return [
        ColorCluster(
            centroid=RGBColor.from_array(centroids[j]),
            points=pixels[labels == j],
        )
        for j in range(k)
    ]
