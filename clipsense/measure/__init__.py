# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Color measurement core for Clipsense.

Deterministic dominant-color extraction from decoded pixel grids.
All operations are pure functions over their inputs.
"""

from clipsense.measure.clustering import ExtractionConfig
from clipsense.measure.distribution import analyze_distribution
from clipsense.measure.extract import average_color, extract_dominant_colors
from clipsense.measure.pixels import PixelGrid, decode_image, image_fingerprint

__all__ = [
    "extract_dominant_colors",
    "average_color",
    "analyze_distribution",
    "ExtractionConfig",
    "PixelGrid",
    "decode_image",
    "image_fingerprint",
]
