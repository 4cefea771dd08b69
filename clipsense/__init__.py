# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Clipsense -- Content intelligence for clipboard captures.

Classifies captured payloads by their bytes and reduces images to a small,
percentage-weighted palette of dominant colors.

Quick start::

    from clipsense import (
        ColorExtractor, FileTypeCategory, decode_image, detect_file_type,
    )

    detected = detect_file_type(data)
    if detected.category is FileTypeCategory.IMAGE:
        with ColorExtractor() as extractor:
            colors = extractor.extract_dominant_colors(decode_image(data))
"""

from __future__ import annotations

__version__ = "1.0.0"

from clipsense.measure import (
    ExtractionConfig,
    PixelGrid,
    analyze_distribution,
    average_color,
    decode_image,
    extract_dominant_colors,
    image_fingerprint,
)
from clipsense.runtime import ColorExtractor, ResultCache
from clipsense.schema import (
    ColorDistribution,
    ColorInfo,
    DetectedFileType,
    FileTypeCategory,
    RGBColor,
)
from clipsense.sniff import detect_file_type, type_for_extension

__all__ = [
    # Sniffing
    "detect_file_type",
    "type_for_extension",
    "DetectedFileType",
    "FileTypeCategory",
    # Color extraction
    "extract_dominant_colors",
    "average_color",
    "analyze_distribution",
    "ExtractionConfig",
    "PixelGrid",
    "decode_image",
    "image_fingerprint",
    # Services
    "ColorExtractor",
    "ResultCache",
    # Types (commonly needed)
    "ColorInfo",
    "ColorDistribution",
    "RGBColor",
    # Version
    "__version__",
]
