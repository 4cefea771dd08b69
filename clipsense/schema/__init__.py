# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Schema definitions for the content intelligence pipeline.

Result types are immutable (frozen dataclasses). ColorCluster is the one
mutable type and never leaves a clustering run.
"""

from clipsense.schema.color_info import (
    CMYKColor,
    ColorCluster,
    ColorDistribution,
    ColorInfo,
    HSBColor,
    RGBColor,
)
from clipsense.schema.file_type import DetectedFileType, FileTypeCategory

__all__ = [
    # Color values
    "RGBColor",
    "HSBColor",
    "CMYKColor",
    # Extraction
    "ColorCluster",
    "ColorInfo",
    "ColorDistribution",
    # File types
    "FileTypeCategory",
    "DetectedFileType",
]
