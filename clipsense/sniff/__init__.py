# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Byte-level file type sniffing.

Classifies captured payloads by magic bytes first and text content
second. Pure functions; no state, no I/O.
"""

from clipsense.sniff.detector import (
    UNKNOWN,
    category_for_mime,
    detect_file_type,
    is_supported_type,
    type_for_extension,
)

__all__ = [
    "detect_file_type",
    "type_for_extension",
    "category_for_mime",
    "is_supported_type",
    "UNKNOWN",
]
