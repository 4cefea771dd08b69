# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Service runtime for Clipsense.

Explicit, independently constructible service objects around the pure
measurement core: a bounded result cache and a single-worker extractor.
"""

from clipsense.runtime.cache import ResultCache
from clipsense.runtime.extractor import ColorExtractor

__all__ = [
    "ColorExtractor",
    "ResultCache",
]
