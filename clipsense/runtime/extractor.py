# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Color extraction service.

Wraps the pure measurement functions with a result cache and a single
background worker. Work runs one task at a time in submission order, so
concurrent callers queue rather than compete.
"""

from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from clipsense.schema import ColorDistribution, ColorInfo
from clipsense.measure.clustering import ExtractionConfig
from clipsense.measure.distribution import analyze_distribution
from clipsense.measure.extract import (
    average_color,
    extract_dominant_colors,
    resolve_max_colors,
)
from clipsense.measure.pixels import PixelGrid, image_fingerprint
from clipsense.runtime.cache import DEFAULT_CAPACITY, ResultCache

LOGGER = logging.getLogger(__name__)

Palette = tuple[ColorInfo, ...]


class ColorExtractor:
    """
    Cached, serialized dominant-color extraction.

    Instances are independent: each owns its cache and its worker thread.

    Args:
        config: Extraction settings (uses defaults if None)
        cache_capacity: Maximum cached palettes (LRU beyond that)
        fingerprint: Derives the cache identity of a grid. Must depend on
            content, not object identity, for repeated decodes to hit.

    Example:
        >>> with ColorExtractor() as extractor:
        ...     colors = extractor.extract_dominant_colors(grid, max_colors=5)
    """

    def __init__(
        self,
        config: Optional[ExtractionConfig] = None,
        cache_capacity: int = DEFAULT_CAPACITY,
        fingerprint: Callable[[PixelGrid], str] = image_fingerprint,
    ) -> None:
        self.config = config or ExtractionConfig()
        self._cache: ResultCache[Palette] = ResultCache(cache_capacity)
        self._fingerprint = fingerprint
        self._worker = ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="color-extraction"
        )

    # -------------------------------------------------------------------------
    # Dominant colors
    # -------------------------------------------------------------------------

    def submit_dominant_colors(
        self,
        grid: PixelGrid,
        max_colors: Optional[int] = None,
        fingerprint: Optional[str] = None,
    ) -> Future:
        """
        Schedule dominant-color extraction.

        A cache hit resolves immediately without touching the worker.

        Args:
            grid: Decoded RGBA image
            max_colors: Palette bound (default from config)
            fingerprint: Precomputed cache identity; derived from the grid
                when omitted

        Returns:
            Future resolving to a tuple of ColorInfo, percentage descending.

        Raises:
            TypeError: If max_colors is not an integer.
        """
        k = resolve_max_colors(max_colors, self.config)
        if k <= 0:
            return _resolved(())

        key = (fingerprint or self._fingerprint(grid), k)
        cached = self._cache.get(key)
        if cached is not None:
            LOGGER.debug("Palette for %s served from cache", key[0])
            return _resolved(cached)

        return self._worker.submit(
            self._cache.get_or_compute,
            key,
            lambda: extract_dominant_colors(grid, k, self.config),
        )

    def extract_dominant_colors(
        self,
        grid: PixelGrid,
        max_colors: Optional[int] = None,
        fingerprint: Optional[str] = None,
    ) -> Palette:
        """Blocking form of submit_dominant_colors()."""
        return self.submit_dominant_colors(grid, max_colors, fingerprint).result()

    # -------------------------------------------------------------------------
    # Secondary analyses (uncached)
    # -------------------------------------------------------------------------

    def submit_average_color(self, grid: PixelGrid) -> Future:
        """Schedule average-color computation; resolves to ColorInfo or None."""
        return self._worker.submit(average_color, grid, self.config)

    def average_color(self, grid: PixelGrid) -> Optional[ColorInfo]:
        return self.submit_average_color(grid).result()

    def submit_distribution(self, grid: PixelGrid) -> Future:
        """Schedule distribution analysis; resolves to ColorDistribution."""
        return self._worker.submit(analyze_distribution, grid, self.config)

    def analyze_distribution(self, grid: PixelGrid) -> ColorDistribution:
        return self.submit_distribution(grid).result()

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    @property
    def cache(self) -> ResultCache[Palette]:
        return self._cache

    def clear_cache(self) -> None:
        """Drop every cached palette."""
        self._cache.clear()

    def close(self) -> None:
        """Finish queued work and stop the worker thread."""
        self._worker.shutdown(wait=True)

    def __enter__(self) -> ColorExtractor:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def _resolved(value) -> Future:
    future: Future = Future()
    future.set_result(value)
    return future
