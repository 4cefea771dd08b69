# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
File type classification results.

Categories form a closed enumeration; callers match on FileTypeCategory
members rather than on type identifier strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class FileTypeCategory(Enum):
    """Coarse content category of a captured payload."""
    IMAGE = "image"
    TEXT = "text"
    DOCUMENT = "document"
    AUDIO = "audio"
    VIDEO = "video"
    ARCHIVE = "archive"
    URL = "url"
    DATA = "data"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    FileTypeCategory.IMAGE: "Image",
    FileTypeCategory.TEXT: "Text",
    FileTypeCategory.DOCUMENT: "Document",
    FileTypeCategory.AUDIO: "Audio",
    FileTypeCategory.VIDEO: "Video",
    FileTypeCategory.ARCHIVE: "Archive",
    FileTypeCategory.URL: "Link",
    FileTypeCategory.DATA: "Data",
}


@dataclass(frozen=True, slots=True)
class DetectedFileType:
    """
    Outcome of sniffing a byte buffer.

    Attributes:
        content_identifier: Canonical type tag (e.g. "public.png")
        file_extension: Preferred extension without the dot, if any
        mime_type: MIME type
        category: Coarse content category
        confidence: 1.0 for signature matches, 0.6-0.9 for text
            heuristics, 0.0 for the unmatched fallback
    """
    content_identifier: str
    file_extension: Optional[str]
    mime_type: str
    category: FileTypeCategory
    confidence: float

    def __post_init__(self) -> None:
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be 0-1, got {self.confidence}")

    @property
    def is_high_confidence(self) -> bool:
        return self.confidence >= 0.8

    @property
    def description(self) -> str:
        """Short label: upper-cased extension, or the category name."""
        if self.file_extension:
            return self.file_extension.upper()
        return self.category.display_name
