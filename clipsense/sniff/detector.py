# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
File type detection entry points.

detect_file_type() classifies raw bytes in strict priority order:
magic-byte signatures, then text heuristics, then the binary fallback.
It is a pure function and never raises for a bytes-like buffer.
"""

from __future__ import annotations

import logging
import mimetypes
from typing import Optional, Union

from clipsense.schema import DetectedFileType, FileTypeCategory
from clipsense.sniff import signatures, text

LOGGER = logging.getLogger(__name__)

mimetypes.init()


UNKNOWN = DetectedFileType(
    content_identifier="public.data",
    file_extension=None,
    mime_type="application/octet-stream",
    category=FileTypeCategory.DATA,
    confidence=0.0,
)

# Identifiers the pipeline itself produces
SUPPORTED_IDENTIFIERS = frozenset({
    # Images
    signatures.PNG.content_identifier,
    signatures.JPEG.content_identifier,
    signatures.TIFF.content_identifier,
    signatures.GIF.content_identifier,
    signatures.BMP.content_identifier,
    signatures.WEBP.content_identifier,
    "public.svg-image",
    # Text
    text.PLAIN_TEXT.content_identifier,
    "public.plain-text",
    "public.rtf",
    text.HTML.content_identifier,
    text.XML.content_identifier,
    text.JSON.content_identifier,
    # Documents
    signatures.PDF.content_identifier,
    # Links
    text.URL.content_identifier,
    text.FILE_PATH.content_identifier,
    # Anything else
    UNKNOWN.content_identifier,
})

# Extensions the standard registry lacks or maps inconsistently across
# platforms
_EXTRA_TYPES = {
    "webp": "image/webp",
    "heic": "image/heic",
    "md": "text/markdown",
    "json": "application/json",
    "7z": "application/x-7z-compressed",
    "rar": "application/vnd.rar",
    "gz": "application/gzip",
    "bz2": "application/x-bzip2",
    "xz": "application/x-xz",
}

_IDENTIFIERS = {
    "png": signatures.PNG.content_identifier,
    "jpg": signatures.JPEG.content_identifier,
    "jpeg": signatures.JPEG.content_identifier,
    "gif": signatures.GIF.content_identifier,
    "bmp": signatures.BMP.content_identifier,
    "tif": signatures.TIFF.content_identifier,
    "tiff": signatures.TIFF.content_identifier,
    "webp": signatures.WEBP.content_identifier,
    "svg": "public.svg-image",
    "pdf": signatures.PDF.content_identifier,
    "txt": text.PLAIN_TEXT.content_identifier,
    "rtf": "public.rtf",
    "html": text.HTML.content_identifier,
    "htm": text.HTML.content_identifier,
    "xml": text.XML.content_identifier,
    "json": text.JSON.content_identifier,
    "zip": "public.zip-archive",
    "mp3": "public.mp3",
    "mp4": "public.mpeg-4",
    "mov": "com.apple.quicktime-movie",
}

_ARCHIVE_TYPES = frozenset({
    "application/zip",
    "application/gzip",
    "application/x-tar",
    "application/x-gtar",
    "application/x-bzip2",
    "application/x-xz",
    "application/x-7z-compressed",
    "application/x-rar-compressed",
    "application/vnd.rar",
})

_TEXTUAL_APPLICATION_TYPES = frozenset({
    "application/json",
    "application/xml",
    "application/javascript",
    "application/rtf",
})


def detect_file_type(data: Union[bytes, bytearray, memoryview]) -> DetectedFileType:
    """
    Classify a raw byte buffer.

    Args:
        data: Captured payload of any length, possibly empty

    Returns:
        DetectedFileType. Unrecognized input resolves to the
        application/octet-stream fallback with confidence 0.0.

    Raises:
        TypeError: If data is not bytes-like.

    Example:
        >>> detect_file_type(b'{"a": 1}').mime_type
        'application/json'
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"Expected bytes-like data, got {type(data).__name__}")
    data = bytes(data)

    detected = signatures.match_signature(data)
    if detected is not None:
        LOGGER.debug("Signature match: %s", detected.mime_type)
        return detected

    decoded = text.decode_text(data)
    if decoded is not None:
        detected = text.classify_text(decoded)
        if detected is not None:
            return detected

    LOGGER.debug("No type match for %d byte(s); using fallback", len(data))
    return UNKNOWN


def type_for_extension(extension: str) -> Optional[DetectedFileType]:
    """
    Look up a type from a file extension.

    Leading dots and case are ignored. Confidence is 0.8: an extension is
    a claim about the content, not evidence.

    Returns:
        The detected type, or None if the extension is unknown.
    """
    ext = extension.strip().lower().strip(".")
    if not ext:
        return None

    mime = _EXTRA_TYPES.get(ext)
    if mime is None:
        mime, _ = mimetypes.guess_type(f"file.{ext}", strict=False)
    if mime is None:
        return None

    return DetectedFileType(
        content_identifier=_IDENTIFIERS.get(ext, mime),
        file_extension=ext,
        mime_type=mime,
        category=category_for_mime(mime),
        confidence=0.8,
    )


def category_for_mime(mime: str) -> FileTypeCategory:
    """Map a MIME type onto a FileTypeCategory."""
    if mime == "text/uri-list":
        return FileTypeCategory.URL
    major = mime.split("/", 1)[0]
    if major == "image":
        return FileTypeCategory.IMAGE
    if major == "text" or mime in _TEXTUAL_APPLICATION_TYPES:
        return FileTypeCategory.TEXT
    if mime == "application/pdf":
        return FileTypeCategory.DOCUMENT
    if major == "audio":
        return FileTypeCategory.AUDIO
    if major == "video":
        return FileTypeCategory.VIDEO
    if mime in _ARCHIVE_TYPES:
        return FileTypeCategory.ARCHIVE
    return FileTypeCategory.DATA


def is_supported_type(content_identifier: str) -> bool:
    """True if the identifier is one the pipeline knows how to handle."""
    return content_identifier in SUPPORTED_IDENTIFIERS
