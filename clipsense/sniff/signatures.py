# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Magic-byte signatures.

Checked in table order against the first HEADER_SIZE bytes; the first
match wins. Buffers shorter than MIN_HEADER_SIZE never match.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from clipsense.schema import DetectedFileType, FileTypeCategory


HEADER_SIZE = 16
MIN_HEADER_SIZE = 4


@dataclass(frozen=True, slots=True)
class Signature:
    """
    A byte pattern anchored at a fixed offset.

    Attributes:
        patterns: (offset, bytes) pairs that must all match
        file_type: Classification returned on a match
    """
    patterns: tuple[tuple[int, bytes], ...]
    file_type: DetectedFileType

    def matches(self, header: bytes) -> bool:
        return all(
            header[offset:offset + len(magic)] == magic
            for offset, magic in self.patterns
        )


def _image(identifier: str, extension: str, mime: str) -> DetectedFileType:
    return DetectedFileType(
        content_identifier=identifier,
        file_extension=extension,
        mime_type=mime,
        category=FileTypeCategory.IMAGE,
        confidence=1.0,
    )


PNG = _image("public.png", "png", "image/png")
JPEG = _image("public.jpeg", "jpg", "image/jpeg")
GIF = _image("com.compuserve.gif", "gif", "image/gif")
BMP = _image("com.microsoft.bmp", "bmp", "image/bmp")
TIFF = _image("public.tiff", "tiff", "image/tiff")
WEBP = _image("org.webmproject.webp", "webp", "image/webp")
PDF = DetectedFileType(
    content_identifier="com.adobe.pdf",
    file_extension="pdf",
    mime_type="application/pdf",
    category=FileTypeCategory.DOCUMENT,
    confidence=1.0,
)


SIGNATURES: tuple[Signature, ...] = (
    Signature(((0, b"\x89PNG"),), PNG),
    Signature(((0, b"\xff\xd8"),), JPEG),
    Signature(((0, b"GIF8"),), GIF),
    Signature(((0, b"%PDF"),), PDF),
    Signature(((0, b"BM"),), BMP),
    Signature(((0, b"II*\x00"),), TIFF),
    Signature(((0, b"MM\x00*"),), TIFF),
    Signature(((0, b"RIFF"), (8, b"WEBP")), WEBP),
)


def match_signature(data: bytes) -> Optional[DetectedFileType]:
    """Return the type of the first matching signature, or None."""
    if len(data) < MIN_HEADER_SIZE:
        return None

    header = bytes(data[:HEADER_SIZE])
    for signature in SIGNATURES:
        if signature.matches(header):
            return signature.file_type
    return None
