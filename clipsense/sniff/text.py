# Copyright (c) 2026 Clipsense
# SPDX-License-Identifier: MIT

"""
Text decoding and content heuristics.

A decode only counts as successful if it yields readable text: control
characters (other than whitespace), unassigned code points and lone
surrogates reject it. Latin-1 maps every byte, so without this rule no
buffer would ever reach the binary fallback.
"""

from __future__ import annotations

import json
import re
import unicodedata
from typing import Optional
from urllib.parse import urlsplit

from clipsense.schema import DetectedFileType, FileTypeCategory


ENCODINGS = ("utf-8", "utf-16", "ascii", "latin-1")

URL_SCHEMES = frozenset({"http", "https", "ftp", "ftps", "file"})

_UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")
_REJECTED_CATEGORIES = frozenset({"Cc", "Cn", "Cs"})
_WHITESPACE = frozenset("\t\n\r\f\v")

_DOMAIN_RE = re.compile(
    r"^(https?://)?(www\.)?[a-zA-Z0-9-]+\.[a-zA-Z]{2,}(/.*)?$",
    re.IGNORECASE,
)
_DRIVE_RE = re.compile(r"^[A-Za-z]:")


HTML = DetectedFileType(
    content_identifier="public.html",
    file_extension="html",
    mime_type="text/html",
    category=FileTypeCategory.TEXT,
    confidence=0.8,
)
XML = DetectedFileType(
    content_identifier="public.xml",
    file_extension="xml",
    mime_type="application/xml",
    category=FileTypeCategory.TEXT,
    confidence=0.8,
)
JSON = DetectedFileType(
    content_identifier="public.json",
    file_extension="json",
    mime_type="application/json",
    category=FileTypeCategory.TEXT,
    confidence=0.9,
)
URL = DetectedFileType(
    content_identifier="public.url",
    file_extension=None,
    mime_type="text/uri-list",
    category=FileTypeCategory.URL,
    confidence=0.9,
)
FILE_PATH = DetectedFileType(
    content_identifier="public.file-url",
    file_extension=None,
    mime_type="text/uri-list",
    category=FileTypeCategory.URL,
    confidence=0.7,
)
PLAIN_TEXT = DetectedFileType(
    content_identifier="public.utf8-plain-text",
    file_extension="txt",
    mime_type="text/plain",
    category=FileTypeCategory.TEXT,
    confidence=0.6,
)


# =============================================================================
# Decoding
# =============================================================================


def decode_text(data: bytes) -> Optional[str]:
    """
    Decode a buffer as text, trying ENCODINGS in order.

    UTF-16 is only attempted when the buffer starts with a byte-order mark;
    without one almost any even-length buffer decodes to noise.

    Returns:
        The decoded text, or None if no encoding produced readable text.
    """
    for encoding in ENCODINGS:
        if encoding == "utf-16" and not data.startswith(_UTF16_BOMS):
            continue
        try:
            text = data.decode(encoding)
        except UnicodeDecodeError:
            continue
        text = text.lstrip("\ufeff")
        if _is_readable(text):
            return text
    return None


def _is_readable(text: str) -> bool:
    return not any(
        ch not in _WHITESPACE and unicodedata.category(ch) in _REJECTED_CATEGORIES
        for ch in text
    )


# =============================================================================
# Heuristics
# =============================================================================


def classify_text(text: str) -> Optional[DetectedFileType]:
    """
    Classify decoded text. First matching rule wins.

    Order: HTML, XML, JSON, URL, file path, plain text.

    Returns:
        The detected type, or None for empty / whitespace-only text.
    """
    trimmed = text.strip()
    if not trimmed:
        return None

    lowered = trimmed.lower()
    if "<html" in lowered or "<!doctype html" in lowered or (
        "<" in trimmed and ">" in trimmed
    ):
        return HTML

    if trimmed.startswith("<?xml") or ("<" in trimmed and "/>" in trimmed):
        return XML

    if _is_json(trimmed):
        return JSON

    if is_url(trimmed):
        return URL

    if is_file_path(trimmed):
        return FILE_PATH

    return PLAIN_TEXT


def _is_json(text: str) -> bool:
    bracketed = (text.startswith("{") and text.endswith("}")) or (
        text.startswith("[") and text.endswith("]")
    )
    if not bracketed:
        return False
    try:
        json.loads(text)
    except (ValueError, RecursionError):
        return False
    return True


def is_url(text: str) -> bool:
    """True for a URL with a known scheme, or a bare domain-like string."""
    if not text or any(ch.isspace() for ch in text):
        return False

    try:
        scheme = urlsplit(text).scheme.lower()
    except ValueError:
        return False
    if scheme in URL_SCHEMES:
        return True

    return _DOMAIN_RE.match(text) is not None


def is_file_path(text: str) -> bool:
    """
    True for things that look like filesystem paths.

    Absolute or home-relative POSIX paths, Windows drive paths, or any
    separator-containing string whose last segment contains a dot.
    """
    if text.startswith(("/", "~")):
        return True

    if len(text) > 2 and _DRIVE_RE.match(text):
        return True

    if "/" in text or "\\" in text:
        return "." in re.split(r"[/\\]", text)[-1]

    return False
