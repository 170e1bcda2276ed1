"""Text normalization helpers used during extraction and segmentation."""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")
_ESCAPED_WHITESPACE_RE = re.compile(r"(?:\\?\s)+")


def normalize_whitespace(text: str) -> str:
    """Collapse repeated whitespace and trim boundaries."""

    return _WHITESPACE_RE.sub(" ", text).strip()


def flexible_whitespace_pattern(literal: str) -> str:
    """Escape *literal* and let each whitespace run match any whitespace run."""

    escaped = re.escape(literal.strip())
    return _ESCAPED_WHITESPACE_RE.sub(lambda _match: r"\s+", escaped)


def normalize_newlines(text: str) -> str:
    """Convert CRLF and bare CR line endings to LF."""

    return text.replace("\r\n", "\n").replace("\r", "\n")
