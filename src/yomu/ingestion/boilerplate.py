"""Publisher boilerplate removal for Project Gutenberg style text dumps."""

from __future__ import annotations

import re

from yomu.ingestion.normalization import normalize_newlines

START_MARKERS: tuple[str, ...] = (
    "*** START OF THE PROJECT GUTENBERG EBOOK",
    "*** START OF THIS PROJECT GUTENBERG EBOOK",
)
END_MARKERS: tuple[str, ...] = (
    "*** END OF THE PROJECT GUTENBERG EBOOK",
    "*** END OF THIS PROJECT GUTENBERG EBOOK",
)

_ANNOTATION_RE = re.compile(r"\[(?:Picture|Illustration)[^\]]*\]", re.IGNORECASE)


def _first_marker(text: str, markers: tuple[str, ...]) -> int:
    positions = [index for index in (text.find(marker) for marker in markers) if index != -1]
    return min(positions) if positions else -1


def strip_boilerplate(raw: str) -> str:
    """Drop header/footer boilerplate and inline picture annotations.

    Everything up to and including the line carrying a start marker is
    removed, as is everything from an end marker onward. A missing marker
    leaves that side of the text untouched. Line endings come back as LF.
    """

    text = normalize_newlines(raw)

    start = _first_marker(text, START_MARKERS)
    if start != -1:
        line_end = text.find("\n", start)
        text = "" if line_end == -1 else text[line_end + 1 :]

    end = _first_marker(text, END_MARKERS)
    if end != -1:
        text = text[:end]

    return _ANNOTATION_RE.sub("", text)
