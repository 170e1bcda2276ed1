"""Story extraction from multi-story source documents."""

from __future__ import annotations

from functools import lru_cache
import logging
import re
from typing import Sequence

from yomu.ingestion.boilerplate import strip_boilerplate
from yomu.ingestion.models import ExtractedStory, ExtractionResult, StoryBoundary
from yomu.ingestion.normalization import flexible_whitespace_pattern

logger = logging.getLogger(__name__)

_COLOPHON_RULE_RE = re.compile(r"\*\s*\*\s*\*\s*\*\s*\*[\s\S]*$")
_LEADING_WHITESPACE_RE = re.compile(r"^\s+")


@lru_cache(maxsize=256)
def build_title_pattern(title: str) -> re.Pattern[str]:
    """Compile a line-anchored, case-insensitive matcher for a literal title.

    The title is escaped before whitespace runs are made flexible, so
    punctuation inside titles is never read as pattern syntax. A trailing
    period after the title and a CR line ending are tolerated.
    """

    if not title.strip():
        raise ValueError("title cannot be empty")

    body = flexible_whitespace_pattern(title)
    return re.compile(rf"^[ \t]*{body}\.?[ \t]*\r?$", re.IGNORECASE | re.MULTILINE)


def _drop_table_of_contents(text: str, first_title: str) -> str:
    matches = build_title_pattern(first_title).finditer(text)
    first = next(matches, None)
    second = next(matches, None)
    if first is None or second is None:
        return text
    return text[second.start() :]


def _with_next_titles(boundaries: Sequence[StoryBoundary]) -> list[StoryBoundary]:
    resolved: list[StoryBoundary] = []
    for index, boundary in enumerate(boundaries):
        next_title = (boundary.next_title or "").strip() or None
        if next_title is None and index + 1 < len(boundaries):
            next_title = boundaries[index + 1].title_en
        resolved.append(StoryBoundary(title_en=boundary.title_en, title_ja=boundary.title_ja, next_title=next_title))
    return resolved


def extract_stories(
    text: str,
    boundaries: Sequence[StoryBoundary],
    *,
    skip_first_occurrence: bool = False,
) -> ExtractionResult:
    """Slice each configured story out of boilerplate-free *text*.

    Stories are returned in boundary order. A boundary whose title cannot be
    found is skipped, logged as a warning, and reported in ``missing``.
    """

    result = ExtractionResult()
    if not boundaries:
        return result

    if skip_first_occurrence:
        text = _drop_table_of_contents(text, boundaries[0].title_en)

    resolved = _with_next_titles(boundaries)
    cursor = 0

    for boundary in resolved:
        match = build_title_pattern(boundary.title_en).search(text, cursor)
        if match is None:
            logger.warning("Story title not found in source: %r", boundary.title_en)
            result.missing.append(boundary)
            continue

        remainder = text[match.end() :]
        lead = _LEADING_WHITESPACE_RE.match(remainder)
        body_start = match.end() + (lead.end() if lead else 0)
        body = text[body_start:]
        cursor = body_start

        if boundary.next_title:
            next_match = build_title_pattern(boundary.next_title).search(body)
            if next_match is not None:
                body = body[: next_match.start()]
                cursor = body_start + next_match.start()
        else:
            body = _COLOPHON_RULE_RE.sub("", body)

        result.stories.append(
            ExtractedStory(
                title_en=boundary.title_en,
                title_ja=boundary.title_ja,
                body_text=body.strip(),
            )
        )

    return result


def extract_story(raw: str, title: str, next_title: str | None = None) -> str:
    """Strip boilerplate from *raw* and return one story body ("" when not found)."""

    boundary = StoryBoundary(title_en=title, next_title=next_title)
    result = extract_stories(strip_boilerplate(raw), [boundary])
    return result.stories[0].body_text if result.stories else ""
