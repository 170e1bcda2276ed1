"""Paragraph and sentence segmentation for extracted story bodies."""

from __future__ import annotations

import re

from yomu.ingestion.normalization import normalize_whitespace

MIN_PARAGRAPH_CHARS = 10
MIN_SENTENCE_CHARS = 3

_PARAGRAPH_BREAK_RE = re.compile(r"\n\s*\n")
_SENTENCE_RE = re.compile("[^.!?]*[.!?]+[\"'”’]?\\s*")
_TOKEN_RE = re.compile(r"\S+")


def split_paragraphs(text: str) -> list[str]:
    """Split on blank lines, collapse whitespace, and drop stray short lines."""

    paragraphs: list[str] = []
    for raw in _PARAGRAPH_BREAK_RE.split(text):
        paragraph = normalize_whitespace(raw)
        if len(paragraph) > MIN_PARAGRAPH_CHARS:
            paragraphs.append(paragraph)
    return paragraphs


def _split_paragraph(paragraph: str) -> list[str]:
    parts = _SENTENCE_RE.findall(paragraph)
    return parts or [paragraph]


def segment(body_text: str) -> list[str]:
    """Return the ordered sentences of a story body.

    A closing quote right after terminal punctuation stays with its
    sentence. Paragraphs without terminal punctuation are kept whole.
    """

    sentences: list[str] = []
    for paragraph in split_paragraphs(body_text):
        for part in _split_paragraph(paragraph):
            candidate = part.strip()
            if len(candidate) > MIN_SENTENCE_CHARS:
                sentences.append(candidate)
    return sentences


def count_words(sentence: str) -> int:
    """Count whitespace-separated tokens."""

    return len(_TOKEN_RE.findall(sentence))
