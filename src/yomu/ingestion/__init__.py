"""Ingestion package interfaces."""

from .boilerplate import strip_boilerplate
from .extractor import build_title_pattern, extract_stories, extract_story
from .models import (
    BookConfig,
    ChapterRecord,
    ExtractedStory,
    ExtractionResult,
    SentenceRecord,
    StoryBoundary,
)
from .segmenter import count_words, segment, split_paragraphs

__all__ = [
    "BookConfig",
    "ChapterRecord",
    "ExtractedStory",
    "ExtractionResult",
    "SentenceRecord",
    "StoryBoundary",
    "build_title_pattern",
    "count_words",
    "extract_stories",
    "extract_story",
    "segment",
    "split_paragraphs",
    "strip_boilerplate",
]
