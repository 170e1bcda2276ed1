"""Canonical data structures shared by extraction, scoring and storage."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class StoryBoundary:
    """Title-based description of where one story starts inside a source."""

    title_en: str
    title_ja: str = ""
    next_title: str | None = None


@dataclass(slots=True)
class ExtractedStory:
    """Cleaned body text of one story, free of boilerplate and neighbours."""

    title_en: str
    title_ja: str
    body_text: str


@dataclass(slots=True)
class ExtractionResult:
    """Extractor output: found stories plus boundaries that could not be located."""

    stories: list[ExtractedStory] = field(default_factory=list)
    missing: list[StoryBoundary] = field(default_factory=list)

    @property
    def warnings(self) -> list[str]:
        return [f"Story title not found in source: {boundary.title_en!r}" for boundary in self.missing]


@dataclass(slots=True)
class SentenceRecord:
    """One positioned sentence as handed to the persistence sink."""

    position: int
    text_en: str
    text_ja: str
    difficulty_score: float
    proficiency_label: str
    word_count: int


@dataclass(slots=True)
class ChapterRecord:
    """Ordered sentences for one extracted story."""

    chapter_number: int
    title_en: str
    title_ja: str
    sentences: list[SentenceRecord] = field(default_factory=list)

    @property
    def sentence_count(self) -> int:
        return len(self.sentences)

    @property
    def word_count(self) -> int:
        return sum(sentence.word_count for sentence in self.sentences)


@dataclass(slots=True)
class BookConfig:
    """Declarative ingestion configuration for one source document."""

    url: str
    title_en: str
    title_ja: str
    author_en: str
    author_ja: str
    stories: list[StoryBoundary]
    description_ja: str = ""
    cefr_level: str = "B1"
    genre_tags: list[str] = field(default_factory=lambda: ["fairy tale", "classic"])
    skip_first_title_occurrence: bool = False
