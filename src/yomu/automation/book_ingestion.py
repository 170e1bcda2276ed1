"""End-to-end book ingestion: fetch, extract, segment, score, translate, persist."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import time
from typing import Callable, Protocol

from yomu.ingestion.boilerplate import strip_boilerplate
from yomu.ingestion.extractor import extract_stories
from yomu.ingestion.models import BookConfig, ChapterRecord
from yomu.ingestion.segmenter import segment
from yomu.scoring.difficulty import score_sentences
from yomu.scoring.policy import DEFAULT_POLICY, DifficultyPolicy
from yomu.storage.repository import LibraryRepository
from yomu.translation.base import Translator, translate_in_batches

logger = logging.getLogger(__name__)


class SourceProvider(Protocol):
    def fetch(self, locator: str) -> str:
        """Return the raw document text for *locator*."""


@dataclass(slots=True)
class PreparedBook:
    """Chapters built from one source, before translation and persistence."""

    config: BookConfig
    chapters: list[ChapterRecord]
    warnings: list[str] = field(default_factory=list)

    @property
    def total_sentences(self) -> int:
        return sum(chapter.sentence_count for chapter in self.chapters)

    @property
    def total_words(self) -> int:
        return sum(chapter.word_count for chapter in self.chapters)


@dataclass(slots=True)
class BookIngestionResult:
    title: str
    book_id: int | None
    chapter_count: int
    sentence_count: int
    word_count: int
    translator: str
    policy_version: str
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "title": self.title,
            "book_id": self.book_id,
            "chapter_count": self.chapter_count,
            "sentence_count": self.sentence_count,
            "word_count": self.word_count,
            "translator": self.translator,
            "policy_version": self.policy_version,
            "warnings": self.warnings,
        }


def prepare_book(
    raw: str,
    config: BookConfig,
    *,
    policy: DifficultyPolicy = DEFAULT_POLICY,
) -> PreparedBook:
    """Run the pure part of ingestion over an already fetched document."""

    extraction = extract_stories(
        strip_boilerplate(raw),
        config.stories,
        skip_first_occurrence=config.skip_first_title_occurrence,
    )

    chapters: list[ChapterRecord] = []
    for number, story in enumerate(extraction.stories, start=1):
        sentences = segment(story.body_text)
        chapter = ChapterRecord(
            chapter_number=number,
            title_en=story.title_en,
            title_ja=story.title_ja,
            sentences=score_sentences(sentences, policy=policy),
        )
        logger.info(
            "Chapter %d %r: %d sentences, %d words",
            number,
            story.title_en,
            chapter.sentence_count,
            chapter.word_count,
        )
        chapters.append(chapter)

    return PreparedBook(config=config, chapters=chapters, warnings=extraction.warnings)


def apply_translations(chapters: list[ChapterRecord], translations: list[str]) -> None:
    """Distribute a flat translation list back onto chapter sentences in order."""

    expected = sum(chapter.sentence_count for chapter in chapters)
    if len(translations) != expected:
        raise ValueError(f"translations must align with sentences: expected {expected}, got {len(translations)}")

    offset = 0
    for chapter in chapters:
        for sentence in chapter.sentences:
            sentence.text_ja = translations[offset]
            offset += 1


class BookIngestionJob:
    """Drive one book through the pipeline with explicitly supplied collaborators."""

    def __init__(
        self,
        *,
        fetcher: SourceProvider,
        translator: Translator,
        repository: LibraryRepository | None = None,
        policy: DifficultyPolicy = DEFAULT_POLICY,
        batch_size: int = 50,
        pause_seconds: float = 0.5,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._fetcher = fetcher
        self._translator = translator
        self._repository = repository
        self._policy = policy
        self._batch_size = batch_size
        self._pause_seconds = pause_seconds
        self._sleep = sleep

    def run(self, config: BookConfig, *, source: str | None = None) -> BookIngestionResult:
        """Ingest *config*; *source* overrides the configured URL (path or URL)."""

        logger.info("Starting ingestion: %s", config.title_en)
        raw = self._fetcher.fetch(source or config.url)
        prepared = prepare_book(raw, config, policy=self._policy)

        english = [sentence.text_en for chapter in prepared.chapters for sentence in chapter.sentences]
        translations = translate_in_batches(
            self._translator,
            english,
            batch_size=self._batch_size,
            pause_seconds=self._pause_seconds,
            sleep=self._sleep,
        )
        apply_translations(prepared.chapters, translations)

        book_id: int | None = None
        if self._repository is not None:
            book_id = self._repository.replace_book(
                config,
                prepared.chapters,
                policy_version=self._policy.version,
            )
            logger.info("Stored book %d: %s", book_id, config.title_en)

        return BookIngestionResult(
            title=config.title_en,
            book_id=book_id,
            chapter_count=len(prepared.chapters),
            sentence_count=prepared.total_sentences,
            word_count=prepared.total_words,
            translator=self._translator.name,
            policy_version=self._policy.version,
            warnings=list(prepared.warnings),
        )
