"""Repository primitives for books, chapters and positioned sentences."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import sqlite3
from typing import Mapping, Sequence

from yomu.ingestion.models import BookConfig, ChapterRecord, SentenceRecord
from yomu.storage.schema import apply_runtime_pragmas, ensure_schema

logger = logging.getLogger(__name__)

SENTENCE_INSERT_BATCH = 50


@dataclass(slots=True)
class BookRow:
    id: int
    title_en: str
    title_ja: str
    author_en: str
    total_chapters: int
    total_sentences: int
    total_words: int
    policy_version: str


@dataclass(slots=True)
class ChapterRow:
    id: int
    book_id: int
    chapter_number: int
    title_en: str
    title_ja: str
    sentence_count: int
    word_count: int


class LibraryRepository:
    """SQLite-backed persistence sink for ingested books."""

    def __init__(self, db_path: str | Path) -> None:
        self._db_path = Path(db_path)
        self._connection = sqlite3.connect(str(self._db_path))
        self._connection.row_factory = sqlite3.Row
        apply_runtime_pragmas(self._connection)
        ensure_schema(self._connection)

    @property
    def connection(self) -> sqlite3.Connection:
        return self._connection

    def close(self) -> None:
        self._connection.close()

    def __enter__(self) -> "LibraryRepository":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def delete_books_by_title(self, titles: Sequence[str]) -> list[int]:
        """Delete books whose English title matches any of *titles*."""

        with self._connection:
            return self._delete_titles(titles)

    def _delete_titles(self, titles: Sequence[str]) -> list[int]:
        deleted: list[int] = []
        for title in titles:
            rows = self._connection.execute("SELECT id FROM books WHERE title_en = ?", (title,)).fetchall()
            for row in rows:
                book_id = int(row["id"])
                self._connection.execute("DELETE FROM books WHERE id = ?", (book_id,))
                logger.info("Deleted existing book %d (%s)", book_id, title)
                deleted.append(book_id)
        return deleted

    def replace_book(
        self,
        config: BookConfig,
        chapters: Sequence[ChapterRecord],
        *,
        policy_version: str,
    ) -> int:
        """Drop earlier copies of the book and insert it with all chapters in one transaction."""

        titles = [config.title_en, *(story.title_en for story in config.stories)]
        total_sentences = sum(chapter.sentence_count for chapter in chapters)
        total_words = sum(chapter.word_count for chapter in chapters)

        with self._connection:
            self._delete_titles(titles)
            cursor = self._connection.execute(
                """
                INSERT INTO books(
                    title_en, title_ja, author_en, author_ja, description_ja, cefr_level,
                    genre_tags, total_chapters, total_sentences, total_words, source_url, policy_version
                )
                VALUES(?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    config.title_en,
                    config.title_ja,
                    config.author_en,
                    config.author_ja,
                    config.description_ja,
                    config.cefr_level,
                    json.dumps(config.genre_tags, ensure_ascii=False),
                    len(chapters),
                    total_sentences,
                    total_words,
                    config.url,
                    policy_version,
                ),
            )
            book_id = int(cursor.lastrowid)

            for chapter in chapters:
                chapter_id = self._insert_chapter(book_id, chapter)
                self._insert_sentences(chapter_id, chapter.sentences)

        return book_id

    def _insert_chapter(self, book_id: int, chapter: ChapterRecord) -> int:
        cursor = self._connection.execute(
            """
            INSERT INTO chapters(book_id, chapter_number, title_en, title_ja, sentence_count, word_count)
            VALUES(?, ?, ?, ?, ?, ?)
            """,
            (
                book_id,
                chapter.chapter_number,
                chapter.title_en,
                chapter.title_ja,
                chapter.sentence_count,
                chapter.word_count,
            ),
        )
        return int(cursor.lastrowid)

    def _insert_sentences(self, chapter_id: int, sentences: Sequence[SentenceRecord]) -> None:
        rows = [
            (
                chapter_id,
                sentence.position,
                sentence.text_en,
                sentence.text_ja,
                sentence.difficulty_score,
                sentence.word_count,
                sentence.proficiency_label,
            )
            for sentence in sentences
        ]
        for start in range(0, len(rows), SENTENCE_INSERT_BATCH):
            self._connection.executemany(
                """
                INSERT INTO sentences(
                    chapter_id, position, text_en, text_ja, difficulty_score, word_count, cefr_estimate
                )
                VALUES(?, ?, ?, ?, ?, ?, ?)
                """,
                rows[start : start + SENTENCE_INSERT_BATCH],
            )

    def update_translations(self, chapter_id: int, translations: Mapping[int, str]) -> int:
        """Backfill Japanese text by sentence position; returns updated row count."""

        with self._connection:
            cursor = self._connection.executemany(
                "UPDATE sentences SET text_ja = ? WHERE chapter_id = ? AND position = ?",
                [(text_ja, chapter_id, position) for position, text_ja in sorted(translations.items())],
            )
        return int(cursor.rowcount)

    def get_book(self, book_id: int) -> BookRow | None:
        row = self._connection.execute(
            """
            SELECT id, title_en, title_ja, author_en, total_chapters, total_sentences, total_words, policy_version
            FROM books
            WHERE id = ?
            """,
            (book_id,),
        ).fetchone()
        if row is None:
            return None
        return BookRow(
            id=int(row["id"]),
            title_en=row["title_en"],
            title_ja=row["title_ja"],
            author_en=row["author_en"],
            total_chapters=int(row["total_chapters"]),
            total_sentences=int(row["total_sentences"]),
            total_words=int(row["total_words"]),
            policy_version=row["policy_version"],
        )

    def list_chapters(self, book_id: int) -> list[ChapterRow]:
        rows = self._connection.execute(
            """
            SELECT id, book_id, chapter_number, title_en, title_ja, sentence_count, word_count
            FROM chapters
            WHERE book_id = ?
            ORDER BY chapter_number ASC
            """,
            (book_id,),
        ).fetchall()
        return [
            ChapterRow(
                id=int(row["id"]),
                book_id=int(row["book_id"]),
                chapter_number=int(row["chapter_number"]),
                title_en=row["title_en"],
                title_ja=row["title_ja"],
                sentence_count=int(row["sentence_count"]),
                word_count=int(row["word_count"]),
            )
            for row in rows
        ]

    def list_sentences(self, chapter_id: int) -> list[SentenceRecord]:
        rows = self._connection.execute(
            """
            SELECT position, text_en, text_ja, difficulty_score, word_count, cefr_estimate
            FROM sentences
            WHERE chapter_id = ?
            ORDER BY position ASC
            """,
            (chapter_id,),
        ).fetchall()
        return [
            SentenceRecord(
                position=int(row["position"]),
                text_en=row["text_en"],
                text_ja=row["text_ja"],
                difficulty_score=float(row["difficulty_score"]),
                proficiency_label=row["cefr_estimate"],
                word_count=int(row["word_count"]),
            )
            for row in rows
        ]
