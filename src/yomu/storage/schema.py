"""SQLite schema and pragmas for the reading library."""

from __future__ import annotations

import sqlite3


PRAGMA_BUSY_TIMEOUT_MS = 5000


def apply_runtime_pragmas(connection: sqlite3.Connection) -> None:
    """Apply runtime pragmas used by ingestion writers."""

    connection.execute("PRAGMA journal_mode=WAL;")
    connection.execute(f"PRAGMA busy_timeout={PRAGMA_BUSY_TIMEOUT_MS};")
    connection.execute("PRAGMA synchronous=NORMAL;")
    connection.execute("PRAGMA foreign_keys=ON;")


def ensure_schema(connection: sqlite3.Connection) -> None:
    """Create book, chapter and sentence tables if missing."""

    connection.executescript(
        """
        CREATE TABLE IF NOT EXISTS books (
            id INTEGER PRIMARY KEY,
            title_en TEXT NOT NULL,
            title_ja TEXT NOT NULL,
            author_en TEXT NOT NULL,
            author_ja TEXT NOT NULL,
            description_ja TEXT NOT NULL DEFAULT '',
            cefr_level TEXT NOT NULL,
            genre_tags TEXT NOT NULL DEFAULT '[]',
            total_chapters INTEGER NOT NULL,
            total_sentences INTEGER NOT NULL,
            total_words INTEGER NOT NULL,
            license_type TEXT NOT NULL DEFAULT 'PUBLIC_DOMAIN',
            source_url TEXT NOT NULL,
            policy_version TEXT NOT NULL,
            created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
        );

        CREATE INDEX IF NOT EXISTS idx_books_title_en ON books(title_en);

        CREATE TABLE IF NOT EXISTS chapters (
            id INTEGER PRIMARY KEY,
            book_id INTEGER NOT NULL,
            chapter_number INTEGER NOT NULL,
            title_en TEXT NOT NULL,
            title_ja TEXT NOT NULL,
            sentence_count INTEGER NOT NULL,
            word_count INTEGER NOT NULL,
            FOREIGN KEY(book_id) REFERENCES books(id) ON DELETE CASCADE,
            UNIQUE(book_id, chapter_number)
        );

        CREATE TABLE IF NOT EXISTS sentences (
            id INTEGER PRIMARY KEY,
            chapter_id INTEGER NOT NULL,
            position INTEGER NOT NULL CHECK(position >= 1),
            text_en TEXT NOT NULL,
            text_ja TEXT NOT NULL,
            difficulty_score REAL NOT NULL,
            word_count INTEGER NOT NULL CHECK(word_count >= 0),
            cefr_estimate TEXT NOT NULL CHECK(cefr_estimate IN ('A1', 'A2', 'B1', 'B2', 'C1', 'C2')),
            FOREIGN KEY(chapter_id) REFERENCES chapters(id) ON DELETE CASCADE,
            UNIQUE(chapter_id, position)
        );
        """
    )
