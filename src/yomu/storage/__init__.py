"""SQLite persistence for ingested books."""

from .repository import BookRow, ChapterRow, LibraryRepository

__all__ = ["BookRow", "ChapterRow", "LibraryRepository"]
