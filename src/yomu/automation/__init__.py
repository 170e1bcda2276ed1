"""Ingestion job orchestration."""

from yomu.automation.book_ingestion import (
    BookIngestionJob,
    BookIngestionResult,
    PreparedBook,
    apply_translations,
    prepare_book,
)

__all__ = [
    "BookIngestionJob",
    "BookIngestionResult",
    "PreparedBook",
    "apply_translations",
    "prepare_book",
]
