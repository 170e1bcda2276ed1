"""CLI command that ingests one catalog book into the reading library."""

from __future__ import annotations

import argparse
from collections import Counter
import json
import logging

from dotenv import load_dotenv

from yomu.automation.book_ingestion import BookIngestionJob, prepare_book
from yomu.catalog.loader import CatalogError, load_catalog, select_book
from yomu.ingestion.source import SourceFetchError, SourceFetcher
from yomu.scoring.policy import DEFAULT_POLICY, DifficultyPolicy
from yomu.storage.repository import LibraryRepository
from yomu.translation import TranslationError, TranslationSettings, build_translator


load_dotenv()

LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest a public-domain book into the bilingual reading library")
    parser.add_argument("--book", default="0", help="Catalog index or English title of the book to ingest")
    parser.add_argument("--catalog", default=None, help="Path to a JSON book catalog (defaults to the packaged one)")
    parser.add_argument("--source", default=None, help="Local file or URL overriding the catalog source URL")
    parser.add_argument("--db-path", default=".yomu-library.db", help="SQLite database path")
    parser.add_argument(
        "--translator",
        choices=("stub", "deepl", "openrouter"),
        default=None,
        help="Translation backend (defaults to YOMU_TRANSLATOR or stub)",
    )
    parser.add_argument("--policy", default=None, help="Path to a JSON difficulty policy")
    parser.add_argument("--dry-run", action="store_true", help="Extract and score only; skip translation and storage")
    parser.add_argument("--list", action="store_true", help="List catalog books and exit")
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def _dry_run(args: argparse.Namespace, policy: DifficultyPolicy) -> dict[str, object]:
    catalog = load_catalog(args.catalog)
    config = select_book(catalog, args.book)
    raw = SourceFetcher().fetch(args.source or config.url)
    prepared = prepare_book(raw, config, policy=policy)

    chapters = []
    for chapter in prepared.chapters:
        levels = Counter(sentence.proficiency_label for sentence in chapter.sentences)
        chapters.append(
            {
                "chapter_number": chapter.chapter_number,
                "title_en": chapter.title_en,
                "sentence_count": chapter.sentence_count,
                "word_count": chapter.word_count,
                "levels": dict(sorted(levels.items())),
            }
        )

    return {
        "title": config.title_en,
        "dry_run": True,
        "policy_version": policy.version,
        "chapter_count": len(prepared.chapters),
        "sentence_count": prepared.total_sentences,
        "word_count": prepared.total_words,
        "chapters": chapters,
        "warnings": prepared.warnings,
    }


def _ingest(args: argparse.Namespace, policy: DifficultyPolicy) -> dict[str, object]:
    catalog = load_catalog(args.catalog)
    config = select_book(catalog, args.book)
    settings = TranslationSettings.from_env(backend=args.translator)

    with LibraryRepository(args.db_path) as repository:
        job = BookIngestionJob(
            fetcher=SourceFetcher(),
            translator=build_translator(settings),
            repository=repository,
            policy=policy,
            batch_size=settings.batch_size,
            pause_seconds=settings.pause_seconds,
        )
        result = job.run(config, source=args.source)

    payload = result.to_dict()
    payload["db_path"] = args.db_path
    return payload


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s %(levelname)s %(message)s")

    if args.list:
        try:
            catalog = load_catalog(args.catalog)
        except CatalogError as exc:
            print(json.dumps({"error": str(exc)}, ensure_ascii=False, indent=2))
            return 1
        books = [
            {"index": index, "title_en": book.title_en, "stories": len(book.stories), "url": book.url}
            for index, book in enumerate(catalog)
        ]
        print(json.dumps({"books": books}, ensure_ascii=False, indent=2))
        return 0

    try:
        policy = DifficultyPolicy.from_json_file(args.policy) if args.policy else DEFAULT_POLICY
        payload = _dry_run(args, policy) if args.dry_run else _ingest(args, policy)
    except (CatalogError, SourceFetchError, TranslationError, ValueError) as exc:
        LOGGER.error("Ingestion failed: %s", exc)
        print(json.dumps({"book": args.book, "error": str(exc)}, ensure_ascii=False, indent=2))
        return 1

    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
