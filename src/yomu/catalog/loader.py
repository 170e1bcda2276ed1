"""Book catalog loading from packaged or user-supplied JSON."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
import json
from pathlib import Path
from typing import Any, Mapping, Sequence

from yomu.ingestion.models import BookConfig, StoryBoundary

_CATALOG_RESOURCE = "books.json"
_REQUIRED_FIELDS = ("url", "title_en", "title_ja", "author_en", "author_ja", "stories")


@dataclass(slots=True)
class CatalogError(Exception):
    """Raised for malformed catalog entries or unknown book selections."""

    message: str

    def __str__(self) -> str:
        return self.message


def _parse_story(entry: Any, *, book: str) -> StoryBoundary:
    if not isinstance(entry, Mapping) or not str(entry.get("title_en", "")).strip():
        raise CatalogError(f"Story entry without title_en in book {book!r}")
    next_title = str(entry.get("next_title") or "").strip()
    return StoryBoundary(
        title_en=str(entry["title_en"]),
        title_ja=str(entry.get("title_ja", "")),
        next_title=next_title or None,
    )


def parse_book(entry: Mapping[str, Any]) -> BookConfig:
    missing = [name for name in _REQUIRED_FIELDS if name not in entry]
    if missing:
        raise CatalogError(f"Catalog entry missing fields: {', '.join(missing)}")

    title = str(entry["title_en"])
    stories = entry["stories"]
    if not isinstance(stories, list) or not stories:
        raise CatalogError(f"Book {title!r} must list at least one story")

    return BookConfig(
        url=str(entry["url"]),
        title_en=title,
        title_ja=str(entry["title_ja"]),
        author_en=str(entry["author_en"]),
        author_ja=str(entry["author_ja"]),
        description_ja=str(entry.get("description_ja", "")),
        cefr_level=str(entry.get("cefr_level", "B1")),
        genre_tags=[str(tag) for tag in entry.get("genre_tags", ["fairy tale", "classic"])],
        skip_first_title_occurrence=bool(entry.get("skip_first_title_occurrence", False)),
        stories=[_parse_story(story, book=title) for story in stories],
    )


def load_catalog(path: str | Path | None = None) -> list[BookConfig]:
    """Load book configs from *path*, or the packaged catalog when omitted."""

    if path is None:
        payload = resources.files("yomu.catalog").joinpath(_CATALOG_RESOURCE).read_text(encoding="utf-8")
    else:
        try:
            payload = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogError(f"Failed to read catalog {path}: {exc}") from exc

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise CatalogError("Catalog must be a JSON list of books")
    return [parse_book(entry) for entry in data]


def select_book(catalog: Sequence[BookConfig], key: str) -> BookConfig:
    """Pick a book by zero-based index or case-insensitive English title."""

    if key.isdigit():
        index = int(key)
        if index < len(catalog):
            return catalog[index]
        raise CatalogError(f"Book index {index} out of range (catalog has {len(catalog)} books)")

    wanted = key.strip().casefold()
    for book in catalog:
        if book.title_en.casefold() == wanted:
            return book
    raise CatalogError(f"No book titled {key!r} in catalog")
