from __future__ import annotations

import json
from pathlib import Path

import pytest

from yomu.catalog.loader import CatalogError, load_catalog, parse_book, select_book


def _entry(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "url": "https://example.org/tales.txt",
        "title_en": "Tales",
        "title_ja": "物語",
        "author_en": "Oscar Wilde",
        "author_ja": "オスカー・ワイルド",
        "stories": [{"title_en": "The Happy Prince", "title_ja": "幸福な王子"}],
    }
    data.update(overrides)
    return data


def test_packaged_catalog_lists_gutenberg_books() -> None:
    catalog = load_catalog()

    assert [book.title_en for book in catalog] == [
        "Alice's Adventures in Wonderland",
        "The Gift of the Magi",
        "The Happy Prince and Other Tales",
    ]
    alice = catalog[0]
    assert alice.skip_first_title_occurrence is True
    assert len(alice.stories) == 12
    assert alice.stories[0].title_en == "CHAPTER I. Down the Rabbit-Hole"
    assert alice.stories[0].title_ja == "第1章 うさぎ穴へ"
    assert catalog[1].skip_first_title_occurrence is False


def test_parse_book_applies_defaults() -> None:
    book = parse_book(_entry())

    assert book.cefr_level == "B1"
    assert book.genre_tags == ["fairy tale", "classic"]
    assert book.skip_first_title_occurrence is False
    assert book.stories[0].next_title is None


def test_parse_book_rejects_incomplete_entries() -> None:
    with pytest.raises(CatalogError, match="url"):
        parse_book({key: value for key, value in _entry().items() if key != "url"})
    with pytest.raises(CatalogError, match="at least one story"):
        parse_book(_entry(stories=[]))
    with pytest.raises(CatalogError, match="without title_en"):
        parse_book(_entry(stories=[{"title_ja": "題名"}]))


def test_load_catalog_from_custom_path(tmp_path: Path) -> None:
    path = tmp_path / "books.json"
    path.write_text(json.dumps([_entry()], ensure_ascii=False), encoding="utf-8")

    catalog = load_catalog(path)

    assert len(catalog) == 1
    assert catalog[0].title_en == "Tales"


def test_load_catalog_reports_bad_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    not_a_list = tmp_path / "object.json"
    not_a_list.write_text(json.dumps(_entry()), encoding="utf-8")

    with pytest.raises(CatalogError, match="not valid JSON"):
        load_catalog(broken)
    with pytest.raises(CatalogError, match="JSON list"):
        load_catalog(not_a_list)
    with pytest.raises(CatalogError, match="Failed to read catalog"):
        load_catalog(tmp_path / "absent.json")


def test_select_book_by_index_or_title() -> None:
    catalog = load_catalog()

    assert select_book(catalog, "1").title_en == "The Gift of the Magi"
    assert select_book(catalog, "the happy prince and other tales").author_en == "Oscar Wilde"
    with pytest.raises(CatalogError, match="out of range"):
        select_book(catalog, "9")
    with pytest.raises(CatalogError, match="No book titled"):
        select_book(catalog, "Moby Dick")


def test_blank_next_title_is_treated_as_absent() -> None:
    book = parse_book(_entry(stories=[{"title_en": "The Happy Prince", "next_title": "   "}]))

    assert book.stories[0].next_title is None
