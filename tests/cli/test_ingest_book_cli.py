from __future__ import annotations

import json
from pathlib import Path

import pytest

from yomu.cli.ingest_book import main as ingest_book_main
from yomu.storage.repository import LibraryRepository

FIXTURE = Path(__file__).resolve().parent.parent / "fixtures" / "tales.txt"


@pytest.fixture(autouse=True)
def _clean_translation_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("YOMU_TRANSLATOR", "YOMU_TRANSLATION_BATCH_SIZE", "YOMU_TRANSLATION_PAUSE_SECONDS"):
        monkeypatch.delenv(name, raising=False)


def _write_catalog(path: Path, *story_titles: str) -> Path:
    catalog = [
        {
            "url": "https://example.org/tales.txt",
            "title_en": "Tales",
            "title_ja": "物語",
            "author_en": "Oscar Wilde",
            "author_ja": "オスカー・ワイルド",
            "skip_first_title_occurrence": True,
            "stories": [{"title_en": title, "title_ja": ""} for title in story_titles],
        }
    ]
    path.write_text(json.dumps(catalog, ensure_ascii=False), encoding="utf-8")
    return path


def test_cli_ingests_book_into_sqlite(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    catalog = _write_catalog(tmp_path / "books.json", "The Happy Prince", "The Selfish Giant")
    db_path = tmp_path / "library.db"

    exit_code = ingest_book_main(
        [
            "--catalog",
            str(catalog),
            "--book",
            "Tales",
            "--source",
            str(FIXTURE),
            "--db-path",
            str(db_path),
            "--translator",
            "stub",
        ]
    )
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["title"] == "Tales"
    assert payload["chapter_count"] == 2
    assert payload["sentence_count"] == 5
    assert payload["translator"] == "stub"
    assert payload["warnings"] == []

    with LibraryRepository(db_path) as repository:
        book = repository.get_book(payload["book_id"])
    assert book is not None
    assert book.total_sentences == 5


def test_cli_dry_run_reports_levels_and_warnings(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    catalog = _write_catalog(tmp_path / "books.json", "The Happy Prince", "The Selfish Giant", "The Devoted Friend")

    exit_code = ingest_book_main(["--catalog", str(catalog), "--source", str(FIXTURE), "--dry-run"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["dry_run"] is True
    assert [chapter["title_en"] for chapter in payload["chapters"]] == ["The Happy Prince", "The Selfish Giant"]
    first = payload["chapters"][0]
    assert sum(first["levels"].values()) == first["sentence_count"] == 3
    assert payload["warnings"] == ["Story title not found in source: 'The Devoted Friend'"]


def test_cli_lists_packaged_catalog(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = ingest_book_main(["--list"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 0
    assert payload["books"][0]["index"] == 0
    assert payload["books"][0]["stories"] == 12


def test_cli_returns_error_payload_for_unknown_book(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    catalog = _write_catalog(tmp_path / "books.json", "The Happy Prince")

    exit_code = ingest_book_main(["--catalog", str(catalog), "--book", "Moby Dick", "--dry-run"])
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert "Moby Dick" in payload["error"]


def test_cli_returns_error_payload_for_missing_source(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    catalog = _write_catalog(tmp_path / "books.json", "The Happy Prince")

    exit_code = ingest_book_main(
        ["--catalog", str(catalog), "--source", str(tmp_path / "absent.txt"), "--dry-run"]
    )
    payload = json.loads(capsys.readouterr().out)

    assert exit_code == 1
    assert "absent.txt" in payload["error"]
