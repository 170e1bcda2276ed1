"""Offline translator that marks sentences as untranslated."""

from __future__ import annotations

from typing import Sequence

UNTRANSLATED_PREFIX = "【未翻訳】"


class StubTranslator:
    """Prefix each sentence so untranslated rows are easy to find and backfill."""

    name = "stub"

    def __init__(self, prefix: str = UNTRANSLATED_PREFIX) -> None:
        self._prefix = prefix

    def translate_batch(self, sentences: Sequence[str]) -> list[str]:
        return [f"{self._prefix}{sentence}" for sentence in sentences]
