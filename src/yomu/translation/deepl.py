"""DeepL REST translation backend."""

from __future__ import annotations

from typing import Any, Sequence

import requests

from yomu.translation.base import TranslationError

DEEPL_FREE_URL = "https://api-free.deepl.com"
DEEPL_PRO_URL = "https://api.deepl.com"


def deepl_base_url(api_key: str) -> str:
    """Free-tier keys end with ":fx" and use a separate host."""

    return DEEPL_FREE_URL if api_key.endswith(":fx") else DEEPL_PRO_URL


class DeepLTranslator:
    """Translate English sentences to Japanese through DeepL's v2 API."""

    name = "deepl"

    def __init__(self, api_key: str, *, session: Any | None = None, timeout: float = 60.0) -> None:
        if not api_key.strip():
            raise ValueError("api_key cannot be empty")
        self._api_key = api_key.strip()
        self._session = session or requests.Session()
        self._timeout = timeout

    def translate_batch(self, sentences: Sequence[str]) -> list[str]:
        if not sentences:
            return []

        try:
            response = self._session.post(
                f"{deepl_base_url(self._api_key)}/v2/translate",
                headers={"Authorization": f"DeepL-Auth-Key {self._api_key}"},
                json={"text": list(sentences), "source_lang": "EN", "target_lang": "JA"},
                timeout=self._timeout,
            )
        except requests.RequestException as exc:
            raise TranslationError(backend=self.name, message=f"DeepL request failed: {exc}") from exc

        if not response.ok:
            raise TranslationError(
                backend=self.name,
                message=f"DeepL API error {response.status_code}: {response.text}",
            )

        try:
            rows = response.json()["translations"]
            return [str(row["text"]) for row in rows]
        except (ValueError, KeyError, TypeError) as exc:
            raise TranslationError(backend=self.name, message=f"Malformed DeepL response: {exc}") from exc
