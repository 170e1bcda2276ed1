from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest
import requests

from yomu.translation.base import TranslationError
from yomu.translation.deepl import DEEPL_FREE_URL, DEEPL_PRO_URL, DeepLTranslator, deepl_base_url


class _FakeSession:
    def __init__(self, response: Any) -> None:
        self._response = response
        self.calls: list[dict[str, Any]] = []

    def post(self, url: str, **kwargs: Any) -> Any:
        self.calls.append({"url": url, **kwargs})
        if isinstance(self._response, Exception):
            raise self._response
        return self._response


def _response(status_code: int, payload: Any = None, text: str = "") -> SimpleNamespace:
    return SimpleNamespace(
        ok=200 <= status_code < 300,
        status_code=status_code,
        text=text,
        json=lambda: payload,
    )


def test_free_keys_use_free_host() -> None:
    assert deepl_base_url("abc:fx") == DEEPL_FREE_URL
    assert deepl_base_url("abc") == DEEPL_PRO_URL


def test_translate_batch_posts_sentences_and_returns_texts() -> None:
    session = _FakeSession(_response(200, {"translations": [{"text": "こんにちは。"}, {"text": "さようなら。"}]}))
    translator = DeepLTranslator("secret:fx", session=session)

    result = translator.translate_batch(["Hello.", "Goodbye."])

    assert result == ["こんにちは。", "さようなら。"]
    call = session.calls[0]
    assert call["url"] == f"{DEEPL_FREE_URL}/v2/translate"
    assert call["headers"] == {"Authorization": "DeepL-Auth-Key secret:fx"}
    assert call["json"] == {"text": ["Hello.", "Goodbye."], "source_lang": "EN", "target_lang": "JA"}


def test_error_status_raises_translation_error() -> None:
    translator = DeepLTranslator("secret", session=_FakeSession(_response(456, text="Quota exceeded")))

    with pytest.raises(TranslationError, match="DeepL API error 456: Quota exceeded"):
        translator.translate_batch(["Hello."])


def test_network_failure_and_malformed_payload_raise_translation_error() -> None:
    offline = DeepLTranslator("secret", session=_FakeSession(requests.ConnectionError("offline")))
    with pytest.raises(TranslationError, match="request failed"):
        offline.translate_batch(["Hello."])

    malformed = DeepLTranslator("secret", session=_FakeSession(_response(200, {"unexpected": []})))
    with pytest.raises(TranslationError, match="Malformed"):
        malformed.translate_batch(["Hello."])


def test_empty_batch_skips_request_and_empty_key_is_rejected() -> None:
    session = _FakeSession(_response(200, {"translations": []}))

    assert DeepLTranslator("secret", session=session).translate_batch([]) == []
    assert session.calls == []
    with pytest.raises(ValueError, match="api_key"):
        DeepLTranslator("  ")
