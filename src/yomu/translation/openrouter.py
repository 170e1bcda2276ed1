"""OpenRouter chat-completions translation backend."""

from __future__ import annotations

import json
import time
from typing import Any, Callable, Sequence

import openai

from yomu.translation.base import TranslationError, call_with_retries
from yomu.translation.config import TranslationSettings


_TRANSIENT_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})
_TRANSIENT_ERRORS = (
    openai.APIConnectionError,
    openai.RateLimitError,
    openai.InternalServerError,
    ConnectionError,
    TimeoutError,
)

SYSTEM_PROMPT = (
    "You translate English literary sentences into natural Japanese for language learners. "
    "Reply with a JSON array of strings only: one Japanese translation per input sentence, same order."
)


def _is_transient(exc: Exception) -> bool:
    return isinstance(exc, _TRANSIENT_ERRORS) or getattr(exc, "status_code", None) in _TRANSIENT_STATUS_CODES


def _response_text(response: Any) -> str:
    choices = getattr(response, "choices", None)
    if not isinstance(choices, list) or not choices:
        return ""

    first = choices[0]
    message = getattr(first, "message", None)
    content = getattr(message, "content", None) if message is not None else None
    if content is None and isinstance(first, dict):
        message_dict = first.get("message", {})
        if isinstance(message_dict, dict):
            content = message_dict.get("content")

    if isinstance(content, list):
        content = "".join(str(part.get("text", "")) for part in content if isinstance(part, dict))
    return str(content or "").strip()


def _strip_code_fence(text: str) -> str:
    if not text.startswith("```"):
        return text
    lines = text.splitlines()[1:]
    if lines and lines[-1].strip().startswith("```"):
        lines = lines[:-1]
    return "\n".join(lines).strip()


class OpenRouterTranslator:
    """Chat-model translator with response validation and retry semantics."""

    name = "openrouter"

    def __init__(
        self,
        settings: TranslationSettings,
        *,
        client: Any | None = None,
        max_retries: int = 2,
        retry_base_seconds: float = 0.25,
        temperature: float = 0.2,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if retry_base_seconds < 0:
            raise ValueError("retry_base_seconds cannot be negative")
        if not settings.openrouter_model:
            raise ValueError("OPENROUTER_TRANSLATION_MODEL is required for the openrouter backend")

        self._settings = settings
        self._client = client or openai.OpenAI(
            api_key=settings.openrouter_api_key,
            base_url=settings.openrouter_base_url,
        )
        self._max_retries = max_retries
        self._retry_base_seconds = retry_base_seconds
        self._temperature = temperature
        self._sleep = sleep

    @property
    def model(self) -> str:
        return self._settings.openrouter_model

    def translate_batch(self, sentences: Sequence[str]) -> list[str]:
        if not sentences:
            return []

        payload = json.dumps(list(sentences), ensure_ascii=False)
        response = self._request_completion(payload)
        text = _strip_code_fence(_response_text(response))
        if not text:
            raise TranslationError(backend=self.name, message="Translation response returned empty text")

        try:
            translations = json.loads(text)
        except json.JSONDecodeError as exc:
            raise TranslationError(backend=self.name, message=f"Translation response is not JSON: {exc}") from exc

        if not isinstance(translations, list) or not all(isinstance(item, str) for item in translations):
            raise TranslationError(backend=self.name, message="Translation response must be a JSON array of strings")
        if len(translations) != len(sentences):
            raise TranslationError(
                backend=self.name,
                message=f"Translation count mismatch: expected {len(sentences)}, got {len(translations)}",
            )
        return [item.strip() for item in translations]

    def _request_completion(self, payload: str) -> Any:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": payload},
        ]
        return call_with_retries(
            lambda: self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                temperature=self._temperature,
            ),
            backend=self.name,
            is_retryable=_is_transient,
            max_retries=self._max_retries,
            base_delay=self._retry_base_seconds,
            sleep=self._sleep,
        )
