"""Translator contract and the batching driver used by ingestion jobs."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import math
import time
from typing import Callable, Protocol, Sequence, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(slots=True)
class TranslationError(RuntimeError):
    """Domain error raised for failed or malformed translation responses."""

    backend: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (backend={self.backend})"


@runtime_checkable
class Translator(Protocol):
    """Backend turning English sentences into Japanese, index for index."""

    name: str

    def translate_batch(self, sentences: Sequence[str]) -> list[str]:
        """Return one translation per input sentence, in input order."""


def translate_in_batches(
    translator: Translator,
    sentences: Sequence[str],
    *,
    batch_size: int = 50,
    pause_seconds: float = 0.5,
    sleep: Callable[[float], None] = time.sleep,
) -> list[str]:
    """Translate *sentences* in fixed-size groups, pausing between calls.

    Backend failures propagate unchanged; a batch whose output length differs
    from its input raises ``TranslationError``.
    """

    if batch_size < 1:
        raise ValueError("batch_size must be >= 1")
    if pause_seconds < 0:
        raise ValueError("pause_seconds cannot be negative")

    total_batches = math.ceil(len(sentences) / batch_size)
    translated: list[str] = []

    for batch_no, start in enumerate(range(0, len(sentences), batch_size), start=1):
        batch = list(sentences[start : start + batch_size])
        output = translator.translate_batch(batch)
        if len(output) != len(batch):
            raise TranslationError(
                backend=translator.name,
                message=f"Batch {batch_no} length mismatch: expected {len(batch)}, got {len(output)}",
            )
        translated.extend(output)
        logger.info("Translated batch %d/%d (%d sentences)", batch_no, total_batches, len(batch))

        if batch_no < total_batches and pause_seconds:
            sleep(pause_seconds)

    return translated


def call_with_retries(
    request: Callable[[], T],
    *,
    backend: str,
    is_retryable: Callable[[Exception], bool],
    max_retries: int = 2,
    base_delay: float = 0.25,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Run *request*, retrying transient failures with exponential backoff.

    The last failure is wrapped in ``TranslationError`` once retries are
    exhausted or the error is not transient.
    """

    attempt = 0
    while True:
        try:
            return request()
        except Exception as exc:
            if attempt >= max_retries or not is_retryable(exc):
                raise TranslationError(
                    backend=backend,
                    message=f"Translation request failed after {attempt + 1} attempt(s): {exc}",
                ) from exc
            delay = base_delay * (2**attempt)
            logger.warning("Retrying %s request in %.2fs after error: %s", backend, delay, exc)
            sleep(delay)
            attempt += 1
