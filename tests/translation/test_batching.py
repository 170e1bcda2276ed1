from __future__ import annotations

from typing import Sequence

import pytest

from yomu.translation import StubTranslator, TranslationSettings, build_translator
from yomu.translation.base import TranslationError, Translator, call_with_retries, translate_in_batches
from yomu.translation.deepl import DeepLTranslator
from yomu.translation.stub import UNTRANSLATED_PREFIX


class _RecordingTranslator:
    name = "recording"

    def __init__(self, *, drop_last: bool = False) -> None:
        self.calls: list[list[str]] = []
        self._drop_last = drop_last

    def translate_batch(self, sentences: Sequence[str]) -> list[str]:
        self.calls.append(list(sentences))
        output = [f"ja:{sentence}" for sentence in sentences]
        return output[:-1] if self._drop_last else output


def test_batches_preserve_order_and_pause_between_calls() -> None:
    translator = _RecordingTranslator()
    pauses: list[float] = []

    result = translate_in_batches(
        translator,
        ["s1", "s2", "s3", "s4", "s5"],
        batch_size=2,
        pause_seconds=0.5,
        sleep=pauses.append,
    )

    assert result == ["ja:s1", "ja:s2", "ja:s3", "ja:s4", "ja:s5"]
    assert translator.calls == [["s1", "s2"], ["s3", "s4"], ["s5"]]
    assert pauses == [0.5, 0.5]


def test_empty_input_makes_no_calls() -> None:
    translator = _RecordingTranslator()

    assert translate_in_batches(translator, [], sleep=lambda _: None) == []
    assert translator.calls == []


def test_length_mismatch_raises_translation_error() -> None:
    with pytest.raises(TranslationError, match="length mismatch") as excinfo:
        translate_in_batches(_RecordingTranslator(drop_last=True), ["a", "b"], sleep=lambda _: None)

    assert excinfo.value.backend == "recording"


def test_invalid_batch_arguments_are_rejected() -> None:
    with pytest.raises(ValueError, match="batch_size"):
        translate_in_batches(_RecordingTranslator(), ["a"], batch_size=0)
    with pytest.raises(ValueError, match="pause_seconds"):
        translate_in_batches(_RecordingTranslator(), ["a"], pause_seconds=-1)


def test_stub_translator_marks_sentences() -> None:
    translator = StubTranslator()

    assert isinstance(translator, Translator)
    assert translator.translate_batch(["Hello there."]) == [f"{UNTRANSLATED_PREFIX}Hello there."]


def test_build_translator_picks_configured_backend() -> None:
    assert isinstance(build_translator(TranslationSettings()), StubTranslator)
    assert isinstance(
        build_translator(TranslationSettings(backend="deepl", deepl_api_key="key:fx")),
        DeepLTranslator,
    )


def test_call_with_retries_backs_off_on_transient_errors() -> None:
    sleeps: list[float] = []
    outcomes: list[object] = [ConnectionError("reset"), ConnectionError("reset"), "done"]

    def request() -> object:
        outcome = outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    result = call_with_retries(
        request,
        backend="recording",
        is_retryable=lambda exc: isinstance(exc, ConnectionError),
        base_delay=0.5,
        sleep=sleeps.append,
    )

    assert result == "done"
    assert sleeps == [0.5, 1.0]


def test_call_with_retries_gives_up_after_max_retries() -> None:
    calls: list[int] = []

    def request() -> object:
        calls.append(1)
        raise ConnectionError("still down")

    with pytest.raises(TranslationError, match="after 2 attempt") as excinfo:
        call_with_retries(
            request,
            backend="recording",
            is_retryable=lambda _: True,
            max_retries=1,
            sleep=lambda _: None,
        )

    assert len(calls) == 2
    assert isinstance(excinfo.value.__cause__, ConnectionError)
