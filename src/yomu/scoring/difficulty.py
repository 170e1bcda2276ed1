"""Deterministic sentence difficulty scoring and proficiency labelling."""

from __future__ import annotations

import math
import re
from typing import Sequence

from yomu.ingestion.models import SentenceRecord
from yomu.ingestion.segmenter import count_words
from yomu.scoring.policy import DEFAULT_POLICY, DifficultyPolicy

LENGTH_SATURATION_TOKENS = 30
BASELINE_WORD_LENGTH = 3.0
WORD_LENGTH_SPAN = 5.0
LENGTH_WEIGHT = 0.6
WORD_LENGTH_WEIGHT = 0.4

_NON_ALPHA_RE = re.compile(r"[^A-Za-z]")


def _round_half_up(value: float, digits: int = 2) -> float:
    factor = 10**digits
    return math.floor(value * factor + 0.5) / factor


def score(sentence_text: str) -> float:
    """Score reading difficulty from sentence length and average word length.

    The word-length component is not floored at zero, so sentences made of
    very short tokens can score slightly below 0. Empty text scores 0.0.
    """

    tokens = sentence_text.split()
    if not tokens:
        return 0.0

    avg_word_length = sum(len(_NON_ALPHA_RE.sub("", token)) for token in tokens) / len(tokens)
    length_component = min(len(tokens) / LENGTH_SATURATION_TOKENS, 1.0)
    word_length_component = min((avg_word_length - BASELINE_WORD_LENGTH) / WORD_LENGTH_SPAN, 1.0)
    raw = length_component * LENGTH_WEIGHT + word_length_component * WORD_LENGTH_WEIGHT
    return _round_half_up(raw)


def classify(difficulty_score: float, policy: DifficultyPolicy = DEFAULT_POLICY) -> str:
    """Map a score onto the policy's proficiency ladder (inclusive lower bounds)."""

    label = policy.floor_label
    for cutpoint in policy.level_cutpoints:
        if difficulty_score < cutpoint.min_score:
            break
        label = cutpoint.label
    return label


def estimate_level(sentence_text: str, policy: DifficultyPolicy = DEFAULT_POLICY) -> str:
    return classify(score(sentence_text), policy)


def score_sentences(
    sentences: Sequence[str],
    translations: Sequence[str] | None = None,
    *,
    policy: DifficultyPolicy = DEFAULT_POLICY,
) -> list[SentenceRecord]:
    """Build 1-based positioned sentence records for one chapter."""

    if translations is not None and len(translations) != len(sentences):
        raise ValueError(
            f"translations must align with sentences: expected {len(sentences)}, got {len(translations)}"
        )

    records: list[SentenceRecord] = []
    for index, text_en in enumerate(sentences):
        difficulty = score(text_en)
        records.append(
            SentenceRecord(
                position=index + 1,
                text_en=text_en,
                text_ja=translations[index] if translations is not None else "",
                difficulty_score=difficulty,
                proficiency_label=classify(difficulty, policy),
                word_count=count_words(text_en),
            )
        )
    return records
