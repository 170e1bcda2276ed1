"""Read-time default language selection from difficulty and English ratio."""

from __future__ import annotations

from typing import Literal

from yomu.scoring.policy import DEFAULT_POLICY, FULL_ENGLISH_RATIO, DifficultyPolicy

DisplayLanguage = Literal["en", "ja"]


def decide_language(
    difficulty_score: float,
    english_ratio: int,
    policy: DifficultyPolicy = DEFAULT_POLICY,
) -> DisplayLanguage:
    """Return "en" for sentences strictly below the ratio's threshold, else "ja".

    Defined for every ratio in ``policy.supported_ratios``; any other ratio
    raises ``ValueError``.
    """

    if english_ratio == FULL_ENGLISH_RATIO:
        return "en"

    threshold = policy.ratio_thresholds.get(english_ratio)
    if threshold is None:
        supported = ", ".join(str(ratio) for ratio in policy.supported_ratios)
        raise ValueError(f"Unsupported English ratio {english_ratio}; expected one of {supported}")

    return "en" if difficulty_score < threshold else "ja"
