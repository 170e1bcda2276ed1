"""Difficulty scoring, proficiency labels and display-language decisions."""

from .difficulty import classify, estimate_level, score, score_sentences
from .language_ratio import decide_language
from .policy import DEFAULT_POLICY, PROFICIENCY_LABELS, DifficultyPolicy, LevelCutpoint, load_default_policy

__all__ = [
    "DEFAULT_POLICY",
    "PROFICIENCY_LABELS",
    "DifficultyPolicy",
    "LevelCutpoint",
    "classify",
    "decide_language",
    "estimate_level",
    "load_default_policy",
    "score",
    "score_sentences",
]
