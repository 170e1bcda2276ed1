"""Versioned threshold table shared by level labelling and display decisions."""

from __future__ import annotations

from dataclasses import dataclass
from importlib import resources
import json
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

PROFICIENCY_LABELS: tuple[str, ...] = ("A1", "A2", "B1", "B2", "C1", "C2")
FULL_ENGLISH_RATIO = 100

_POLICY_RESOURCE = "difficulty_policy.json"


@dataclass(frozen=True, slots=True)
class LevelCutpoint:
    min_score: float
    label: str


@dataclass(frozen=True, slots=True)
class DifficultyPolicy:
    """Score cutpoints for proficiency labels and ratio-to-threshold mapping.

    Ingestion stores labels computed from ``level_cutpoints`` while the reader
    picks default languages from ``ratio_thresholds``; both come from the same
    versioned table so stored labels and live rendering cannot drift apart.
    """

    version: str
    floor_label: str
    level_cutpoints: tuple[LevelCutpoint, ...]
    ratio_thresholds: Mapping[int, float]

    def __post_init__(self) -> None:
        object.__setattr__(self, "ratio_thresholds", MappingProxyType(dict(self.ratio_thresholds)))

        labels = [self.floor_label, *(cut.label for cut in self.level_cutpoints)]
        unknown = [label for label in labels if label not in PROFICIENCY_LABELS]
        if unknown:
            raise ValueError(f"Unknown proficiency labels: {', '.join(unknown)}")

        scores = [cut.min_score for cut in self.level_cutpoints]
        if scores != sorted(scores) or len(set(scores)) != len(scores):
            raise ValueError("level_cutpoints must be strictly increasing")

        order = [PROFICIENCY_LABELS.index(label) for label in labels]
        if order != sorted(order):
            raise ValueError("level labels must increase with score")

        for ratio in self.ratio_thresholds:
            if not 0 < ratio < FULL_ENGLISH_RATIO:
                raise ValueError(f"ratio must be between 0 and {FULL_ENGLISH_RATIO} (exclusive): {ratio}")

    @property
    def supported_ratios(self) -> tuple[int, ...]:
        return (*sorted(self.ratio_thresholds), FULL_ENGLISH_RATIO)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "DifficultyPolicy":
        try:
            cutpoints = tuple(
                LevelCutpoint(min_score=float(item["min_score"]), label=str(item["label"]))
                for item in data["level_cutpoints"]
            )
            ratios = {int(ratio): float(threshold) for ratio, threshold in data["ratio_thresholds"].items()}
            return cls(
                version=str(data["version"]),
                floor_label=str(data.get("floor_label", PROFICIENCY_LABELS[0])),
                level_cutpoints=cutpoints,
                ratio_thresholds=ratios,
            )
        except (KeyError, TypeError, AttributeError) as exc:
            raise ValueError(f"Malformed difficulty policy: {exc}") from exc

    @classmethod
    def from_json_file(cls, path: str | Path) -> "DifficultyPolicy":
        return cls.from_mapping(json.loads(Path(path).read_text(encoding="utf-8")))


def load_default_policy() -> DifficultyPolicy:
    """Load the packaged threshold table."""

    payload = resources.files("yomu.scoring").joinpath(_POLICY_RESOURCE).read_text(encoding="utf-8")
    return DifficultyPolicy.from_mapping(json.loads(payload))


DEFAULT_POLICY = load_default_policy()
