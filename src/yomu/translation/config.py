"""Runtime configuration for translation backends."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_BATCH_SIZE = 50
DEFAULT_PAUSE_SECONDS = 0.5
SUPPORTED_BACKENDS = ("stub", "deepl", "openrouter")


def _parse_number(source: Mapping[str, str], name: str, default: float, cast: type) -> float:
    raw = source.get(name, "").strip()
    if not raw:
        return default
    try:
        return cast(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True, slots=True)
class TranslationSettings:
    """Validated translation settings used by the ingestion job."""

    backend: str = "stub"
    deepl_api_key: str = ""
    openrouter_api_key: str = ""
    openrouter_model: str = ""
    openrouter_base_url: str = DEFAULT_OPENROUTER_BASE_URL
    batch_size: int = DEFAULT_BATCH_SIZE
    pause_seconds: float = DEFAULT_PAUSE_SECONDS

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        backend: str | None = None,
    ) -> "TranslationSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        chosen = (backend or source.get("YOMU_TRANSLATOR", "stub")).strip().lower() or "stub"
        if chosen not in SUPPORTED_BACKENDS:
            raise ValueError(f"YOMU_TRANSLATOR must be one of {', '.join(SUPPORTED_BACKENDS)}, got {chosen!r}")

        deepl_api_key = source.get("DEEPL_API_KEY", "").strip()
        openrouter_api_key = source.get("OPENROUTER_API_KEY", "").strip()
        openrouter_model = source.get("OPENROUTER_TRANSLATION_MODEL", "").strip()
        base_url = source.get("OPENROUTER_BASE_URL", DEFAULT_OPENROUTER_BASE_URL).strip()

        missing: list[str] = []
        if chosen == "deepl" and not deepl_api_key:
            missing.append("DEEPL_API_KEY")
        if chosen == "openrouter":
            if not openrouter_api_key:
                missing.append("OPENROUTER_API_KEY")
            if not openrouter_model:
                missing.append("OPENROUTER_TRANSLATION_MODEL")

        if missing:
            missing_text = ", ".join(missing)
            raise ValueError(f"Missing required translation environment variables: {missing_text}")

        if not base_url:
            raise ValueError("OPENROUTER_BASE_URL cannot be empty")
        if not (base_url.startswith("http://") or base_url.startswith("https://")):
            raise ValueError("OPENROUTER_BASE_URL must start with http:// or https://")

        batch_size = int(_parse_number(source, "YOMU_TRANSLATION_BATCH_SIZE", DEFAULT_BATCH_SIZE, int))
        pause_seconds = float(_parse_number(source, "YOMU_TRANSLATION_PAUSE_SECONDS", DEFAULT_PAUSE_SECONDS, float))
        if batch_size < 1:
            raise ValueError("YOMU_TRANSLATION_BATCH_SIZE must be >= 1")
        if pause_seconds < 0:
            raise ValueError("YOMU_TRANSLATION_PAUSE_SECONDS cannot be negative")

        return cls(
            backend=chosen,
            deepl_api_key=deepl_api_key,
            openrouter_api_key=openrouter_api_key,
            openrouter_model=openrouter_model,
            openrouter_base_url=base_url.rstrip("/"),
            batch_size=batch_size,
            pause_seconds=pause_seconds,
        )
