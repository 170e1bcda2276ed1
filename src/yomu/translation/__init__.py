"""Translation backends behind a shared batch contract."""

from .base import TranslationError, Translator, translate_in_batches
from .config import TranslationSettings
from .deepl import DeepLTranslator
from .openrouter import OpenRouterTranslator
from .stub import StubTranslator


def build_translator(settings: TranslationSettings) -> Translator:
    """Return the backend selected by *settings*."""

    if settings.backend == "deepl":
        return DeepLTranslator(settings.deepl_api_key)
    if settings.backend == "openrouter":
        return OpenRouterTranslator(settings)
    return StubTranslator()


__all__ = [
    "DeepLTranslator",
    "OpenRouterTranslator",
    "StubTranslator",
    "TranslationError",
    "TranslationSettings",
    "Translator",
    "build_translator",
    "translate_in_batches",
]
