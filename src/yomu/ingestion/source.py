"""Raw source retrieval for HTTP URLs and local text files."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
from typing import Any

from charset_normalizer import from_bytes
import requests

from yomu.ingestion.normalization import normalize_newlines

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


@dataclass(slots=True)
class SourceFetchError(Exception):
    """Raised when a raw source document cannot be retrieved or decoded."""

    locator: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (locator={self.locator})"


def decode_source(raw: bytes) -> str:
    """Decode raw bytes to LF-terminated text, preferring UTF-8 over detection."""

    return normalize_newlines(_decode_bytes(raw))


def _decode_bytes(raw: bytes) -> str:
    if raw.startswith(b"\xef\xbb\xbf"):
        return raw[3:].decode("utf-8")
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass

    best = from_bytes(raw).best()
    if best is None or not best.encoding:
        raise ValueError("Could not detect source text encoding")
    return str(best)


def _is_url(locator: str) -> bool:
    return locator.startswith(("http://", "https://"))


class SourceFetcher:
    """Fetch a document by URL or filesystem path and return decoded text."""

    def __init__(self, *, session: Any | None = None, timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        if timeout <= 0:
            raise ValueError("timeout must be positive")
        self._session = session or requests.Session()
        self._timeout = timeout

    def fetch(self, locator: str) -> str:
        raw = self._fetch_url(locator) if _is_url(locator) else self._read_path(locator)
        try:
            text = decode_source(raw)
        except (ValueError, UnicodeDecodeError) as exc:
            raise SourceFetchError(locator, f"Failed to decode source: {exc}") from exc
        logger.info("Fetched %d characters from %s", len(text), locator)
        return text

    def _fetch_url(self, url: str) -> bytes:
        logger.info("Downloading source text: %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise SourceFetchError(url, f"Failed to fetch source: {exc}") from exc
        return response.content

    def _read_path(self, locator: str) -> bytes:
        path = Path(locator)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise SourceFetchError(locator, f"Failed to read source file: {exc}") from exc
