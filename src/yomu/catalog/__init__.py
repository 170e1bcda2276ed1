"""Declarative book catalog."""

from .loader import CatalogError, load_catalog, parse_book, select_book

__all__ = ["CatalogError", "load_catalog", "parse_book", "select_book"]
