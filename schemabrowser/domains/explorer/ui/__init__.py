"""Textual widgets for the object browser."""

from .object_browser import ObjectBrowser, SearchInput

__all__ = ["ObjectBrowser", "SearchInput"]
