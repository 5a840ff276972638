"""Domain types for the object browser."""

from .errors import STALE, FetchFailed, SchemaBrowserError, ScopeNotReady, is_stale
from .object_types import (
    DEFAULT_PAGE_SIZE,
    PAGE_SIZE_OPTIONS,
    FetchRequest,
    FetchToken,
    Node,
    ObjectType,
    PagedResponse,
    PageState,
    ResultSet,
    SearchState,
)
from .scope import EMPTY_SCOPE, BrowseScope
from .state import BrowserState, BrowserStatus

__all__ = [
    "DEFAULT_PAGE_SIZE",
    "EMPTY_SCOPE",
    "PAGE_SIZE_OPTIONS",
    "STALE",
    "BrowseScope",
    "BrowserState",
    "BrowserStatus",
    "FetchFailed",
    "FetchRequest",
    "FetchToken",
    "Node",
    "ObjectType",
    "PageState",
    "PagedResponse",
    "ResultSet",
    "SchemaBrowserError",
    "ScopeNotReady",
    "SearchState",
    "is_stale",
]
