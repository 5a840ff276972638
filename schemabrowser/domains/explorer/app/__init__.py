"""Object browser application layer: fetching, sequencing and state."""

from .controller import BrowserController
from .projection import BrowserView, project
from .registry import FullFetch, ObjectTypeRegistry, PagedFetch
from .sequencer import RequestSequencer

__all__ = [
    "BrowserController",
    "BrowserView",
    "FullFetch",
    "ObjectTypeRegistry",
    "PagedFetch",
    "RequestSequencer",
    "project",
]
