"""schemabrowser - A terminal object browser for remote database schemas."""

from typing import TYPE_CHECKING, Any

__all__ = [
    "__version__",
    "main",
    "BrowserApp",
    "BrowseScope",
    "BrowserController",
    "ObjectType",
]

try:
    from ._version import __version__
except ImportError:
    __version__ = "0.0.0.dev"

if TYPE_CHECKING:
    from schemabrowser.app import BrowserApp
    from schemabrowser.domains.explorer.app.controller import BrowserController
    from schemabrowser.domains.explorer.domain.object_types import ObjectType
    from schemabrowser.domains.explorer.domain.scope import BrowseScope

    from .cli import main


def __getattr__(name: str) -> Any:
    """Lazy import for heavy modules to keep package import side-effect free."""
    if name == "main":
        from .cli import main

        return main
    if name == "BrowserApp":
        from schemabrowser.app import BrowserApp

        return BrowserApp
    if name == "BrowserController":
        from schemabrowser.domains.explorer.app.controller import BrowserController

        return BrowserController
    if name == "BrowseScope":
        from schemabrowser.domains.explorer.domain.scope import BrowseScope

        return BrowseScope
    if name == "ObjectType":
        from schemabrowser.domains.explorer.domain.object_types import ObjectType

        return ObjectType
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
