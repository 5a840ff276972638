"""Configuration for schemabrowser.

Browser preferences are plain dataclasses; persistence lives in
``schemabrowser.stores``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields, replace
from typing import Any

from .domains.explorer.domain.object_types import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS
from .shared.core.store import CONFIG_DIR

SETTINGS_PATH = CONFIG_DIR / "settings.json"

DEBOUNCE_MS = 500
PAGINATION_THRESHOLD = 200


@dataclass(frozen=True)
class BrowserSettings:
    """Tunable behaviour of the object browser."""

    debounce_ms: int = DEBOUNCE_MS
    default_page_size: int = DEFAULT_PAGE_SIZE
    pagination_threshold: int = PAGINATION_THRESHOLD

    def __post_init__(self) -> None:
        if self.debounce_ms < 0:
            raise ValueError(f"debounce_ms must be >= 0, got {self.debounce_ms}")
        if self.default_page_size not in PAGE_SIZE_OPTIONS:
            raise ValueError(
                f"default_page_size must be one of {PAGE_SIZE_OPTIONS}, got {self.default_page_size}"
            )
        if self.pagination_threshold < 0:
            raise ValueError(f"pagination_threshold must be >= 0, got {self.pagination_threshold}")

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> BrowserSettings:
        """Build settings from a JSON mapping, ignoring unknown keys.

        Raises:
            ValueError: If a known key holds an invalid value.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, int] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{key} must be an integer, got {value!r}")
            values[key] = value
        return cls(**values)

    def to_dict(self) -> dict[str, int]:
        return asdict(self)

    def with_overrides(self, **overrides: int | None) -> BrowserSettings:
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if not changes:
            return self
        return replace(self, **changes)


def load_settings() -> BrowserSettings:
    """Load browser settings from the settings file."""
    from .stores.settings import SettingsStore

    return SettingsStore.get_instance().load_browser_settings()


def save_settings(settings: BrowserSettings) -> None:
    """Save browser settings to the settings file."""
    from .stores.settings import SettingsStore

    SettingsStore.get_instance().save_browser_settings(settings)
