"""Settings store for object browser preferences."""

from __future__ import annotations

from pathlib import Path

import structlog

from ..config import SETTINGS_PATH, BrowserSettings
from ..shared.core.store import JSONFileStore

logger = structlog.get_logger()

BROWSER_SECTION = "object_browser"


class SettingsStore(JSONFileStore):
    """Store for browser settings.

    Settings live in ~/.schemabrowser/settings.json under the
    ``object_browser`` key; other top-level keys are preserved on save.
    """

    _instance: SettingsStore | None = None

    def __init__(self, file_path: Path | None = None) -> None:
        super().__init__(file_path or SETTINGS_PATH)

    @classmethod
    def get_instance(cls) -> SettingsStore:
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def load_browser_settings(self) -> BrowserSettings:
        """Load browser settings, falling back to defaults on bad values."""
        section = self._read_section(BROWSER_SECTION)
        try:
            return BrowserSettings.from_dict(section)
        except ValueError as error:
            logger.warning(
                "settings_invalid",
                path=str(self.file_path),
                error=str(error),
            )
            return BrowserSettings()

    def save_browser_settings(self, settings: BrowserSettings) -> None:
        self._write_section(BROWSER_SECTION, settings.to_dict())
        logger.info("settings_saved", path=str(self.file_path))
