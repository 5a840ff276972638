"""Base store class with common JSON file operations."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any

# Shared config directory - can be overridden via environment variable for testing
CONFIG_DIR = Path(os.environ.get("SCHEMABROWSER_CONFIG_DIR", Path.home() / ".schemabrowser"))


class JSONFileStore:
    """Base class for JSON file-backed stores.

    Provides common file I/O operations with error handling.
    """

    def __init__(self, file_path: Path):
        self._file_path = file_path

    @property
    def file_path(self) -> Path:
        """Get the store's file path."""
        return self._file_path

    def _ensure_dir(self) -> None:
        """Ensure the config directory exists with owner-only permissions."""
        dir_path = self._file_path.parent
        dir_path.mkdir(parents=True, exist_ok=True)
        try:
            os.chmod(dir_path, 0o700)
        except OSError:
            pass  # Not supported on every platform

    def _read_json(self) -> Any:
        """Read and parse JSON from file.

        Returns:
            Parsed JSON data, or None if file doesn't exist or is invalid.
        """
        if not self._file_path.exists():
            return None
        try:
            with open(self._file_path, encoding="utf-8") as f:
                return json.load(f)
        except (json.JSONDecodeError, TypeError):
            return None

    def _write_json(self, data: Any) -> None:
        """Write data as JSON via temp file + rename, with 0600 permissions.

        Args:
            data: Data to serialize and write.
        """
        self._ensure_dir()
        # Temp file must live in the same directory for the rename to be atomic
        fd, tmp_path = tempfile.mkstemp(
            dir=self._file_path.parent,
            prefix=".tmp_",
            suffix=".json",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
            os.chmod(tmp_path, 0o600)
            os.replace(tmp_path, self._file_path)
        except Exception:
            try:
                os.unlink(tmp_path)
            except OSError:
                pass
            raise

    def _read_section(self, key: str) -> dict[str, Any]:
        """Read one top-level object from the file, or ``{}`` when absent or malformed."""
        data = self._read_json()
        if not isinstance(data, dict):
            return {}
        section = data.get(key)
        return section if isinstance(section, dict) else {}

    def _write_section(self, key: str, section: dict[str, Any]) -> None:
        """Replace one top-level object while keeping sibling keys intact."""
        data = self._read_json()
        if not isinstance(data, dict):
            data = {}
        data[key] = section
        self._write_json(data)
