"""Data persistence stores for schemabrowser.

- SettingsStore: manages browser preferences
"""

from .settings import SettingsStore

__all__ = [
    "SettingsStore",
]
