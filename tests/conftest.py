"""Pytest fixtures for schemabrowser tests."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

_TEST_CONFIG_DIR = Path(tempfile.mkdtemp(prefix="schemabrowser-test-config-"))
os.environ.setdefault("SCHEMABROWSER_CONFIG_DIR", str(_TEST_CONFIG_DIR))
os.environ.setdefault("SCHEMABROWSER_MOCK_QUERY_DELAY", "0")


@pytest.fixture
def gated():
    from tests.helpers import GatedRegistry

    return GatedRegistry()


@pytest.fixture
def fast_settings():
    from schemabrowser.config import BrowserSettings

    return BrowserSettings(debounce_ms=10)


@pytest.fixture
def controller(gated, fast_settings):
    from schemabrowser.domains.explorer.app.controller import BrowserController

    return BrowserController(gated.registry, settings=fast_settings)


@pytest.fixture(autouse=True)
def _reset_settings_store():
    """Keep the settings singleton from leaking between tests."""
    from schemabrowser.stores.settings import SettingsStore

    SettingsStore._instance = None
    yield
    SettingsStore._instance = None
