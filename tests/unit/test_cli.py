"""Tests for command line parsing."""

from __future__ import annotations

import pytest

from schemabrowser.cli import build_parser, build_scope, main, resolve_settings
from schemabrowser.config import BrowserSettings


class TestParser:
    def test_scope_from_flags(self):
        args = build_parser().parse_args(
            ["--data-source", "3", "--database", "app", "--schema", "public", "--db-type", "POSTGRESQL"]
        )

        scope = build_scope(args)

        assert scope.data_source_id == "3"
        assert scope.database_name == "app"
        assert scope.schema_name == "public"
        assert scope.database_type == "POSTGRESQL"
        assert scope.is_ready

    def test_unknown_mock_profile_rejected(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--mock", "nope"])

    def test_page_size_must_be_an_option(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--page-size", "75"])


class TestResolveSettings:
    def test_flags_override_stored_settings(self):
        args = build_parser().parse_args(["--page-size", "200", "--debounce-ms", "50"])
        base = BrowserSettings(pagination_threshold=10)

        settings = resolve_settings(args, base)

        assert settings == BrowserSettings(debounce_ms=50, default_page_size=200, pagination_threshold=10)

    def test_no_flags_keeps_base(self):
        base = BrowserSettings(debounce_ms=250)
        assert resolve_settings(build_parser().parse_args([]), base) is base

    def test_invalid_override_exits_with_error(self, capsys):
        code = main(["--debounce-ms", "-5", "--log-file", "stderr"])

        assert code == 2
        assert "debounce_ms" in capsys.readouterr().err
