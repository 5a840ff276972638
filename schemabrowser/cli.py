#!/usr/bin/env python3
"""schemabrowser - browse tables, views and routines of a remote schema."""

from __future__ import annotations

import argparse
import sys

import structlog

from .config import BrowserSettings, load_settings, save_settings
from .domains.explorer.domain.object_types import PAGE_SIZE_OPTIONS
from .domains.explorer.domain.scope import BrowseScope
from .mocks import MOCK_PROFILES, get_mock_profile, make_table_nodes
from .shared.core.logging import configure_logging

logger = structlog.get_logger()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schemabrowser",
        description="Page through, filter and refresh the objects of a database schema",
        epilog="Example: schemabrowser --data-source 1 --database app --schema public --mock demo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--data-source", default="mock", help="Data source (connection) identifier (default: mock)")
    parser.add_argument("--database", help="Database name")
    parser.add_argument("--schema", help="Schema name")
    parser.add_argument("--db-type", help="Database type recorded on new consoles (e.g. MYSQL)")

    parser.add_argument(
        "--mock",
        metavar="PROFILE",
        default="demo",
        choices=sorted(MOCK_PROFILES),
        help="Mock backend profile (default: demo)",
    )
    parser.add_argument(
        "--mock-tables",
        type=int,
        default=None,
        metavar="COUNT",
        help="Number of generated tables in the mock backend.",
    )
    parser.add_argument(
        "--mock-latency",
        type=float,
        default=None,
        metavar="SECONDS",
        help="Artificial delay added to every mock listing call (e.g. 1.5).",
    )

    parser.add_argument(
        "--page-size",
        type=int,
        choices=PAGE_SIZE_OPTIONS,
        help="Initial table page size (overrides settings).",
    )
    parser.add_argument(
        "--debounce-ms",
        type=int,
        metavar="MS",
        help="Search quiet period before a search is applied (overrides settings).",
    )
    parser.add_argument(
        "--pagination-threshold",
        type=int,
        metavar="COUNT",
        help="Show the pager only when there are more tables than this (overrides settings).",
    )
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="Persist the effective settings to the settings file.",
    )

    parser.add_argument("--log-level", default="INFO", help="Log level (default: INFO)")
    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help='Log destination file, or "stderr" (default: ~/.schemabrowser/schemabrowser.log)',
    )
    parser.add_argument("--log-json", action="store_true", help="Write JSON log lines.")
    return parser


def resolve_settings(args: argparse.Namespace, base: BrowserSettings | None = None) -> BrowserSettings:
    """Apply command line overrides on top of the stored settings."""
    base = base or load_settings()
    return base.with_overrides(
        default_page_size=args.page_size,
        debounce_ms=args.debounce_ms,
        pagination_threshold=args.pagination_threshold,
    )


def build_scope(args: argparse.Namespace) -> BrowseScope:
    return BrowseScope(
        data_source_id=args.data_source,
        database_name=args.database,
        schema_name=args.schema,
        database_type=args.db_type,
    )


def main(argv: list[str] | None = None) -> int:
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    log_path = configure_logging(level=args.log_level, log_file=args.log_file, json_format=args.log_json)

    try:
        settings = resolve_settings(args)
    except ValueError as error:
        print(f"Error: {error}", file=sys.stderr)
        return 2

    if args.save_settings:
        save_settings(settings)

    service = get_mock_profile(args.mock)
    if args.mock_tables is not None:
        service.tables = make_table_nodes(args.mock_tables)
    if args.mock_latency is not None:
        service.latency = args.mock_latency

    scope = build_scope(args)
    logger.info(
        "starting",
        scope=scope.describe(),
        mock=args.mock,
        log_file=str(log_path) if log_path else "stderr",
    )

    from .app import BrowserApp

    app = BrowserApp(service, scope, settings=settings)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
