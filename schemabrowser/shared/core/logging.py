"""Structured logging setup.

The browser runs inside a full-screen terminal UI, so log records never go
to the console: they are written to a file (or stderr when explicitly asked
for, e.g. from tests or headless runs).
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

from .store import CONFIG_DIR

DEFAULT_LOG_FILE = CONFIG_DIR / "schemabrowser.log"

_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def _create_handler(destination: str | Path) -> logging.Handler:
    """Create handler for "stderr" or a file path."""
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def configure_logging(
    *,
    level: str = "INFO",
    log_file: str | Path | None = None,
    json_format: bool = False,
) -> Path | None:
    """Configure structlog on top of stdlib logging.

    Args:
        level: Minimum level name.
        log_file: Destination file, or "stderr". Defaults to the config dir log.
        json_format: Render JSON lines instead of key=value text.

    Returns:
        The log file path, or None when logging to stderr.
    """
    default_level = _LEVEL_MAP.get(level.upper(), logging.INFO)
    destination = log_file if log_file is not None else DEFAULT_LOG_FILE

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(default_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Don't cache - allows reconfiguration and respects level changes
        cache_logger_on_first_use=False,
    )

    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = _create_handler(destination)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(default_level)
    root_logger.addHandler(handler)

    # Event-loop debug noise drowns out fetch events
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    if destination == "stderr":
        return None
    return Path(destination)
