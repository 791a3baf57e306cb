"""Logging configuration for mediamatch using structlog.

Nothing is configured on import; applications (and the ``mediamatch`` CLI)
call ``setup_logging`` once at startup.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import structlog
from structlog.types import Processor

if TYPE_CHECKING:
    from mediamatch.config import LoggingConfig


def setup_logging(config: LoggingConfig | None = None) -> None:
    """Configure structlog and standard library logging.

    Args:
        config: Optional logging configuration. If None, uses the loaded settings.
    """
    if config is None:
        from mediamatch.config import get_settings

        config = get_settings().logging

    log_level = getattr(logging, config.level.upper(), logging.WARNING)

    # Log to stderr so CLI output on stdout stays machine readable
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if config.format == "json":
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if config.file is not None:
        _add_file_handler(config.file, log_level)


def _add_file_handler(file_path: Path, level: int) -> None:
    """Also write log records to a file.

    Args:
        file_path: Path to the log file.
        level: Logging level.
    """
    file_path.parent.mkdir(parents=True, exist_ok=True)

    file_handler = logging.FileHandler(file_path)
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.getLogger().addHandler(file_handler)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    The logger wraps a standard library logger, so library users who never
    call ``setup_logging`` get the usual stdlib defaults (warnings and up).

    Args:
        name: Optional logger name, usually ``__name__``.

    Returns:
        A structlog BoundLogger instance.
    """
    return structlog.wrap_logger(logging.getLogger(name), wrapper_class=structlog.stdlib.BoundLogger)


__all__ = [
    "setup_logging",
    "get_logger",
]
