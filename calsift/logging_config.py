"""
Structured logging for the calsift CLI and analysis services.

structlog renders through stdlib logging so that library records and
calsift events share one handler. The JSON report owns stdout, so log
records go to stderr unless another stream is given.

Environment:
    CALSIFT_LOG_LEVEL: DEBUG, INFO, WARNING (default), ERROR
    CALSIFT_LOG_FORMAT: "json" for one JSON object per line

Usage:
    from calsift.logging_config import bind_command, get_logger, setup_logging

    setup_logging()
    bind_command("free", tz="Europe/Berlin")
    get_logger(__name__).debug("free_time_computed", days=7)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO, Any

import structlog


LOG_LEVEL_ENV = "CALSIFT_LOG_LEVEL"
LOG_FORMAT_ENV = "CALSIFT_LOG_FORMAT"
DEFAULT_LEVEL = "WARNING"


def _resolve_level(level: str | None) -> int:
    name = (level or os.environ.get(LOG_LEVEL_ENV) or DEFAULT_LEVEL).upper()
    return getattr(logging, name, logging.WARNING)


def _renderer(json_output: bool) -> structlog.types.Processor:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=False)


def setup_logging(
    level: str | None = None,
    json_output: bool | None = None,
    stream: IO[str] | None = None,
) -> None:
    """
    Configure structlog and the root logger.

    Args:
        level: Level name; falls back to CALSIFT_LOG_LEVEL, then WARNING
        json_output: JSON lines instead of console text; falls back to
            CALSIFT_LOG_FORMAT
        stream: Destination for log records (default: stderr)
    """
    if json_output is None:
        json_output = os.environ.get(LOG_FORMAT_ENV, "").lower() == "json"

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    structlog.configure(
        processors=[
            *pre_chain,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_output),
        ],
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def bind_command(command: str, **context: Any) -> None:
    """Attach the running subcommand (and any extra context) to every later record."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(command=command, **context)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


__all__ = ["bind_command", "get_logger", "setup_logging"]
