"""
Logging setup for the digest runner.

Library modules log through ``logging.getLogger(__name__)``; this wires the
standard library handlers to structlog's formatter:

- Development: colored, human-readable console output
- Production (ENV=production): JSON lines

Usage:
    from rss_digest.logging_config import configure_logging

    configure_logging()
"""
from __future__ import annotations

import logging
import os
import sys
from typing import List, Optional

import structlog
from structlog.types import Processor


def _is_production() -> bool:
    env = os.getenv("ENV", os.getenv("ENVIRONMENT", "development")).lower()
    return env in ("production", "prod")


def _get_log_level() -> int:
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(
    json_format: Optional[bool] = None,
    log_level: Optional[int] = None,
) -> None:
    """
    Route standard-library logging through structlog's ProcessorFormatter.

    Args:
        json_format: Emit JSON. If None, auto-detect from ENV.
        log_level: If None, read LOG_LEVEL (default: INFO).
    """
    if json_format is None:
        json_format = _is_production()
    if log_level is None:
        log_level = _get_log_level()

    shared_processors: List[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_format:
        final: List[Processor] = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        final = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *final,
        ],
    )
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Suppress per-request noise from the HTTP client
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
