"""
Logging setup for applications embedding Hamachi.

Library modules log through the standard ``logging`` module and stay silent
unless the host configures logging. The CLI calls ``configure_logging`` to
route both stdlib and structlog output to stderr.
"""

import logging
import sys
from typing import Optional

import structlog

from .config import get_settings


def configure_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """
    Configure stdlib logging and structlog.

    Args:
        level: Level name such as ``DEBUG``; defaults to ``HAMACHI_LOG_LEVEL``
        fmt: ``json`` or ``console``; defaults to ``HAMACHI_LOG_FORMAT``
    """
    settings = get_settings()
    level_name = (level or settings.log_level).upper()
    numeric_level = logging.getLevelName(level_name)
    if not isinstance(numeric_level, int):
        raise ValueError(f"unknown log level: {level_name}")
    fmt = fmt or settings.log_format

    logging.basicConfig(stream=sys.stderr, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("hamachi").setLevel(numeric_level)

    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )
