"""
Structured logging setup.

Library modules only ask for ``structlog.get_logger(__name__)``; applications
call :func:`setup_logging` once at startup to decide how events are rendered.
"""

import logging
import sys
from typing import List, Optional

import structlog

from batchwire.config import DeliveryConfig, get_config


def _processors(json_format: bool) -> List:
    renderer = structlog.processors.JSONRenderer() if json_format else structlog.dev.ConsoleRenderer()
    return [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def setup_logging(
    config: Optional[DeliveryConfig] = None,
    level: Optional[str] = None,
    json_format: Optional[bool] = None,
) -> None:
    """
    Configure structlog on top of stdlib logging.

    Args:
        config: Settings providing ``log_level`` and ``log_json`` (global config if not provided)
        level: Overrides ``config.log_level``
        json_format: Overrides ``config.log_json``
    """
    config = config or get_config()
    level = level or config.log_level
    json_format = config.log_json if json_format is None else json_format

    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper()),
        stream=sys.stdout,
    )
