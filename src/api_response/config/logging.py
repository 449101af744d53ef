"""structlog configuration for api_response.

Two output modes:
- Human (default): console-formatted output to stderr
- JSON (``log_json``): Structured JSON lines to stderr

Library modules log through ``logging.getLogger(__name__)``; the
``ProcessorFormatter`` installed here renders those records too.
"""

from __future__ import annotations

import logging
import sys

import structlog

from api_response.config.settings import get_settings

LOGGER_NAME = "api_response"


def configure_logging(
    *,
    verbose: bool | None = None,
    log_json: bool | None = None,
) -> None:
    """Configure structlog processors and output routing.

    Args:
        verbose: Enable DEBUG-level output. When False, only WARNING+.
            ``None`` falls back to :attr:`Settings.verbose`.
        log_json: Use JSON renderer instead of console renderer.
            ``None`` falls back to :attr:`Settings.log_json`.
    """
    settings = get_settings()
    if verbose is None:
        verbose = settings.verbose
    if log_json is None:
        log_json = settings.log_json

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    # Only the library logger is touched; the root logger belongs to the application.
    library_logger = logging.getLogger(LOGGER_NAME)
    library_logger.handlers.clear()
    library_logger.addHandler(handler)
    library_logger.propagate = False
    library_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
