from __future__ import annotations

import logging
import sys
from typing import cast

import structlog

LIBRARY_LOGGER = "sdk_telemetry"


def configure_logging(level: str = "WARNING", json: bool = True) -> None:
    """Configure structlog output for the telemetry library.

    Only the ``sdk_telemetry`` stdlib logger gets a handler, so the host
    application's own logging setup is left alone.  Pass
    ``TelemetrySettings.log_level`` to honour ``SDK_TELEMETRY_LOG_LEVEL``.

    Args:
        level: Standard logging level string, e.g. "DEBUG", "INFO", "WARNING".
            Unknown names fall back to WARNING.
        json: If True, render log entries as JSON. If False, use coloured console output.
    """
    log_level = getattr(logging, level.upper(), None)
    if not isinstance(log_level, int):
        log_level = logging.WARNING

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    render_chain: list[structlog.types.Processor] = [
        structlog.stdlib.ProcessorFormatter.remove_processors_meta,
    ]
    if json:
        render_chain += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        render_chain.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=shared_processors
        + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=render_chain,
        foreign_pre_chain=shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers.clear()
    library_logger.addHandler(handler)
    library_logger.setLevel(log_level)
    library_logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a named structlog logger backed by the stdlib logger *name*.

    Records go through ``logging.getLogger(name)``, so nothing is emitted
    unless the host's logging setup (or :func:`configure_logging`) lets
    them through.  Processors are taken from the structlog configuration
    in effect at first use.

    Args:
        name: Logger name, typically ``__name__`` of the calling module.

    Returns:
        A structlog stdlib BoundLogger bound to *name*.
    """
    return cast(
        structlog.stdlib.BoundLogger,
        structlog.wrap_logger(
            logging.getLogger(name),
            wrapper_class=structlog.stdlib.BoundLogger,
        ),
    )
