"""Structured logging for the trader using structlog.

Every module logs through ``get_logger(__name__)``, so records land under
the ``fibtrader`` logger tree. Decimal values passed as log context are
rendered as strings, which keeps them exact and lets the JSON renderer
serialize them.
"""

import logging
import os
from decimal import Decimal

import structlog

#: Root of the project's logger tree.
LOGGER_NAME = "fibtrader"

#: Third-party loggers that are noisy at INFO (ccxt logs every request).
_QUIET_LOGGERS = ("ccxt", "asyncio")


def _decimals_to_str(
    logger: logging.Logger, method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """Render Decimal context values as plain strings."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
    return event_dict


def setup_logging(log_level: str = "INFO", log_format: str | None = None) -> None:
    """Configure structlog rendering for the trader process.

    Args:
        log_level: Level for the ``fibtrader`` logger tree.
        log_format: "json" or "console". Defaults to the LOG_FORMAT
            environment variable, then "console".
    """
    if log_format is None:
        log_format = os.environ.get("LOG_FORMAT", "console")
    log_format = log_format.lower()

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _decimals_to_str,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if log_format == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    project_logger = logging.getLogger(LOGGER_NAME)
    project_logger.handlers.clear()
    project_logger.addHandler(handler)
    project_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    project_logger.propagate = False

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str = LOGGER_NAME) -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger, defaulting to the project root logger."""
    return structlog.get_logger(name)
