"""Structured logging configuration using structlog."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import Processor

_SIZE_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def _processors() -> list[Processor]:
    """Processors applied to every event before rendering."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def setup_logging(
    level: str = "INFO",
    format_type: str = "structured",
    file_enabled: bool = True,
    file_path: str = "data/stockpulse.log",
    max_file_size: str = "10MB",
    backup_count: int = 5,
) -> None:
    """
    Configure structlog and route its output through the root logger.

    Console output is JSON in ``structured`` mode and colored key/value text
    in ``plain`` mode. The optional rotating file always receives JSON lines.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: Console format ('structured' or 'plain')
        file_enabled: Whether to also write to a rotating log file
        file_path: Path to log file
        max_file_size: Rotation threshold such as ``10MB``
        backup_count: Number of rotated files to keep
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    console_renderer = (
        structlog.processors.JSONRenderer()
        if format_type == "structured"
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers = [console]
    root.setLevel(log_level)

    structlog.configure(
        processors=_processors() + [console_renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    if file_enabled:
        root.addHandler(
            _rotating_file_handler(file_path, max_file_size, backup_count, log_level)
        )

    # Third-party chatter stays at WARNING unless debugging
    if log_level > logging.DEBUG:
        for name in ("yfinance", "peewee", "urllib3", "sqlalchemy.engine"):
            logging.getLogger(name).setLevel(logging.WARNING)


def _rotating_file_handler(
    file_path: str, max_file_size: str, backup_count: int, log_level: int
) -> logging.Handler:
    log_file = Path(file_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=_parse_file_size(max_file_size),
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def _parse_file_size(size_str: str) -> int:
    """Parse ``512KB``/``10MB``/``1GB`` (or plain bytes) into bytes."""
    size_str = size_str.strip().upper()
    for suffix, multiplier in _SIZE_UNITS.items():
        if size_str.endswith(suffix):
            return int(size_str[: -len(suffix)]) * multiplier
    return int(size_str)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (defaults to calling module)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)


def bind_request_context(**context: Any) -> None:
    """Attach values (such as the request id) to every log line of this request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_audit_event(event: str, user_id: Optional[str] = None, **context: Any) -> None:
    """
    Log an account or watchlist change to the ``audit`` logger.

    Args:
        event: Event name, e.g. ``user_registered``
        user_id: ID of the user who triggered the event
        **context: Additional context
    """
    logger = get_logger("audit")
    # structlog reserves the ``event`` key for the message itself
    logger.info("Audit event", audit_event=event, user_id=user_id, **context)
