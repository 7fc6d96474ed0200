"""
Structured logging.
structlog over stdlib logging, rendered for the console or as JSON lines.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger.json import JsonFormatter

SERVICE_NAME = "show-shaper"

# Third-party loggers that are chatty at INFO
_QUIET_LOGGERS = ("httpx", "httpcore", "urllib3", "google.auth", "uvicorn.access")


def _add_service(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structured logging for the service.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_logs: Emit one JSON object per line instead of console output
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    if json_logs:
        handler.setFormatter(JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    logging.basicConfig(level=log_level, handlers=[handler], force=True)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            _add_service,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger for a module (pass ``__name__``)."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind key/value pairs to every log line emitted in scope.

    Used by the HTTP middleware to attach ``request_id`` and ``path``.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self.tokens: dict[str, Any] = {}

    def __enter__(self) -> "LogContext":
        self.tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self.tokens)
