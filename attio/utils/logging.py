"""Structured logging for the Attio SDK.

The SDK logs through structlog and never configures logging on import. Applications that want the SDK's
formatting call `configure_logging()` once at startup:

```
from attio.utils.logging import configure_logging, get_logger

configure_logging(level="DEBUG", renderer="console")
logger = get_logger(__name__)
logger.info("Fetched page", resource="records", page_size=50)
```

Without arguments the level comes from ATTIO_LOG_LEVEL (default INFO) and the renderer from ATTIO_LOG_RENDERER
('console' for colored output, JSON otherwise). Standard `logging` records, such as those from `requests` and
`urllib3`, pass through the same processors.

Context bound with `add_log_context(workspace_id=...)` is attached to every message logged in the current context
until `remove_log_context()` or `clear_log_context()` drops it.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import IO, Any

import structlog
import structlog.contextvars

REDACTED = "[REDACTED]"
SENSITIVE_HEADER_MARKERS = ("authorization", "api-key", "api_key", "token", "secret", "password", "cookie")

# Event keys whose values are header mappings
HEADER_EVENT_KEYS = ("headers", "request_headers", "response_headers")


def redact_headers(headers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of headers with credential-bearing values replaced."""
    if not headers:
        return {}

    return {
        key: REDACTED if any(marker in str(key).lower() for marker in SENSITIVE_HEADER_MARKERS) else value
        for key, value in headers.items()
    }


def redact_event_headers(
    _logger: Any, _method_name: str, event_dict: structlog.types.EventDict
) -> structlog.types.EventDict:
    """structlog processor that scrubs credentials from header mappings bound to an event."""
    for key in HEADER_EVENT_KEYS:
        value = event_dict.get(key)
        if isinstance(value, Mapping):
            event_dict[key] = redact_headers(value)
    return event_dict


def select_renderer(name: str | None = None) -> structlog.types.Processor:
    """Pick the final renderer: 'console' gives colored key/value lines, anything else JSON."""
    name = (name if name is not None else os.getenv("ATTIO_LOG_RENDERER", "")).lower()
    if name == "console":
        return structlog.dev.ConsoleRenderer(
            colors=True,
            sort_keys=True,
            event_key="message",
            exception_formatter=structlog.dev.plain_traceback,
        )
    return structlog.processors.JSONRenderer()


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_event_headers,
        structlog.processors.EventRenamer("message"),
    ]


def configure_logging(
    level: str | int | None = None,
    renderer: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Route structlog and stdlib logging through one handler on the root logger."""
    shared = _shared_processors()

    structlog.configure(
        processors=[structlog.stdlib.filter_by_level, *shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=select_renderer(renderer),
            foreign_pre_chain=shared,
        )
    )

    if level is None:
        level = os.getenv("ATTIO_LOG_LEVEL", "INFO")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def add_log_context(**kwargs: Any) -> None:
    structlog.contextvars.bind_contextvars(**kwargs)


def remove_log_context(*keys: str) -> None:
    structlog.contextvars.unbind_contextvars(*keys)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


# Context manager form: `with LogContext(record_id=...):`
LogContext = structlog.contextvars.bound_contextvars


def get_logger(name: str, **initial_values: Any) -> structlog.stdlib.BoundLogger:
    """Get a logger, usually with `__name__`. Extra keyword arguments are bound to every message."""
    return structlog.get_logger(name, **initial_values)
