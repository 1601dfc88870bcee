"""Structured logging for vargraph.

Every event is one JSON object on stderr carrying ``service``, ``component``,
``level`` and ``ts``. Values under credential keys are masked before
rendering so store connection details can be logged as-is.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping, MutableMapping
from typing import IO, Any

import structlog

_SECRET_KEYS = frozenset({"password", "auth", "credentials"})
_MASK = "***"


def _masked(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: (_MASK if k in _SECRET_KEYS and v else _masked(v)) for k, v in value.items()}
    return value


def mask_secrets(_logger: Any, _method: str, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """structlog processor replacing credential values, at any depth, with a fixed mask."""
    for key, value in event_dict.items():
        event_dict[key] = _MASK if key in _SECRET_KEYS and value else _masked(value)
    return event_dict


def setup_logging(level: str = "info", stream: IO[str] | None = None) -> None:
    """Configure structlog JSON output; *stream* defaults to stderr.

    stdout is left to command output (``vargraph augment`` prints JSON there).
    """
    log_level = logging.getLevelNamesMapping().get(level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key="ts"),
            mask_secrets,
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=True,
    )
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service="vargraph")


def get_logger(component: str) -> structlog.stdlib.BoundLogger:
    """Get a logger bound with a component name."""
    return structlog.get_logger(component=component)  # type: ignore[return-value]
