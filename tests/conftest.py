"""Test-wide fixtures.

Logging is routed to a discarding logger so structlog never writes to
streams that CliRunner or pytest swap out and close.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog

import vargraph.app
import vargraph.cli.main


def _quiet_logging(level: str = "info") -> None:
    structlog.configure(
        processors=[structlog.processors.add_log_level, structlog.processors.JSONRenderer()],
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        logger_factory=structlog.ReturnLoggerFactory(),
        cache_logger_on_first_use=False,
    )


@pytest.fixture(autouse=True, scope="session")
def _quiet_structlog() -> Iterator[None]:
    patcher = pytest.MonkeyPatch()
    _quiet_logging()
    patcher.setattr(vargraph.app, "setup_logging", _quiet_logging)
    patcher.setattr(vargraph.cli.main, "setup_logging", _quiet_logging)
    yield
    patcher.undo()
