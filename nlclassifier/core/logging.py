from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

__all__: list[str] = [
    "configure_logging",
]


def _drop_credentials(
    logger: Any,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Make sure credential-bearing keys never reach the renderer."""

    for key in ("api_key", "password", "authorization"):
        if key in event_dict:
            event_dict[key] = "***"
    return event_dict


_JSON_PROCESSORS: list[Processor] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    _drop_credentials,
    structlog.processors.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.JSONRenderer(),
]


def _configure_stdlib_logging(level: int) -> None:
    """Route the built-in *logging* module (httpx logs through it) to stderr."""

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.handlers.clear()
    root_logger.addHandler(handler)


_LOGGING_CONFIGURED: bool = False


def configure_logging(debug: bool = False) -> None:
    """Initialise `structlog` for the entire process.

    Libraries should not configure logging on import, so the client never
    calls this itself; applications (and the bundled CLI) do. Until then the
    client's events go to a silent stdlib logger; afterwards every event is
    rendered as JSON and handed to the root handler on stderr. The function is
    idempotent: calls after the first are no-ops.

    Parameters
    ----------
    debug:
        When *True* lowers the log level to ``DEBUG``; otherwise ``INFO``.
    """

    global _LOGGING_CONFIGURED

    if _LOGGING_CONFIGURED:
        return

    level: int = logging.DEBUG if debug else logging.INFO

    _configure_stdlib_logging(level)

    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(level),
        processors=_JSON_PROCESSORS,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _LOGGING_CONFIGURED = True