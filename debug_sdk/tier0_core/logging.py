"""
debug_sdk.tier0_core.logging
─────────────────────────────
Structured logs for the degrade paths (render fallback, failed descriptions,
recursion markers). Events carry type names and exception classes only,
never the values being formatted.

Minimal stack: structlog (stdout JSON or console)
Configure via: DEBUG_SDK_LOG_LEVEL, DEBUG_SDK_LOG_FORMAT=json|console
"""
from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from debug_sdk.tier0_core.config import get_config
from debug_sdk.tier0_core.policy import RedactionPolicy
from debug_sdk.tier0_core.values import REDACTED_TEXT

_LOGGER_NAME = "debug_sdk"

# Field names that never reach a log line, whatever a caller binds.
_LOG_REDACT_POLICY = RedactionPolicy.of({
    "password", "secret", "token", "api_key", "authorization",
    "credential", "private_key", "client_secret",
})


def _redact_processor(logger: Any, method: str, event_dict: dict) -> dict:
    for key in list(event_dict):
        if key.lower() in _LOG_REDACT_POLICY:
            event_dict[key] = REDACTED_TEXT
    return event_dict


def _configure() -> None:
    config = get_config()
    level = getattr(logging, config.log_level.upper(), logging.INFO)

    processors: list[Any] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        _redact_processor,
    ]
    if config.log_format == "console":
        renderer: Any = structlog.dev.ConsoleRenderer()
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    ))
    sdk_logger = logging.getLogger(_LOGGER_NAME)
    sdk_logger.addHandler(handler)
    sdk_logger.setLevel(level)


_configured = False


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Usage:
        log = get_logger(__name__)
        log.warning("describe.failed", type_name="User", error_type="KeyError")
    """
    global _configured
    if not _configured:
        _configure()
        _configured = True
    return structlog.get_logger(name or _LOGGER_NAME)


__all__ = ["get_logger"]
