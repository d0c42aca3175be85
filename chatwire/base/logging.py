"""Base structured logging utilities for the chatwire package.

Rationale:
- Central place to configure consistent JSON (or plain) logging.
- Avoid sprinkling ad-hoc logger setup across adapters and transports.

All package loggers are children of the shared ``chatwire`` logger, which
writes single-line JSON to stderr. The level comes from the
``CHATWIRE_LOG_LEVEL`` environment variable and defaults to ``WARNING`` so
that lifecycle events (emitted at INFO) stay silent unless requested.

Only lifecycle events are logged (request start/end, emitted counts). Errors
are raised to callers and never logged as a substitute for raising.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
import sys
from typing import Any, Dict

from .log_support import JsonFormatter, LogContext


BASE_LOGGER_NAME = "chatwire"
_BASE_LOGGER_ATTR = "_chatwire_logger_initialized"
_CONSOLE_HANDLER_ATTR = "_chatwire_console_handler"
_PLAIN_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def _parse_level(value: str | None, default: int = logging.WARNING) -> int:
    """Parse a logging level string into an integer constant.

    Accepts common names (DEBUG, INFO, WARNING, ERROR, CRITICAL) case-insensitively.
    Falls back to ``default`` on unknown values.
    """
    if not value:
        return default
    mapping = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARN": logging.WARNING,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    return mapping.get(value.strip().upper(), default)


def _make_formatter(json_mode: bool) -> logging.Formatter:
    return JsonFormatter() if json_mode else logging.Formatter(_PLAIN_FORMAT)


def _ensure_base_logger(json_mode: bool, level: int) -> logging.Logger:
    """Initialize and return the shared ``chatwire`` logger."""

    logger = logging.getLogger(BASE_LOGGER_NAME)
    env_level = os.getenv("CHATWIRE_LOG_LEVEL")
    desired_level = _parse_level(env_level, default=level)
    if getattr(logger, _BASE_LOGGER_ATTR, False):
        # Keep a level set through configure_logger unless the env pins one.
        if env_level:
            logger.setLevel(desired_level)
        for existing in logger.handlers:
            if not getattr(existing, _CONSOLE_HANDLER_ATTR, False):
                continue
            existing.setLevel(logger.level)
            # Rebind to the current stderr (test harnesses swap it).
            if isinstance(existing, logging.StreamHandler):
                with contextlib.suppress(ValueError):
                    existing.setStream(sys.stderr)
            if json_mode != isinstance(existing.formatter, JsonFormatter):
                existing.setFormatter(_make_formatter(json_mode))
        return logger

    logger.setLevel(desired_level)
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(desired_level)
    handler.setFormatter(_make_formatter(json_mode))
    setattr(handler, _CONSOLE_HANDLER_ATTR, True)
    logger.handlers[:] = [handler]
    logger.propagate = False
    setattr(logger, _BASE_LOGGER_ATTR, True)
    return logger


def get_logger(name: str = BASE_LOGGER_NAME, json_mode: bool = True, level: int = logging.WARNING) -> logging.Logger:
    """Return ``name`` as a child of the configured ``chatwire`` logger."""
    base_logger = _ensure_base_logger(json_mode=json_mode, level=level)
    if name == BASE_LOGGER_NAME:
        return base_logger
    if not name.startswith(BASE_LOGGER_NAME + "."):
        name = f"{BASE_LOGGER_NAME}.{name}"
    logger = logging.getLogger(name)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    return logger


def configure_logger(*, level: int | str | None = None, json_mode: bool = True) -> logging.Logger:
    """Reconfigure the shared ``chatwire`` logger at runtime.

    Parameters
    ----------
    level: int | str | None
        Desired logging level. Accepts numeric levels or names (e.g., "DEBUG").
        When ``None``, the current level is preserved.
    json_mode: bool
        Whether the console handler uses the JSON formatter or plain text.

    Returns
    -------
    logging.Logger
        The configured base logger. Handlers not managed by this module are
        left untouched.
    """
    logger = _ensure_base_logger(json_mode=json_mode, level=logging.getLogger(BASE_LOGGER_NAME).level or logging.WARNING)
    if level is not None:
        if isinstance(level, str):
            logger.setLevel(_parse_level(level, default=logger.level))
        else:
            logger.setLevel(level)
        for h in logger.handlers:
            if getattr(h, _CONSOLE_HANDLER_ATTR, False):
                h.setLevel(logger.level)
    return logger


def log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    **fields: Any,
) -> None:
    """Emit a structured log event.

    Builds ``{"event": event, **ctx, **fields}`` (dropping ``None`` values)
    and writes it as a single JSON message at INFO level. Serialization is
    skipped entirely when INFO is disabled for ``logger``.
    """
    if not logger.isEnabledFor(logging.INFO):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload.update({k: v for k, v in fields.items() if v is not None})
    logger.info(json.dumps(payload, ensure_ascii=False, default=str))


def normalized_log_event(
    logger: logging.Logger,
    event: str,
    ctx: LogContext | None = None,
    *,
    phase: str,
    emitted: int | bool | None = None,
    **extra_fields: Any,
) -> None:
    """Emit a lifecycle event that always carries ``phase`` and ``emitted`` keys.

    ``emitted`` is kept even when ``None`` so downstream filters can rely on
    its presence; other ``None`` fields are dropped as in ``log_event``.
    """
    if not logger.isEnabledFor(logging.INFO):
        return
    payload: Dict[str, Any] = {"event": event}
    if ctx:
        payload |= ctx.to_dict()
    payload["phase"] = phase
    payload["emitted"] = emitted
    for k, v in extra_fields.items():
        if v is not None and k not in payload:
            payload[k] = v
    logger.info(json.dumps(payload, ensure_ascii=False, default=str))


__all__ = [
    "BASE_LOGGER_NAME",
    "LogContext",
    "get_logger",
    "configure_logger",
    "log_event",
    "normalized_log_event",
]
