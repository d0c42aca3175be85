"""Timeout configuration for HTTP clients created by chatwire.

No retry or per-call timeout policy lives in this package: callers bound a
call with a ``CancellationToken`` deadline. The values here only configure
the pooled ``httpx.Client`` instances chatwire builds itself; clients
injected by callers keep their own timeout, TLS, and proxy settings.

Supported environment variables (all optional, positive floats):
    CHATWIRE_CONNECT_TIMEOUT_SECONDS
    CHATWIRE_READ_TIMEOUT_SECONDS

Invalid or non-positive values fall back to the defaults.
"""
from __future__ import annotations

import os
from dataclasses import dataclass

import httpx

from ..config.defaults import (
    HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS,
    HTTP_DEFAULT_READ_TIMEOUT_SECONDS,
)


@dataclass(frozen=True)
class TimeoutConfig:
    """Container for normalized timeout values (seconds).

    Attributes:
        connect_timeout_seconds: Time allowed to establish a connection.
        read_timeout_seconds: Maximum idle gap between two reads; streaming
            responses may be idle while a model is loading, hence the
            generous default.
    """

    connect_timeout_seconds: float = HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS
    read_timeout_seconds: float = HTTP_DEFAULT_READ_TIMEOUT_SECONDS

    def to_httpx(self) -> httpx.Timeout:
        """Translate to an ``httpx.Timeout`` (write/pool share the connect value)."""
        return httpx.Timeout(self.connect_timeout_seconds, read=self.read_timeout_seconds)


_CACHED: TimeoutConfig | None = None
_ENV_GUARD: str | None = None


def _parse_env_float(name: str, default: float) -> float:
    """Parse an environment variable as a positive float, else ``default``."""
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        val = float(raw)
    except ValueError:
        return default
    return val if val > 0 else default


def get_timeout_config() -> TimeoutConfig:
    """Return the process-cached `TimeoutConfig`, refreshed if the env changed."""
    global _CACHED, _ENV_GUARD  # noqa: PLW0603 - documented module cache
    guard = "/".join(
        [
            os.getenv("CHATWIRE_CONNECT_TIMEOUT_SECONDS", ""),
            os.getenv("CHATWIRE_READ_TIMEOUT_SECONDS", ""),
        ]
    )
    if _CACHED is not None and _ENV_GUARD == guard:
        return _CACHED
    _CACHED = TimeoutConfig(
        connect_timeout_seconds=_parse_env_float(
            "CHATWIRE_CONNECT_TIMEOUT_SECONDS", HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS
        ),
        read_timeout_seconds=_parse_env_float(
            "CHATWIRE_READ_TIMEOUT_SECONDS", HTTP_DEFAULT_READ_TIMEOUT_SECONDS
        ),
    )
    _ENV_GUARD = guard
    return _CACHED


__all__ = ["TimeoutConfig", "get_timeout_config"]
