"""
HTTP status classification helpers.

Maps HTTP status codes onto normalized :class:`ErrorCode` values and renders
status lines for error messages.
"""
from __future__ import annotations

from http import HTTPStatus
from typing import Dict

from .error_code import ErrorCode


_HTTP_STATUS_MAP: Dict[int, ErrorCode] = {
    400: ErrorCode.VALIDATION,
    401: ErrorCode.AUTH,
    403: ErrorCode.AUTH,
    404: ErrorCode.NOT_FOUND,
    408: ErrorCode.TIMEOUT,
    409: ErrorCode.CONFLICT,
    422: ErrorCode.VALIDATION,
    429: ErrorCode.RATE_LIMIT,
    500: ErrorCode.SERVER_ERROR,
    502: ErrorCode.TRANSIENT,
    503: ErrorCode.UNAVAILABLE,
    504: ErrorCode.TIMEOUT,
}


def classify_status(status_code: int) -> ErrorCode:
    """Classify an HTTP status code into a normalized :class:`ErrorCode`.

    Precedence:
        1. Exact mapping for well-known statuses.
        2. ``VALIDATION`` for any other 4xx, ``SERVER_ERROR`` for any other 5xx.
        3. ``UNKNOWN`` fallback.
    """
    if status_code in _HTTP_STATUS_MAP:
        return _HTTP_STATUS_MAP[status_code]
    if 400 <= status_code < 500:
        return ErrorCode.VALIDATION
    if 500 <= status_code < 600:
        return ErrorCode.SERVER_ERROR
    return ErrorCode.UNKNOWN


def status_line(status_code: int, reason: str | None = None) -> str:
    """Render ``"404 Not Found"`` style text, filling in a missing reason phrase."""
    if not reason:
        try:
            reason = HTTPStatus(status_code).phrase
        except ValueError:
            reason = ""
    return f"{status_code} {reason}".strip()


__all__ = [
    "classify_status",
    "status_line",
    "_HTTP_STATUS_MAP",
]
