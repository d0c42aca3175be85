"""Errors parts package public surface.

Re-exports individual error taxonomy components for optional direct imports.
Prefer importing from `chatwire.base.errors` for the stable surface.
"""

from .base_error import ChatwireError
from .error_code import ErrorCode
from .encoding_error import EncodingError
from .provider_error import ProviderError
from .sink_error import SinkError
from .transport_error import TransportError
from .classification import classify_status, status_line

__all__ = [
    "ChatwireError",
    "ErrorCode",
    "EncodingError",
    "ProviderError",
    "SinkError",
    "TransportError",
    "classify_status",
    "status_line",
]
