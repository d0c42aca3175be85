"""HTTP layer: pooled clients, frame reader, and the JSON transport."""

from .client import close_all_clients, get_httpx_client
from .framing import FrameReader
from .transport import HttpTransport, Sink

__all__ = [
    "get_httpx_client",
    "close_all_clients",
    "FrameReader",
    "HttpTransport",
    "Sink",
]
