"""Base shared constants for transports and adapters.

Central location to avoid scattering magic strings across modules.
"""
from __future__ import annotations

import platform

VERSION = "0.1.0"

JSON_CONTENT_TYPE = "application/json"

# e.g. "chatwire/0.1.0 (x86_64 linux) Python/3.12.4"
USER_AGENT = (
    f"chatwire/{VERSION} ({platform.machine()} {platform.system().lower()}) "
    f"Python/{platform.python_version()}"
)

__all__ = [
    "VERSION",
    "JSON_CONTENT_TYPE",
    "USER_AGENT",
]
