"""chatwire.config.defaults
=========================

Central place for small, stable default values used across the chatwire
package. These defaults can be overridden via environment variables, an
optional config file, or explicit overrides (see ``chatwire.config``), but
provide sensible fallbacks for local development and tests.

This module intentionally avoids importing from other chatwire packages to
prevent circular dependencies. Only plain constants live here.
"""

from __future__ import annotations

# ---- Ollama (local daemon) ----
OLLAMA_DEFAULT_HOST = "http://localhost:11434"
OLLAMA_DEFAULT_MODEL = "llama3.2"
OLLAMA_DEFAULT_EMBED_MODEL = "nomic-embed-text"

# ---- OpenAI ----
# The SDK uses api.openai.com when base_url is omitted; kept explicit for parity.
OPENAI_DEFAULT_BASE_URL = "https://api.openai.com/v1"
OPENAI_DEFAULT_MODEL = "gpt-4o-mini"

# ---- Transport ----
# Initial capacity hint for the streaming frame buffer (bytes). The buffer
# grows past this for larger frames.
STREAM_INITIAL_BUFFER_BYTES = 512 * 1000
HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0
HTTP_DEFAULT_READ_TIMEOUT_SECONDS = 300.0


__all__ = [
    "OLLAMA_DEFAULT_HOST",
    "OLLAMA_DEFAULT_MODEL",
    "OLLAMA_DEFAULT_EMBED_MODEL",
    "OPENAI_DEFAULT_BASE_URL",
    "OPENAI_DEFAULT_MODEL",
    "STREAM_INITIAL_BUFFER_BYTES",
    "HTTP_DEFAULT_CONNECT_TIMEOUT_SECONDS",
    "HTTP_DEFAULT_READ_TIMEOUT_SECONDS",
]
