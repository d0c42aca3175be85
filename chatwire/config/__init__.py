"""Unified configuration layer for providers.

Goals
-----
* Centralize defaults (models, hosts, base URLs).
* Merge sources in a predictable order:
    1. Built-in defaults
    2. Optional external JSON config file pointed to by CHATWIRE_CONFIG_FILE
    3. Environment variables (e.g. OLLAMA_HOST, OPENAI_API_KEY)
    4. In-code overrides passed to the helper (``None`` values ignored)
* Provide a single call site: ``get_provider_config(provider: str)``.

Environment Variable Conventions
--------------------------------
<PROVIDER>_MODEL, <PROVIDER>_EMBED_MODEL, <PROVIDER>_HOST,
<PROVIDER>_BASE_URL, <PROVIDER>_API_KEY; e.g. OLLAMA_HOST, OPENAI_MODEL.

External Config File (Optional)
-------------------------------
A JSON object keyed by provider name::

    {
      "ollama": {"host": "http://gpu-box:11434", "model": "llama3.1:8b"},
      "openai": {"model": "gpt-4o-mini"}
    }

Public API
----------
* get_provider_config(provider: str, overrides: dict | None = None) -> dict
* get_model(provider: str) -> str | None
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from .defaults import (
    OLLAMA_DEFAULT_EMBED_MODEL,
    OLLAMA_DEFAULT_HOST,
    OLLAMA_DEFAULT_MODEL,
    OPENAI_DEFAULT_BASE_URL,
    OPENAI_DEFAULT_MODEL,
)


DEFAULTS: Dict[str, Dict[str, Any]] = {
    "ollama": {
        "host": OLLAMA_DEFAULT_HOST,
        "model": OLLAMA_DEFAULT_MODEL,
        "embed_model": OLLAMA_DEFAULT_EMBED_MODEL,
    },
    "openai": {
        "base_url": OPENAI_DEFAULT_BASE_URL,
        "model": OPENAI_DEFAULT_MODEL,
    },
}


ENV_FIELD_MAP = {
    "model": "MODEL",
    "embed_model": "EMBED_MODEL",
    "host": "HOST",
    "base_url": "BASE_URL",
    "api_key": "API_KEY",  # pragma: allowlist secret - env suffix name, not a secret
}


def _load_config_file() -> Dict[str, Any]:
    """Load the optional JSON config file named by ``CHATWIRE_CONFIG_FILE``.

    A missing variable or missing file yields an empty mapping. A file that
    exists but is not a JSON object raises ``ValueError`` so misconfiguration
    is not silently ignored.
    """
    path = os.getenv("CHATWIRE_CONFIG_FILE")
    if not path:
        return {}
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        return {}
    data = json.loads(file_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"config file {file_path} must contain a JSON object")
    return data


def _env_values(provider: str) -> Dict[str, str]:
    """Collect ``<PROVIDER>_<FIELD>`` environment overrides for ``provider``."""
    prefix = provider.upper()
    values: Dict[str, str] = {}
    for key, suffix in ENV_FIELD_MAP.items():
        raw = os.getenv(f"{prefix}_{suffix}")
        if raw is not None and raw.strip():
            values[key] = raw.strip()
    return values


def get_provider_config(provider: str, overrides: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Return the merged configuration dict for ``provider``.

    Later sources win: defaults < config file < environment < overrides.
    Unknown providers start from an empty default mapping.
    """
    key = provider.lower()
    cfg: Dict[str, Any] = dict(DEFAULTS.get(key, {}))
    file_section = _load_config_file().get(key)
    if isinstance(file_section, dict):
        cfg.update(file_section)
    cfg.update(_env_values(key))
    if overrides:
        cfg.update({k: v for k, v in overrides.items() if v is not None})
    return cfg


def get_model(provider: str) -> Optional[str]:
    """Convenience accessor for the resolved default chat model of ``provider``."""
    return get_provider_config(provider).get("model")


__all__ = ["DEFAULTS", "ENV_FIELD_MAP", "get_provider_config", "get_model"]
