"""Provider Factory utilities.

Purpose
-------
Centralize creation of chat and embedding adapters by provider name. Adapter
modules (and the SDKs behind them) are imported lazily using ``importlib`` so
that importing the factory stays cheap and side-effect free.

Resolution
----------
- The model comes from the ``model=`` argument, else the provider's
  configured default (``model`` for chat, ``embed_model`` for embeddings).
- Connection settings (``host``, ``base_url``, ``api_key``) come from keyword
  arguments layered over :func:`chatwire.config.get_provider_config`.
- A ready-made provider client may be passed as ``client=``; otherwise one is
  built. OpenAI SDK clients are built with ``max_retries=0``.

Timeout and fallback semantics
------------------------------
No timeouts, retries or fallbacks are introduced here. The factory either
returns an adapter or raises :class:`UnknownProviderError`.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Mapping, Optional, Tuple, Type

from ..config import get_provider_config

_CLIENT_KWARGS = ("host", "base_url", "api_key", "http_client")


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized.

    Failure modes include:
    - The provider name is not registered for the requested capability.
    - The adapter module cannot be imported or the adapter class is missing.
    - No model was given and none is configured.
    - The provider client or adapter constructor raised.
    """


class ProviderFactory:
    """Create adapters by canonical provider name (e.g. ``"ollama"``)."""

    _CHAT_PROVIDERS: Dict[str, Dict[str, str]] = {
        "ollama": {"module": "chatwire.ollama.chat_model", "class": "OllamaChatModel"},
        "openai": {"module": "chatwire.openai.chat_model", "class": "OpenAIChatModel"},
    }
    _EMBEDDING_PROVIDERS: Dict[str, Dict[str, str]] = {
        "ollama": {"module": "chatwire.ollama.embedding_model", "class": "OllamaEmbeddingModel"},
    }

    @classmethod
    def create_chat_model(
        cls,
        provider: str,
        *,
        model: Optional[str] = None,
        client: Any = None,
        **kwargs: Any,
    ) -> Any:
        """Create a chat adapter implementing ``ChatModel``.

        Raises
        ------
        UnknownProviderError
            Unknown provider, import failure, missing model, or a constructor
            error.
        """
        return cls._create(cls._CHAT_PROVIDERS, "chat", "model", provider, model, client, kwargs)

    @classmethod
    def create_embedding_model(
        cls,
        provider: str,
        *,
        model: Optional[str] = None,
        client: Any = None,
        **kwargs: Any,
    ) -> Any:
        """Create an embedding adapter implementing ``EmbeddingModel``."""
        return cls._create(cls._EMBEDDING_PROVIDERS, "embedding", "embed_model", provider, model, client, kwargs)

    @classmethod
    def supported(cls, capability: str = "chat") -> Tuple[str, ...]:
        """Return the provider names supporting ``capability`` (``chat`` or ``embedding``)."""
        table = cls._EMBEDDING_PROVIDERS if capability == "embedding" else cls._CHAT_PROVIDERS
        return tuple(table.keys())

    @classmethod
    def _create(
        cls,
        table: Mapping[str, Mapping[str, str]],
        capability: str,
        model_key: str,
        provider: str,
        model: Optional[str],
        client: Any,
        kwargs: Dict[str, Any],
    ) -> Any:
        name = (provider or "").lower().strip()
        spec = table.get(name)
        if not spec:
            raise UnknownProviderError(f"Unknown {capability} provider '{provider}'")
        unexpected = sorted(set(kwargs) - set(_CLIENT_KWARGS))
        if unexpected:
            raise UnknownProviderError(f"Invalid arguments for '{provider}': {', '.join(unexpected)}")

        klass = cls._load(spec["module"], spec["class"], provider)
        cfg = get_provider_config(name, overrides={k: kwargs.get(k) for k in ("host", "base_url", "api_key")})
        resolved_model = model or cfg.get(model_key)
        if not resolved_model:
            raise UnknownProviderError(f"No {capability} model given or configured for provider '{provider}'")

        try:
            if client is None:
                client = cls._build_client(name, cfg, kwargs.get("http_client"))
            return klass(client, resolved_model)
        except UnknownProviderError:
            raise
        except Exception as exc:
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {exc}") from exc

    @staticmethod
    def _load(module_path: str, class_name: str, provider: str) -> Type:
        try:
            mod = import_module(module_path)
        except ImportError as exc:  # pragma: no cover - import failure path
            raise UnknownProviderError(
                f"Failed to import module '{module_path}' for provider '{provider}': {exc}"
            ) from exc
        try:
            return getattr(mod, class_name)
        except AttributeError as exc:
            raise UnknownProviderError(
                f"Adapter class '{class_name}' not found in '{module_path}' for provider '{provider}'"
            ) from exc

    @staticmethod
    def _build_client(name: str, cfg: Mapping[str, Any], http_client: Any) -> Any:
        if name == "ollama":
            from ..ollama.client import OllamaClient

            return OllamaClient(cfg["host"], http_client=http_client)
        if name == "openai":
            sdk = import_module("openai")
            return sdk.OpenAI(
                api_key=cfg.get("api_key"),
                base_url=cfg.get("base_url"),
                max_retries=0,
                http_client=http_client,
            )
        raise UnknownProviderError(f"No client builder for provider '{name}'")


def create_chat_model(provider: str, *, model: Optional[str] = None, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create_chat_model`."""
    return ProviderFactory.create_chat_model(provider, model=model, **kwargs)


def create_embedding_model(provider: str, *, model: Optional[str] = None, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create_embedding_model`."""
    return ProviderFactory.create_embedding_model(provider, model=model, **kwargs)


__all__ = [
    "UnknownProviderError",
    "ProviderFactory",
    "create_chat_model",
    "create_embedding_model",
]
