# src/llm/client_factory.py — v1
"""Factory: instantiate the translation LLM client from settings.

Adapters are imported lazily by dotted path, so a deployment that only
talks to ollama never needs the openai or anthropic SDKs installed.
"""

from __future__ import annotations

import importlib
import logging

from bialign.config.settings import Settings
from bialign.llm.base_client import BaseLLMClient

logger = logging.getLogger(__name__)

# Registry of provider name -> adapter class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "openai": "bialign.llm.adapters.openai_adapter.OpenAIAdapter",
    "anthropic": "bialign.llm.adapters.anthropic_adapter.AnthropicAdapter",
    "ollama": "bialign.llm.adapters.ollama_adapter.OllamaAdapter",
}

# Adapter keyword -> Settings field, per provider
_SETTINGS_KWARGS: dict[str, dict[str, str]] = {
    "openai": {"api_key": "openai_api_key", "timeout_s": "translation_timeout_s"},
    "anthropic": {"api_key": "anthropic_api_key", "timeout_s": "translation_timeout_s"},
    "ollama": {
        "host": "ollama_base_url",
        "keep_alive": "ollama_keep_alive",
        "timeout_s": "translation_timeout_s",
    },
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(
    provider: str,
    model: str,
    settings: Settings | None = None,
    **kwargs: object,
) -> BaseLLMClient:
    """Instantiate the correct adapter from provider name.

    Args:
        provider: Provider identifier (openai, anthropic, ollama).
        model: Model name (e.g. gpt-4o-mini).
        settings: Source of credentials and hosts. Explicit kwargs win.
        **kwargs: Additional provider-specific arguments.

    Raises:
        UnsupportedProviderError: If provider is not registered.
    """
    class_path = _PROVIDER_REGISTRY.get(provider)
    if class_path is None:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    init_kwargs = dict(kwargs, model=model)
    if settings is not None:
        for kwarg, field in _SETTINGS_KWARGS.get(provider, {}).items():
            init_kwargs.setdefault(kwarg, getattr(settings, field))

    logger.debug("Creating LLM client: provider=%s, model=%s", provider, model)
    return _import_class(class_path)(**init_kwargs)


def create_translation_client(settings: Settings) -> BaseLLMClient:
    """Client for the configured LLM_PROVIDER / LLM_MODEL pair."""
    return create_llm_client(settings.llm_provider, settings.llm_model, settings)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom provider adapter.

    Custom providers receive no settings-derived arguments; pass them as
    kwargs to ``create_llm_client``.
    """
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s -> %s", name, class_path)


def _import_class(class_path: str) -> type:
    module_path, class_name = class_path.rsplit(".", 1)
    return getattr(importlib.import_module(module_path), class_name)
