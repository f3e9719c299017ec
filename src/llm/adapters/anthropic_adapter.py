# src/llm/adapters/anthropic_adapter.py — v1
"""Anthropic Claude adapter implementing BaseLLMClient.

The Messages API takes the system prompt as a separate parameter, so any
system-role messages are folded into it ahead of the explicit ``system``.
SDK-level retries are disabled; ``llm.retry.with_retry`` owns retrying.
"""

from __future__ import annotations

import time
from typing import Any

from bialign.llm.base_client import BaseLLMClient
from bialign.llm.models import LLMResponse, Message


class AnthropicAdapter(BaseLLMClient):
    """Adapter for Anthropic Claude models."""

    def __init__(
        self,
        model: str = "claude-sonnet-4-20250514",
        api_key: str | None = None,
        timeout_s: float | None = None,
        **kwargs: Any,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout_s = timeout_s
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            try:
                import anthropic
            except ImportError as e:
                raise ImportError(
                    "anthropic package required: pip install anthropic"
                ) from e
            client_kwargs: dict[str, Any] = {"api_key": self._api_key or None, "max_retries": 0}
            if self._timeout_s is not None:
                client_kwargs["timeout"] = self._timeout_s
            self.__client = anthropic.AsyncAnthropic(**client_kwargs)
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.0,
    ) -> LLMResponse:
        system_parts = [m.content for m in messages if m.role == "system"]
        if system:
            system_parts.append(system)

        request: dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [
                {"role": m.role, "content": m.content}
                for m in messages
                if m.role != "system"
            ],
        }
        if system_parts:
            request["system"] = "\n\n".join(system_parts)

        started = time.monotonic()
        response = await self._client.messages.create(**request)
        elapsed_ms = int((time.monotonic() - started) * 1000)

        return LLMResponse(
            content="".join(
                block.text for block in response.content if getattr(block, "type", None) == "text"
            ),
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
            model=response.model,
            provider="anthropic",
            latency_ms=elapsed_ms,
            raw_response=response,
        )

    @property
    def provider_name(self) -> str:
        return "anthropic"

    @property
    def model_name(self) -> str:
        return self._model
