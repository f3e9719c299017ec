# src/llm/adapters/openai_adapter.py — v1
"""OpenAI chat-completions adapter implementing BaseLLMClient."""

from __future__ import annotations

import time
from typing import Any

from bialign.llm.base_client import BaseLLMClient
from bialign.llm.models import LLMResponse, Message


class OpenAIAdapter(BaseLLMClient):
    """OpenAI GPT adapter."""

    def __init__(
        self,
        model: str = "gpt-4o-mini",
        api_key: str = "",
        timeout_s: float | None = None,
        **kwargs: Any,
    ):
        self._model = model
        self._api_key = api_key
        self._timeout_s = timeout_s
        self.__client = None

    @property
    def _client(self):
        """AsyncOpenAI client, built on first use with SDK retries off."""
        if self.__client is None:
            try:
                import openai
            except ImportError as e:
                raise ImportError("openai package required: pip install openai") from e
            # Empty key falls back to OPENAI_API_KEY in the environment
            client_kwargs: dict[str, Any] = {"api_key": self._api_key or None, "max_retries": 0}
            if self._timeout_s is not None:
                client_kwargs["timeout"] = self._timeout_s
            self.__client = openai.AsyncOpenAI(**client_kwargs)
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.0,
    ) -> LLMResponse:
        chat = [{"role": m.role, "content": m.content} for m in messages]
        if system:
            chat.insert(0, {"role": "system", "content": system})

        started = time.monotonic()
        resp = await self._client.chat.completions.create(
            model=self._model,
            messages=chat,
            max_tokens=max_tokens,
            temperature=temperature,
        )
        elapsed_ms = int((time.monotonic() - started) * 1000)

        usage = resp.usage
        return LLMResponse(
            content=resp.choices[0].message.content or "",
            input_tokens=getattr(usage, "prompt_tokens", 0),
            output_tokens=getattr(usage, "completion_tokens", 0),
            model=self._model,
            provider="openai",
            latency_ms=elapsed_ms,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    @property
    def model_name(self) -> str:
        return self._model
