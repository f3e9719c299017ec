# src/llm/adapters/ollama_adapter.py — v1
"""Ollama local LLM adapter implementing BaseLLMClient.

One ``ollama.AsyncClient`` is created on first use and reused, so a batch of
paragraph translations shares the same HTTP connection pool. ``keep_alive``
keeps the model resident between requests.
"""

from __future__ import annotations

import time
from typing import Any

from bialign.llm.base_client import BaseLLMClient
from bialign.llm.models import LLMResponse, Message


class OllamaAdapter(BaseLLMClient):
    """Ollama local inference adapter."""

    def __init__(
        self,
        model: str = "llama3",
        host: str = "http://localhost:11434",
        keep_alive: str | None = "5m",
        timeout_s: float | None = None,
        **kwargs: Any,
    ):
        self._model = model
        self._host = host
        self._keep_alive = keep_alive
        self._timeout_s = timeout_s
        self.__client = None

    @property
    def _client(self):
        if self.__client is None:
            import ollama

            client_kwargs: dict[str, Any] = {"host": self._host}
            if self._timeout_s is not None:
                client_kwargs["timeout"] = self._timeout_s
            self.__client = ollama.AsyncClient(**client_kwargs)
        return self.__client

    async def complete(
        self,
        messages: list[Message],
        system: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.0,
    ) -> LLMResponse:
        chat_messages = [{"role": m.role, "content": m.content} for m in messages]
        if system:
            chat_messages.insert(0, {"role": "system", "content": system})

        request: dict[str, Any] = {
            "model": self._model,
            "messages": chat_messages,
            "options": {"num_predict": max_tokens, "temperature": temperature},
        }
        if self._keep_alive is not None:
            request["keep_alive"] = self._keep_alive

        started = time.monotonic()
        resp = await self._client.chat(**request)
        elapsed_ms = int((time.monotonic() - started) * 1000)

        # Counts are absent when the prompt was served from ollama's own cache
        return LLMResponse(
            content=resp["message"]["content"],
            input_tokens=resp.get("prompt_eval_count") or 0,
            output_tokens=resp.get("eval_count") or 0,
            model=self._model,
            provider="ollama",
            latency_ms=elapsed_ms,
            raw_response=resp,
        )

    @property
    def provider_name(self) -> str:
        return "ollama"

    @property
    def model_name(self) -> str:
        return self._model
