# src/translation/translator.py — v1
"""LLM-backed paragraph translator.

The model is instructed to keep sentence boundaries 1:1 (one output line per
input sentence, same order). Nothing checks that it complied; the sentence
matcher copes with merged or split sentences.

Failures never raise: ``translate`` returns a TranslationError so batch
scoring can carry on past a single bad paragraph.
"""

from __future__ import annotations

import asyncio
import logging

from bialign.core.models import TranslationError, TranslationOutcome
from bialign.llm.base_client import BaseLLMClient
from bialign.llm.models import Message
from bialign.llm.retry import LLMRetryExhausted, RetryConfig, with_retry

logger = logging.getLogger(__name__)

_PROMPT_TEMPLATE = (
    "Translate the following {source} paragraph to {target}. "
    "Preserve sentence boundaries: for each {source} sentence, output the "
    "corresponding {target} sentence on a new line, in the same order. "
    "Do not merge or split sentences. "
    "Return ONLY the translation, one {target} sentence per line."
)


def build_system_prompt(source_language: str = "Hebrew", target_language: str = "English") -> str:
    """Sentence-preserving translation instruction."""
    return _PROMPT_TEMPLATE.format(source=source_language, target=target_language)


def _preview(text: str, length: int = 50) -> str:
    return text if len(text) <= length else f"{text[:length]}..."


class Translator:
    """Translate source-language paragraphs through an LLM client."""

    def __init__(
        self,
        client: BaseLLMClient,
        source_language: str = "Hebrew",
        target_language: str = "English",
        timeout_s: float = 60.0,
        max_tokens: int = 4096,
        temperature: float = 0.0,
        retry_configs: dict[str, RetryConfig] | None = None,
    ) -> None:
        self._client = client
        self._system_prompt = build_system_prompt(source_language, target_language)
        self._timeout_s = timeout_s
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._retry_configs = retry_configs

    @property
    def system_prompt(self) -> str:
        return self._system_prompt

    async def translate(self, source_text: str) -> TranslationOutcome:
        """Translate one paragraph.

        Returns:
            The translated text, or a TranslationError describing the failure.
        """
        if not source_text.strip():
            return TranslationError(reason="empty source text")

        logger.debug(
            "Translating via %s:%s: %r",
            self._client.provider_name, self._client.model_name, _preview(source_text),
        )
        try:
            response = await asyncio.wait_for(
                with_retry(
                    self._complete,
                    source_text,
                    operation="translate",
                    retry_configs=self._retry_configs,
                ),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError:
            logger.error("Translation timed out after %.1fs", self._timeout_s)
            return TranslationError(
                reason=f"timed out after {self._timeout_s}s",
                source_preview=_preview(source_text),
            )
        except LLMRetryExhausted as e:
            logger.error("Translation failed: %s", e)
            return TranslationError(
                reason=f"{e.error_type}: {e.last_error}",
                source_preview=_preview(source_text),
            )

        translation = response.content.strip()
        if not translation:
            logger.error("Translation returned empty output")
            return TranslationError(
                reason="empty model output", source_preview=_preview(source_text)
            )

        logger.debug(
            "Translation received (%d ms, %d tokens): %r",
            response.latency_ms, response.total_tokens, _preview(translation),
        )
        return translation

    async def _complete(self, source_text: str):
        return await self._client.complete(
            [Message(role="user", content=source_text)],
            system=self._system_prompt,
            max_tokens=self._max_tokens,
            temperature=self._temperature,
        )
