# src/llm/retry.py — v1
"""Retry policy with exponential backoff for LLM calls.

Errors are classified by the HTTP status the provider SDKs attach to their
exceptions (``status_code`` on openai, anthropic and ollama errors), falling
back to the exception name and message for transport errors that have none.
"""

from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

logger = logging.getLogger(__name__)


class LLMRetryExhausted(Exception):
    """All retries exhausted for an LLM call."""

    def __init__(self, operation: str, error_type: str, attempts: int, last_error: Exception):
        self.operation = operation
        self.error_type = error_type
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"{operation!r} failed after {attempts} attempts ({error_type}): {last_error}"
        )


@dataclass(frozen=True)
class RetryConfig:
    """Backoff schedule for one error type."""

    max_retries: int
    base_delay_s: float
    backoff_factor: float = 2.0
    jitter: bool = True
    max_delay_s: float = 30.0


DEFAULT_RETRY_CONFIGS: dict[str, RetryConfig] = {
    "rate_limit": RetryConfig(max_retries=3, base_delay_s=2.0),
    "timeout": RetryConfig(max_retries=2, base_delay_s=1.0, backoff_factor=1.0),
    "server_error": RetryConfig(max_retries=3, base_delay_s=5.0),
    "connection": RetryConfig(max_retries=2, base_delay_s=1.0),
}

# Other statuses: 5xx is server_error, anything else unknown
_STATUS_TYPES: dict[int, str] = {
    401: "auth",
    403: "auth",
    408: "timeout",
    429: "rate_limit",
    529: "server_error",
}


def _status_code(error: Exception) -> int | None:
    status = getattr(error, "status_code", None)
    return status if isinstance(status, int) else None


def classify_error(error: Exception) -> str:
    """Map an exception to an error type: rate_limit, timeout, connection,
    server_error, auth or unknown."""
    status = _status_code(error)
    if status is not None:
        if status in _STATUS_TYPES:
            return _STATUS_TYPES[status]
        if status >= 500:
            return "server_error"
        return "unknown"

    msg = str(error).lower()
    name = type(error).__name__.lower()

    if "ratelimit" in name or "429" in msg or "rate limit" in msg:
        return "rate_limit"
    if "timeout" in name or "timed out" in msg or "timeout" in msg:
        return "timeout"
    if "connection" in name or "connection" in msg:
        return "connection"
    if any(c in msg for c in ("500", "502", "503", "504", "server error", "overloaded")):
        return "server_error"
    if "auth" in name or "401" in msg or "api key" in msg:
        return "auth"
    return "unknown"


def _compute_delay(config: RetryConfig, attempt: int) -> float:
    """Delay before retry ``attempt`` (0-based), capped at ``max_delay_s``."""
    delay = min(config.base_delay_s * (config.backoff_factor ** attempt), config.max_delay_s)
    if config.jitter:
        delay *= 0.5 + random.random()  # noqa: S311
    return delay


async def with_retry(
    fn: Callable[..., Awaitable[Any]],
    *args: Any,
    operation: str = "llm_call",
    retry_configs: dict[str, RetryConfig] | None = None,
    **kwargs: Any,
) -> Any:
    """Await ``fn(*args, **kwargs)``, retrying transient failures.

    An error type without a RetryConfig fails on the first attempt. Passing
    ``retry_configs={}`` disables retries entirely.

    Raises:
        LLMRetryExhausted: On a non-retryable error or when retries run out.
    """
    configs = DEFAULT_RETRY_CONFIGS if retry_configs is None else retry_configs
    attempt = 0

    while True:
        try:
            return await fn(*args, **kwargs)
        except Exception as e:
            attempt += 1
            error_type = classify_error(e)
            config = configs.get(error_type)
            if config is None or attempt > config.max_retries:
                raise LLMRetryExhausted(operation, error_type, attempt, e) from e

            delay = _compute_delay(config, attempt - 1)
            logger.warning(
                "%s: %s on attempt %d of %d, next try in %.1fs",
                operation, error_type, attempt, config.max_retries + 1, delay,
            )
            await asyncio.sleep(delay)
