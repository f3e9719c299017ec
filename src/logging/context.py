# src/logging/context.py — v1
"""Contextual logging support: attach collection_id and operation to log records."""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per request.
_collection_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "collection_id", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    collection_id: str | None = None
    operation: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        collection_id=_collection_id.get(),
        operation=_operation.get(),
    )


def set_collection_context(collection_id: str | None) -> None:
    """Set the collection whose cache scope is active."""
    _collection_id.set(collection_id)


def set_operation_context(operation: str | None) -> None:
    """Set the public operation being served (score_pair, match_sentences, ...)."""
    _operation.set(operation)


def clear_context() -> None:
    """Reset all context variables."""
    _collection_id.set(None)
    _operation.set(None)
