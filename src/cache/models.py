# src/cache/models.py — v1
"""Cache domain model: CacheRecord.

Serialized as ``{"key", "source", "translation"}``. Files written by earlier
tooling use ``he``/``en`` for the two text fields; both spellings are read.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class CacheRecord(BaseModel):
    """A source text and its translation, keyed by the source fingerprint."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    key: str = Field(min_length=1)
    source_text: str = Field(
        default="",
        validation_alias=AliasChoices("source_text", "source", "he"),
        serialization_alias="source",
    )
    translated_text: str = Field(
        default="",
        validation_alias=AliasChoices("translated_text", "translation", "en"),
        serialization_alias="translation",
    )

    def to_json_line(self) -> str:
        """Serialize as a single JSONL line (no trailing newline)."""
        return self.model_dump_json(by_alias=True)
