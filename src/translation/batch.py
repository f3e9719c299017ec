# src/translation/batch.py — v1
"""Offline translation through the OpenAI Batch API.

Steps around an external batch run:

1. ``write_paragraph_jsonl`` splits a plain-text file into paragraph JSONL.
2. ``build_batch_requests`` turns paragraph JSONL (``paragraph`` and an
   optional ``request_id``) into batch request lines carrying the
   sentence-preserving translation instruction.
3. ``build_caches_from_batch`` joins the request file with the batch output
   and writes one cache file per collection. The collection id is the second
   ``_``-separated field of each ``custom_id`` (``lecture_12_p3`` -> ``12``).
"""

from __future__ import annotations

import json
import logging
from collections import defaultdict
from pathlib import Path
from typing import Any, Literal

from bialign.cache.base_cache_store import BaseCacheStore
from bialign.cache.fingerprint import compute_cache_key
from bialign.cache.models import CacheRecord
from bialign.text.paragraphs import parse_paragraphs
from bialign.translation.translator import build_system_prompt

logger = logging.getLogger(__name__)

BATCH_URL = "/v1/chat/completions"
BATCH_METHOD = "POST"


def _read_jsonl(path: Path) -> list[dict[str, Any]]:
    """Read JSON objects from a JSONL file, skipping invalid lines."""
    rows: list[dict[str, Any]] = []
    for lineno, line in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if not line.strip():
            continue
        try:
            obj = json.loads(line)
        except json.JSONDecodeError:
            logger.warning("Skipping invalid JSON on %s:%d", path.name, lineno)
            continue
        if isinstance(obj, dict):
            rows.append(obj)
    return rows


def collection_from_custom_id(custom_id: str) -> str | None:
    """Collection id encoded in a batch custom_id, or None if absent."""
    parts = custom_id.split("_")
    return parts[1] if len(parts) > 1 and parts[1] else None


def write_paragraph_jsonl(
    text_path: Path,
    output_path: Path,
    language: Literal["english", "hebrew"] = "hebrew",
    id_prefix: str | None = None,
) -> int:
    """Split a plain-text file into paragraphs and write batch input JSONL.

    Each line carries ``paragraph`` and, when ``id_prefix`` is given,
    ``request_id`` = ``<id_prefix>_p<n>``. A prefix such as ``lecture_12``
    places every paragraph in collection ``12`` when caches are built.

    Returns:
        Number of paragraphs written.
    """
    paragraphs = parse_paragraphs(text_path.read_text(encoding="utf-8"), language)
    rows: list[dict[str, str]] = []
    for n, paragraph in enumerate(paragraphs, start=1):
        row = {"paragraph": paragraph}
        if id_prefix:
            row["request_id"] = f"{id_prefix}_p{n}"
        rows.append(row)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(
        "".join(json.dumps(row, ensure_ascii=False) + "\n" for row in rows), encoding="utf-8"
    )
    logger.info("Wrote %d %s paragraphs to %s", len(rows), language, output_path)
    return len(rows)


def build_batch_requests(
    input_path: Path,
    output_path: Path,
    model: str = "gpt-4o-mini",
    source_language: str = "Hebrew",
    target_language: str = "English",
) -> int:
    """Write OpenAI batch request lines for every paragraph in ``input_path``.

    Returns:
        Number of requests written.
    """
    system_prompt = build_system_prompt(source_language, target_language)
    lines: list[str] = []
    for idx, row in enumerate(_read_jsonl(input_path), start=1):
        paragraph = row.get("paragraph")
        if not isinstance(paragraph, str) or not paragraph.strip():
            logger.warning("Skipping row %d without a paragraph", idx)
            continue
        request = {
            "custom_id": row.get("request_id") or f"req_{idx}",
            "method": BATCH_METHOD,
            "url": BATCH_URL,
            "body": {
                "model": model,
                "messages": [
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": paragraph},
                ],
                "temperature": 0,
            },
        }
        lines.append(json.dumps(request, ensure_ascii=False))

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    logger.info("Wrote %d batch requests to %s", len(lines), output_path)
    return len(lines)


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _source_paragraphs(requests: list[dict[str, Any]]) -> dict[str, str]:
    by_id: dict[str, str] = {}
    for row in requests:
        custom_id = row.get("custom_id")
        messages = _as_dict(row.get("body")).get("messages")
        if not isinstance(messages, list):
            continue
        user = next(
            (
                m.get("content")
                for m in messages
                if isinstance(m, dict) and m.get("role") == "user"
            ),
            None,
        )
        if isinstance(custom_id, str) and custom_id and isinstance(user, str):
            by_id[custom_id] = user
    return by_id


def _translations(responses: list[dict[str, Any]]) -> dict[str, str]:
    by_id: dict[str, str] = {}
    for row in responses:
        custom_id = row.get("custom_id")
        response = _as_dict(row.get("response"))
        if not isinstance(custom_id, str) or response.get("status_code") != 200:
            continue
        choices = _as_dict(response.get("body")).get("choices")
        first = choices[0] if isinstance(choices, list) and choices else None
        # Null or malformed entries skip the row instead of aborting the run
        content = _as_dict(_as_dict(first).get("message")).get("content")
        if isinstance(content, str) and content.strip():
            by_id[custom_id] = content.strip()
    return by_id


def build_caches_from_batch(
    requests_path: Path,
    responses_path: Path,
    store: BaseCacheStore,
) -> dict[str, int]:
    """Join batch requests with batch output and write per-collection caches.

    Paragraphs without a successful translation are left out, so a later live
    session can still translate them.

    Returns:
        Mapping of collection id to number of records written.
    """
    sources = _source_paragraphs(_read_jsonl(requests_path))
    translations = _translations(_read_jsonl(responses_path))

    grouped: dict[str, list[CacheRecord]] = defaultdict(list)
    seen: set[tuple[str, str]] = set()
    for custom_id, source_text in sources.items():
        collection_id = collection_from_custom_id(custom_id)
        if collection_id is None:
            logger.warning("custom_id %r has no collection field; skipped", custom_id)
            continue
        translation = translations.get(custom_id)
        if translation is None:
            logger.warning("Missing translation for custom_id %s", custom_id)
            continue
        key = compute_cache_key(source_text)
        if (collection_id, key) in seen:
            continue
        seen.add((collection_id, key))
        grouped[collection_id].append(
            CacheRecord(key=key, source_text=source_text, translated_text=translation)
        )

    written = {cid: store.write(cid, records) for cid, records in sorted(grouped.items())}
    logger.info("Built caches for %d collections", len(written))
    return written
