# tests/integration/cache/test_int_cache_stores.py — v1
"""Integration tests for the cache subsystem on real files.

Covers: cache/jsonl_store.py, cache/scope.py, cache/models.py, cache/fingerprint.py
"""

from __future__ import annotations

import json

from bialign.cache.fingerprint import compute_cache_key
from bialign.cache.jsonl_store import JsonlCacheStore
from bialign.cache.models import CacheRecord
from bialign.cache.scope import CacheScope

PARAGRAPHS = {
    "החתול ישב.": "The cat sat.",
    "מזג האוויר נעים היום.": "The weather is nice today.",
    "שורה ראשונה.\nשורה שנייה.": "First line.\nSecond line.",
}


class TestJsonlLifecycle:
    def test_ephemeral_flush_reload(self, tmp_path):
        store = JsonlCacheStore(tmp_path)
        scope = CacheScope.load(store, "21")
        for source, translation in PARAGRAPHS.items():
            scope.put(
                CacheRecord(
                    key=compute_cache_key(source), source_text=source, translated_text=translation
                )
            )
        assert scope.flush(store) == 3

        reloaded = CacheScope.load(store, "21")
        assert reloaded.persistent is True
        for source, translation in PARAGRAPHS.items():
            assert reloaded.get(compute_cache_key(source)).translated_text == translation

    def test_file_is_utf8_jsonl(self, tmp_path):
        store = JsonlCacheStore(tmp_path)
        store.write(
            "21",
            [CacheRecord(key=compute_cache_key("החתול ישב."), source_text="החתול ישב.",
                         translated_text="The cat sat.")],
        )
        raw = (tmp_path / "21.jsonl").read_text(encoding="utf-8")
        assert raw.endswith("\n")
        assert "החתול" in raw
        assert json.loads(raw)["source"] == "החתול ישב."

    def test_partially_corrupt_file(self, tmp_path):
        good = {"key": compute_cache_key("א"), "he": "א", "en": "A"}
        (tmp_path / "22.jsonl").write_text(
            json.dumps(good) + "\n" + '{"key": "truncated', encoding="utf-8"
        )
        scope = CacheScope.load(JsonlCacheStore(tmp_path), "22")
        assert scope.persistent is True
        assert len(scope) == 1

    def test_collections_are_isolated(self, tmp_path):
        store = JsonlCacheStore(tmp_path)
        key = compute_cache_key("החתול ישב.")
        store.write("1", [CacheRecord(key=key, source_text="החתול ישב.", translated_text="One")])
        store.write("2", [CacheRecord(key=key, source_text="החתול ישב.", translated_text="Two")])
        assert CacheScope.load(store, "1").get(key).translated_text == "One"
        assert CacheScope.load(store, "2").get(key).translated_text == "Two"
