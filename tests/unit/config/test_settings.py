# tests/unit/config/test_settings.py — v1
"""Tests for config/settings.py — typed Settings and validation rules."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from bialign.config.settings import ConfigurationError, Settings, load_settings


class TestSettingsDefaults:
    def test_default_llm(self):
        s = Settings(_env_file=None)
        assert s.llm_provider == "openai"
        assert s.llm_model == "gpt-4o-mini"
        assert s.llm_temperature == 0.0

    def test_default_languages(self):
        s = Settings(_env_file=None)
        assert s.translation_source_language == "Hebrew"
        assert s.translation_target_language == "English"

    def test_default_embedding(self):
        s = Settings(_env_file=None)
        assert s.embedding_model == "sentence-transformers/distiluse-base-multilingual-cased-v2"

    def test_default_cache_root(self):
        assert Settings(_env_file=None).cache_root == Path("~/.bialign/cache")

    def test_default_ollama(self):
        s = Settings(_env_file=None)
        assert s.ollama_base_url == "http://localhost:11434"
        assert s.ollama_keep_alive == "5m"

    def test_default_dedupe_on(self):
        assert Settings(_env_file=None).dedupe_inflight_translations is True

    def test_default_logging(self):
        s = Settings(_env_file=None)
        assert s.log_file is None
        assert s.log_rotation == "10MB"

    def test_llm_key(self):
        s = Settings(_env_file=None, llm_provider="anthropic", llm_model="claude-sonnet-4-20250514")
        assert s.llm_key == "anthropic:claude-sonnet-4-20250514"


class TestSettingsValidation:
    def test_empty_embedding_model(self):
        with pytest.raises(ConfigurationError, match="EMBEDDING_MODEL"):
            Settings(_env_file=None, embedding_model="  ")

    def test_non_positive_timeout(self):
        with pytest.raises(ConfigurationError, match="TRANSLATION_TIMEOUT_S"):
            Settings(_env_file=None, translation_timeout_s=0)

    def test_non_positive_max_tokens(self):
        with pytest.raises(ConfigurationError, match="LLM_MAX_TOKENS"):
            Settings(_env_file=None, llm_max_tokens=0)

    def test_missing_model(self):
        with pytest.raises(ConfigurationError, match="LLM_MODEL"):
            Settings(_env_file=None, llm_model="")

    def test_errors_are_joined(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Settings(_env_file=None, translation_timeout_s=-1, llm_max_tokens=-1)
        assert "; " in str(exc_info.value)

    def test_temperature_range(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, llm_temperature=3.0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="TRACE")


class TestEnvironment:
    def test_reads_env_vars(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "ollama")
        monkeypatch.setenv("CACHE_ROOT", "/tmp/bialign-cache")
        s = Settings(_env_file=None)
        assert s.llm_provider == "ollama"
        assert s.cache_root == Path("/tmp/bialign-cache")

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TRANSLATION_TARGET_LANGUAGE=German\n", encoding="utf-8")
        assert Settings(_env_file=env_file).translation_target_language == "German"


class TestLoadSettings:
    def test_overrides(self, tmp_path):
        s = load_settings(_env_file=None, cache_root=tmp_path)
        assert s.cache_root == tmp_path

    def test_raises_configuration_error(self):
        with pytest.raises(ConfigurationError):
            load_settings(_env_file=None, translation_timeout_s=0)
