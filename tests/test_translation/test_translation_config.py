"""Unit tests for TranslationConfig."""

import dataclasses

import pytest

from rso_translator.translation.config import (
    DEFAULT_BASE_URL,
    DEFAULT_MODEL,
    TranslationConfig,
)


class TestTranslationConfigFromDict:
    """Tests for TranslationConfig.from_dict."""

    def test_all_fields_populated(self):
        data = {
            "base_url": "http://localhost:11434/v1",
            "api_key": "sk-test",
            "model": "llama3.2",
            "temperature": "0.2",
            "max_tokens": "512",
            "top_p": "0.9",
            "frequency_penalty": "0.5",
            "presence_penalty": "0.25",
            "timeout_seconds": "5",
            "strict_mode": "true",
        }
        cfg = TranslationConfig.from_dict(data)
        assert cfg.base_url == "http://localhost:11434/v1"
        assert cfg.api_key == "sk-test"
        assert cfg.model == "llama3.2"
        assert cfg.temperature == 0.2
        assert cfg.max_tokens == 512
        assert cfg.top_p == 0.9
        assert cfg.frequency_penalty == 0.5
        assert cfg.presence_penalty == 0.25
        assert cfg.timeout_seconds == 5.0
        assert cfg.strict_mode is True

    def test_defaults_for_missing_fields(self):
        cfg = TranslationConfig.from_dict({})
        assert cfg.base_url == DEFAULT_BASE_URL
        assert cfg.api_key == ""
        assert cfg.model == DEFAULT_MODEL
        assert cfg.temperature == 0.8
        assert cfg.max_tokens == 4096
        assert cfg.top_p == 1.0
        assert cfg.frequency_penalty == 0.0
        assert cfg.presence_penalty == 0.0
        assert cfg.timeout_seconds == 60.0
        assert cfg.strict_mode is False

    @pytest.mark.parametrize("raw", ["false", "no", "0", "off", ""])
    def test_strict_mode_falsey_strings(self, raw):
        assert TranslationConfig.from_dict({"strict_mode": raw}).strict_mode is False

    def test_typed_values_accepted(self):
        cfg = TranslationConfig.from_dict({"strict_mode": True, "max_tokens": 100})
        assert cfg.strict_mode is True
        assert cfg.max_tokens == 100


class TestTranslationConfigValidation:
    def test_empty_base_url_rejected(self):
        with pytest.raises(ValueError, match="base_url"):
            TranslationConfig(base_url="")

    def test_non_positive_timeout_rejected(self):
        with pytest.raises(ValueError, match="timeout_seconds"):
            TranslationConfig(timeout_seconds=0)

    def test_non_positive_max_tokens_rejected(self):
        with pytest.raises(ValueError, match="max_tokens"):
            TranslationConfig(max_tokens=0)


class TestTranslationConfigProperties:
    def test_urls_built_from_base_url(self):
        cfg = TranslationConfig(base_url="https://api.example.com/v1")
        assert cfg.chat_completions_url == "https://api.example.com/v1/chat/completions"
        assert cfg.models_url == "https://api.example.com/v1/models"

    def test_trailing_slash_stripped(self):
        cfg = TranslationConfig(base_url="https://api.example.com/v1/")
        assert cfg.chat_completions_url == "https://api.example.com/v1/chat/completions"

    def test_frozen(self):
        cfg = TranslationConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.model = "other"  # type: ignore[misc]

    def test_api_key_not_in_repr(self):
        cfg = TranslationConfig(api_key="sk-secret")
        assert "sk-secret" not in repr(cfg)
