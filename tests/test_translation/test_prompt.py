"""Unit tests for prompt construction."""

import json

from rso_translator.translation.models import TranslationEntry
from rso_translator.translation.prompt import build_system_prompt, serialize_entries


class TestBuildSystemPrompt:
    def test_names_both_languages(self):
        prompt = build_system_prompt("en", "fr")
        assert "from en to fr" in prompt

    def test_mandates_same_format(self):
        assert "exact same format" in build_system_prompt("en", "fr")

    def test_describes_optional_comment_field(self):
        prompt = build_system_prompt("en", "fr")
        assert "`comment`" in prompt
        assert '"comment": "not sure about this one' in prompt

    def test_forbids_surrounding_text(self):
        prompt = build_system_prompt("en", "fr")
        assert "Return absolutely nothing but the json itself" in prompt

    def test_deterministic(self):
        assert build_system_prompt("de", "ja") == build_system_prompt("de", "ja")

    def test_braces_in_language_tag_are_literal(self):
        prompt = build_system_prompt("{en}", "fr")
        assert "from {en} to fr" in prompt


class TestSerializeEntries:
    def test_round_trips_as_json_array(self):
        entries = [
            TranslationEntry(key="greeting", value="Hello"),
            TranslationEntry(key="farewell", value="Goodbye"),
        ]
        assert json.loads(serialize_entries(entries)) == [
            {"key": "greeting", "value": "Hello"},
            {"key": "farewell", "value": "Goodbye"},
        ]

    def test_preserves_order_and_duplicates(self):
        entries = [
            TranslationEntry(key="b", value="2"),
            TranslationEntry(key="a", value="1"),
            TranslationEntry(key="b", value="3"),
        ]
        keys = [item["key"] for item in json.loads(serialize_entries(entries))]
        assert keys == ["b", "a", "b"]

    def test_indented_two_spaces(self):
        text = serialize_entries([TranslationEntry(key="k", value="v")])
        assert text == '[\n  {\n    "key": "k",\n    "value": "v"\n  }\n]'

    def test_non_ascii_written_verbatim(self):
        text = serialize_entries([TranslationEntry(key="k", value="Grüße")])
        assert "Grüße" in text

    def test_empty(self):
        assert serialize_entries([]) == "[]"
