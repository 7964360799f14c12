"""Tests for storyloom.models."""

import pytest
from pydantic import ValidationError

from storyloom.models import (
    Chapter,
    LorebookEntry,
    LorebookMetadata,
    ParsedPrompt,
    Prompt,
    PromptMessage,
    PromptParserConfig,
)


class TestPromptMessage:
    def test_valid_roles(self) -> None:
        for role in ["system", "user", "assistant"]:
            assert PromptMessage(role=role, content="x").role == role

    def test_invalid_role_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PromptMessage(role="narrator", content="x")


class TestPrompt:
    def test_defaults(self) -> None:
        p = Prompt(id="p", name="P")
        assert p.prompt_type == "other"
        assert p.messages == []

    def test_serialise_roundtrip(self) -> None:
        p = Prompt(id="p", name="P", messages=[PromptMessage(role="user", content="{{pov}}")])
        assert Prompt.model_validate_json(p.model_dump_json()) == p


class TestChapter:
    def test_optional_fields_default(self) -> None:
        c = Chapter(id="c", story_id="s", title="T", order=1)
        assert c.summary is None
        assert c.pov_type is None
        assert c.pov_character is None
        assert c.content == ""
        assert c.word_count == 0

    def test_invalid_pov_type_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Chapter(id="c", story_id="s", title="T", order=1, pov_type="Second Person")


class TestLorebookEntry:
    def test_defaults(self) -> None:
        e = LorebookEntry(id="e", story_id="s", name="E")
        assert e.category == "character"
        assert e.tags == []
        assert e.metadata is None

    def test_metadata_keeps_extra_keys(self) -> None:
        meta = LorebookMetadata.model_validate({"importance": "minor", "age": 40})
        assert meta.importance == "minor"
        assert meta.model_dump()["age"] == 40

    def test_invalid_importance_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LorebookMetadata(importance="critical")


class TestParserModels:
    def test_config_defaults(self) -> None:
        config = PromptParserConfig(prompt_id="p", story_id="s")
        assert config.chapter_id is None
        assert config.matched_entries is None
        assert config.additional_context == {}

    def test_parsed_prompt_success(self) -> None:
        result = ParsedPrompt(messages=[PromptMessage(role="user", content="hi")])
        assert result.error is None

    def test_parsed_prompt_failure(self) -> None:
        result = ParsedPrompt(error="Prompt not found")
        assert result.messages == []

    def test_parsed_prompt_rejects_both(self) -> None:
        with pytest.raises(ValidationError):
            ParsedPrompt(messages=[PromptMessage(role="user", content="hi")], error="x")
