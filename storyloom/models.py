"""Core domain models.

Storage, the prompt engine and the API all operate on these types.
Pydantic is used for validation and serialisation at every data boundary.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

Role = Literal["system", "user", "assistant"]

PovType = Literal[
    "First Person",
    "Third Person Limited",
    "Third Person Omniscient",
]

Importance = Literal["major", "minor", "background"]


class PromptMessage(BaseModel):
    """One role-tagged message of a prompt template (or of a parsed prompt)."""

    role: Role
    content: str


class Prompt(BaseModel):
    """A user-authored prompt template."""

    id: str
    name: str
    prompt_type: str = "other"  # "scene_beat" | "gen_summary" | "continue_writing" | ...
    messages: list[PromptMessage] = Field(default_factory=list)


class Chapter(BaseModel):
    id: str
    story_id: str
    title: str
    order: int
    summary: str | None = None
    content: str = ""
    word_count: int = 0
    pov_character: str | None = None
    pov_type: PovType | None = None


class Relationship(BaseModel):
    type: str
    description: str


class LorebookMetadata(BaseModel):
    """Free-form entry metadata. Unknown keys are kept as-is."""

    model_config = ConfigDict(extra="allow")

    type: str | None = None
    importance: Importance | None = None
    status: str | None = None
    relationships: list[Relationship] = Field(default_factory=list)


class LorebookEntry(BaseModel):
    """A world-building record (character, location, item, ...)."""

    id: str
    story_id: str
    name: str
    description: str = ""
    category: str = "character"
    tags: list[str] = Field(default_factory=list)
    metadata: LorebookMetadata | None = None


class PromptParserConfig(BaseModel):
    """Everything a caller hands to PromptParser.parse()."""

    prompt_id: str
    story_id: str
    chapter_id: str | None = None
    scenebeat: str | None = None
    previous_words: str | None = None
    matched_entries: list[LorebookEntry] | None = None
    chapter_matched_entries: list[LorebookEntry] | None = None
    scenebeat_matched_entries: list[LorebookEntry] | None = None
    pov_type: PovType | None = None
    pov_character: str | None = None
    additional_context: dict[str, Any] = Field(default_factory=dict)


class ParsedPrompt(BaseModel):
    """Result of parsing: either messages or an error, never both."""

    messages: list[PromptMessage] = Field(default_factory=list)
    error: str | None = None

    @model_validator(mode="after")
    def _error_excludes_messages(self) -> ParsedPrompt:
        if self.error is not None and self.messages:
            raise ValueError("a failed parse must not carry messages")
        return self
