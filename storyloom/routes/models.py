"""Pydantic request/response models for API endpoints."""

from typing import Any

from pydantic import BaseModel, Field

from storyloom.models import LorebookEntry, PovType


class ParseBody(BaseModel):
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


class MatchBody(BaseModel):
    texts: list[str]
