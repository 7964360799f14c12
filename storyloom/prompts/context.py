"""Resolution context: the read-only snapshot every resolver sees."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from storyloom.lorebook import dedupe
from storyloom.models import Chapter, LorebookEntry, Prompt, PromptParserConfig

logger = logging.getLogger(__name__)


class StoryDatabase(Protocol):
    """Lookups the parser needs. storyloom.storage.Storage implements it."""

    def get_prompt(self, prompt_id: str) -> Prompt | None: ...

    def get_chapters_by_story(self, story_id: str) -> list[Chapter]: ...

    def get_chapter(self, chapter_id: str) -> Chapter | None: ...

    def get_lorebook_entries(self, story_id: str) -> list[LorebookEntry]: ...


@dataclass(frozen=True)
class PointOfView:
    type: str
    character: str | None = None


@dataclass(frozen=True)
class ResolutionContext:
    story_id: str
    chapter_id: str | None = None
    current_chapter: Chapter | None = None
    chapters: tuple[Chapter, ...] = ()
    chapter_matched_entries: tuple[LorebookEntry, ...] = ()
    scenebeat_matched_entries: tuple[LorebookEntry, ...] = ()
    lorebook_entries: tuple[LorebookEntry, ...] = ()
    scenebeat: str = ""
    previous_words: str = ""
    pov: PointOfView | None = None
    additional_context: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))


def _point_of_view(config: PromptParserConfig, chapter: Chapter | None) -> PointOfView | None:
    # An explicit override replaces the chapter's POV as a whole.
    if config.pov_type:
        return PointOfView(config.pov_type, config.pov_character or None)
    if chapter is not None and chapter.pov_type:
        return PointOfView(chapter.pov_type, chapter.pov_character or None)
    return None


def build_context(config: PromptParserConfig, db: StoryDatabase) -> ResolutionContext:
    """Fetch chapters and lorebook for the story and freeze the caller's config."""
    chapters = db.get_chapters_by_story(config.story_id)
    current = db.get_chapter(config.chapter_id) if config.chapter_id else None
    lorebook = db.get_lorebook_entries(config.story_id)

    chapter_matched = config.chapter_matched_entries
    if chapter_matched is None:
        chapter_matched = config.matched_entries or []

    logger.debug(
        "context story=%s chapter=%s chapters=%d matched=%d previous_words_len=%d",
        config.story_id, config.chapter_id, len(chapters),
        len(chapter_matched), len(config.previous_words or ""),
    )

    return ResolutionContext(
        story_id=config.story_id,
        chapter_id=config.chapter_id,
        current_chapter=current,
        chapters=tuple(chapters),
        chapter_matched_entries=tuple(dedupe(chapter_matched)),
        scenebeat_matched_entries=tuple(dedupe(config.scenebeat_matched_entries or [])),
        lorebook_entries=tuple(lorebook),
        scenebeat=config.scenebeat or "",
        previous_words=config.previous_words or "",
        pov=_point_of_view(config, current),
        additional_context=MappingProxyType(dict(config.additional_context)),
    )
