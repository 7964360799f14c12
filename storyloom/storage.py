"""JSON file storage.

All state is stored in flat JSON files under a configurable base directory.
There is no database or ORM — reads and writes go through plain helper
methods that load and dump JSON.

Directory layout:

    {base}/
      prompts/
        {prompt_id}.json      ← one Prompt per file
      stories/
        {story_id}/
          chapters.json       ← list of Chapter objects
          lorebook.json       ← list of LorebookEntry objects

Storage satisfies the StoryDatabase protocol the prompt parser reads from.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from storyloom.models import Chapter, LorebookEntry, Prompt

logger = logging.getLogger(__name__)


class Storage:
    def __init__(self, base_path: Path) -> None:
        self._base = base_path
        self._prompt_root = base_path / "prompts"
        self._story_root = base_path / "stories"
        self._prompt_root.mkdir(parents=True, exist_ok=True)
        self._story_root.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Internal path helpers
    # ------------------------------------------------------------------

    def _prompt_file(self, prompt_id: str) -> Path:
        return self._prompt_root / f"{prompt_id}.json"

    def _story_dir(self, story_id: str) -> Path:
        return self._story_root / story_id

    def _read_json(self, path: Path) -> Any:
        return json.loads(path.read_text())

    def _write_json(self, path: Path, data: Any) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2))

    # ------------------------------------------------------------------
    # Prompts
    # ------------------------------------------------------------------

    def save_prompt(self, prompt: Prompt) -> None:
        self._prompt_file(prompt.id).write_text(prompt.model_dump_json(indent=2))

    def get_prompt(self, prompt_id: str) -> Prompt | None:
        path = self._prompt_file(prompt_id)
        if not path.is_file():
            return None
        return Prompt.model_validate_json(path.read_text())

    def list_prompts(self) -> list[Prompt]:
        return [
            Prompt.model_validate_json(path.read_text())
            for path in sorted(self._prompt_root.glob("*.json"))
        ]

    def delete_prompt(self, prompt_id: str) -> bool:
        path = self._prompt_file(prompt_id)
        if not path.is_file():
            return False
        path.unlink()
        return True

    # ------------------------------------------------------------------
    # Chapters
    # ------------------------------------------------------------------

    def save_chapter(self, chapter: Chapter) -> None:
        """Upsert a chapter by id."""
        chapters = self.get_chapters_by_story(chapter.story_id)
        for i, c in enumerate(chapters):
            if c.id == chapter.id:
                chapters[i] = chapter
                break
        else:
            chapters.append(chapter)
        self._write_json(
            self._story_dir(chapter.story_id) / "chapters.json",
            [c.model_dump() for c in chapters],
        )

    def get_chapters_by_story(self, story_id: str) -> list[Chapter]:
        """Chapters of a story in stored order."""
        path = self._story_dir(story_id) / "chapters.json"
        if not path.is_file():
            return []
        return [Chapter.model_validate(c) for c in self._read_json(path)]

    def get_chapter(self, chapter_id: str) -> Chapter | None:
        # Chapter ids are global; scan every story.
        for story_dir in sorted(self._story_root.iterdir()):
            if not story_dir.is_dir():
                continue
            for chapter in self.get_chapters_by_story(story_dir.name):
                if chapter.id == chapter_id:
                    return chapter
        return None

    # ------------------------------------------------------------------
    # Lorebook
    # ------------------------------------------------------------------

    def get_lorebook_entries(self, story_id: str) -> list[LorebookEntry]:
        path = self._story_dir(story_id) / "lorebook.json"
        if not path.is_file():
            return []
        return [LorebookEntry.model_validate(e) for e in self._read_json(path)]

    def save_lorebook_entries(self, story_id: str, entries: list[LorebookEntry]) -> None:
        """Upsert entries by id — existing ids are overwritten."""
        existing = {e.id: e for e in self.get_lorebook_entries(story_id)}
        for entry in entries:
            existing[entry.id] = entry
        self._write_json(
            self._story_dir(story_id) / "lorebook.json",
            [e.model_dump() for e in existing.values()],
        )
        logger.debug("lorebook saved story=%s entries=%d", story_id, len(existing))
