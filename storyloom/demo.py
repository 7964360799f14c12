"""Create demo prompts, chapters and lorebook entries for development."""

import shutil

from storyloom.models import (
    Chapter,
    LorebookEntry,
    LorebookMetadata,
    Prompt,
    PromptMessage,
    Relationship,
)
from storyloom.storage import Storage

DEMO_STORY_ID = "the-salt-road"

DEMO_PROMPTS = [
    Prompt(
        id="scene-beat",
        name="Scene Beat",
        prompt_type="scene_beat",
        messages=[
            PromptMessage(
                role="system",
                content=(
                    "/* Keeps the model in the author's voice. */\n"
                    "You are a co-author continuing a novel. Write in {{pov}}.\n\n"
                    "Story so far:\n{{summaries}}\n\n\n"
                    "Relevant world details:\n{{matched_entries_chapter}}"
                ),
            ),
            PromptMessage(
                role="user",
                content=(
                    "Previous text:\n{{previous_words(300)}}\n\n"
                    "Write the next scene: {{scenebeat}}"
                ),
            ),
        ],
    ),
    Prompt(
        id="chapter-summary",
        name="Summarize Chapter",
        prompt_type="gen_summary",
        messages=[
            PromptMessage(role="system", content="Summarize the chapter in three sentences."),
            PromptMessage(role="user", content="{{chapter_content}}"),
        ],
    ),
]

DEMO_CHAPTERS = [
    Chapter(
        id="salt-road-1", story_id=DEMO_STORY_ID, title="The Caravan", order=1,
        summary="Mira joins a salt caravan leaving Varesh at dawn.",
        pov_type="Third Person Limited", pov_character="Mira",
    ),
    Chapter(
        id="salt-road-2", story_id=DEMO_STORY_ID, title="Dust", order=2,
        summary="A sandstorm splits the caravan; Mira shelters with the old guide Tobin.",
        pov_type="Third Person Limited", pov_character="Mira",
    ),
    Chapter(
        id="salt-road-3", story_id=DEMO_STORY_ID, title="The Well", order=3,
        pov_type="First Person", pov_character="Tobin",
    ),
]

DEMO_LOREBOOK = [
    LorebookEntry(
        id="mira", story_id=DEMO_STORY_ID, name="Mira", category="character",
        description="A runaway scribe with a talent for forging seals.",
        tags=["Mira", "the scribe"],
        metadata=LorebookMetadata(
            type="protagonist", importance="major", status="alive",
            relationships=[Relationship(type="ally", description="Travels under Tobin's protection")],
        ),
    ),
    LorebookEntry(
        id="tobin", story_id=DEMO_STORY_ID, name="Tobin", category="character",
        description="An aging caravan guide who knows every well on the Salt Road.",
        tags=["Tobin", "guide"],
        metadata=LorebookMetadata(type="mentor", importance="minor", status="alive"),
    ),
    LorebookEntry(
        id="varesh", story_id=DEMO_STORY_ID, name="Varesh", category="location",
        description="A walled trade city at the edge of the salt flats.",
        tags=["Varesh"],
        metadata=LorebookMetadata(importance="background"),
    ),
]


def create_demo_data(storage: Storage) -> None:
    """Wipe existing prompts/stories and write fresh demo data."""
    for sub in ("prompts", "stories"):
        path = storage.base_path / sub
        if path.exists():
            shutil.rmtree(path)
        path.mkdir(parents=True, exist_ok=True)

    for prompt in DEMO_PROMPTS:
        storage.save_prompt(prompt)
    for chapter in DEMO_CHAPTERS:
        storage.save_chapter(chapter)
    storage.save_lorebook_entries(DEMO_STORY_ID, DEMO_LOREBOOK)
