"""Chapter and lorebook read endpoints for a story."""

from fastapi import APIRouter, Depends, HTTPException

from storyloom.lorebook import match_entries
from storyloom.storage import Storage

from .deps import get_storage
from .models import MatchBody

router = APIRouter()


@router.get("/stories/{story_id}/chapters")
async def list_chapters(story_id: str, storage: Storage = Depends(get_storage)):
    """Chapters of a story, sorted by order."""
    return sorted(storage.get_chapters_by_story(story_id), key=lambda c: c.order)


@router.get("/chapters/{chapter_id}")
async def get_chapter(chapter_id: str, storage: Storage = Depends(get_storage)):
    chapter = storage.get_chapter(chapter_id)
    if not chapter:
        raise HTTPException(404, "Chapter not found")
    return chapter


@router.get("/stories/{story_id}/lorebook")
async def get_lorebook(story_id: str, storage: Storage = Depends(get_storage)):
    """Get lorebook entries for a story."""
    return storage.get_lorebook_entries(story_id)


@router.post("/stories/{story_id}/lorebook/match")
async def match_lorebook(story_id: str, body: MatchBody, storage: Storage = Depends(get_storage)):
    """Return the lorebook entries whose tags appear in the given texts."""
    return match_entries(storage.get_lorebook_entries(story_id), body.texts)
