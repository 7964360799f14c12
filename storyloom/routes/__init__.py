"""FastAPI API endpoints under /api.

Endpoint groups: health, prompts (list, get, parse), stories (chapters,
lorebook, lorebook matching). Handlers read from the Storage instance held
on app.state; nothing is global.
"""

from fastapi import APIRouter

from .prompts import router as prompts_router
from .settings import router as settings_router
from .stories import router as stories_router

router = APIRouter()
router.include_router(settings_router)
router.include_router(prompts_router)
router.include_router(stories_router)
