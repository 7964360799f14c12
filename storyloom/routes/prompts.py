"""Prompt listing and parsing endpoints."""

from fastapi import APIRouter, Depends, HTTPException

from storyloom.models import PromptParserConfig
from storyloom.prompts import PROMPT_NOT_FOUND, PromptParser
from storyloom.storage import Storage

from .deps import get_storage
from .models import ParseBody

router = APIRouter()


@router.get("/prompts")
async def list_prompts(storage: Storage = Depends(get_storage)):
    """List all stored prompt templates."""
    return storage.list_prompts()


@router.get("/prompts/{prompt_id}")
async def get_prompt(prompt_id: str, storage: Storage = Depends(get_storage)):
    """Get a single prompt template."""
    prompt = storage.get_prompt(prompt_id)
    if not prompt:
        raise HTTPException(404, PROMPT_NOT_FOUND)
    return prompt


@router.post("/prompts/{prompt_id}/parse")
async def parse_prompt(prompt_id: str, body: ParseBody, storage: Storage = Depends(get_storage)):
    """Expand a prompt template into model-ready messages."""
    config = PromptParserConfig(prompt_id=prompt_id, **body.model_dump())
    result = PromptParser(storage).parse(config)
    if result.error == PROMPT_NOT_FOUND:
        raise HTTPException(404, result.error)
    if result.error:
        raise HTTPException(422, result.error)
    return result
