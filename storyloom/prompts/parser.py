"""Prompt parser — expands a stored prompt template into model-ready messages.

Parse flow:
  1. Look up the prompt template by id.
  2. Build the resolution context (chapters, current chapter, lorebook).
  3. For every message, in order:
       strip comments → expand function calls → substitute variables
       → normalize whitespace
  4. Return the messages with their roles unchanged.

parse() never raises. Every failure, including a missing prompt, comes back
as ParsedPrompt(messages=[], error=...).
"""

from __future__ import annotations

import logging

from storyloom.models import ParsedPrompt, PromptMessage, PromptParserConfig

from .context import ResolutionContext, StoryDatabase, build_context
from .scanner import (
    expand_function_calls,
    normalize_whitespace,
    render,
    strip_comments,
    substitute_variables,
    tokenize,
)

logger = logging.getLogger(__name__)

PROMPT_NOT_FOUND = "Prompt not found"
UNKNOWN_ERROR = "Unknown error occurred"


class PromptError(Exception):
    """Base class for prompt parsing failures."""


class PromptNotFoundError(PromptError):
    """Raised when the requested prompt template does not exist."""

    def __init__(self, prompt_id: str) -> None:
        super().__init__(PROMPT_NOT_FOUND)
        self.prompt_id = prompt_id


def resolve_content(content: str, ctx: ResolutionContext) -> str:
    """Run one message body through every expansion stage."""
    tokens = tokenize(strip_comments(content))
    logger.debug(
        "resolving content len=%d tokens=%s",
        len(content), [t.raw for t in tokens if t.kind != "text"],
    )
    tokens = expand_function_calls(tokens, ctx)
    tokens = substitute_variables(tokens, ctx)
    return normalize_whitespace(render(tokens))


class PromptParser:
    """Parses prompts read from an injected StoryDatabase."""

    def __init__(self, db: StoryDatabase) -> None:
        self._db = db

    def parse(self, config: PromptParserConfig) -> ParsedPrompt:
        logger.debug(
            "parse prompt=%s story=%s chapter=%s",
            config.prompt_id, config.story_id, config.chapter_id,
        )
        try:
            prompt = self._db.get_prompt(config.prompt_id)
            if prompt is None:
                raise PromptNotFoundError(config.prompt_id)
            ctx = build_context(config, self._db)
            messages = [
                PromptMessage(role=m.role, content=resolve_content(m.content, ctx))
                for m in prompt.messages
            ]
        except Exception as e:
            logger.warning("Error parsing prompt %s: %s", config.prompt_id, e)
            return ParsedPrompt(messages=[], error=str(e) or UNKNOWN_ERROR)

        logger.debug("parsed prompt=%s messages=%d", prompt.id, len(messages))
        return ParsedPrompt(messages=messages)
