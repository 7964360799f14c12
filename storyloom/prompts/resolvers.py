"""Variable resolvers.

Every known variable name is a member of Variable and maps to exactly one
handler in _RESOLVERS. A handler takes the resolution context plus the
string parameters written after the name and returns the substitution text.
Handlers never raise for missing data; they return "" instead.

    {{summaries}}                    → "Chapter 1: ...\n\nChapter 2: ..."
    {{previous_words(200)}}          → last 201 words of the buffer
    {{character Mira Vale}}          → formatted lorebook entry for "Mira Vale"
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from storyloom.lorebook import format_entries, format_entry, sort_by_importance

from .context import ResolutionContext

logger = logging.getLogger(__name__)

DEFAULT_PREVIOUS_WORDS = 1000

Resolver = Callable[..., str]


class Variable(str, Enum):
    MATCHED_ENTRIES_CHAPTER = "matched_entries_chapter"
    LOREBOOK_CHAPTER_MATCHED_ENTRIES = "lorebook_chapter_matched_entries"
    LOREBOOK_SCENEBEAT_MATCHED_ENTRIES = "lorebook_scenebeat_matched_entries"
    SUMMARIES = "summaries"
    PREVIOUS_WORDS = "previous_words"
    POV = "pov"
    CHAPTER_CONTENT = "chapter_content"
    CHARACTER = "character"


# Variables that may also be written as {{name(args)}}.
FUNCTION_VARIABLES = frozenset({Variable.PREVIOUS_WORDS})

# Scene beat text is substituted verbatim and never goes through the registry.
SCENEBEAT = "scenebeat"


# ── Resolvers ────────────────────────────────────────────


def resolve_matched_entries_chapter(ctx: ResolutionContext, *_: str) -> str:
    if not ctx.chapter_matched_entries:
        return ""
    return format_entries(sort_by_importance(ctx.chapter_matched_entries))


def resolve_scenebeat_matched_entries(ctx: ResolutionContext, *_: str) -> str:
    # TODO: format ctx.scenebeat_matched_entries once scene beats carry their own tag matches.
    return ""


def resolve_summaries(ctx: ResolutionContext, *_: str) -> str:
    limit = ctx.current_chapter.order if ctx.current_chapter else float("inf")
    chapters = sorted(
        (ch for ch in ctx.chapters if ch.summary and ch.order < limit),
        key=lambda ch: ch.order,
    )
    return "\n\n".join(f"Chapter {ch.order}: {ch.summary}" for ch in chapters)


def _word_count(raw: str) -> int:
    try:
        count = int(raw.strip())
    except ValueError:
        return DEFAULT_PREVIOUS_WORDS
    return count if count > 0 else DEFAULT_PREVIOUS_WORDS


def resolve_previous_words(ctx: ResolutionContext, count: str = str(DEFAULT_PREVIOUS_WORDS), *_: str) -> str:
    """Last count + 1 words of the text before the cursor.

    The extra word is long-standing behavior that existing templates are
    tuned against.
    """
    if not ctx.previous_words:
        return ""
    requested = _word_count(count)
    words = ctx.previous_words.split()
    selected = words[-(requested + 1):]
    logger.debug(
        "previous_words requested=%d total=%d selected=%d",
        requested, len(words), len(selected),
    )
    return " ".join(selected)


def resolve_pov(ctx: ResolutionContext, *_: str) -> str:
    if ctx.pov is None or not ctx.pov.type:
        return ""
    if ctx.pov.character:
        return f"{ctx.pov.type} ({ctx.pov.character})"
    return ctx.pov.type


def resolve_chapter_content(ctx: ResolutionContext, *_: str) -> str:
    content = ctx.additional_context.get("plain_text_content")
    if not content:
        return ""
    return str(content)


def resolve_character(ctx: ResolutionContext, *name_parts: str) -> str:
    name = " ".join(name_parts).strip().lower()
    if not name:
        return ""
    for entry in ctx.lorebook_entries:
        if entry.category == "character" and entry.name.lower() == name:
            return format_entry(entry)
    return ""


_RESOLVERS: dict[Variable, Resolver] = {
    Variable.MATCHED_ENTRIES_CHAPTER: resolve_matched_entries_chapter,
    Variable.LOREBOOK_CHAPTER_MATCHED_ENTRIES: resolve_matched_entries_chapter,
    Variable.LOREBOOK_SCENEBEAT_MATCHED_ENTRIES: resolve_scenebeat_matched_entries,
    Variable.SUMMARIES: resolve_summaries,
    Variable.PREVIOUS_WORDS: resolve_previous_words,
    Variable.POV: resolve_pov,
    Variable.CHAPTER_CONTENT: resolve_chapter_content,
    Variable.CHARACTER: resolve_character,
}


def lookup(name: str) -> Variable | None:
    """Return the Variable for a template name, or None if unknown."""
    try:
        return Variable(name)
    except ValueError:
        return None


def resolve(variable: Variable, ctx: ResolutionContext, *params: str) -> str:
    return _RESOLVERS[variable](ctx, *params)
