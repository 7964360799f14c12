"""Lorebook helpers: tag matching, importance ordering and prompt formatting.

Matching runs before prompt parsing; the parser only receives the matched
entries and formats them.
"""

from __future__ import annotations

from collections.abc import Iterable

from storyloom.models import LorebookEntry

IMPORTANCE_RANK: dict[str, int] = {"major": 0, "minor": 1, "background": 2}


def build_tag_map(entries: Iterable[LorebookEntry]) -> dict[str, LorebookEntry]:
    """Map lowercase tags to the entry that owns them.

    Multi-word tags also register their single words, but only when a word
    is itself one of the entry's tags ("Elder Brook" + "brook" → "brook").
    Later entries win on tag collision.
    """
    tag_map: dict[str, LorebookEntry] = {}
    for entry in entries:
        own_tags = {t.lower().strip() for t in entry.tags}
        for tag in entry.tags:
            normalized = tag.lower().strip()
            if not normalized:
                continue
            tag_map[normalized] = entry
            if " " not in normalized:
                continue
            for word in normalized.split():
                if word in own_tags:
                    tag_map[word] = entry
    return tag_map


def match_entries(entries: list[LorebookEntry], texts: list[str]) -> list[LorebookEntry]:
    """Return entries whose tags occur in any of the texts.

    Case-insensitive substring match. Each entry appears at most once,
    in lorebook order.
    """
    haystack = "\n".join(texts).lower()
    if not haystack:
        return []
    hits: set[str] = set()
    for tag, entry in build_tag_map(entries).items():
        if tag in haystack:
            hits.add(entry.id)
    return [e for e in dedupe(entries) if e.id in hits]


def dedupe(entries: Iterable[LorebookEntry]) -> list[LorebookEntry]:
    """Drop repeated entries (by id), keeping first occurrence order."""
    seen: set[str] = set()
    result = []
    for entry in entries:
        if entry.id in seen:
            continue
        seen.add(entry.id)
        result.append(entry)
    return result


def importance_rank(entry: LorebookEntry) -> int:
    importance = entry.metadata.importance if entry.metadata else None
    return IMPORTANCE_RANK.get(importance or "background", IMPORTANCE_RANK["background"])


def sort_by_importance(entries: Iterable[LorebookEntry]) -> list[LorebookEntry]:
    """Major first, then minor, then background. Ties keep their order."""
    return sorted(entries, key=importance_rank)


def format_entry(entry: LorebookEntry) -> str:
    meta = entry.metadata
    lines = [
        f"{entry.category.upper()}: {entry.name}",
        f"Type: {(meta and meta.type) or 'Unknown'}",
        f"Importance: {(meta and meta.importance) or 'Unknown'}",
        f"Status: {(meta and meta.status) or 'Unknown'}",
        f"Description: {entry.description}",
    ]
    if meta and meta.relationships:
        lines.append("")
        lines.append("Relationships:")
        lines.extend(f"- {r.type}: {r.description}" for r in meta.relationships)
    return "\n".join(lines)


def format_entries(entries: Iterable[LorebookEntry]) -> str:
    """Format entries as prompt text blocks separated by a blank line."""
    return "\n\n".join(format_entry(e) for e in entries)
