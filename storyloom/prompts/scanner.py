"""Template scanning and expansion stages.

Template grammar:

    /* ... */              block comment, removed before anything else
    {{name(args)}}         function call, args is raw text without parentheses
    {{name p1 p2 ...}}     variable, name and params separated by whitespace

Comments are stripped from the raw text first. The remaining text is then
tokenized in a single left-to-right pass into text, call and variable tokens.
Each later stage replaces tokens with plain text tokens, so text produced by a
resolver is never scanned again.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Literal

from . import resolvers
from .context import ResolutionContext

logger = logging.getLogger(__name__)

COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"
TOKEN_OPEN = "{{"
TOKEN_CLOSE = "}}"

_CALL_BODY = re.compile(r"\s*(\w+)\(([^()]*)\)\s*")
_BLANK_RUN = re.compile(r"\n\s*\n\s*\n")

TokenKind = Literal["text", "call", "variable"]


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    raw: str
    name: str = ""
    params: tuple[str, ...] = ()


def strip_comments(text: str) -> str:
    """Remove every /* ... */ span. An unclosed comment runs to the end."""
    parts: list[str] = []
    pos = 0
    while True:
        start = text.find(COMMENT_OPEN, pos)
        if start == -1:
            parts.append(text[pos:])
            break
        parts.append(text[pos:start])
        end = text.find(COMMENT_CLOSE, start + len(COMMENT_OPEN))
        if end == -1:
            break
        pos = end + len(COMMENT_CLOSE)
    return "".join(parts)


def _token_from_body(raw: str, body: str) -> Token:
    call = _CALL_BODY.fullmatch(body)
    if call:
        return Token("call", raw, call.group(1), (call.group(2).strip(),))
    parts = body.split()
    if not parts:
        return Token("variable", raw)
    return Token("variable", raw, parts[0], tuple(parts[1:]))


def tokenize(text: str) -> list[Token]:
    """Split comment-free text into text, call and variable tokens."""
    tokens: list[Token] = []
    pos = 0
    literal_start = 0
    while True:
        start = text.find(TOKEN_OPEN, pos)
        if start == -1:
            break
        close = text.find("}", start + len(TOKEN_OPEN))
        if close == -1:
            break
        body = text[start + len(TOKEN_OPEN):close]
        if not text.startswith(TOKEN_CLOSE, close) or not body or "{" in body:
            # Not a token here; a later "{{" inside may still open one.
            pos = start + 1
            continue
        if literal_start < start:
            tokens.append(Token("text", text[literal_start:start]))
        end = close + len(TOKEN_CLOSE)
        tokens.append(_token_from_body(text[start:end], body))
        pos = literal_start = end
    if literal_start < len(text):
        tokens.append(Token("text", text[literal_start:]))
    return tokens


def expand_function_calls(tokens: list[Token], ctx: ResolutionContext) -> list[Token]:
    """Resolve {{name(args)}} calls. Unknown functions stay as written."""
    result = []
    for token in tokens:
        if token.kind != "call":
            result.append(token)
            continue
        variable = resolvers.lookup(token.name)
        if variable not in resolvers.FUNCTION_VARIABLES:
            logger.debug("Leaving unknown function call as-is: %s", token.raw)
            result.append(Token("text", token.raw))
            continue
        result.append(Token("text", resolvers.resolve(variable, ctx, *token.params)))
    return result


def substitute_variables(tokens: list[Token], ctx: ResolutionContext) -> list[Token]:
    """Resolve {{name params...}} variables. Unknown names become ""."""
    result = []
    for token in tokens:
        if token.kind != "variable":
            result.append(token)
            continue
        if token.name == resolvers.SCENEBEAT and ctx.scenebeat:
            result.append(Token("text", ctx.scenebeat))
            continue
        variable = resolvers.lookup(token.name)
        if variable is None:
            logger.warning("No resolver found for variable: %s", token.name)
            result.append(Token("text", ""))
            continue
        result.append(Token("text", resolvers.resolve(variable, ctx, *token.params)))
    return result


def render(tokens: list[Token]) -> str:
    return "".join(t.raw for t in tokens)


def normalize_whitespace(text: str) -> str:
    """Collapse two or more blank lines into one and trim the ends."""
    return _BLANK_RUN.sub("\n\n", text).strip()
