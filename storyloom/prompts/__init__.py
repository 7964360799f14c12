"""Prompt template resolution.

Re-exports the public API so callers can `from storyloom.prompts import PromptParser`.
"""

from .context import (  # noqa: F401
    PointOfView,
    ResolutionContext,
    StoryDatabase,
    build_context,
)

from .parser import (  # noqa: F401
    PROMPT_NOT_FOUND,
    PromptError,
    PromptNotFoundError,
    PromptParser,
    resolve_content,
)

from .resolvers import (  # noqa: F401
    DEFAULT_PREVIOUS_WORDS,
    FUNCTION_VARIABLES,
    Variable,
)

from .scanner import (  # noqa: F401
    Token,
    expand_function_calls,
    normalize_whitespace,
    render,
    strip_comments,
    substitute_variables,
    tokenize,
)
