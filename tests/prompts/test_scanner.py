"""Tests for template scanning: comment stripping, tokenizing, function-call
expansion, variable substitution and whitespace normalization."""

import pytest

from storyloom.prompts import (
    PointOfView,
    ResolutionContext,
    Token,
    expand_function_calls,
    normalize_whitespace,
    render,
    strip_comments,
    substitute_variables,
    tokenize,
)


def _expand(text: str, ctx: ResolutionContext) -> str:
    return render(substitute_variables(expand_function_calls(tokenize(text), ctx), ctx))


# ── strip_comments ───────────────────────────────────────────


def test_strip_inline_comment():
    assert strip_comments("a /* note */ b") == "a  b"


def test_strip_multiline_comment():
    assert strip_comments("before\n/* line one\nline two\n*/\nafter") == "before\n\nafter"


def test_strip_is_non_greedy():
    assert strip_comments("a/*1*/b/*2*/c") == "abc"


@pytest.mark.parametrize("body", ["", "{{pov}}", "x\n\ny", "/* nested open", "previous_words(3)"])
def test_strip_removes_span_regardless_of_content(body):
    text = f"start /*{body}*/ end"
    assert strip_comments(text) == "start  end"


def test_strip_unterminated_runs_to_end():
    assert strip_comments("keep this /* but not\nthis") == "keep this "


def test_strip_no_comments_untouched():
    text = "  plain\n\n\ntext  "
    assert strip_comments(text) == text


def test_strip_close_without_open_untouched():
    assert strip_comments("a */ b") == "a */ b"


# ── tokenize ─────────────────────────────────────────────────


def test_tokenize_plain_text():
    assert tokenize("no tokens here") == [Token("text", "no tokens here")]


def test_tokenize_variable():
    tokens = tokenize("Hi {{name}}!")
    assert tokens == [
        Token("text", "Hi "),
        Token("variable", "{{name}}", "name"),
        Token("text", "!"),
    ]


def test_tokenize_variable_params():
    (token,) = tokenize("{{ character  Mira Vale }}")
    assert token.kind == "variable"
    assert token.name == "character"
    assert token.params == ("Mira", "Vale")


def test_tokenize_function_call():
    (token,) = tokenize("{{previous_words( 20 )}}")
    assert token.kind == "call"
    assert token.name == "previous_words"
    assert token.params == ("20",)


def test_tokenize_extra_open_brace_stays_text():
    assert tokenize("{{{pov}}") == [
        Token("text", "{"),
        Token("variable", "{{pov}}", "pov"),
    ]


def test_tokenize_unclosed_is_text():
    assert tokenize("open {{pov and never close") == [Token("text", "open {{pov and never close")]


def test_tokenize_empty_braces_are_text():
    assert tokenize("{{}}") == [Token("text", "{{}}")]


def test_tokenize_render_is_lossless():
    text = "a {{x}} b {{f(1)}} {{ y z }} c"
    assert render(tokenize(text)) == text


# ── expand_function_calls ────────────────────────────────────


def test_expand_previous_words_call():
    ctx = ResolutionContext(story_id="s", previous_words="a b c d e")
    assert _expand("x {{previous_words(2)}} y", ctx) == "x c d e y"


def test_expand_each_call_independently():
    ctx = ResolutionContext(story_id="s", previous_words="a b c d e")
    assert _expand("{{previous_words(1)}}|{{previous_words(0)}}", ctx) == "d e|a b c d e"


def test_expand_unknown_function_left_verbatim():
    ctx = ResolutionContext(story_id="s")
    assert _expand("say {{shout(hello)}} now", ctx) == "say {{shout(hello)}} now"


def test_expand_non_function_variable_call_left_verbatim():
    ctx = ResolutionContext(story_id="s", pov=PointOfView("First Person"))
    assert _expand("{{pov()}} / {{pov}}", ctx) == "{{pov()}} / First Person"


def test_expand_call_output_not_rescanned():
    ctx = ResolutionContext(
        story_id="s",
        previous_words="she wrote {{pov}}",
        pov=PointOfView("First Person"),
    )
    assert _expand("{{previous_words(5)}}", ctx) == "she wrote {{pov}}"


# ── substitute_variables ─────────────────────────────────────


def test_substitute_unknown_variable_is_empty():
    ctx = ResolutionContext(story_id="s")
    assert _expand("Hello {{unknown_var}}!", ctx) == "Hello !"


def test_substitute_unknown_does_not_stop_later_tokens():
    ctx = ResolutionContext(story_id="s", pov=PointOfView("Third Person Limited", "Tobin"))
    assert _expand("{{nope}}[{{pov}}]", ctx) == "[Third Person Limited (Tobin)]"


def test_substitute_scenebeat_verbatim():
    ctx = ResolutionContext(
        story_id="s",
        scenebeat="Tobin says {{pov}} and {{summaries}}",
        pov=PointOfView("First Person"),
    )
    assert _expand("Beat: {{scenebeat}}", ctx) == "Beat: Tobin says {{pov}} and {{summaries}}"


def test_substitute_empty_scenebeat_is_empty():
    ctx = ResolutionContext(story_id="s")
    assert _expand("Beat: {{scenebeat}}.", ctx) == "Beat: ."


def test_substitute_previous_words_plain_form():
    ctx = ResolutionContext(story_id="s", previous_words="a b c d e")
    assert _expand("{{previous_words 1}}", ctx) == "d e"


def test_substitute_repeated_token():
    ctx = ResolutionContext(story_id="s", pov=PointOfView("First Person"))
    assert _expand("{{pov}} {{pov}}", ctx) == "First Person First Person"


# ── normalize_whitespace ─────────────────────────────────────


def test_normalize_collapses_blank_runs():
    assert normalize_whitespace("a\n\n\n\nb") == "a\n\nb"


def test_normalize_blank_lines_with_spaces():
    assert normalize_whitespace("a\n  \n\t\nb") == "a\n\nb"


def test_normalize_keeps_single_blank_line():
    assert normalize_whitespace("a\n\nb\nc") == "a\n\nb\nc"


def test_normalize_trims_ends():
    assert normalize_whitespace("\n\n  hello  \n\n") == "hello"


def test_normalize_keeps_indentation_after_collapse():
    assert normalize_whitespace("a\n\n\n    b") == "a\n\n    b"


@pytest.mark.parametrize("text", [
    "a\n\n\n\nb",
    "  x  \n\n\n\n\n y\n \n \n z ",
    "\n\n\n",
    "one\ntwo",
])
def test_normalize_idempotent(text):
    once = normalize_whitespace(text)
    assert normalize_whitespace(once) == once
