# topmark:header:start
#
#   project      : DocSieve
#   file         : test_tokens.py
#   file_relpath : tests/lexer/test_tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for the tokenizer and `TokenList`."""

from __future__ import annotations

import pytest

from docsieve.lexer.tokens import Token, TokenKind, TokenList, render_tokens, tokenize
from tests.conftest import parametrize


def _kinds(source: str) -> list[tuple[TokenKind, str]]:
    return [(tok.kind, tok.text) for tok in tokenize(source)]


def test_def_with_parameters() -> None:
    assert _kinds("def foo(a)") == [
        (TokenKind.KEYWORD, "def"),
        (TokenKind.IDENTIFIER, "foo"),
        (TokenKind.OPERATOR, "("),
        (TokenKind.IDENTIFIER, "a"),
        (TokenKind.OPERATOR, ")"),
    ]


def test_positions_are_one_based_lines_and_zero_based_columns() -> None:
    tokens: list[Token] = [t for t in tokenize("class Foo\n  def bar") if t.kind != TokenKind.NEWLINE]
    assert [(t.text, t.line_no, t.column) for t in tokens] == [
        ("class", 1, 0),
        ("Foo", 1, 6),
        ("def", 2, 2),
        ("bar", 2, 6),
    ]


@parametrize(
    "source, expected",
    [
        (":name", [(TokenKind.SYMBOL, ":name")]),
        ('"a b"', [(TokenKind.STRING, '"a b"')]),
        ("@count", [(TokenKind.IVAR, "@count")]),
        ("@@total", [(TokenKind.IVAR, "@@total")]),
        ("$stdout", [(TokenKind.GVAR, "$stdout")]),
        ("42", [(TokenKind.NUMBER, "42")]),
        ("empty?", [(TokenKind.IDENTIFIER, "empty?")]),
        (
            "Foo::Bar",
            [(TokenKind.CONSTANT, "Foo"), (TokenKind.OPERATOR, "::"), (TokenKind.CONSTANT, "Bar")],
        ),
        (
            "a!=b",
            [(TokenKind.IDENTIFIER, "a"), (TokenKind.OPERATOR, "!="), (TokenKind.IDENTIFIER, "b")],
        ),
    ],
)
def test_token_kinds(source: str, expected: list[tuple[TokenKind, str]]) -> None:
    assert _kinds(source) == expected


def test_comments_and_newlines_are_kept() -> None:
    assert _kinds("x # note\n") == [
        (TokenKind.IDENTIFIER, "x"),
        (TokenKind.COMMENT, "# note"),
        (TokenKind.NEWLINE, "\n"),
    ]


def test_backslash_continuation_is_dropped() -> None:
    kinds: list[TokenKind] = [t.kind for t in tokenize("a \\\n b")]
    assert TokenKind.NEWLINE not in kinds
    assert [t.line_no for t in tokenize("a \\\n b")] == [1, 2]


def test_unknown_characters_never_raise() -> None:
    assert _kinds("§") == [(TokenKind.UNKNOWN, "§")]


def test_keyword_and_operator_predicates() -> None:
    tok = Token(TokenKind.KEYWORD, "def")
    assert tok.is_keyword()
    assert tok.is_keyword("class", "def")
    assert not tok.is_keyword("class")
    assert not tok.is_operator()
    assert Token(TokenKind.OPERATOR, "::").is_operator("::")


def test_multiline_string_end_position() -> None:
    tok = Token(TokenKind.STRING, '"a\nbc"', line_no=3, column=4)
    assert tok.end_line == 4
    assert tok.end_column == 3


def test_token_list_from_text_and_tokens() -> None:
    from_text = TokenList("a = 1")
    assert len(from_text) == 3
    assert TokenList(list(from_text)) == from_text
    assert isinstance(from_text[1:], TokenList)
    assert from_text[0].text == "a"


def test_token_list_rejects_non_tokens() -> None:
    with pytest.raises(TypeError):
        TokenList([1, 2])  # type: ignore[list-item]


def test_render_reproduces_spacing() -> None:
    assert TokenList("foo(a,  b)").render() == "foo(a,  b)"
    assert render_tokens([]) == ""


def test_render_multiline_keeps_relative_indent() -> None:
    tokens: list[Token] = [t for t in tokenize("foo(1,\n  2)") if t.kind != TokenKind.NEWLINE]
    assert render_tokens(tokens) == "foo(1,\n  2)"
