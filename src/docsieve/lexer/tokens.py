# topmark:header:start
#
#   project      : DocSieve
#   file         : tokens.py
#   file_relpath : src/docsieve/lexer/tokens.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tokens and a tolerant, regex-based tokenizer for Ruby-flavoured source.

The tokenizer exists so the parser can accept raw source text. It only needs
to be good enough for statement grouping and for the built-in handlers: it
recognizes names, keywords, constants, symbols, strings, numbers, operators
and comments, tracks 1-based line numbers and 0-based columns, and never
raises. Anything it does not understand becomes an ``UNKNOWN`` token.

Heredocs, regex literals and ``=begin``/``=end`` comments are not recognized.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Final, overload

from docsieve.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterator

    from docsieve.config.logging import DocsieveLogger

logger: DocsieveLogger = get_logger(__name__)


class TokenKind(Enum):
    """Lexical category of a token."""

    KEYWORD = "keyword"
    IDENTIFIER = "identifier"
    CONSTANT = "constant"
    IVAR = "ivar"
    GVAR = "gvar"
    SYMBOL = "symbol"
    STRING = "string"
    NUMBER = "number"
    OPERATOR = "operator"
    SEMICOLON = "semicolon"
    COMMENT = "comment"
    NEWLINE = "newline"
    UNKNOWN = "unknown"


KEYWORDS: Final[frozenset[str]] = frozenset(
    {
        "BEGIN",
        "END",
        "__FILE__",
        "__LINE__",
        "alias",
        "and",
        "begin",
        "break",
        "case",
        "class",
        "def",
        "defined?",
        "do",
        "else",
        "elsif",
        "end",
        "ensure",
        "false",
        "for",
        "if",
        "in",
        "module",
        "next",
        "nil",
        "not",
        "or",
        "redo",
        "rescue",
        "retry",
        "return",
        "self",
        "super",
        "then",
        "true",
        "undef",
        "unless",
        "until",
        "when",
        "while",
        "yield",
    }
)

_OPERATORS: Final[str] = "|".join(
    re.escape(op)
    for op in (
        "**=", "<=>", "===", "...", "<<=", ">>=", "&&=", "||=",
        "**", "==", "!=", "=~", "!~", "<=", ">=", "<<", ">>", "&&", "||",
        "+=", "-=", "*=", "/=", "%=", "|=", "&=", "^=", "->", "=>", "..", "&.",
        "+", "-", "*", "/", "%", "=", "<", ">", "!", "&", "|", "^", "~", "?", ":",
        ".", ",", "(", ")", "[", "]", "{", "}",
    )
)  # fmt: skip

# Order matters: earlier alternatives win.
_TOKEN_SPEC: Final[tuple[tuple[str, str], ...]] = (
    ("NEWLINE", r"\r?\n"),
    ("CONTINUATION", r"\\\r?\n"),
    ("SPACE", r"[ \t\f]+"),
    ("COMMENT", r"\#[^\r\n]*"),
    ("STRING", r"\"(?:[^\"\\]|\\.)*\"|'(?:[^'\\]|\\.)*'"),
    ("IVAR", r"@@?[A-Za-z_]\w*"),
    ("GVAR", r"\$(?:[A-Za-z_]\w*|[0-9!@&`'+~=/\\,;.<>_*$?:\"])"),
    ("SCOPE", r"::"),
    ("SYMBOL", r":(?:[A-Za-z_]\w*(?:[?!]|=(?![=>~]))?|\"(?:[^\"\\]|\\.)*\")"),
    ("NUMBER", r"\d[\d_]*(?:\.\d[\d_]*)?(?:[eE][+-]?\d+)?"),
    ("NAME", r"[A-Za-z_]\w*(?:[?!](?!=))?"),
    ("OPERATOR", _OPERATORS),
    ("SEMICOLON", r";"),
    ("UNKNOWN", r"."),
)

_TOKEN_RE: Final[re.Pattern[str]] = re.compile(
    "|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_SPEC),
    re.DOTALL,
)

_SKIPPED: Final[frozenset[str]] = frozenset({"SPACE", "CONTINUATION"})

_GROUP_KINDS: Final[dict[str, TokenKind]] = {
    "NEWLINE": TokenKind.NEWLINE,
    "COMMENT": TokenKind.COMMENT,
    "STRING": TokenKind.STRING,
    "IVAR": TokenKind.IVAR,
    "GVAR": TokenKind.GVAR,
    "SCOPE": TokenKind.OPERATOR,
    "SYMBOL": TokenKind.SYMBOL,
    "NUMBER": TokenKind.NUMBER,
    "OPERATOR": TokenKind.OPERATOR,
    "SEMICOLON": TokenKind.SEMICOLON,
    "UNKNOWN": TokenKind.UNKNOWN,
}


@dataclass(frozen=True, slots=True)
class Token:
    """A lexical unit: kind, source text and position.

    Attributes:
        kind (TokenKind): Lexical category.
        text (str): Exact source text of the token.
        line_no (int): 1-based line of the first character.
        column (int): 0-based column of the first character.
    """

    kind: TokenKind
    text: str
    line_no: int = 1
    column: int = 0

    @property
    def end_line(self) -> int:
        """Line of the last character (strings may span lines)."""
        return self.line_no + self.text.count("\n")

    @property
    def end_column(self) -> int:
        """Column just past the last character on `end_line`."""
        if "\n" in self.text:
            return len(self.text) - self.text.rfind("\n") - 1
        return self.column + len(self.text)

    def is_keyword(self, *words: str) -> bool:
        """Return True if this is a keyword token, optionally one of ``words``."""
        return self.kind is TokenKind.KEYWORD and (not words or self.text in words)

    def is_operator(self, *ops: str) -> bool:
        """Return True if this is an operator token, optionally one of ``ops``."""
        return self.kind is TokenKind.OPERATOR and (not ops or self.text in ops)


def _classify_name(text: str) -> TokenKind:
    if text in KEYWORDS:
        return TokenKind.KEYWORD
    if text[0].isupper():
        return TokenKind.CONSTANT
    return TokenKind.IDENTIFIER


def tokenize(source: str) -> list[Token]:
    """Split ``source`` into tokens.

    Whitespace and backslash line continuations are dropped; newlines and
    comments are kept so statement grouping can use them.

    Args:
        source (str): Source text.

    Returns:
        list[Token]: Tokens in source order.
    """
    tokens: list[Token] = []
    line: int = 1
    line_start: int = 0
    for match in _TOKEN_RE.finditer(source):
        group: str | None = match.lastgroup
        text: str = match.group()
        start: int = match.start()
        if group is not None and group not in _SKIPPED:
            kind: TokenKind = (
                _classify_name(text) if group == "NAME" else _GROUP_KINDS[group]
            )
            if kind is TokenKind.UNKNOWN:
                logger.trace("Unknown character %r at %d:%d", text, line, start - line_start)
            tokens.append(Token(kind, text, line, start - line_start))
        newlines: int = text.count("\n")
        if newlines:
            line += newlines
            line_start = start + text.rfind("\n") + 1
    logger.trace("Tokenized %d token(s) over %d line(s)", len(tokens), line)
    return tokens


def render_tokens(tokens: Iterable[Token]) -> str:
    """Render tokens back into readable source text using their positions.

    Gaps between tokens on the same line are reproduced as spaces; a change
    of line starts a new output line indented relative to the first token.

    Args:
        tokens (Iterable[Token]): Tokens to render.

    Returns:
        str: The rendering (empty for no tokens).
    """
    parts: list[str] = []
    prev: Token | None = None
    base_column: int = 0
    for tok in tokens:
        if prev is None:
            base_column = tok.column
        elif tok.line_no != prev.end_line:
            parts.append("\n" + " " * max(tok.column - base_column, 0))
        else:
            parts.append(" " * max(tok.column - prev.end_column, 0))
        parts.append(tok.text)
        prev = tok
    return "".join(parts)


class TokenList(Sequence[Token]):
    """Immutable, ordered sequence of tokens.

    A `TokenList` is built either from source text (which is tokenized) or
    from any iterable of existing `Token` objects.
    """

    __slots__ = ("_tokens",)

    def __init__(self, content: str | Iterable[Token] = "") -> None:
        if isinstance(content, str):
            self._tokens: tuple[Token, ...] = tuple(tokenize(content))
            return
        items: tuple[object, ...] = tuple(content)
        for item in items:
            if not isinstance(item, Token):
                raise TypeError(f"TokenList items must be Token, got {type(item).__name__}")
        self._tokens = tuple(item for item in items if isinstance(item, Token))

    @overload
    def __getitem__(self, index: int) -> Token: ...

    @overload
    def __getitem__(self, index: slice) -> TokenList: ...

    def __getitem__(self, index: int | slice) -> Token | TokenList:
        if isinstance(index, slice):
            return TokenList(self._tokens[index])
        return self._tokens[index]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TokenList):
            return self._tokens == other._tokens
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __repr__(self) -> str:
        return f"TokenList({len(self._tokens)} tokens)"

    def render(self) -> str:
        """Return a readable rendering of the tokens (see `render_tokens`)."""
        return render_tokens(self._tokens)
