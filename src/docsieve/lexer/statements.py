# topmark:header:start
#
#   project      : DocSieve
#   file         : statements.py
#   file_relpath : src/docsieve/lexer/statements.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Group tokens into logical statements.

A `Statement` is one logical unit of source: the tokens of a line (or of
several lines joined by open brackets or continuation operators), the
comment lines directly above it, and, for constructs closed by ``end``, the
nested `StatementList` of its body.

Grouping rules:
    * A newline or ``;`` ends a statement unless a bracket is still open, the
      line ends with a continuation operator, or the next line starts with a
      method-call dot.
    * Comment lines directly above a statement become its ``comments``; a
      blank line discards them. Trailing comments on code lines are dropped.
    * A statement with a positive balance of block openers (leading
      ``class``/``module``/``def``/``begin``/``if``/... keywords, the same
      keywords right after an assignment, every ``do``) against ``end``
      tokens opens a block that the next statement starting with ``end``
      closes. A definition passed to a leading call (``private def x``)
      opens a block too. Blocks still open at the end of input are closed
      implicitly.
    * ``def name = expr`` and ``def name(args) = expr`` never open a block;
      setter and operator names (``name=``, ``[]=``) and parameter defaults
      are not mistaken for that ``=``.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from itertools import groupby, pairwise
from typing import TYPE_CHECKING, Final, overload

from docsieve.config.logging import get_logger
from docsieve.lexer.tokens import Token, TokenKind, TokenList, render_tokens

if TYPE_CHECKING:
    from collections.abc import Iterator

    from docsieve.config.logging import DocsieveLogger

logger: DocsieveLogger = get_logger(__name__)

BLOCK_KEYWORDS: Final[frozenset[str]] = frozenset(
    {"class", "module", "def", "begin", "if", "unless", "while", "until", "case", "for"}
)
# Keywords that open a block when used as an expression (``x = if ...``).
_EMBEDDABLE_KEYWORDS: Final[frozenset[str]] = frozenset(
    {"begin", "if", "unless", "while", "until", "case"}
)
# Definitions that may follow a leading method call (``private def x``).
_DEFINITION_KEYWORDS: Final[frozenset[str]] = frozenset({"def", "class", "module"})
# Loops whose optional ``do`` belongs to the loop itself.
_LOOP_KEYWORDS: Final[frozenset[str]] = frozenset({"while", "until", "for"})

ASSIGNMENT_OPERATORS: Final[frozenset[str]] = frozenset(
    {"=", "||=", "&&=", "+=", "-=", "*=", "/=", "%=", "**=", "|=", "&=", "^=", "<<=", ">>="}
)
_CONTINUATION_OPERATORS: Final[frozenset[str]] = ASSIGNMENT_OPERATORS | frozenset(
    {",", ".", "&.", "::", "&&", "||", "=>", "->", "+", "*", "/", "<<", "?", ":"}
)
_LEADING_CONTINUATION: Final[frozenset[str]] = frozenset({".", "&."})
_OPENING_BRACKETS: Final[frozenset[str]] = frozenset({"(", "[", "{"})
_CLOSING_BRACKETS: Final[frozenset[str]] = frozenset({")", "]", "}"})
_NAME_KINDS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.IDENTIFIER, TokenKind.CONSTANT, TokenKind.KEYWORD}
)
_OPERATOR_NAME_KINDS: Final[frozenset[TokenKind]] = frozenset(
    {TokenKind.OPERATOR, TokenKind.UNKNOWN}
)


@dataclass(frozen=True)
class Statement:
    """One logical statement: tokens, leading comments and an optional body.

    Attributes:
        tokens (tuple[Token, ...]): Non-empty token sequence (no comment or
            newline tokens).
        comments (tuple[str, ...]): Comment lines directly preceding the
            statement, without the ``#`` marker.
        block (StatementList | None): Body statements for constructs closed by
            ``end``; ``None`` otherwise.
        end_line (int | None): Line of the closing ``end``, if any.
    """

    tokens: tuple[Token, ...]
    comments: tuple[str, ...] = ()
    block: StatementList | None = field(default=None, compare=False)
    end_line: int | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", tuple(self.tokens))
        object.__setattr__(self, "comments", tuple(self.comments))
        if not self.tokens:
            raise ValueError("A statement needs at least one token")

    @property
    def first(self) -> Token:
        """The first token of the statement."""
        return self.tokens[0]

    @property
    def line(self) -> int:
        """Line number of the first token."""
        return self.tokens[0].line_no

    @property
    def text(self) -> str:
        """Readable rendering of the statement tokens."""
        return render_tokens(self.tokens)

    @property
    def docstring(self) -> str:
        """Leading comments joined into a single block of text."""
        return "\n".join(self.comments)

    def show(self) -> str:
        """Return a line-numbered rendering of the statement, as used in diagnostics."""
        return "\n".join(
            f"\t{line_no}: {render_tokens(group)}"
            for line_no, group in groupby(self.tokens, key=lambda tok: tok.line_no)
        )

    def __str__(self) -> str:
        return self.text


class StatementList(Sequence[Statement]):
    """Immutable, ordered sequence of statements.

    Built from source text, from a `TokenList` (or any iterable of tokens),
    or from an iterable of already-grouped `Statement` objects.
    """

    __slots__ = ("_statements",)

    def __init__(self, content: str | Iterable[Token] | Iterable[Statement] = ()) -> None:
        if isinstance(content, str):
            content = TokenList(content)
        items: list[object] = list(content)
        if all(isinstance(item, Statement) for item in items):
            self._statements: tuple[Statement, ...] = tuple(
                item for item in items if isinstance(item, Statement)
            )
        elif all(isinstance(item, Token) for item in items):
            self._statements = tuple(
                group_statements(item for item in items if isinstance(item, Token))
            )
        else:
            raise TypeError("StatementList items must be all Token or all Statement objects")

    @overload
    def __getitem__(self, index: int) -> Statement: ...

    @overload
    def __getitem__(self, index: slice) -> StatementList: ...

    def __getitem__(self, index: int | slice) -> Statement | StatementList:
        if isinstance(index, slice):
            return StatementList(self._statements[index])
        return self._statements[index]

    def __len__(self) -> int:
        return len(self._statements)

    def __iter__(self) -> Iterator[Statement]:
        return iter(self._statements)

    def __repr__(self) -> str:
        return f"StatementList({len(self._statements)} statements)"


def _strip_comment(text: str) -> str:
    body: str = text[1:]
    if body.startswith(" "):
        body = body[1:]
    return body.rstrip()


def _glued(prev: Token, tok: Token) -> bool:
    """Return True when ``tok`` starts exactly where ``prev`` ends."""
    return prev.end_line == tok.line_no and prev.end_column == tok.column


def method_name_end(tokens: Sequence[Token], start: int) -> int:
    """Return the index just past the method name that starts at ``start``.

    Names are a single name token (``foo``, ``valid?``), a setter with its
    ``=`` glued to the name and followed by ``(`` or nothing (``name=``), or a
    run of glued operator tokens (``[]=``, ``<=>``, ``-@``). Returns ``start``
    when there is no name.
    """
    if start >= len(tokens) or tokens[start].is_operator("("):
        return start
    first: Token = tokens[start]
    index: int = start + 1
    if first.kind in _NAME_KINDS:
        if (
            index < len(tokens)
            and tokens[index].is_operator("=")
            and _glued(first, tokens[index])
            and (index + 1 == len(tokens) or tokens[index + 1].is_operator("("))
        ):
            index += 1
        return index
    if first.kind not in _OPERATOR_NAME_KINDS:
        return start
    while (
        index < len(tokens)
        and tokens[index].kind in _OPERATOR_NAME_KINDS
        and not tokens[index].is_operator("(")
        and _glued(tokens[index - 1], tokens[index])
    ):
        index += 1
    return index


def bracket_end(tokens: Sequence[Token], start: int) -> int:
    """Return the index just past the bracket group opened at ``start``.

    An unbalanced group runs to the end of ``tokens``.
    """
    depth: int = 0
    for index in range(start, len(tokens)):
        if tokens[index].is_operator(*_OPENING_BRACKETS):
            depth += 1
        elif tokens[index].is_operator(*_CLOSING_BRACKETS):
            depth -= 1
            if depth == 0:
                return index + 1
    return len(tokens)


def is_endless_def(tokens: Sequence[Token]) -> bool:
    """Return True for ``def name(args) = expr`` style one-line definitions.

    Only an ``=`` right after the complete method name or after its
    parenthesized parameter list makes a definition endless. Setter names
    (``def name=(value)``, ``def []=(k, v)``) and default values of
    parenthesis-less parameters (``def name a, b = 1``) do not.
    """
    index: int = 1
    if index + 2 < len(tokens) and tokens[index + 1].is_operator("."):
        index += 2  # receiver: ``def self.name``
    name_end: int = method_name_end(tokens, index)
    if name_end == index:
        return False
    index = name_end
    if index < len(tokens) and tokens[index].is_operator("("):
        index = bracket_end(tokens, index)
    return index < len(tokens) and tokens[index].is_operator("=")


def definition_start(tokens: Sequence[Token]) -> int:
    """Return the index of the definition keyword of a statement.

    ``private def helper`` and ``memoize def value`` pass a definition to a
    leading method call; the definition then starts at index 1. Otherwise
    returns 0.
    """
    if (
        len(tokens) > 1
        and tokens[0].kind is TokenKind.IDENTIFIER
        and tokens[1].is_keyword(*_DEFINITION_KEYWORDS)
    ):
        return 1
    return 0


def opens_block(tokens: Sequence[Token]) -> bool:
    """Return True if a statement's body continues until a matching ``end``."""
    tokens = tokens[definition_start(tokens) :]
    first: Token = tokens[0]
    if first.is_keyword("def") and is_endless_def(tokens):
        return False
    balance: int = 1 if first.is_keyword(*BLOCK_KEYWORDS) else 0
    loop_do_pending: bool = first.is_keyword(*_LOOP_KEYWORDS)
    for prev, tok in pairwise(tokens):
        if tok.kind is not TokenKind.KEYWORD:
            continue
        if tok.text == "do":
            if loop_do_pending:
                loop_do_pending = False
                continue
            balance += 1
        elif tok.text == "end":
            balance -= 1
        elif tok.text in _EMBEDDABLE_KEYWORDS and prev.is_operator(*ASSIGNMENT_OPERATORS):
            balance += 1
    return balance > 0


@dataclass
class _OpenBlock:
    tokens: tuple[Token, ...]
    comments: tuple[str, ...]
    body: list[Statement] = field(default_factory=lambda: [])


@dataclass
class _StatementGrouper:
    """Single-pass state machine turning tokens into nested statements."""

    tokens: Sequence[Token]
    top: list[Statement] = field(default_factory=lambda: [])
    stack: list[_OpenBlock] = field(default_factory=lambda: [])
    current: list[Token] = field(default_factory=lambda: [])
    comments: list[str] = field(default_factory=lambda: [])
    depth: int = 0

    def run(self) -> list[Statement]:
        prev_kind: TokenKind | None = None
        for index, tok in enumerate(self.tokens):
            if tok.kind is TokenKind.COMMENT:
                if not self.current:
                    self.comments.append(_strip_comment(tok.text))
            elif tok.kind is TokenKind.NEWLINE:
                if self.current:
                    if not self._continues(index):
                        self._flush()
                elif prev_kind is TokenKind.NEWLINE or prev_kind is None:
                    # Blank line: comments above it are not attached to what follows.
                    self.comments.clear()
            elif tok.kind is TokenKind.SEMICOLON:
                if self.current and self.depth == 0:
                    self._flush()
            else:
                if tok.kind is TokenKind.OPERATOR:
                    if tok.text in _OPENING_BRACKETS:
                        self.depth += 1
                    elif tok.text in _CLOSING_BRACKETS:
                        self.depth = max(self.depth - 1, 0)
                self.current.append(tok)
            prev_kind = tok.kind
        if self.current:
            self._flush()
        while self.stack:
            block: _OpenBlock = self.stack[-1]
            logger.debug("Closing unterminated block opened at line %d", block.tokens[0].line_no)
            self._close(end_line=None)
        return self.top

    def _continues(self, index: int) -> bool:
        if self.depth > 0:
            return True
        if self.current[-1].is_operator(*_CONTINUATION_OPERATORS):
            return True
        for pos in range(index + 1, len(self.tokens)):
            following: Token = self.tokens[pos]
            if following.kind is not TokenKind.NEWLINE:
                return following.is_operator(*_LEADING_CONTINUATION)
        return False

    def _emit(self, statement: Statement) -> None:
        if self.stack:
            self.stack[-1].body.append(statement)
        else:
            self.top.append(statement)

    def _close(self, end_line: int | None) -> None:
        block: _OpenBlock = self.stack.pop()
        self._emit(
            Statement(
                tokens=block.tokens,
                comments=block.comments,
                block=StatementList(block.body),
                end_line=end_line,
            )
        )

    def _flush(self) -> None:
        tokens: tuple[Token, ...] = tuple(self.current)
        comments: tuple[str, ...] = tuple(self.comments)
        self.current.clear()
        self.comments.clear()
        self.depth = 0

        first: Token = tokens[0]
        if first.is_keyword("end"):
            if self.stack:
                self._close(end_line=first.line_no)
            else:
                logger.debug("Ignoring unmatched 'end' at line %d", first.line_no)
            return
        if opens_block(tokens):
            self.stack.append(_OpenBlock(tokens=tokens, comments=comments))
            return
        self._emit(Statement(tokens=tokens, comments=comments))


def group_statements(tokens: Iterable[Token]) -> list[Statement]:
    """Group a token stream into top-level statements (with nested blocks).

    Args:
        tokens (Iterable[Token]): Tokens in source order, including comment
            and newline tokens.

    Returns:
        list[Statement]: Top-level statements in source order.
    """
    statements: list[Statement] = _StatementGrouper(tokens=list(tokens)).run()
    logger.trace("Grouped %d top-level statement(s)", len(statements))
    return statements
