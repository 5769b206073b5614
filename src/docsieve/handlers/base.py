# topmark:header:start
#
#   project      : DocSieve
#   file         : base.py
#   file_relpath : src/docsieve/handlers/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler base module for DocSieve's statement dispatch.

This module defines the `Handler` base class. A handler knows how to
**recognize** one statement shape (`Handler.handles`, a pure predicate over
the statement tokens) and how to **extract** documentation from it
(`Handler.process`), mutating the shared traversal context and the document
store as it goes.

Responsibilities:
    - **Recognition:** ``handles(tokens)`` must be cheap and side-effect free;
      the resolver calls it for every statement.
    - **Extraction:** ``process()`` registers documentation objects through
      `Handler.register`, which also attaches the statement's comments and
      source location.
    - **Nesting:** handlers for constructs with a body call
      `Handler.parse_block` to run the parser over the body with a pushed
      namespace, scope or visibility; the previous state is restored
      afterwards.
    - **Soft failures:** raise `UndocumentableError` when a construct is
      recognized but cannot be documented. Any other exception is treated
      as an unexpected fault by the parser.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, TypeVar

from docsieve.config.logging import get_logger
from docsieve.core.errors import UndocumentableError
from docsieve.lexer.tokens import Token, TokenKind, render_tokens
from docsieve.objects.base import CodeObject, ModuleObject, NamespaceObject

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.config.logging import DocsieveLogger
    from docsieve.lexer.statements import Statement
    from docsieve.objects.store import DocumentStore
    from docsieve.parser.context import TraversalContext
    from docsieve.parser.source_parser import SourceParser

logger: DocsieveLogger = get_logger(__name__)

T = TypeVar("T", bound=CodeObject)

# Tokens that may be used as symbol-like arguments (``:name`` or ``"name"``).
_NAME_ARGUMENT_KINDS: frozenset[TokenKind] = frozenset({TokenKind.SYMBOL, TokenKind.STRING})


class Handler:
    """Base class for statement handlers.

    Subclasses override `handles` and `process`, and are registered with
    `docsieve.handlers.registry.register_handler`.

    Attributes:
        name (str): Registered handler name (set at registration time).
        parser (SourceParser): The parser driving this run.
        statement (Statement): The statement being handled.
        context (TraversalContext): The parser's shared traversal context.
        store (DocumentStore): The document store being populated.
    """

    name: ClassVar[str] = ""

    def __init__(self, parser: SourceParser, statement: Statement) -> None:
        self.parser: SourceParser = parser
        self.statement: Statement = statement
        self.context: TraversalContext = parser.context
        self.store: DocumentStore = parser.store

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        """Return True if this handler applies to a statement with ``tokens``.

        Default: ``False``. Must not have side effects.
        """
        return False

    def process(self) -> None:
        """Extract documentation from the bound statement."""
        raise NotImplementedError(f"{type(self).__name__} must implement process()")

    @property
    def tokens(self) -> tuple[Token, ...]:
        """Tokens of the bound statement."""
        return self.statement.tokens

    def register(self, obj: T) -> T:
        """Register ``obj`` in the store and record docstring and source location.

        If an object with the same path and kind already exists (a reopened
        class, a redefined method), that object is updated and returned.

        Args:
            obj (T): A freshly built documentation object.

        Returns:
            T: The registered object.

        Raises:
            UndocumentableError: If the path is taken by an object of another kind.
        """
        try:
            registered: T = self.store.register(obj)
        except ValueError as exc:
            raise UndocumentableError(str(exc)) from exc
        if self.statement.comments:
            registered.docstring = self.statement.docstring
        registered.add_file(self.parser.file, self.statement.line)
        return registered

    def parse_block(self, **changes: Any) -> None:
        """Run the parser over the statement's body with temporarily changed context.

        Args:
            **changes (Any): Context fields to push for the body (``namespace``,
                ``owner``, ``visibility``, ``scope``); see
                `TraversalContext.scoped`.
        """
        block = self.statement.block
        if not block:
            return
        with self.context.scoped(**changes):
            self.parser.process(block)

    def namespace_for(self, path: str) -> tuple[NamespaceObject, str]:
        """Split a constant path into its enclosing namespace and final name.

        ``"Bar"`` lives in the current namespace, ``"Foo::Bar"`` in ``Foo``
        (resolved lexically; created as a placeholder module when unknown),
        ``"::Bar"`` in the root.

        Args:
            path (str): Constant path as written.

        Returns:
            tuple[NamespaceObject, str]: The enclosing namespace and the last segment.

        Raises:
            UndocumentableError: If an intermediate segment is not a namespace.
        """
        namespace: NamespaceObject = self.context.namespace
        if path.startswith("::"):
            namespace = self.store.root
            path = path[2:]
        *parents, name = path.split("::")
        for index, segment in enumerate(parents):
            found: CodeObject | None = (
                self.store.resolve(namespace, segment)
                if index == 0 and namespace is self.context.namespace
                else namespace.child(segment)
            )
            if found is None:
                logger.debug("Creating placeholder namespace %s in %r", segment, namespace)
                found = self.store.register(ModuleObject(namespace, segment))
            if not isinstance(found, NamespaceObject):
                raise UndocumentableError(f"'{found.path}' is not a namespace")
            namespace = found
        return namespace, name


def parse_const_path(tokens: Sequence[Token], start: int) -> tuple[str, int]:
    """Read a constant path (``A``, ``A::B``, ``::A::B``) starting at ``start``.

    Args:
        tokens (Sequence[Token]): Statement tokens.
        start (int): Index of the first token of the path.

    Returns:
        tuple[str, int]: The path text and the index just past it.

    Raises:
        UndocumentableError: If the tokens at ``start`` do not form a constant path
            (for example a name computed at runtime).
    """
    parts: list[str] = []
    i: int = start
    if i < len(tokens) and tokens[i].is_operator("::"):
        parts.append("")
        i += 1
    if i >= len(tokens) or tokens[i].kind is not TokenKind.CONSTANT:
        raise UndocumentableError(f"dynamic name '{render_tokens(tokens[start:])}'")
    parts.append(tokens[i].text)
    i += 1
    while (
        i + 1 < len(tokens)
        and tokens[i].is_operator("::")
        and tokens[i + 1].kind is TokenKind.CONSTANT
    ):
        parts.append(tokens[i + 1].text)
        i += 2
    return "::".join(parts), i


def split_arguments(tokens: Sequence[Token]) -> list[list[Token]]:
    """Split call arguments on top-level commas (surrounding parentheses are dropped).

    Args:
        tokens (Sequence[Token]): Argument tokens, e.g. everything after ``attr_reader``.

    Returns:
        list[list[Token]]: One token list per argument (empty arguments are dropped).
    """
    items: list[Token] = list(tokens)
    if items and items[0].is_operator("(") and items[-1].is_operator(")"):
        items = items[1:-1]
    arguments: list[list[Token]] = [[]]
    depth: int = 0
    for tok in items:
        if tok.is_operator("(", "[", "{"):
            depth += 1
        elif tok.is_operator(")", "]", "}"):
            depth -= 1
        elif depth == 0 and tok.is_operator(","):
            arguments.append([])
            continue
        arguments[-1].append(tok)
    return [arg for arg in arguments if arg]


def name_argument(argument: Sequence[Token]) -> str:
    """Return the name given by a ``:symbol`` or ``"string"`` argument.

    Raises:
        UndocumentableError: For any other argument shape (computed names).
    """
    if len(argument) != 1 or argument[0].kind not in _NAME_ARGUMENT_KINDS:
        raise UndocumentableError(f"dynamic name '{render_tokens(argument)}'")
    text: str = argument[0].text
    if argument[0].kind is TokenKind.SYMBOL:
        text = text[1:]
    return text.strip("\"'")
