# topmark:header:start
#
#   project      : DocSieve
#   file         : source_parser.py
#   file_relpath : src/docsieve/parser/source_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The source parser: turn input into statements and dispatch them to handlers.

`SourceParser.parse` accepts four input forms:

* a filesystem path (``str`` or `os.PathLike`), read with the configured
  encoding; the path becomes the parser's ``file`` label;
* a `TokenList`, grouped into statements;
* a `StatementList`, used as is;
* any object with a ``read()`` method (``str`` or ``bytes`` result).

Anything else raises `InvalidInputError` before a single statement is
processed.

`SourceParser.process` is the dispatch loop. Statements are handled strictly
in source order; every matching handler runs in registration order, each
inside its own failure boundary (`execute_handler`), and the loop always
moves on to the next handler and the next statement. Undocumentable
constructs become warnings; unexpected handler faults become errors with a
bounded trace. Both are recorded in `SourceParser.diagnostics` and logged.

The traversal context is reset at the start of every parse run and never
between statements, so a handler's changes are visible to every later
statement of the run.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from docsieve.config.logging import get_logger
from docsieve.config.model import Config
from docsieve.constants import STDIN_LABEL
from docsieve.core.errors import InvalidInputError
from docsieve.diagnostic import DiagnosticLog, SourceLocation
from docsieve.handlers import register_all_handlers
from docsieve.lexer.statements import StatementList
from docsieve.lexer.tokens import TokenList
from docsieve.objects.store import get_default_store
from docsieve.parser.context import TraversalContext
from docsieve.parser.outcomes import HandlerStatus, execute_handler
from docsieve.parser.resolver import HandlerResolver

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docsieve.config.logging import DocsieveLogger
    from docsieve.diagnostic import DiagnosticStats
    from docsieve.handlers.registry import HandlerDescriptor, HandlerRegistry
    from docsieve.lexer.statements import Statement
    from docsieve.objects.store import DocumentStore
    from docsieve.parser.outcomes import HandlerOutcome

logger: DocsieveLogger = get_logger(__name__)


class SourceParser:
    """Dispatch the statements of one source to the registered handlers.

    Args:
        store (DocumentStore | None): Store the handlers populate (defaults to the
            process-wide store).
        registry (HandlerRegistry | None): Handlers to dispatch to (defaults to the
            process-wide registry with all built-in handlers loaded).
        config (Config | None): Runtime configuration (defaults to `Config()`).

    Attributes:
        file (str): Label of the source being parsed; ``"<STDIN>"`` unless a path
            or an explicit label was given.
        config (Config): Runtime configuration.
        store (DocumentStore): Documentation object store.
        resolver (HandlerResolver): Selects the handlers for a statement.
        context (TraversalContext): Shared traversal state.
        diagnostics (DiagnosticLog): Warnings and errors recorded by the last run.
        statements_processed (int): Number of statements dispatched by the last run
            (nested statements included).
    """

    def __init__(
        self,
        *,
        store: DocumentStore | None = None,
        registry: HandlerRegistry | None = None,
        config: Config | None = None,
    ) -> None:
        self.file: str = STDIN_LABEL
        self.config: Config = config or Config()
        self.store: DocumentStore = store if store is not None else get_default_store()
        self.resolver: HandlerResolver = HandlerResolver(
            registry if registry is not None else register_all_handlers(),
            disabled=self.config.disabled_handlers,
        )
        self.context: TraversalContext = TraversalContext.at_root(self.store.root)
        self.diagnostics: DiagnosticLog = DiagnosticLog()
        self.statements_processed: int = 0

    def parse(self, content: object) -> SourceParser:
        """Parse ``content`` and dispatch every statement.

        Args:
            content (object): A path, a `TokenList`, a `StatementList` or a readable object.

        Returns:
            SourceParser: ``self``, with diagnostics and counters filled in.

        Raises:
            InvalidInputError: If ``content`` is none of the supported forms.
            OSError: If a path cannot be read.
            UnicodeDecodeError: If a path or a ``read()`` result cannot be decoded.
        """
        statements: StatementList = self._to_statements(content)
        self._start_run()
        logger.debug("Parsing %s (%d top-level statement(s))", self.file, len(statements))
        self.process(statements)
        stats: DiagnosticStats = self.diagnostics.stats()
        logger.info(
            "Parsed %s: %d statement(s), %d warning(s), %d error(s)",
            self.file,
            self.statements_processed,
            stats.n_warning,
            stats.n_error,
        )
        return self

    def parse_string(self, text: str, *, file: str | None = None) -> SourceParser:
        """Parse in-memory source ``text``.

        Args:
            text (str): Source text.
            file (str | None): Label used in diagnostics (default ``"<STDIN>"``).

        Returns:
            SourceParser: ``self``.
        """
        self.file = file or STDIN_LABEL
        return self.parse(StatementList(text))

    def _to_statements(self, content: object) -> StatementList:
        read: object = getattr(content, "read", None)
        match content:
            case StatementList():
                return content
            case TokenList():
                return StatementList(content)
            case str() | os.PathLike():
                path: str = os.fspath(content)
                logger.debug("Reading %s (%s)", path, self.config.encoding)
                with open(path, encoding=self.config.encoding) as fh:
                    text: str = fh.read()
                self.file = path
                return StatementList(text)
            case _ if callable(read):
                data: object = read()
                if isinstance(data, bytes):
                    data = data.decode(self.config.encoding)
                if not isinstance(data, str):
                    raise InvalidInputError(
                        f"read() returned {type(data).__name__}, expected str or bytes"
                    )
                return StatementList(data)
            case _:
                raise InvalidInputError(
                    f"Invalid input to parse: {type(content).__name__} "
                    "(expected a path, TokenList, StatementList or readable object)"
                )

    def _start_run(self) -> None:
        self.context.reset(self.store.root)
        self.diagnostics = DiagnosticLog()
        self.statements_processed = 0

    def process(self, statements: Iterable[Statement]) -> None:
        """Dispatch ``statements`` in order to every matching handler.

        Handlers call this recursively (through `Handler.parse_block`) for the
        bodies of nested constructs. Handler failures never propagate.

        Args:
            statements (Iterable[Statement]): Statements in source order.
        """
        for stmt in statements:
            self.statements_processed += 1
            descriptors: tuple[HandlerDescriptor, ...] = self.resolver.resolve(stmt)
            for descriptor in descriptors:
                outcome: HandlerOutcome = execute_handler(
                    descriptor, self, stmt, trace_depth=self.config.trace_depth
                )
                self._report(outcome, stmt)

    def _report(self, outcome: HandlerOutcome, stmt: Statement) -> None:
        match outcome.status:
            case HandlerStatus.PROCESSED:
                logger.trace("%s processed line %d", outcome.handler, stmt.line)
            case HandlerStatus.UNDOCUMENTABLE:
                logger.warning("in %s: Undocumentable %s", outcome.handler, outcome.message)
                logger.warning("\tin file '%s':%d:\n\n%s\n", self.file, stmt.line, stmt.show())
                self.diagnostics.add_warning(
                    f"Undocumentable {outcome.message}",
                    location=SourceLocation(self.file, stmt.line),
                    context=stmt.show(),
                    handler=outcome.handler,
                )
            case HandlerStatus.FAULTED:
                logger.error("Unhandled exception in %s:", outcome.handler)
                logger.error("  %s", outcome.message)
                logger.error("  in `%s`:%d:\n\n%s\n", self.file, stmt.line, stmt.show())
                logger.debug("Stack trace:\n%s\n", outcome.trace)
                self.diagnostics.add_error(
                    outcome.message,
                    location=SourceLocation(self.file, stmt.line),
                    context=stmt.show(),
                    trace=outcome.trace,
                    handler=outcome.handler,
                )
