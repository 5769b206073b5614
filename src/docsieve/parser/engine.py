# topmark:header:start
#
#   project      : DocSieve
#   file         : engine.py
#   file_relpath : src/docsieve/parser/engine.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Execution helpers for parsing a list of files (engine layer).

This module runs one `SourceParser` per file, all sharing a single
`DocumentStore`, so a class reopened in another file merges with its first
definition. It exists so both the public API and the CLI share the same
engine logic.

Design goals:
  - No CLI dependencies: do not import Click or anything under
    ``docsieve.cli.*`` from here.
  - Structured results: return a list of `ParseResult` objects, plus an
    optional `ExitCode` summarizing any error encountered while iterating files.
  - Logging only: error conditions are logged via the package logger.

Typical usage:

    results, err = parse_files(file_list=files, config=cfg)
    if err is not None:
        # CLI maps this to a process exit; API callers may handle it differently.
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from docsieve.config.logging import get_logger
from docsieve.core.exit_codes import ExitCode
from docsieve.objects.store import DocumentStore
from docsieve.parser.source_parser import SourceParser

if TYPE_CHECKING:
    from pathlib import Path

    from docsieve.config import Config
    from docsieve.config.logging import DocsieveLogger
    from docsieve.diagnostic import FrozenDiagnosticLog
    from docsieve.handlers.registry import HandlerRegistry
    from docsieve.parser.context import ContextSnapshot

logger: DocsieveLogger = get_logger(__name__)


@dataclass(frozen=True)
class ParseResult:
    """Summary of one finished parse run.

    Attributes:
        label (str): Source label (file path or ``"<STDIN>"``).
        diagnostics (FrozenDiagnosticLog): Warnings and errors of the run.
        statements_processed (int): Statements dispatched (nested ones included).
        context (ContextSnapshot): Traversal context at the end of the run.
    """

    label: str
    diagnostics: FrozenDiagnosticLog
    statements_processed: int
    context: ContextSnapshot

    @classmethod
    def from_parser(cls, parser: SourceParser) -> ParseResult:
        """Capture the state of a parser that just finished a run."""
        return cls(
            label=parser.file,
            diagnostics=parser.diagnostics.freeze(),
            statements_processed=parser.statements_processed,
            context=parser.context.snapshot(),
        )


def parse_text(
    text: str,
    *,
    label: str,
    config: Config,
    store: DocumentStore,
    registry: HandlerRegistry | None = None,
) -> ParseResult:
    """Parse in-memory source text (used for STDIN).

    Args:
        text (str): Source text.
        label (str): Label used in diagnostics.
        config (Config): Runtime configuration.
        store (DocumentStore): Store to populate.
        registry (HandlerRegistry | None): Handlers (defaults to the built-ins).

    Returns:
        ParseResult: The result of the run.
    """
    parser = SourceParser(store=store, registry=registry, config=config)
    parser.parse_string(text, file=label)
    return ParseResult.from_parser(parser)


def parse_files(
    *,
    file_list: list[Path],
    config: Config,
    store: DocumentStore | None = None,
    registry: HandlerRegistry | None = None,
) -> tuple[list[ParseResult], ExitCode | None]:
    """Parse each file and return ``(results, encountered_error_code)``.

    Catches common filesystem and encoding errors so command bodies don't
    duplicate try/except.

    Args:
        file_list (list[Path]): Files to parse, in order.
        config (Config): Runtime configuration.
        store (DocumentStore | None): Store shared by all files (a fresh one when omitted).
        registry (HandlerRegistry | None): Handlers (defaults to the built-ins).

    Returns:
        tuple[list[ParseResult], ExitCode | None]: One result per file that could
            be read, and ``None`` or the first encountered non-success exit code.

    Exit code mapping:
        FILE_NOT_FOUND
            Missing path, or a directory where a file was expected.
        PERMISSION_DENIED
            Insufficient permissions.
        ENCODING_ERROR
            The file cannot be decoded with the configured encoding.
        PIPELINE_ERROR
            Any other unexpected exception.

    Notes:
        Handler failures are not errors here: they are recorded in each
        result's diagnostics. Only the first error code is preserved;
        subsequent files continue to run.
    """
    shared: DocumentStore = store if store is not None else DocumentStore()
    results: list[ParseResult] = []
    encountered_error_code: ExitCode | None = None

    for path in file_list:
        try:
            parser = SourceParser(store=shared, registry=registry, config=config)
            parser.parse(path)
            results.append(ParseResult.from_parser(parser))
        except (FileNotFoundError, IsADirectoryError) as e:
            logger.error("Filesystem error while parsing %s: %s", path, e)
            encountered_error_code = encountered_error_code or ExitCode.FILE_NOT_FOUND
        except PermissionError as e:
            logger.error("Filesystem error while parsing %s: %s", path, e)
            encountered_error_code = encountered_error_code or ExitCode.PERMISSION_DENIED
        except UnicodeDecodeError as e:
            logger.error("Encoding error while reading %s: %s", path, e)
            encountered_error_code = encountered_error_code or ExitCode.ENCODING_ERROR
        except Exception as e:  # pragma: no cover
            logger.exception("Unexpected error parsing %s: %s", path, e)
            encountered_error_code = encountered_error_code or ExitCode.PIPELINE_ERROR

    return results, encountered_error_code
