# topmark:header:start
#
#   project      : DocSieve
#   file         : outcomes.py
#   file_relpath : src/docsieve/parser/outcomes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Run one handler inside a failure boundary and classify how it ended.

Every handler execution ends in exactly one `HandlerStatus`:

* ``PROCESSED``: the handler returned normally.
* ``UNDOCUMENTABLE``: the handler raised `UndocumentableError`.
* ``FAULTED``: constructing or running the handler raised any other
  `Exception`. The outcome carries a ``"<Type>: <message>"`` summary and a
  trace of the innermost frames.

`BaseException` subclasses that are not `Exception` (``KeyboardInterrupt``,
``SystemExit``) are not caught.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from docsieve.config.logging import get_logger
from docsieve.constants import DEFAULT_TRACE_DEPTH
from docsieve.core.errors import UndocumentableError

if TYPE_CHECKING:
    from types import TracebackType

    from docsieve.config.logging import DocsieveLogger
    from docsieve.handlers.registry import HandlerDescriptor, Processable
    from docsieve.lexer.statements import Statement
    from docsieve.parser.source_parser import SourceParser

logger: DocsieveLogger = get_logger(__name__)


class HandlerStatus(Enum):
    """How a handler execution ended."""

    PROCESSED = "processed"
    UNDOCUMENTABLE = "undocumentable"
    FAULTED = "faulted"


@dataclass(frozen=True)
class HandlerOutcome:
    """Result of running one handler on one statement.

    Attributes:
        handler (str): Name of the handler.
        status (HandlerStatus): How the execution ended.
        message (str): Failure message (empty for ``PROCESSED``).
        trace (str | None): Bounded stack trace for ``FAULTED`` outcomes.
    """

    handler: str
    status: HandlerStatus
    message: str = ""
    trace: str | None = None


def format_trace(tb: TracebackType | None, depth: int = DEFAULT_TRACE_DEPTH) -> str:
    """Format at most ``depth`` innermost frames of ``tb``.

    Args:
        tb (TracebackType | None): Traceback of the caught exception.
        depth (int): Maximum number of frames (``0`` gives an empty trace).

    Returns:
        str: One ``file:line:in `function'`` entry per line, innermost last.
    """
    if depth <= 0:
        return ""
    frames: traceback.StackSummary = traceback.extract_tb(tb)
    return "\n".join(
        f"\t{frame.filename}:{frame.lineno}:in `{frame.name}'" for frame in frames[-depth:]
    )


def execute_handler(
    descriptor: HandlerDescriptor,
    parser: SourceParser,
    statement: Statement,
    *,
    trace_depth: int = DEFAULT_TRACE_DEPTH,
) -> HandlerOutcome:
    """Build and run the handler of ``descriptor`` for ``statement``.

    Args:
        descriptor (HandlerDescriptor): The matching handler.
        parser (SourceParser): Parser driving the run (gives access to the context).
        statement (Statement): The statement to handle.
        trace_depth (int): Maximum number of frames kept for faults.

    Returns:
        HandlerOutcome: The classified outcome. Never raises for `Exception` subclasses.
    """
    try:
        handler: Processable = descriptor.create(parser, statement)
        handler.process()
    except UndocumentableError as exc:
        return HandlerOutcome(descriptor.name, HandlerStatus.UNDOCUMENTABLE, str(exc))
    except Exception as exc:
        return HandlerOutcome(
            descriptor.name,
            HandlerStatus.FAULTED,
            f"{type(exc).__name__}: {exc}",
            format_trace(exc.__traceback__, trace_depth),
        )
    return HandlerOutcome(descriptor.name, HandlerStatus.PROCESSED)
