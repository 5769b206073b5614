# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/parser/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Statement dispatch: context, resolver, failure boundary, driver and engine."""

from __future__ import annotations

from docsieve.parser.context import ContextSnapshot, TraversalContext
from docsieve.parser.engine import ParseResult, parse_files, parse_text
from docsieve.parser.outcomes import HandlerOutcome, HandlerStatus, execute_handler
from docsieve.parser.resolver import HandlerResolver
from docsieve.parser.source_parser import SourceParser

__all__ = [
    "ContextSnapshot",
    "HandlerOutcome",
    "HandlerResolver",
    "HandlerStatus",
    "ParseResult",
    "SourceParser",
    "TraversalContext",
    "execute_handler",
    "parse_files",
    "parse_text",
]
