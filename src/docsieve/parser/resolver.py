# topmark:header:start
#
#   project      : DocSieve
#   file         : resolver.py
#   file_relpath : src/docsieve/parser/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Map a statement to the handlers that apply to it.

The resolver scans the registry at call time, so handlers registered while a
run is in progress are picked up by the next statement. It never consults
the traversal context: whether a handler applies depends on the statement
tokens alone.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docsieve.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docsieve.config.logging import DocsieveLogger
    from docsieve.handlers.registry import HandlerDescriptor, HandlerRegistry
    from docsieve.lexer.statements import Statement

logger: DocsieveLogger = get_logger(__name__)


class HandlerResolver:
    """Select the registered handlers whose predicate matches a statement.

    Args:
        registry (HandlerRegistry): Registry to scan.
        disabled (Iterable[str]): Names of handlers to skip.
    """

    def __init__(self, registry: HandlerRegistry, disabled: Iterable[str] = ()) -> None:
        self.registry: HandlerRegistry = registry
        self.disabled: frozenset[str] = frozenset(disabled)
        unknown: frozenset[str] = self.disabled - set(registry.names())
        if unknown:
            logger.warning("Disabled handler(s) not registered: %s", ", ".join(sorted(unknown)))

    def resolve(self, statement: Statement) -> tuple[HandlerDescriptor, ...]:
        """Return every matching descriptor, in registration order.

        A predicate that raises is logged and treated as not matching.

        Args:
            statement (Statement): The statement to resolve.

        Returns:
            tuple[HandlerDescriptor, ...]: Matching descriptors (possibly empty).
        """
        matched: list[HandlerDescriptor] = []
        for descriptor in self.registry.descriptors():
            if descriptor.name in self.disabled:
                continue
            try:
                applies: bool = descriptor.matches(statement.tokens)
            except Exception as exc:
                logger.error(
                    "Handler '%s' failed to test line %d: %s: %s",
                    descriptor.name,
                    statement.line,
                    type(exc).__name__,
                    exc,
                )
                continue
            if applies:
                matched.append(descriptor)
        logger.trace(
            "Line %d resolved to [%s]", statement.line, ", ".join(d.name for d in matched)
        )
        return tuple(matched)
