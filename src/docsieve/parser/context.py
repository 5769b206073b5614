# topmark:header:start
#
#   project      : DocSieve
#   file         : context.py
#   file_relpath : src/docsieve/parser/context.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Traversal context: the mutable "where am I" state of a parse run.

One `TraversalContext` lives for exactly one parse run and is shared by every
handler the parser executes. Handlers read it to know where a definition
belongs and write it to change what later statements see: a bare ``private``
switches the visibility for the following methods, a ``class`` statement
enters a new namespace for its body.

The context provides the slots; the push/pop discipline belongs to the
handlers, which use `TraversalContext.scoped` to enter a nested construct
and restore the previous state on the way out.

Sections:
    ContextSnapshot:
        Immutable copy of the four fields, for comparisons and results.
    TraversalContext:
        The mutable context itself.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

from docsieve.config.logging import get_logger
from docsieve.core.enums import Scope, Visibility

if TYPE_CHECKING:
    from collections.abc import Iterator

    from docsieve.config.logging import DocsieveLogger
    from docsieve.objects.base import CodeObject, NamespaceObject

logger: DocsieveLogger = get_logger(__name__)

__all__: list[str] = [
    "ContextSnapshot",
    "TraversalContext",
]


@dataclass(frozen=True)
class ContextSnapshot:
    """Immutable copy of a `TraversalContext` at a point in time."""

    namespace: NamespaceObject
    owner: CodeObject
    visibility: Visibility
    scope: Scope


@dataclass
class TraversalContext:
    """Mutable traversal state shared by all handlers of a parse run.

    Attributes:
        namespace (NamespaceObject): Namespace new definitions are placed in.
        owner (CodeObject): Object that owns the statements being processed
            (usually the namespace itself).
        visibility (Visibility): Visibility given to newly defined methods.
        scope (Scope): Whether new methods are instance or class methods.
    """

    namespace: NamespaceObject
    owner: CodeObject
    visibility: Visibility = Visibility.PUBLIC
    scope: Scope = Scope.INSTANCE

    @classmethod
    def at_root(cls, root: NamespaceObject) -> TraversalContext:
        """Return a context positioned at ``root`` with default visibility and scope."""
        return cls(namespace=root, owner=root)

    def reset(self, root: NamespaceObject) -> None:
        """Restore the initial state: ``root`` namespace and owner, public, instance."""
        self.namespace = root
        self.owner = root
        self.visibility = Visibility.PUBLIC
        self.scope = Scope.INSTANCE

    def snapshot(self) -> ContextSnapshot:
        """Return an immutable copy of the current state."""
        return ContextSnapshot(
            namespace=self.namespace,
            owner=self.owner,
            visibility=self.visibility,
            scope=self.scope,
        )

    def restore(self, snapshot: ContextSnapshot) -> None:
        """Rebind every field to the values held by ``snapshot``."""
        self.namespace = snapshot.namespace
        self.owner = snapshot.owner
        self.visibility = snapshot.visibility
        self.scope = snapshot.scope

    @contextmanager
    def scoped(
        self,
        *,
        namespace: NamespaceObject | None = None,
        owner: CodeObject | None = None,
        visibility: Visibility | None = None,
        scope: Scope | None = None,
    ) -> Iterator[TraversalContext]:
        """Temporarily rebind fields for the duration of a nested construct.

        When ``namespace`` is given and ``owner`` is not, the owner follows the
        namespace. The previous state is restored on exit, also when the body
        raises.

        Yields:
            TraversalContext: This context, with the new values applied.
        """
        saved: ContextSnapshot = self.snapshot()
        if namespace is not None:
            self.namespace = namespace
            self.owner = namespace
        if owner is not None:
            self.owner = owner
        if visibility is not None:
            self.visibility = visibility
        if scope is not None:
            self.scope = scope
        logger.trace("Entering %r (%s, %s)", self.owner, self.visibility.value, self.scope.value)
        try:
            yield self
        finally:
            self.restore(saved)
            logger.trace("Leaving to %r", self.owner)
