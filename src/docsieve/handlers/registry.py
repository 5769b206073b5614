# topmark:header:start
#
#   project      : DocSieve
#   file         : registry.py
#   file_relpath : src/docsieve/handlers/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Registry of statement handlers.

A handler is described by a `HandlerDescriptor`: a name, a pure predicate over
a statement's tokens and a factory producing an executable handler bound to a
parser and a statement. Descriptors live in an append-only, ordered
`HandlerRegistry`; the order of registration is the order in which matching
handlers run for a statement.

Built-in handlers register themselves in the process-wide registry with the
`register_handler` class decorator when their module is imported (see
`docsieve.handlers.register_all_handlers`). Plugins can do the same, or
register a plain ``(predicate, factory)`` pair with `HandlerRegistry.register`.
Tests usually build a private `HandlerRegistry` and hand it to the parser.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, TypeVar

from docsieve.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from docsieve.config.logging import DocsieveLogger
    from docsieve.handlers.base import Handler
    from docsieve.lexer.statements import Statement
    from docsieve.lexer.tokens import Token
    from docsieve.parser.source_parser import SourceParser

logger: DocsieveLogger = get_logger(__name__)

H = TypeVar("H", bound="Handler")


class Processable(Protocol):
    """Anything a handler factory may return: an object with a ``process()`` method."""

    def process(self) -> None:
        """Extract documentation from the bound statement."""
        ...


@dataclass(frozen=True)
class HandlerDescriptor:
    """Stable description of a registered handler.

    Attributes:
        name (str): Unique handler name, used in diagnostics and configuration.
        predicate (Callable[[Sequence[Token]], bool]): Pure applicability test.
        factory (Callable[[SourceParser, Statement], Processable]): Builds the
            executable handler for one statement.
        description (str): One-line description for listings.
    """

    name: str
    predicate: Callable[[Sequence[Token]], bool]
    factory: Callable[[SourceParser, Statement], Processable]
    description: str = ""

    def matches(self, tokens: Sequence[Token]) -> bool:
        """Return True if this handler applies to a statement with ``tokens``."""
        return bool(self.predicate(tokens))

    def create(self, parser: SourceParser, statement: Statement) -> Processable:
        """Build the handler instance bound to ``parser`` and ``statement``."""
        return self.factory(parser, statement)


class HandlerRegistry:
    """Append-only, ordered collection of handler descriptors."""

    def __init__(self) -> None:
        self._descriptors: list[HandlerDescriptor] = []

    def register(
        self,
        name: str,
        predicate: Callable[[Sequence[Token]], bool],
        factory: Callable[[SourceParser, Statement], Processable],
        *,
        description: str = "",
    ) -> HandlerDescriptor:
        """Register a handler as a ``(predicate, factory)`` pair.

        Args:
            name (str): Unique handler name.
            predicate (Callable[[Sequence[Token]], bool]): Applicability test.
            factory (Callable[[SourceParser, Statement], Processable]): Handler factory.
            description (str): Optional one-line description.

        Returns:
            HandlerDescriptor: The new descriptor.

        Raises:
            ValueError: If a handler with the same name is already registered.
        """
        if name in self:
            raise ValueError(f"Handler '{name}' is already registered.")
        descriptor = HandlerDescriptor(
            name=name,
            predicate=predicate,
            factory=factory,
            description=description,
        )
        self._descriptors.append(descriptor)
        logger.debug("Registered handler %s (%d total)", name, len(self._descriptors))
        return descriptor

    def register_class(
        self,
        handler_cls: type[Handler],
        name: str | None = None,
    ) -> HandlerDescriptor:
        """Register a `Handler` subclass (predicate ``handles``, factory the class itself).

        Args:
            handler_cls (type[Handler]): The handler class.
            name (str | None): Handler name; defaults to the class' ``name`` attribute
                or, failing that, the class name.

        Returns:
            HandlerDescriptor: The new descriptor.
        """
        resolved: str = name or handler_cls.name or handler_cls.__name__
        doc: str = (handler_cls.__doc__ or "").strip()
        descriptor: HandlerDescriptor = self.register(
            resolved,
            handler_cls.handles,
            handler_cls,
            description=doc.splitlines()[0] if doc else "",
        )
        handler_cls.name = resolved
        return descriptor

    def descriptors(self) -> tuple[HandlerDescriptor, ...]:
        """Return every registered descriptor in registration order."""
        return tuple(self._descriptors)

    def names(self) -> tuple[str, ...]:
        """Return the registered handler names in registration order."""
        return tuple(d.name for d in self._descriptors)

    def get(self, name: str) -> HandlerDescriptor | None:
        """Return the descriptor called ``name``, if any."""
        for descriptor in self._descriptors:
            if descriptor.name == name:
                return descriptor
        return None

    def __contains__(self, name: object) -> bool:
        return any(d.name == name for d in self._descriptors)

    def __iter__(self) -> Iterator[HandlerDescriptor]:
        return iter(tuple(self._descriptors))

    def __len__(self) -> int:
        return len(self._descriptors)


_registry: HandlerRegistry = HandlerRegistry()


def get_handler_registry() -> HandlerRegistry:
    """Return the process-wide handler registry."""
    return _registry


def register_handler(name: str) -> Callable[[type[H]], type[H]]:
    """Class decorator registering a `Handler` subclass in the process-wide registry.

    Args:
        name (str): Unique handler name.

    Returns:
        Callable[[type[H]], type[H]]: The decorator.

    Raises:
        ValueError: If a handler with the same name is already registered.
    """

    def decorator(cls: type[H]) -> type[H]:
        logger.debug("Registering handler %s as '%s'", cls.__name__, name)
        _registry.register_class(cls, name=name)
        return cls

    return decorator
