# topmark:header:start
#
#   project      : DocSieve
#   file         : store.py
#   file_relpath : src/docsieve/objects/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Path-indexed store of documentation objects.

A `DocumentStore` owns the root namespace and indexes every registered
object by path. Registering an object whose path is already taken returns
the existing object (so reopened classes and redefined methods merge), as
long as both are of the same kind.

Typical usage:
    ```python
    store = DocumentStore()
    cls = store.register(ClassObject(store.root, "Foo"))
    assert store.at("Foo") is cls
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from docsieve.config.logging import get_logger
from docsieve.objects.base import CodeObject, NamespaceObject, RootObject

if TYPE_CHECKING:
    from collections.abc import Iterator

    from docsieve.config.logging import DocsieveLogger

logger: DocsieveLogger = get_logger(__name__)

T = TypeVar("T", bound=CodeObject)


class DocumentStore:
    """Documentation object graph rooted at a `RootObject`."""

    def __init__(self) -> None:
        self.root: RootObject = RootObject()
        self._index: dict[str, CodeObject] = {}

    def register(self, obj: T) -> T:
        """Register ``obj`` under its path and attach it to its namespace.

        Args:
            obj (T): A freshly built object.

        Returns:
            T: ``obj``, or the already registered object with the same path and kind.

        Raises:
            ValueError: If the path is taken by an object of a different kind.
        """
        path: str = obj.path
        existing: CodeObject | None = self._index.get(path)
        if existing is not None:
            if type(existing) is not type(obj):
                raise ValueError(
                    f"'{path}' is already defined as a {existing.kind}, not a {obj.kind}"
                )
            logger.trace("Reusing %r", existing)
            return existing  # type: ignore[return-value]
        self._index[path] = obj
        if obj.namespace is not None:
            obj.namespace.add_child(obj)
        logger.debug("Registered %r", obj)
        return obj

    def at(self, path: str) -> CodeObject | None:
        """Return the object registered at ``path`` (``""`` is the root)."""
        if path == "":
            return self.root
        return self._index.get(path)

    def resolve(self, namespace: NamespaceObject, name: str) -> CodeObject | None:
        """Look up ``name`` lexically, starting in ``namespace`` and walking outwards.

        A leading ``::`` anchors the lookup at the root.

        Args:
            namespace (NamespaceObject): Namespace the reference appears in.
            name (str): Constant path as written, e.g. ``"Bar"`` or ``"Foo::Bar"``.

        Returns:
            CodeObject | None: The first match, or ``None``.
        """
        if name.startswith("::"):
            return self.at(name[2:])
        current: NamespaceObject | None = namespace
        while current is not None:
            prefix: str = current.path
            found: CodeObject | None = self.at(f"{prefix}::{name}" if prefix else name)
            if found is not None:
                return found
            current = current.namespace
        return None

    def all(self, kind: type[T] | None = None) -> list[CodeObject]:
        """Return registered objects in registration order, optionally filtered by kind."""
        if kind is None:
            return list(self._index.values())
        return [obj for obj in self._index.values() if isinstance(obj, kind)]

    def paths(self) -> tuple[str, ...]:
        """Return all registered paths in registration order."""
        return tuple(self._index)

    def clear(self) -> None:
        """Drop every object and start over with a fresh root."""
        self.root = RootObject()
        self._index.clear()

    def __contains__(self, path: object) -> bool:
        return path in self._index

    def __iter__(self) -> Iterator[CodeObject]:
        return iter(list(self._index.values()))

    def __len__(self) -> int:
        return len(self._index)


_default_store: DocumentStore = DocumentStore()


def get_default_store() -> DocumentStore:
    """Return the process-wide store used by parsers that are not given one."""
    return _default_store
