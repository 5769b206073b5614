# topmark:header:start
#
#   project      : DocSieve
#   file         : base.py
#   file_relpath : src/docsieve/objects/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Documentation objects populated by the handlers.

Every object has a name, an enclosing namespace, a docstring and the list of
source locations where it was defined. Paths follow Ruby conventions:
``A::B`` for namespaces and constants, ``A::B#m`` for instance methods and
``A::B.m`` for class methods. The root namespace has the empty path.
"""

from __future__ import annotations

from typing import Any, ClassVar

from docsieve.core.enums import Scope, Visibility


class CodeObject:
    """Base class for all documentation objects.

    Attributes:
        name (str): Unqualified name.
        namespace (NamespaceObject | None): Enclosing namespace (``None`` only for the root).
        docstring (str): Documentation text taken from the comments above the definition.
        files (list[tuple[str, int]]): ``(source label, line)`` pairs where the object was seen.
        visibility (Visibility): Visibility at the point of definition.
    """

    kind: ClassVar[str] = "object"

    def __init__(self, namespace: NamespaceObject | None, name: str) -> None:
        self.name: str = name
        self.namespace: NamespaceObject | None = namespace
        self.docstring: str = ""
        self.files: list[tuple[str, int]] = []
        self.visibility: Visibility = Visibility.PUBLIC

    @property
    def sep(self) -> str:
        """Separator placed between the namespace path and this object's name."""
        return "::"

    @property
    def path(self) -> str:
        """Fully qualified path of the object."""
        if self.namespace is None:
            return ""
        if self.namespace.namespace is None:
            return self.name
        return f"{self.namespace.path}{self.sep}{self.name}"

    def add_file(self, label: str, line: int) -> None:
        """Record a definition site (duplicates are ignored)."""
        if (label, line) not in self.files:
            self.files.append((label, line))

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping describing this object."""
        return {
            "kind": self.kind,
            "path": self.path,
            "docstring": self.docstring,
            "visibility": self.visibility.value,
            "files": [{"label": label, "line": line} for label, line in self.files],
        }

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.path or '#root'}>"


class NamespaceObject(CodeObject):
    """An object that can contain other objects (modules, classes and the root)."""

    kind: ClassVar[str] = "namespace"

    def __init__(self, namespace: NamespaceObject | None, name: str) -> None:
        super().__init__(namespace, name)
        self.children: list[CodeObject] = []
        self.mixins: dict[Scope, list[str]] = {Scope.INSTANCE: [], Scope.CLASS: []}
        # attribute name -> {"read": reader method or None, "write": writer method or None}
        self.attributes: dict[Scope, dict[str, dict[str, MethodObject | None]]] = {
            Scope.INSTANCE: {},
            Scope.CLASS: {},
        }

    def add_child(self, obj: CodeObject) -> None:
        """Attach ``obj`` as a child unless it is already attached."""
        if obj not in self.children:
            self.children.append(obj)

    def child(self, name: str, kind: type[CodeObject] | None = None) -> CodeObject | None:
        """Return the first direct child called ``name`` (optionally of a given kind)."""
        for obj in self.children:
            if obj.name == name and (kind is None or isinstance(obj, kind)):
                return obj
        return None

    def methods(self, scope: Scope | None = None) -> list[MethodObject]:
        """Return the methods defined directly in this namespace."""
        return [
            obj
            for obj in self.children
            if isinstance(obj, MethodObject) and (scope is None or obj.scope is scope)
        ]

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = super().to_dict()
        data["mixins"] = {scope.value: list(names) for scope, names in self.mixins.items()}
        data["children"] = [obj.path for obj in self.children]
        return data


class RootObject(NamespaceObject):
    """The unnamed top-level namespace."""

    kind: ClassVar[str] = "root"

    def __init__(self) -> None:
        super().__init__(None, "root")


class ModuleObject(NamespaceObject):
    """A ``module`` definition."""

    kind: ClassVar[str] = "module"


class ClassObject(NamespaceObject):
    """A ``class`` definition.

    Attributes:
        superclass (str | None): Superclass as written in the source, if any.
    """

    kind: ClassVar[str] = "class"

    def __init__(self, namespace: NamespaceObject | None, name: str) -> None:
        super().__init__(namespace, name)
        self.superclass: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = super().to_dict()
        data["superclass"] = self.superclass
        return data


class MethodObject(CodeObject):
    """A method definition.

    Attributes:
        scope (Scope): Instance or class method.
        signature (str): The ``def`` line as written.
        parameters (list[tuple[str, str | None]]): ``(name, default)`` pairs.
    """

    kind: ClassVar[str] = "method"

    def __init__(
        self,
        namespace: NamespaceObject | None,
        name: str,
        scope: Scope = Scope.INSTANCE,
    ) -> None:
        super().__init__(namespace, name)
        self.scope: Scope = scope
        self.signature: str = ""
        self.parameters: list[tuple[str, str | None]] = []

    @property
    def sep(self) -> str:
        return self.scope.separator

    @property
    def path(self) -> str:
        if self.namespace is None:
            return f"{self.sep}{self.name}"
        return f"{self.namespace.path}{self.sep}{self.name}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = super().to_dict()
        data["scope"] = self.scope.value
        data["signature"] = self.signature
        data["parameters"] = [[name, default] for name, default in self.parameters]
        return data


class ConstantObject(CodeObject):
    """A constant assignment.

    Attributes:
        value (str): Source rendering of the assigned expression.
    """

    kind: ClassVar[str] = "constant"

    def __init__(self, namespace: NamespaceObject | None, name: str, value: str = "") -> None:
        super().__init__(namespace, name)
        self.value: str = value

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = super().to_dict()
        data["value"] = self.value
        return data
