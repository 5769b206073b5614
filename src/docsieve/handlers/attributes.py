# topmark:header:start
#
#   project      : DocSieve
#   file         : attributes.py
#   file_relpath : src/docsieve/handlers/attributes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for ``attr_reader``, ``attr_writer``, ``attr_accessor`` and ``attr``."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from docsieve.handlers.base import Handler, name_argument, split_arguments
from docsieve.handlers.registry import register_handler
from docsieve.lexer.tokens import TokenKind
from docsieve.objects.base import MethodObject

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.lexer.tokens import Token
    from docsieve.objects.base import NamespaceObject

# keyword -> (creates reader, creates writer)
_ACCESSORS: Final[dict[str, tuple[bool, bool]]] = {
    "attr": (True, False),
    "attr_reader": (True, False),
    "attr_writer": (False, True),
    "attr_accessor": (True, True),
}


@register_handler("attribute")
class AttributeHandler(Handler):
    """Document attribute readers and writers."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        first: Token = tokens[0]
        return first.kind is TokenKind.IDENTIFIER and first.text in _ACCESSORS and len(tokens) > 1

    def process(self) -> None:
        read, write = _ACCESSORS[self.tokens[0].text]
        names: list[str] = [name_argument(arg) for arg in split_arguments(self.tokens[1:])]
        namespace: NamespaceObject = self.context.namespace
        table: dict[str, dict[str, MethodObject | None]] = namespace.attributes[self.context.scope]

        for name in names:
            entry: dict[str, MethodObject | None] = table.setdefault(
                name, {"read": None, "write": None}
            )
            if read:
                entry["read"] = self._accessor(name, f"def {name}", [])
            if write:
                entry["write"] = self._accessor(
                    f"{name}=", f"def {name}=(value)", [("value", None)]
                )

    def _accessor(
        self,
        name: str,
        signature: str,
        parameters: list[tuple[str, str | None]],
    ) -> MethodObject:
        obj: MethodObject = self.register(
            MethodObject(self.context.namespace, name, self.context.scope)
        )
        obj.visibility = self.context.visibility
        obj.signature = signature
        obj.parameters = parameters
        return obj
