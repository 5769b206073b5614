# topmark:header:start
#
#   project      : DocSieve
#   file         : visibility.py
#   file_relpath : src/docsieve/handlers/visibility.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for visibility statements.

* A bare ``public``, ``protected`` or ``private`` changes the visibility of
  the methods defined by the following statements of the same body.
* With symbol or string arguments (``private :a, "b"``) the named,
  already documented methods change visibility and the context is left
  alone.
* ``private_class_method`` and ``public_class_method`` do the same for
  class methods.
* ``private def name`` is left to the method handler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from docsieve.config.logging import get_logger
from docsieve.core.enums import Scope, Visibility
from docsieve.core.errors import UndocumentableError
from docsieve.handlers.base import Handler, name_argument, split_arguments
from docsieve.handlers.registry import register_handler
from docsieve.lexer.statements import definition_start
from docsieve.lexer.tokens import TokenKind

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.config.logging import DocsieveLogger
    from docsieve.lexer.tokens import Token
    from docsieve.objects.base import MethodObject

logger: DocsieveLogger = get_logger(__name__)

_CLASS_METHOD_KEYWORDS: Final[dict[str, Visibility]] = {
    "private_class_method": Visibility.PRIVATE,
    "public_class_method": Visibility.PUBLIC,
}
_KEYWORDS: Final[frozenset[str]] = frozenset(
    {v.value for v in Visibility} | set(_CLASS_METHOD_KEYWORDS)
)


@register_handler("visibility")
class VisibilityHandler(Handler):
    """Track ``public``/``protected``/``private`` and apply them to methods."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        first: Token = tokens[0]
        if first.kind is not TokenKind.IDENTIFIER or first.text not in _KEYWORDS:
            return False
        # ``private def name`` is documented by the method handler
        return not tokens[definition_start(tokens)].is_keyword("def")

    def process(self) -> None:
        keyword: str = self.tokens[0].text
        arguments: list[list[Token]] = split_arguments(self.tokens[1:])

        if keyword in _CLASS_METHOD_KEYWORDS:
            if not arguments:
                raise UndocumentableError(f"'{keyword}' without method names")
            self._apply(arguments, _CLASS_METHOD_KEYWORDS[keyword], Scope.CLASS)
            return

        visibility: Visibility = Visibility.from_keyword(keyword)
        if not arguments:
            logger.debug("Visibility of %r is now %s", self.context.owner, visibility.value)
            self.context.visibility = visibility
            return
        self._apply(arguments, visibility, self.context.scope)

    def _apply(self, arguments: list[list[Token]], visibility: Visibility, scope: Scope) -> None:
        # Resolve every name before touching any method.
        names: list[str] = [name_argument(argument) for argument in arguments]
        methods: dict[str, MethodObject] = {
            meth.name: meth for meth in self.context.namespace.methods(scope)
        }
        missing: list[str] = [name for name in names if name not in methods]
        for name in names:
            if name in methods:
                methods[name].visibility = visibility
        if missing:
            raise UndocumentableError(
                f"{visibility.value} visibility for unknown method(s): {', '.join(missing)}"
            )
