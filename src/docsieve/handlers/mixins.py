# topmark:header:start
#
#   project      : DocSieve
#   file         : mixins.py
#   file_relpath : src/docsieve/handlers/mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for ``include``, ``prepend`` and ``extend``.

``include`` and ``prepend`` mix into the current scope; ``extend`` always
mixes into the class scope. Mixins are recorded by name as written; only
constant paths can be documented.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from docsieve.config.logging import get_logger
from docsieve.core.enums import Scope
from docsieve.core.errors import UndocumentableError
from docsieve.handlers.base import Handler, parse_const_path, split_arguments
from docsieve.handlers.registry import register_handler
from docsieve.lexer.tokens import TokenKind, render_tokens

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.config.logging import DocsieveLogger
    from docsieve.lexer.tokens import Token

logger: DocsieveLogger = get_logger(__name__)

_MIXIN_KEYWORDS: Final[frozenset[str]] = frozenset({"include", "prepend", "extend"})


@register_handler("mixin")
class MixinHandler(Handler):
    """Record modules mixed into the current namespace."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        first: Token = tokens[0]
        return (
            first.kind is TokenKind.IDENTIFIER and first.text in _MIXIN_KEYWORDS and len(tokens) > 1
        )

    def process(self) -> None:
        keyword: str = self.tokens[0].text
        scope: Scope = Scope.CLASS if keyword == "extend" else self.context.scope

        names: list[str] = []
        for argument in split_arguments(self.tokens[1:]):
            path, end = parse_const_path(argument, 0)
            if end != len(argument):
                raise UndocumentableError(f"dynamic mixin '{render_tokens(argument)}'")
            names.append(path)

        mixins: list[str] = self.context.namespace.mixins[scope]
        for name in names:
            if name not in mixins:
                mixins.append(name)
        logger.debug(
            "%s %s into %r (%s)", keyword, ", ".join(names), self.context.namespace, scope.value
        )
