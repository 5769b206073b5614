# topmark:header:start
#
#   project      : DocSieve
#   file         : constants.py
#   file_relpath : src/docsieve/handlers/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for constant assignments (``NAME = value``, ``Outer::NAME = value``)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docsieve.core.errors import UndocumentableError
from docsieve.handlers.base import Handler, parse_const_path
from docsieve.handlers.registry import register_handler
from docsieve.lexer.tokens import TokenKind, render_tokens
from docsieve.objects.base import ConstantObject

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.lexer.tokens import Token


def _assignment_index(tokens: Sequence[Token]) -> int | None:
    """Return the index of the ``=`` following a leading constant path, if any."""
    index: int = 0
    if tokens[index].is_operator("::"):
        index += 1
    while index < len(tokens) and tokens[index].kind is TokenKind.CONSTANT:
        index += 1
        if index < len(tokens) and tokens[index].is_operator("::"):
            index += 1
            continue
        break
    if index == 0 or index >= len(tokens) or not tokens[index].is_operator("="):
        return None
    if tokens[index - 1].kind is not TokenKind.CONSTANT:
        return None
    return index


@register_handler("constant")
class ConstantHandler(Handler):
    """Document constant assignments."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        return _assignment_index(tokens) is not None

    def process(self) -> None:
        path, index = parse_const_path(self.tokens, 0)
        value: str = render_tokens(self.tokens[index + 1 :])
        if not value:
            raise UndocumentableError(f"constant '{path}' without a value")
        namespace, name = self.namespace_for(path)
        obj: ConstantObject = self.register(ConstantObject(namespace, name))
        obj.value = value
