# topmark:header:start
#
#   project      : DocSieve
#   file         : methods.py
#   file_relpath : src/docsieve/handlers/methods.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for ``def`` statements.

Supported shapes:
    * ``def name``, ``def name(a, b = 1, *rest, key: 2, &block)`` and the
      parenthesis-less ``def name a, b``;
    * class methods: ``def self.name`` and any ``def`` inside
      ``class << self``;
    * setter, predicate, bang and operator names (``name=``, ``name?``,
      ``[]=``, ``<=>``, ``-@``);
    * endless definitions (``def name(a) = a * 2``);
    * definitions passed to a leading call: ``private def helper`` sets the
      visibility of ``helper`` only, ``memoize def value`` keeps the current
      one.

``def other.name`` on a receiver other than ``self`` is undocumentable.
Method bodies are not processed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from docsieve.config.logging import get_logger
from docsieve.core.enums import Scope, Visibility
from docsieve.core.errors import UndocumentableError
from docsieve.handlers.base import Handler, split_arguments
from docsieve.handlers.registry import register_handler
from docsieve.lexer.statements import bracket_end, definition_start, method_name_end
from docsieve.lexer.tokens import render_tokens
from docsieve.objects.base import MethodObject

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.config.logging import DocsieveLogger
    from docsieve.lexer.tokens import Token

logger: DocsieveLogger = get_logger(__name__)

# Leading calls that change the visibility of the method defined after them.
_MODIFIER_VISIBILITY: Final[dict[str, Visibility]] = {
    "public": Visibility.PUBLIC,
    "protected": Visibility.PROTECTED,
    "private": Visibility.PRIVATE,
    "public_class_method": Visibility.PUBLIC,
    "private_class_method": Visibility.PRIVATE,
}


def read_method_name(tokens: Sequence[Token], start: int) -> tuple[str, int]:
    """Read a method name starting at ``start``.

    Args:
        tokens (Sequence[Token]): Statement tokens.
        start (int): Index of the first name token.

    Returns:
        tuple[str, int]: The name and the index just past it.

    Raises:
        UndocumentableError: If no name is found.
    """
    if start >= len(tokens) or tokens[start].is_operator("("):
        raise UndocumentableError("anonymous method definition")
    end: int = method_name_end(tokens, start)
    if end == start:
        raise UndocumentableError(f"unsupported method name '{tokens[start].text}'")
    return "".join(tok.text for tok in tokens[start:end]), end


def parse_parameters(tokens: Sequence[Token]) -> list[tuple[str, str | None]]:
    """Turn parameter tokens into ``(name, default)`` pairs.

    Keyword parameters keep their trailing colon (``"key:"``); splat and
    block markers stay part of the name (``"*rest"``, ``"&block"``).
    """
    parameters: list[tuple[str, str | None]] = []
    for argument in split_arguments(tokens):
        default: str | None = None
        name_tokens: list[Token] = argument
        for i, tok in enumerate(argument):
            if tok.is_operator("="):
                name_tokens, default = argument[:i], render_tokens(argument[i + 1 :])
                break
            if tok.is_operator(":") and i > 0:
                name_tokens = argument[: i + 1]
                default = render_tokens(argument[i + 1 :]) or None
                break
        parameters.append(("".join(tok.text for tok in name_tokens), default))
    return parameters


def _parameter_tokens(tokens: Sequence[Token], start: int) -> tuple[Token, ...]:
    """Return the tokens of the parameter list that starts at ``start``."""
    if start >= len(tokens):
        return ()
    if not tokens[start].is_operator("("):
        # ``def name a, b`` or endless ``def name = expr``
        if tokens[start].is_operator("="):
            return ()
        return tuple(tokens[start:])
    return tuple(tokens[start : bracket_end(tokens, start)])


@register_handler("method")
class MethodHandler(Handler):
    """Document instance and class method definitions."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        return tokens[definition_start(tokens)].is_keyword("def")

    def process(self) -> None:
        tokens: tuple[Token, ...] = self.tokens
        scope: Scope = self.context.scope
        visibility: Visibility = self.context.visibility
        index: int = definition_start(tokens) + 1
        modifier: Visibility | None = (
            _MODIFIER_VISIBILITY.get(tokens[0].text) if index > 1 else None
        )

        if index + 2 < len(tokens) and tokens[index + 1].is_operator("."):
            receiver: Token = tokens[index]
            if not receiver.is_keyword("self"):
                raise UndocumentableError(f"method on receiver '{receiver.text}'")
            if scope is Scope.INSTANCE:
                # ``private`` does not apply to ``def self.name``
                visibility = Visibility.PUBLIC
            scope = Scope.CLASS
            index += 2

        name, index = read_method_name(tokens, index)
        obj: MethodObject = self.register(MethodObject(self.context.namespace, name, scope))
        obj.visibility = modifier or visibility
        obj.signature = self.statement.text
        obj.parameters = parse_parameters(_parameter_tokens(tokens, index))
        logger.debug(
            "method %s (%s, %d parameter(s))", obj.path, obj.visibility.value, len(obj.parameters)
        )
