# topmark:header:start
#
#   project      : DocSieve
#   file         : classes.py
#   file_relpath : src/docsieve/handlers/classes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for ``class Name [< Superclass]`` definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docsieve.config.logging import get_logger
from docsieve.core.enums import Scope, Visibility
from docsieve.handlers.base import Handler, parse_const_path
from docsieve.handlers.registry import register_handler
from docsieve.lexer.tokens import render_tokens
from docsieve.objects.base import ClassObject

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.config.logging import DocsieveLogger
    from docsieve.lexer.tokens import Token

logger: DocsieveLogger = get_logger(__name__)


@register_handler("class")
class ClassHandler(Handler):
    """Document class definitions and reopened classes."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        # ``class << self`` belongs to the singleton class handler
        return (
            len(tokens) > 1 and tokens[0].is_keyword("class") and not tokens[1].is_operator("<<")
        )

    def process(self) -> None:
        tokens: tuple[Token, ...] = self.tokens
        path, index = parse_const_path(tokens, 1)
        namespace, name = self.namespace_for(path)
        obj: ClassObject = self.register(ClassObject(namespace, name))

        if index < len(tokens) and tokens[index].is_operator("<"):
            superclass: str = render_tokens(tokens[index + 1 :])
            if superclass:
                obj.superclass = superclass
        logger.debug("class %s (superclass: %s)", obj.path, obj.superclass)

        self.parse_block(namespace=obj, visibility=Visibility.PUBLIC, scope=Scope.INSTANCE)
