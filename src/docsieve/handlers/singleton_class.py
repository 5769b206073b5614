# topmark:header:start
#
#   project      : DocSieve
#   file         : singleton_class.py
#   file_relpath : src/docsieve/handlers/singleton_class.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for ``class << self`` blocks.

Methods defined inside the block are class methods of the enclosing
namespace. Opening the singleton class of any other object cannot be
documented statically.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from docsieve.core.enums import Scope, Visibility
from docsieve.core.errors import UndocumentableError
from docsieve.handlers.base import Handler
from docsieve.handlers.registry import register_handler
from docsieve.lexer.tokens import render_tokens

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.lexer.tokens import Token


@register_handler("singleton_class")
class SingletonClassHandler(Handler):
    """Document methods of ``class << self`` blocks as class methods."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        return len(tokens) > 1 and tokens[0].is_keyword("class") and tokens[1].is_operator("<<")

    def process(self) -> None:
        target: tuple[Token, ...] = self.tokens[2:]
        if len(target) != 1 or not target[0].is_keyword("self"):
            raise UndocumentableError(f"singleton class of '{render_tokens(target)}'")
        self.parse_block(scope=Scope.CLASS, visibility=Visibility.PUBLIC)
