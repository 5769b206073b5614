# topmark:header:start
#
#   project      : DocSieve
#   file         : modules.py
#   file_relpath : src/docsieve/handlers/modules.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Handler for ``module Name`` definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from docsieve.core.enums import Scope, Visibility
from docsieve.handlers.base import Handler, parse_const_path
from docsieve.handlers.registry import register_handler
from docsieve.objects.base import ModuleObject

if TYPE_CHECKING:
    from collections.abc import Sequence

    from docsieve.lexer.tokens import Token


@register_handler("module")
class ModuleHandler(Handler):
    """Document module definitions and reopened modules."""

    @classmethod
    def handles(cls, tokens: Sequence[Token]) -> bool:
        return len(tokens) > 1 and tokens[0].is_keyword("module")

    def process(self) -> None:
        path, _ = parse_const_path(self.tokens, 1)
        namespace, name = self.namespace_for(path)
        obj: ModuleObject = self.register(ModuleObject(namespace, name))
        self.parse_block(namespace=obj, visibility=Visibility.PUBLIC, scope=Scope.INSTANCE)
