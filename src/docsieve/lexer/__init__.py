# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/lexer/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Statement sources: a reference tokenizer and statement grouper.

The parser core accepts raw text, a `TokenList` or a `StatementList`; this
package turns the first two into the third.
"""

from __future__ import annotations

from docsieve.lexer.statements import Statement, StatementList, group_statements
from docsieve.lexer.tokens import Token, TokenKind, TokenList, render_tokens, tokenize

__all__ = [
    "Statement",
    "StatementList",
    "Token",
    "TokenKind",
    "TokenList",
    "group_statements",
    "render_tokens",
    "tokenize",
]
