# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocSieve package.

DocSieve extracts documentation from Ruby-flavoured source files. It groups
source into statements, dispatches every statement to the handlers that
recognize it, and collects the documented objects in a store. Constructs a
handler cannot document and unexpected handler faults are reported as
diagnostics without stopping the run.

Typical usage:
    ```python
    import docsieve

    parser = docsieve.parse_string("class Foo; def bar; end; end")
    print(parser.store.paths())  # ('Foo', 'Foo#bar')
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from docsieve.parser.source_parser import SourceParser


def parse(content: object, **kwargs: Any) -> SourceParser:
    """Parse ``content`` with a new `SourceParser` and return the finished parser.

    Args:
        content (object): A path, a `TokenList`, a `StatementList` or a readable object.
        **kwargs (Any): Forwarded to `SourceParser` (``store``, ``registry``, ``config``).

    Returns:
        SourceParser: The parser after the run.
    """
    from docsieve.parser.source_parser import SourceParser

    return SourceParser(**kwargs).parse(content)


def parse_string(text: str, *, file: str | None = None, **kwargs: Any) -> SourceParser:
    """Parse in-memory source ``text`` and return the finished parser.

    Args:
        text (str): Source text.
        file (str | None): Label used in diagnostics (default ``"<STDIN>"``).
        **kwargs (Any): Forwarded to `SourceParser`.

    Returns:
        SourceParser: The parser after the run.
    """
    from docsieve.parser.source_parser import SourceParser

    return SourceParser(**kwargs).parse_string(text, file=file)
