# topmark:header:start
#
#   project      : DocSieve
#   file         : errors.py
#   file_relpath : src/docsieve/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception taxonomy for DocSieve.

Three conditions matter to a parse run:

* `InvalidInputError`: the parser was handed something it cannot turn into
  statements. Raised before any statement is processed and propagated to the
  caller.
* `UndocumentableError`: raised by a handler when a construct is recognized but
  cannot be documented (for example a dynamically computed name). The parser
  records it as a warning and moves on.
* Any other exception escaping a handler is an unexpected fault. The parser
  records it as an error (with a bounded trace) and moves on.

`ConfigError` covers malformed configuration files and values.
"""

from __future__ import annotations


class DocsieveError(Exception):
    """Base class for all DocSieve errors."""


class InvalidInputError(DocsieveError, TypeError):
    """The parser input is neither a path, a token list, a statement list, nor readable."""


class UndocumentableError(DocsieveError):
    """A recognized construct cannot (or should not) be documented."""


class ConfigError(DocsieveError):
    """Configuration could not be read or holds invalid values."""
