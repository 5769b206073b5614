# topmark:header:start
#
#   project      : DocSieve
#   file         : __main__.py
#   file_relpath : src/docsieve/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running DocSieve via ``python -m docsieve``.

Equivalent to running the ``docsieve`` console script; delegates to
`docsieve.cli.main.cli`.

Examples:
    Parse a source tree::

        python -m docsieve parse lib/
"""

from __future__ import annotations

from docsieve.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()
