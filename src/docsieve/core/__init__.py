# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core DocSieve primitives shared by the parser, the handlers and the CLI."""

from __future__ import annotations
