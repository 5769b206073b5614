# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``docsieve`` command group."""
