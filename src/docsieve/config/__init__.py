# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration for DocSieve: the `Config` model, TOML loading and logging setup."""

from __future__ import annotations

from docsieve.config.model import Config, MutableConfig

__all__ = [
    "Config",
    "MutableConfig",
]
