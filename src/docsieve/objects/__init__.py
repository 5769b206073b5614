# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/objects/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Documentation object graph populated by the handlers."""

from __future__ import annotations

from docsieve.objects.base import (
    ClassObject,
    CodeObject,
    ConstantObject,
    MethodObject,
    ModuleObject,
    NamespaceObject,
    RootObject,
)
from docsieve.objects.store import DocumentStore, get_default_store

__all__ = [
    "ClassObject",
    "CodeObject",
    "ConstantObject",
    "DocumentStore",
    "MethodObject",
    "ModuleObject",
    "NamespaceObject",
    "RootObject",
    "get_default_store",
]
