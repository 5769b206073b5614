# topmark:header:start
#
#   project      : DocSieve
#   file         : enums.py
#   file_relpath : src/docsieve/core/enums.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Enumerations shared by the traversal context and the documentation objects."""

from __future__ import annotations

from enum import Enum


class Visibility(Enum):
    """Visibility applied to methods defined by subsequent statements."""

    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"

    @classmethod
    def from_keyword(cls, keyword: str) -> Visibility:
        """Return the visibility named by a ``public``/``protected``/``private`` keyword.

        Raises:
            ValueError: If ``keyword`` names no visibility.
        """
        return cls(keyword)


class Scope(Enum):
    """Whether definitions attach to instances or to the namespace itself."""

    INSTANCE = "instance"
    CLASS = "class"

    @property
    def separator(self) -> str:
        """Path separator used for methods defined in this scope."""
        return "#" if self is Scope.INSTANCE else "."
