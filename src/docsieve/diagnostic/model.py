# topmark:header:start
#
#   project      : DocSieve
#   file         : model.py
#   file_relpath : src/docsieve/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and helpers for DocSieve.

This module defines the structured diagnostic records produced while parsing
a source: undocumentable constructs (warnings) and handler faults (errors).
Every record carries the source location and a rendering of the offending
statement so it can be reported without access to the original file.

Sections:
    * DiagnosticLevel: severity levels with associated terminal colors.
    * SourceLocation: source label and line number.
    * Diagnostic: immutable structured diagnostic payload.
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable per-run collection with helpers for
      adding and summarizing diagnostics.
    * FrozenDiagnosticLog: immutable snapshot container for results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, cast

from yachalk import chalk

from docsieve.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from docsieve.config.logging import DocsieveLogger


logger: DocsieveLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during parsing.

    Levels are ordered by importance: ERROR > WARNING > DEBUG.
    """

    DEBUG = "debug"
    WARNING = "warning"
    ERROR = "error"

    @property
    def color(self) -> Callable[[str], str]:
        """Return the `yachalk` color function associated with this severity level.

        Intended for human-readable output only; machine formats should not use colors.

        Returns:
            Callable[[str], str]: The `yachalk` color function associated with this severity level.
        """
        return cast(
            "Callable[[str], str]",
            {
                DiagnosticLevel.DEBUG: chalk.gray,
                DiagnosticLevel.WARNING: chalk.yellow,
                DiagnosticLevel.ERROR: chalk.red_bright,
            }[self],
        )


@dataclass(frozen=True)
class SourceLocation:
    """Where a diagnostic originated: a source label and a 1-based line number."""

    label: str
    line: int

    def __str__(self) -> str:
        return f"{self.label}:{self.line}"


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level, message and source context.

    Attributes:
        level (DiagnosticLevel): Severity of the diagnostic.
        message (str): Human-readable message.
        location (SourceLocation | None): Source label and line of the statement.
        context (str): Line-numbered rendering of the statement tokens.
        trace (str | None): Bounded stack trace for unexpected faults.
        handler (str | None): Name of the handler that produced the diagnostic.
    """

    level: DiagnosticLevel
    message: str
    location: SourceLocation | None = None
    context: str = ""
    trace: str | None = None
    handler: str | None = None

    def render(self) -> str:
        """Return a plain-text, multi-line rendering of this diagnostic."""
        where: str = f" in `{self.location}`" if self.location else ""
        who: str = f"[{self.handler}] " if self.handler else ""
        text: str = f"{self.level.value}: {who}{self.message}{where}"
        if self.context:
            text += f"\n\n{self.context}\n"
        return text

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly mapping of this diagnostic."""
        return {
            "level": self.level.value,
            "message": self.message,
            "location": (
                {"label": self.location.label, "line": self.location.line}
                if self.location
                else None
            ),
            "context": self.context,
            "trace": self.trace,
            "handler": self.handler,
        }


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_debug: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_debug + self.n_warning + self.n_error


@dataclass
class DiagnosticLog:
    """Mutable, per-run collection of diagnostics.

    This wrapper keeps track of all diagnostics emitted during one parser
    run. It provides convenience helpers for adding diagnostics at a given
    level and exposes simple aggregation helpers (`stats`, `to_dict`).
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot of this log's diagnostics."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def _add(self, diagnostic: Diagnostic) -> Diagnostic:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)
        return diagnostic

    def add_debug(self, message: str, **details: Any) -> Diagnostic:
        """Add a ``debug`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
            **details: Optional `Diagnostic` fields (``location``, ``context``, ...).

        Returns:
            The diagnostic that was added.
        """
        return self._add(Diagnostic(DiagnosticLevel.DEBUG, message, **details))

    def add_warning(self, message: str, **details: Any) -> Diagnostic:
        """Add a ``warning`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
            **details: Optional `Diagnostic` fields (``location``, ``context``, ...).

        Returns:
            The diagnostic that was added.
        """
        return self._add(Diagnostic(DiagnosticLevel.WARNING, message, **details))

    def add_error(self, message: str, **details: Any) -> Diagnostic:
        """Add an ``error`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
            **details: Optional `Diagnostic` fields (``location``, ``trace``, ...).

        Returns:
            The diagnostic that was added.
        """
        return self._add(Diagnostic(DiagnosticLevel.ERROR, message, **details))

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_warning(self) -> bool:
        """Return True if the DiagnosticLog contains warning diagnostics."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if the DiagnosticLog contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        return diagnostics_counts_to_dict(self.items)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable diagnostic container stored on parse results."""

    items: tuple[Diagnostic, ...]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def stats(self) -> DiagnosticStats:
        """Return aggregated per-level counts for the contained diagnostics."""
        return compute_diagnostic_stats(self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        return diagnostics_counts_to_dict(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: the diagnostics to count.

    Returns:
        Per-level counts for the given diagnostics.
    """
    items: list[Diagnostic] = list(diagnostics)
    n_debug: int = sum(1 for d in items if d.level == DiagnosticLevel.DEBUG)
    n_warn: int = sum(1 for d in items if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in items if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_debug=n_debug, n_warning=n_warn, n_error=n_err)


def diagnostics_counts_to_dict(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    """Return a JSON-friendly mapping of counts by severity for any iterable."""
    stats: DiagnosticStats = compute_diagnostic_stats(diagnostics)
    return {
        "debug": stats.n_debug,
        "warning": stats.n_warning,
        "error": stats.n_error,
    }
