# topmark:header:start
#
#   project      : DocSieve
#   file         : emitters.py
#   file_relpath : src/docsieve/cli/emitters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Rendering helpers for ``docsieve parse`` results.

Human output (``--format default``) goes through the console and may be
colored; machine output (``--format json``) is built by
`parse_results_to_payload` and never colored.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from docsieve.diagnostic import DiagnosticStats, compute_diagnostic_stats

if TYPE_CHECKING:
    from docsieve.cli.console import ConsoleLike
    from docsieve.diagnostic import Diagnostic
    from docsieve.objects.store import DocumentStore
    from docsieve.parser.engine import ParseResult


def _render_diagnostic(diagnostic: Diagnostic, *, color: bool, verbosity_level: int) -> str:
    text: str = diagnostic.render()
    if verbosity_level > 1 and diagnostic.trace:
        text += f"\nStack trace:\n{diagnostic.trace}\n"
    if color:
        return diagnostic.level.color(text)
    return text


def render_parse_results_default(
    *,
    console: ConsoleLike,
    results: list[ParseResult],
    store: DocumentStore,
    color: bool,
    verbosity_level: int,
    show_objects: bool,
) -> None:
    """Print diagnostics, a per-file summary and optionally the documented objects.

    Args:
        console (ConsoleLike): Program-output console.
        results (list[ParseResult]): Results in parse order.
        store (DocumentStore): Store populated by the run.
        color (bool): Whether to color diagnostics by level.
        verbosity_level (int): ``>= 1`` prints per-file summaries, ``>= 2`` adds traces.
        show_objects (bool): Whether to list every documented object.
    """
    for result in results:
        for diagnostic in result.diagnostics:
            console.print(
                _render_diagnostic(diagnostic, color=color, verbosity_level=verbosity_level)
            )
        if verbosity_level > 0:
            stats: DiagnosticStats = result.diagnostics.stats()
            console.print(
                f"{result.label}: {result.statements_processed} statement(s), "
                f"{stats.n_warning} warning(s), {stats.n_error} error(s)"
            )

    if show_objects:
        for obj in store:
            console.print(f"{obj.kind:<9} {obj.path}")

    total: DiagnosticStats = compute_diagnostic_stats(
        d for result in results for d in result.diagnostics
    )
    console.print(
        console.styled(
            f"{len(results)} file(s), {len(store)} object(s), "
            f"{total.n_warning} warning(s), {total.n_error} error(s)",
            bold=True,
        )
    )


def parse_results_to_payload(
    *,
    results: list[ParseResult],
    store: DocumentStore,
) -> dict[str, Any]:
    """Return a JSON-friendly payload describing a parse run."""
    return {
        "files": [
            {
                "label": result.label,
                "statements_processed": result.statements_processed,
                "counts": result.diagnostics.to_dict(),
                "diagnostics": [d.to_dict() for d in result.diagnostics],
            }
            for result in results
        ],
        "objects": [obj.to_dict() for obj in store],
    }
