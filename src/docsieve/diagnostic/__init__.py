# topmark:header:start
#
#   project      : DocSieve
#   file         : __init__.py
#   file_relpath : src/docsieve/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic primitives and helpers.

This package provides strongly-typed diagnostic objects used by the parser to report
undocumentable constructs and handler faults in a consistent way.

Design:
    - Diagnostics are represented by immutable `Diagnostic` instances.
    - During a parse run, diagnostics are accumulated in a mutable `DiagnosticLog`.
    - Parse results store diagnostics as an immutable `FrozenDiagnosticLog`.
"""

from __future__ import annotations

from docsieve.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    FrozenDiagnosticLog,
    SourceLocation,
    compute_diagnostic_stats,
    diagnostics_counts_to_dict,
)

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DiagnosticStats",
    "FrozenDiagnosticLog",
    "SourceLocation",
    "compute_diagnostic_stats",
    "diagnostics_counts_to_dict",
]
