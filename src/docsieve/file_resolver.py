# topmark:header:start
#
#   project      : DocSieve
#   file         : file_resolver.py
#   file_relpath : src/docsieve/file_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve input files for DocSieve based on config, paths and filters.

This module expands positional paths (directories recursively), applies the
configured include and exclude patterns with gitignore semantics, and
returns a deterministic, sorted list of files to parse.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from docsieve.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable

    from docsieve.config import Config
    from docsieve.config.logging import DocsieveLogger

logger: DocsieveLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        rel: Path = path.resolve().relative_to(base.resolve())
        return rel.as_posix()
    except ValueError:
        return path.as_posix()


def resolve_file_list(
    paths: Iterable[str | Path],
    *,
    config: Config,
    cwd: Path | None = None,
) -> list[Path]:
    """Return the list of files to parse.

    The resolver implements these semantics:
      1. **Candidates**: files named explicitly are kept as is; directories are
         expanded recursively and only files matching *any* include pattern
         are kept (patterns are matched relative to the expanded directory).
      2. **Missing paths** are logged and kept, so the engine reports them.
      3. **Exclude subtraction**: files matching any exclude pattern (relative
         to ``cwd``) are removed, explicit files included.
      4. Returns a **sorted**, de-duplicated list of paths.

    Args:
        paths (Iterable[str | Path]): Positional paths from the command line.
        config (Config): Supplies ``include_patterns`` and ``exclude_patterns``.
        cwd (Path | None): Base for exclude patterns (defaults to the working directory).

    Returns:
        list[Path]: Sorted list of files selected for parsing.
    """
    base: Path = cwd or Path.cwd()
    include_spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, config.include_patterns)
    exclude_spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, config.exclude_patterns)

    candidates: set[Path] = set()
    for raw in paths:
        p = Path(raw)
        if p.is_dir():
            found: list[Path] = [
                f
                for f in p.rglob("*")
                if f.is_file() and include_spec.match_file(_rel_for_match(f, p))
            ]
            logger.debug("Expanded %s to %d file(s)", p, len(found))
            candidates.update(found)
        elif p.is_file():
            candidates.add(p)
        else:
            logger.warning("No such file or directory: %s", p)
            candidates.add(p)

    kept: list[Path] = sorted(
        p for p in candidates if not exclude_spec.match_file(_rel_for_match(p, base))
    )
    logger.debug("Resolved %d file(s) (%d excluded)", len(kept), len(candidates) - len(kept))
    return kept
