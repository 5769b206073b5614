# topmark:header:start
#
#   project      : DocSieve
#   file         : model.py
#   file_relpath : src/docsieve/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model.

This module defines:
    - `Config`: an immutable runtime snapshot handed to parsers and the engine.
    - `MutableConfig`: a mutable builder used while loading and merging TOML
      sources; it can be frozen into `Config` and thawed back for edits.

Recognized keys (top level of ``docsieve.toml`` or ``[tool.docsieve]``):

    ```toml
    trace_depth = 6          # innermost frames kept in fault diagnostics
    encoding = "utf-8"       # encoding used to read source files

    [handlers]
    disabled = ["constant"]  # handler names skipped by the resolver

    [files]
    include = ["*.rb"]       # gitignore-style patterns
    exclude = ["vendor/"]
    ```

Later sources override earlier ones key by key. Unknown keys are logged and
ignored; values of the wrong type raise `ConfigError`.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from docsieve.config.io import (
    get_int_value,
    get_list_value,
    get_string_value,
    get_table_value,
    load_toml_dict,
    warn_unknown_keys,
)
from docsieve.config.logging import get_logger
from docsieve.constants import (
    DEFAULT_ENCODING,
    DEFAULT_INCLUDE_PATTERNS,
    DEFAULT_TRACE_DEPTH,
    DOCSIEVE_TOML_NAME,
    PYPROJECT_TOML_NAME,
)
from docsieve.core.errors import ConfigError

if TYPE_CHECKING:
    from docsieve.config.io import TomlTable
    from docsieve.config.logging import DocsieveLogger

logger: DocsieveLogger = get_logger(__name__)

_TOP_LEVEL_KEYS: set[str] = {"trace_depth", "encoding", "handlers", "files"}
_HANDLERS_KEYS: set[str] = {"disabled"}
_FILES_KEYS: set[str] = {"include", "exclude"}


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration.

    Attributes:
        trace_depth (int): Number of innermost stack frames kept in fault diagnostics.
        encoding (str): Text encoding used when reading source files.
        disabled_handlers (frozenset[str]): Handler names the resolver skips.
        include_patterns (tuple[str, ...]): Patterns selecting files when expanding directories.
        exclude_patterns (tuple[str, ...]): Patterns removing files from the selection.
        config_files (tuple[Path, ...]): Configuration files that contributed to this config.
    """

    trace_depth: int = DEFAULT_TRACE_DEPTH
    encoding: str = DEFAULT_ENCODING
    disabled_handlers: frozenset[str] = frozenset()
    include_patterns: tuple[str, ...] = DEFAULT_INCLUDE_PATTERNS
    exclude_patterns: tuple[str, ...] = ()
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config."""
        return MutableConfig(
            trace_depth=self.trace_depth,
            encoding=self.encoding,
            disabled_handlers=set(self.disabled_handlers),
            include_patterns=list(self.include_patterns),
            exclude_patterns=list(self.exclude_patterns),
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> TomlTable:
        """Return the configuration as a TOML-compatible dict (config files excluded)."""
        return {
            "trace_depth": self.trace_depth,
            "encoding": self.encoding,
            "handlers": {"disabled": sorted(self.disabled_handlers)},
            "files": {
                "include": list(self.include_patterns),
                "exclude": list(self.exclude_patterns),
            },
        }


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used while loading and merging sources.

    Attributes mirror `Config` with mutable containers.
    """

    trace_depth: int = DEFAULT_TRACE_DEPTH
    encoding: str = DEFAULT_ENCODING
    disabled_handlers: set[str] = field(default_factory=lambda: set[str]())
    include_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE_PATTERNS))
    exclude_patterns: list[str] = field(default_factory=lambda: [])
    config_files: list[Path] = field(default_factory=lambda: [])

    def freeze(self) -> Config:
        """Validate this builder and freeze it into an immutable `Config`.

        Raises:
            ConfigError: If ``trace_depth`` is negative or ``encoding`` is unknown.
        """
        if self.trace_depth < 0:
            raise ConfigError(f"'trace_depth' must be >= 0, got {self.trace_depth}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigError(f"Unknown encoding '{self.encoding}'") from e
        return Config(
            trace_depth=self.trace_depth,
            encoding=self.encoding,
            disabled_handlers=frozenset(self.disabled_handlers),
            include_patterns=tuple(self.include_patterns),
            exclude_patterns=tuple(self.exclude_patterns),
            config_files=tuple(self.config_files),
        )

    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder holding the built-in defaults."""
        return cls()

    def merge_toml(self, data: TomlTable) -> MutableConfig:
        """Apply the keys present in ``data`` on top of this builder.

        Args:
            data (TomlTable): Parsed DocSieve table (top level of ``docsieve.toml``
                or ``[tool.docsieve]``).

        Returns:
            MutableConfig: ``self``, for chaining.

        Raises:
            ConfigError: If a value has the wrong type.
        """
        warn_unknown_keys(data, _TOP_LEVEL_KEYS)
        self.trace_depth = get_int_value(data, "trace_depth", self.trace_depth)
        self.encoding = get_string_value(data, "encoding", self.encoding)

        handlers: TomlTable = get_table_value(data, "handlers")
        warn_unknown_keys(handlers, _HANDLERS_KEYS, section="handlers")
        disabled: list[str] | None = get_list_value(handlers, "disabled")
        if disabled is not None:
            self.disabled_handlers = set(disabled)

        files: TomlTable = get_table_value(data, "files")
        warn_unknown_keys(files, _FILES_KEYS, section="files")
        include: list[str] | None = get_list_value(files, "include")
        if include is not None:
            self.include_patterns = include
        exclude: list[str] | None = get_list_value(files, "exclude")
        if exclude is not None:
            self.exclude_patterns = exclude
        return self

    def merge_toml_file(self, path: Path) -> MutableConfig:
        """Load ``path`` and merge it (``[tool.docsieve]`` for ``pyproject.toml``).

        Raises:
            ConfigError: If the file cannot be read or holds invalid values.
        """
        logger.debug("Merging configuration from %s", path)
        data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_TOML_NAME:
            tool: TomlTable = get_table_value(get_table_value(data, "tool"), "docsieve")
            if not tool:
                logger.warning("[tool.docsieve] section missing in %s", path)
            data = tool
        self.merge_toml(data)
        self.config_files.append(path)
        return self

    @staticmethod
    def discover_config_file(start: Path) -> Path | None:
        """Return the configuration file of directory ``start``, if any.

        ``docsieve.toml`` wins over a ``pyproject.toml`` in the same directory;
        a ``pyproject.toml`` only counts when it has a ``[tool.docsieve]`` table.
        """
        candidate: Path = start / DOCSIEVE_TOML_NAME
        if candidate.is_file():
            return candidate
        pyproject: Path = start / PYPROJECT_TOML_NAME
        if pyproject.is_file():
            data: TomlTable = load_toml_dict(pyproject)
            tool: object = data.get("tool", {})
            if isinstance(tool, dict) and "docsieve" in tool:
                return pyproject
        return None

    @classmethod
    def load_merged(
        cls,
        *,
        config_file: Path | None = None,
        cwd: Path | None = None,
    ) -> MutableConfig:
        """Build a configuration from defaults, the discovered file and an explicit file.

        Precedence (last wins): defaults, the configuration file found in
        ``cwd``, then ``config_file``.

        Args:
            config_file (Path | None): File given explicitly (``--config``).
            cwd (Path | None): Directory searched for a configuration file
                (defaults to the current working directory).

        Returns:
            MutableConfig: The merged builder.

        Raises:
            ConfigError: If a configuration source is unreadable or invalid.
        """
        draft: MutableConfig = cls.from_defaults()
        discovered: Path | None = cls.discover_config_file(cwd or Path.cwd())
        if discovered is not None:
            draft.merge_toml_file(discovered)
        if config_file is not None and (
            discovered is None or config_file.resolve() != discovered.resolve()
        ):
            draft.merge_toml_file(config_file)
        logger.debug("Merged configuration: %s", draft)
        return draft
