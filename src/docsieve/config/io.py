# topmark:header:start
#
#   project      : DocSieve
#   file         : io.py
#   file_relpath : src/docsieve/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources and extract typed values.

DocSieve reads its configuration from ``docsieve.toml``, from the
``[tool.docsieve]`` table of ``pyproject.toml``, or from a file named on the
command line. Parsing is done with `tomlkit` and returned as plain `dict`
structures.

Value getters validate the expected shape. A wrong type is a user mistake
that would silently change behavior, so it raises `ConfigError` instead of
falling back to the default.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from docsieve.config.logging import get_logger
from docsieve.core.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from docsieve.config.logging import DocsieveLogger

logger: DocsieveLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dictionary.

    Args:
        text (str): TOML document.
        source (str): Label used in error messages.

    Returns:
        TomlTable: The parsed document.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", source, e)
        raise ConfigError(f"Invalid TOML in {source}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``docsieve.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        raise ConfigError(f"Cannot read {path}: {e}") from e
    return parse_toml_text(text, source=str(path))


def to_toml(data: TomlTable) -> str:
    """Render a plain dictionary as a TOML document."""
    return tomlkit.dumps(data)


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table ``key`` (empty when missing).

    Raises:
        ConfigError: If the value is present but not a table.
    """
    value: Any = table.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"[{key}] must be a table, got {type(value).__name__}")
    return cast("TomlTable", value)


def get_int_value(table: TomlTable, key: str, default: int) -> int:
    """Return the integer ``key`` (``default`` when missing).

    Raises:
        ConfigError: If the value is present but not an integer.
    """
    value: Any = table.get(key)
    if value is None:
        return default
    # bool is an int subclass; ``trace_depth = true`` is still a mistake
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    return value


def get_string_value(table: TomlTable, key: str, default: str) -> str:
    """Return the string ``key`` (``default`` when missing).

    Raises:
        ConfigError: If the value is present but not a string.
    """
    value: Any = table.get(key)
    if value is None:
        return default
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value


def get_list_value(table: TomlTable, key: str) -> list[str] | None:
    """Return the list of strings ``key``, or ``None`` when missing.

    Raises:
        ConfigError: If the value is present but not a list of strings.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"'{key}' must be a list of strings, got {value!r}")
    return list(cast("list[str]", value))


def warn_unknown_keys(table: TomlTable, known: set[str], *, section: str = "") -> list[str]:
    """Log a warning for every key of ``table`` not in ``known``.

    Returns:
        list[str]: The unknown keys, sorted.
    """
    unknown: list[str] = sorted(set(table) - known)
    where: str = f"[{section}]" if section else "top level"
    for key in unknown:
        logger.warning("Ignoring unknown configuration key '%s' at %s", key, where)
    return unknown
