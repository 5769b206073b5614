# topmark:header:start
#
#   project      : DocSieve
#   file         : constants.py
#   file_relpath : src/docsieve/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocSieve Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

DOCSIEVE_VERSION: str = get_version("docsieve")

# Source label used when the input is not a named file:
STDIN_LABEL: str = "<STDIN>"

# Configuration file names discovered in the working directory:
DOCSIEVE_TOML_NAME: str = "docsieve.toml"
PYPROJECT_TOML_NAME: str = "pyproject.toml"

# Number of innermost stack frames kept in fault diagnostics:
DEFAULT_TRACE_DEPTH: int = 6

DEFAULT_ENCODING: str = "utf-8"

DEFAULT_INCLUDE_PATTERNS: tuple[str, ...] = ("*.rb",)

VALUE_NOT_SET: str = "<not set>"
