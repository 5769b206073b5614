# topmark:header:start
#
#   project      : DocSieve
#   file         : exit_codes.py
#   file_relpath : src/docsieve/core/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for DocSieve.

DocSieve aligns with the BSD `sysexits` convention where practical, so that other tooling
can interpret failures consistently. Handler faults and undocumentable constructs are
reported as diagnostics and never change the exit code: a run that parsed every file
exits with `SUCCESS`.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for DocSieve.

    Attributes:
        SUCCESS: Every input was parsed (diagnostics may still have been emitted).
        FAILURE: Generic failure (non-specific error). Prefer a more specific
            code if available.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        ENCODING_ERROR: Text decoding error (e.g., UnicodeDecodeError).
            Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        PIPELINE_ERROR: Internal failure outside the per-handler failure boundary.
            Mirrors BSD ``EX_SOFTWARE (70)``.
        IO_ERROR: I/O error reading a file. Mirrors BSD ``EX_IOERR (74)``.
        PERMISSION_DENIED: Insufficient permissions. Mirrors BSD ``EX_NOPERM (77)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    ENCODING_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    PIPELINE_ERROR = 70  # EX_SOFTWARE (internal error)
    IO_ERROR = 74  # EX_IOERR
    PERMISSION_DENIED = 77  # EX_NOPERM
    CONFIG_ERROR = 78  # EX_CONFIG
