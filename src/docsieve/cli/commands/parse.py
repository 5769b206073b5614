# topmark:header:start
#
#   project      : DocSieve
#   file         : parse.py
#   file_relpath : src/docsieve/cli/commands/parse.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocSieve `parse` command.

Parses source files and reports what could not be documented.

Input modes:
  * **Paths**: files and directories (expanded recursively, filtered by the
    ``[files]`` include/exclude patterns).
  * **Content on STDIN**: a single ``-`` as the sole PATH; ``--stdin-filename``
    names the source in diagnostics.

Examples:
  Parse a tree:
    $ docsieve parse lib/

  Parse content from STDIN:
    $ cat foo.rb | docsieve parse - --stdin-filename foo.rb

  Machine-readable output:
    $ docsieve parse --format json lib/

Exit status is 0 when every file could be read, even when constructs were
undocumentable or handlers faulted; otherwise it is the code of the first
file error (66 missing file, 77 permission denied, 65 encoding error).
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from docsieve.cli.emitters import parse_results_to_payload, render_parse_results_default
from docsieve.cli.errors import DocsieveConfigError, DocsieveEncodingError, DocsieveUsageError
from docsieve.cli.options import OutputFormat, output_format_option
from docsieve.config.logging import get_logger
from docsieve.config.model import MutableConfig
from docsieve.constants import STDIN_LABEL
from docsieve.core.errors import ConfigError
from docsieve.file_resolver import resolve_file_list
from docsieve.objects.store import DocumentStore
from docsieve.parser.engine import parse_files, parse_text

if TYPE_CHECKING:
    from docsieve.cli.console import ConsoleLike
    from docsieve.config import Config
    from docsieve.config.logging import DocsieveLogger
    from docsieve.core.exit_codes import ExitCode
    from docsieve.parser.engine import ParseResult

logger: DocsieveLogger = get_logger(__name__)


@click.command(
    name="parse",
    help="Extract documentation from source files and report undocumentable constructs.",
)
@click.argument("paths", nargs=-1, type=str)
@click.option(
    "--stdin-filename",
    "stdin_filename",
    type=str,
    default=None,
    help="Name used for content read from STDIN via '-' (dash).",
)
@click.option(
    "--config",
    "config_path",
    metavar="FILE",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
    default=None,
    help="Configuration file to merge on top of the discovered one.",
)
@click.option(
    "--objects",
    "show_objects",
    is_flag=True,
    help="List every documented object (default format only).",
)
@output_format_option
def parse_command(
    *,
    paths: tuple[str, ...],
    stdin_filename: str | None,
    config_path: str | None,
    show_objects: bool,
    output_format: str,
) -> None:
    """Parse PATHS and report diagnostics.

    Args:
        paths (tuple[str, ...]): Files, directories, or ``-`` for STDIN.
        stdin_filename (str | None): Label for STDIN content.
        config_path (str | None): Explicit configuration file.
        show_objects (bool): List documented objects.
        output_format (str): ``default`` or ``json``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    fmt: OutputFormat = OutputFormat(output_format.lower())
    if show_objects and fmt == OutputFormat.JSON:
        console.warn("--objects is ignored with --format json (objects are always included).")

    stdin_mode: bool = list(paths) == ["-"]
    if "-" in paths and not stdin_mode:
        raise DocsieveUsageError("'-' (STDIN) must be the only PATH.")
    if stdin_filename and not stdin_mode:
        raise DocsieveUsageError("--stdin-filename requires '-' as the only PATH.")

    try:
        config: Config = MutableConfig.load_merged(
            config_file=Path(config_path) if config_path else None
        ).freeze()
    except ConfigError as e:
        raise DocsieveConfigError(str(e)) from e

    store = DocumentStore()
    results: list[ParseResult]
    encountered_error_code: ExitCode | None = None
    if stdin_mode:
        data: bytes = click.get_binary_stream("stdin").read()
        try:
            text: str = data.decode(config.encoding)
        except UnicodeDecodeError as e:
            raise DocsieveEncodingError(f"Cannot decode STDIN as {config.encoding}: {e}") from e
        results = [
            parse_text(text, label=stdin_filename or STDIN_LABEL, config=config, store=store)
        ]
    else:
        file_list: list[Path] = resolve_file_list(paths, config=config)
        if not file_list:
            console.print(console.styled("No files to parse.", fg="blue"))
            return
        results, encountered_error_code = parse_files(
            file_list=file_list, config=config, store=store
        )

    if fmt == OutputFormat.JSON:
        console.print(json.dumps(parse_results_to_payload(results=results, store=store), indent=2))
    else:
        render_parse_results_default(
            console=console,
            results=results,
            store=store,
            color=bool(ctx.obj.get("color_enabled", False)),
            verbosity_level=int(ctx.obj.get("verbosity_level", 0)),
            show_objects=show_objects,
        )

    if encountered_error_code is not None:
        console.error(
            f"Some files could not be parsed (exit code {int(encountered_error_code)}); "
            "see the log above."
        )
        ctx.exit(encountered_error_code)
