# topmark:header:start
#
#   project      : DocSieve
#   file         : version.py
#   file_relpath : src/docsieve/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocSieve `version` command.

Prints the current DocSieve version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from docsieve.cli.options import OutputFormat, output_format_option
from docsieve.constants import DOCSIEVE_VERSION

if TYPE_CHECKING:
    from docsieve.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of DocSieve.",
)
@output_format_option
def version_command(*, output_format: str) -> None:
    """Show the current version of DocSieve.

    Args:
        output_format (str): ``default`` or ``json``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if OutputFormat(output_format.lower()) == OutputFormat.JSON:
        console.print(json.dumps({"version": DOCSIEVE_VERSION}))
    elif ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled("DocSieve version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(DOCSIEVE_VERSION, bold=True)}")
    else:
        console.print(console.styled(DOCSIEVE_VERSION, bold=True))
