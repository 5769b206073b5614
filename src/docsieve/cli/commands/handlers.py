# topmark:header:start
#
#   project      : DocSieve
#   file         : handlers.py
#   file_relpath : src/docsieve/cli/commands/handlers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI command to list registered statement handlers.

Handlers are listed in resolution order: the order in which the handlers
matching a statement run.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from docsieve.cli.options import OutputFormat, output_format_option
from docsieve.handlers import register_all_handlers

if TYPE_CHECKING:
    from docsieve.cli.console import ConsoleLike
    from docsieve.handlers.registry import HandlerRegistry


@click.command(
    name="handlers",
    help="List registered statement handlers in resolution order.",
)
@output_format_option
def handlers_command(*, output_format: str) -> None:
    """List registered statement handlers.

    Args:
        output_format (str): ``default`` or ``json``.
    """
    ctx: click.Context = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    registry: HandlerRegistry = register_all_handlers()
    payload: list[dict[str, Any]] = [
        {"position": position, "name": d.name, "description": d.description}
        for position, d in enumerate(registry.descriptors(), start=1)
    ]

    if OutputFormat(output_format.lower()) == OutputFormat.JSON:
        console.print(json.dumps({"handlers": payload}, indent=2))
        return

    console.print(console.styled("Registered handlers:\n", bold=True, underline=True))
    width: int = max((len(entry["name"]) for entry in payload), default=0)
    for entry in payload:
        console.print(
            f"{entry['position']:>3}. {console.styled(entry['name'].ljust(width), bold=True)}"
            f"  {entry['description']}"
        )
