# topmark:header:start
#
#   project      : DocSieve
#   file         : main.py
#   file_relpath : src/docsieve/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""DocSieve command-line interface.

Key ideas:
- Group-level options (verbosity, color) are initialized once and placed into
  ``ctx.obj`` together with the program-output console.
- ``-v``/``-q`` drive the log level; ``DOCSIEVE_LOG_LEVEL`` overrides them.
- Subcommands read the console from ``ctx.obj`` and never print directly.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from docsieve.cli.commands.handlers import handlers_command
from docsieve.cli.commands.parse import parse_command
from docsieve.cli.commands.version import version_command
from docsieve.cli.console import ClickConsole
from docsieve.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from docsieve.config.logging import get_logger, resolve_env_log_level, setup_logging
from docsieve.handlers import register_all_handlers

if TYPE_CHECKING:
    from docsieve.cli.console import ConsoleLike

logger = get_logger(__name__)

register_all_handlers()


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    level_cli: int = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbose

    # The environment wins over -v/-q for internal logging
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env if level_env is not None else level_cli
    setup_logging(level=ctx.obj["log_level"])

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="DocSieve: extract documentation from Ruby-flavoured source files.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: str | None,
    no_color: bool,
) -> None:
    """Entry point for the DocSieve CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=ColorMode(color_mode) if color_mode else None,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'docsieve parse [PATHS...]' to extract documentation.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(handlers_command)

cli.add_command(parse_command)

if __name__ == "__main__":
    cli()
