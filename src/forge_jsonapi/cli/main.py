# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : main.py
#   file_relpath : src/forge_jsonapi/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point of the ``forge-jsonapi`` command.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; subcommands read the console and verbosity from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from forge_jsonapi.cli.commands.encode import encode_command
from forge_jsonapi.cli.commands.modes import modes_command
from forge_jsonapi.cli.commands.schemas import schemas_command
from forge_jsonapi.cli.commands.version import version_command
from forge_jsonapi.cli.console import ClickConsole
from forge_jsonapi.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_log_level,
    resolve_verbosity,
)
from forge_jsonapi.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from forge_jsonapi.cli.console import ConsoleLike
    from forge_jsonapi.config.logging import ForgeLogger

logger: ForgeLogger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging & color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    verbosity = resolve_verbosity(verbose, quiet)
    ctx.obj["verbosity_level"] = verbosity

    log_level = resolve_log_level(verbosity, resolve_env_log_level())
    ctx.obj["log_level"] = log_level
    setup_logging(level=log_level)

    effective_color_mode = ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    enable_color = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Forge JSON:API CLI",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the Forge JSON:API CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'forge-jsonapi encode module:callable' to encode a resource.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(modes_command)

cli.add_command(schemas_command)

cli.add_command(encode_command)

if __name__ == "__main__":
    cli()
