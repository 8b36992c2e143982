# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : version.py
#   file_relpath : src/forge_jsonapi/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forge JSON:API `version` command.

Prints the installed Forge JSON:API version and the JSON:API version it targets.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from forge_jsonapi.cli.cmd_common import get_console, get_effective_verbosity
from forge_jsonapi.cli.options import output_format_option
from forge_jsonapi.cli.utils import OutputFormat
from forge_jsonapi.constants import FORGE_JSONAPI_VERSION, SPEC_VERSION

if TYPE_CHECKING:
    from forge_jsonapi.cli.console import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of Forge JSON:API.",
)
@output_format_option
def version_command(
    *,
    output_format: OutputFormat | None = None,
) -> None:
    """Show the current version of Forge JSON:API.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt.is_machine:
        console.print(json.dumps({"version": FORGE_JSONAPI_VERSION, "jsonapi": SPEC_VERSION}))
    elif fmt == OutputFormat.MARKDOWN:
        console.print("# Forge JSON:API Version\n")
        console.print(f"**Forge JSON:API version: {FORGE_JSONAPI_VERSION}** (JSON:API {SPEC_VERSION})")
    else:
        if vlevel > 0:
            console.print(console.styled("Forge JSON:API version:\n", bold=True, underline=True))
            console.print(f"    {console.styled(FORGE_JSONAPI_VERSION, bold=True)}")
            console.print(f"    JSON:API {SPEC_VERSION}")
        else:
            console.print(console.styled(FORGE_JSONAPI_VERSION, bold=True))
