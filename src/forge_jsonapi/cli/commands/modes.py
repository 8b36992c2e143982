# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : modes.py
#   file_relpath : src/forge_jsonapi/cli/commands/modes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forge JSON:API `modes` command.

Lists the encoder presets with their flag triple and the HTTP verbs that
select them.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from forge_jsonapi.cli.cmd_common import get_console, get_effective_verbosity
from forge_jsonapi.cli.options import output_format_option
from forge_jsonapi.cli.utils import OutputFormat, render_markdown_table
from forge_jsonapi.encoding.config import EncoderMode, mode_for_method
from forge_jsonapi.http import HttpMethod

if TYPE_CHECKING:
    from forge_jsonapi.cli.console import ConsoleLike


def _methods_for(mode: EncoderMode) -> list[str]:
    return [m.value for m in HttpMethod if mode_for_method(m) is mode]


def _serialize_mode(mode: EncoderMode) -> dict[str, Any]:
    flags = mode.flags
    return {
        "mode": mode.value,
        "empty_id": flags.empty_id,
        "empty_timestamps": flags.empty_timestamps,
        "map_included": flags.map_included,
        "methods": _methods_for(mode),
    }


def _yes_no(flag: bool) -> str:
    return "yes" if flag else "no"


@click.command(
    name="modes",
    help="List the encoder presets and their flags.",
)
@output_format_option
def modes_command(
    *,
    output_format: OutputFormat | None = None,
) -> None:
    """List the encoder presets.

    Args:
        output_format (OutputFormat | None): Output format to use.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if fmt == OutputFormat.JSON:
        console.print(json.dumps([_serialize_mode(m) for m in EncoderMode], indent=2))
        return
    if fmt == OutputFormat.NDJSON:
        for m in EncoderMode:
            console.print(json.dumps(_serialize_mode(m)))
        return

    headers = ["Mode", "Empty id", "Empty timestamps", "Map included", "HTTP methods"]
    rows: list[list[str]] = [
        [
            f"`{m.value}`" if fmt == OutputFormat.MARKDOWN else m.value,
            _yes_no(m.flags.empty_id),
            _yes_no(m.flags.empty_timestamps),
            _yes_no(m.flags.map_included),
            ", ".join(_methods_for(m)),
        ]
        for m in EncoderMode
    ]

    if fmt == OutputFormat.MARKDOWN:
        console.print("# Encoder Modes\n")
        console.print(render_markdown_table(headers, rows))
        return

    if vlevel > 0:
        console.print(console.styled("Encoder modes:\n", bold=True, underline=True))
    width = max(len(m.value) for m in EncoderMode)
    for row, m in zip(rows, EncoderMode):
        flags = f"empty_id={row[1]} empty_timestamps={row[2]} map_included={row[3]}"
        line = f"{m.value:<{width}}  {flags}"
        if vlevel > 0:
            line += "  " + console.styled(f"({row[4]})", dim=True)
        console.print(line)
