# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : schemas.py
#   file_relpath : src/forge_jsonapi/cli/commands/schemas.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forge JSON:API `schemas` command.

Imports the configured model modules and lists the registered resource
schemas: type discriminator, model class and (with ``--long``) every field
mapping, inherited ones included.
"""

from __future__ import annotations

import json
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

import click

from forge_jsonapi.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    import_model_modules,
    load_settings,
)
from forge_jsonapi.cli.options import model_source_options, output_format_option
from forge_jsonapi.cli.utils import OutputFormat, render_markdown_table
from forge_jsonapi.registry.registry import MetadataRegistry

if TYPE_CHECKING:
    from pathlib import Path

    from forge_jsonapi.cli.console import ConsoleLike
    from forge_jsonapi.registry.registry import SchemaMeta


def _serialize_schema(schema: SchemaMeta, *, show_details: bool) -> dict[str, Any]:
    out: dict[str, Any] = {"type": schema.type_name, "model": schema.model}
    if show_details:
        out["fields"] = [asdict(f) for f in schema.fields]
    return out


@click.command(
    name="schemas",
    help="List registered resource schemas.",
    epilog="""
Model modules are taken from the 'models' setting of the configuration file
and from every --module option. Importing a module registers its models.
""",
)
@model_source_options
@output_format_option
@click.option(
    "--long",
    "show_details",
    is_flag=True,
    help="Show every field mapping (kind, wire name, owner key, target, transformer).",
)
def schemas_command(
    *,
    modules: tuple[str, ...] = (),
    config_path: Path | None = None,
    output_format: OutputFormat | None = None,
    show_details: bool = False,
) -> None:
    """List registered resource schemas.

    Args:
        modules (tuple[str, ...]): Extra model modules to import.
        config_path (Path | None): Explicit configuration file.
        output_format (OutputFormat | None): Output format to use.
        show_details (bool): If True, include the field mappings.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    settings = load_settings(config_path)
    import_model_modules([*settings.models, *modules])
    schemas: list[SchemaMeta] = list(MetadataRegistry.iter_meta())

    if fmt == OutputFormat.JSON:
        payload = [_serialize_schema(s, show_details=show_details) for s in schemas]
        console.print(json.dumps(payload, indent=2))
        return
    if fmt == OutputFormat.NDJSON:
        for s in schemas:
            console.print(json.dumps(_serialize_schema(s, show_details=show_details)))
        return

    if fmt == OutputFormat.MARKDOWN:
        console.print("# Resource Schemas\n")
        if show_details:
            for s in schemas:
                console.print(f"## `{s.type_name}`\n")
                console.print(f"Model: `{s.model}`\n")
                rows = [
                    [f.kind, f"`{f.name}`", f"`{f.key}`", f.target, f.transformer]
                    for f in s.fields
                ]
                console.print(
                    render_markdown_table(["Kind", "Name", "Key", "Target", "Transformer"], rows)
                )
        else:
            rows = [[f"`{s.type_name}`", f"`{s.model}`"] for s in schemas]
            console.print(render_markdown_table(["Type", "Model"], rows))
        return

    if not schemas:
        if vlevel >= 0:
            console.warn("No resource schemas registered.")
        return

    if vlevel > 0:
        console.print(console.styled("Registered resource schemas:\n", bold=True, underline=True))
    num_width = len(str(len(schemas)))
    type_width = max(len(s.type_name) for s in schemas)
    for idx, s in enumerate(schemas, start=1):
        console.print(
            f"{idx:>{num_width}}. {s.type_name:<{type_width}} {console.styled(s.model, dim=True)}"
        )
        if show_details:
            for f in s.fields:
                line = f"      {f.kind:<16} {f.name}"
                if f.key != f.name:
                    line += f" <- {f.key}"
                if f.target:
                    line += f" -> {f.target}"
                if f.transformer:
                    line += " " + console.styled(f"[{f.transformer}]", dim=True)
                console.print(line)
