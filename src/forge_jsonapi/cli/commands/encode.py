# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : encode.py
#   file_relpath : src/forge_jsonapi/cli/commands/encode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forge JSON:API `encode` command.

Calls a ``module:callable`` target returning a resource (or a list of
resources) and prints the encoded JSON:API document.

Mode resolution (first match wins):
    1. ``--mode``
    2. ``--method`` (the HTTP verb of the request being prepared)
    3. ``mode`` from the configuration file
    4. the encoder default (client-create)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from forge_jsonapi.cli.cli_types import EnumChoiceParam, JsonObjectParam
from forge_jsonapi.cli.cmd_common import (
    get_console,
    import_model_modules,
    load_settings,
    resolve_target,
)
from forge_jsonapi.cli.errors import ForgeEncodeError, ForgeUsageError
from forge_jsonapi.cli.options import model_source_options
from forge_jsonapi.config.logging import get_logger
from forge_jsonapi.encoding.config import (
    EncoderMode,
    encode_as_client,
    encode_with_mode,
    encode_with_root_meta,
)
from forge_jsonapi.encoding.encoder import Encoder
from forge_jsonapi.errors import ForgeJsonApiError
from forge_jsonapi.http import HttpMethod
from forge_jsonapi.serializers import serialize_document
from forge_jsonapi.values import ValueShape, classify_value

if TYPE_CHECKING:
    from pathlib import Path

    from forge_jsonapi.cli.console import ConsoleLike
    from forge_jsonapi.config.logging import ForgeLogger
    from forge_jsonapi.document import Document
    from forge_jsonapi.encoding.config import EncoderOption

logger: ForgeLogger = get_logger(__name__)


def build_options(
    *,
    mode: EncoderMode | None,
    method: HttpMethod | None,
    default_mode: EncoderMode | None,
    root_meta: dict[str, Any] | None,
) -> list[EncoderOption]:
    """Translate command-line choices into encoder options.

    Raises:
        ForgeUsageError: If both ``mode`` and ``method`` are given.
    """
    if mode is not None and method is not None:
        raise ForgeUsageError("The '--mode' and '--method' options are mutually exclusive.")

    options: list[EncoderOption] = []
    if mode is not None:
        options.append(encode_with_mode(mode))
    elif method is not None:
        options.append(encode_as_client(method))
    elif default_mode is not None:
        options.append(encode_with_mode(default_mode))
    if root_meta is not None:
        options.append(encode_with_root_meta(root_meta))
    return options


@click.command(
    name="encode",
    help="Encode the resource(s) returned by TARGET (module:callable) as a JSON:API document.",
)
@click.argument("target", metavar="TARGET")
@click.option(
    "--mode",
    "mode",
    type=EnumChoiceParam(EncoderMode),
    default=None,
    help=f"Encoder preset ({', '.join(m.value for m in EncoderMode)}).",
)
@click.option(
    "--method",
    "method",
    type=EnumChoiceParam(HttpMethod),
    default=None,
    help="Pick the client preset matching this HTTP verb (read verbs select server-read).",
)
@click.option(
    "--root-meta",
    "root_meta",
    type=JsonObjectParam(),
    default=None,
    help="JSON object attached as the document's top-level meta.",
)
@click.option(
    "--indent",
    type=click.IntRange(min=0),
    default=2,
    show_default=True,
    help="JSON indentation (0 for compact output).",
)
@model_source_options
def encode_command(
    *,
    target: str,
    mode: EncoderMode | None = None,
    method: HttpMethod | None = None,
    root_meta: dict[str, Any] | None = None,
    indent: int = 2,
    modules: tuple[str, ...] = (),
    config_path: Path | None = None,
) -> None:
    """Encode a resource or a list of resources.

    Args:
        target (str): ``module:callable`` returning the object(s) to encode.
        mode (EncoderMode | None): Explicit encoder preset.
        method (HttpMethod | None): HTTP verb selecting a client preset.
        root_meta (dict[str, Any] | None): Top-level meta object.
        indent (int): JSON indentation; ``0`` prints compact JSON.
        modules (tuple[str, ...]): Extra model modules to import.
        config_path (Path | None): Explicit configuration file.
    """
    ctx = click.get_current_context()
    console: ConsoleLike = get_console(ctx)

    settings = load_settings(config_path)
    options = build_options(
        mode=mode, method=method, default_mode=settings.mode, root_meta=root_meta
    )
    import_model_modules([*settings.models, *modules])

    factory = resolve_target(target)
    subject: Any = factory()
    logger.debug("Target %s returned %s", target, type(subject).__name__)

    encoder = Encoder()
    try:
        if classify_value(subject) is ValueShape.SEQUENCE:
            doc: Document | None = encoder.encode_collection(subject, *options)
        else:
            doc = encoder.encode(subject, *options)
    except ForgeJsonApiError as exc:
        raise ForgeEncodeError(str(exc)) from exc

    console.print(serialize_document(doc, indent=indent or None))
