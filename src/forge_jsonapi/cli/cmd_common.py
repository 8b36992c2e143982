# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : cmd_common.py
#   file_relpath : src/forge_jsonapi/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by the Forge JSON:API subcommands.

Covers console access, effective verbosity, configuration loading and the
dynamic imports (model modules and ``module:callable`` targets) the commands
rely on. Library and import errors are translated into
[`ForgeCliError`][forge_jsonapi.cli.errors.ForgeCliError] subclasses here.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from typing import TYPE_CHECKING, Any, Callable

import click

from forge_jsonapi.cli.errors import ForgeConfigError, ForgeImportError, ForgeUsageError
from forge_jsonapi.config.loaders import CliConfig, load_cli_config
from forge_jsonapi.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import ModuleType

    from forge_jsonapi.cli.console import ConsoleLike
    from forge_jsonapi.config.logging import ForgeLogger

logger: ForgeLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored on the group context."""
    ctx.ensure_object(dict)
    return ctx.obj["console"]


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity for this command (0 = terse)."""
    return int(ctx.obj.get("verbosity_level", 0))


def load_settings(config_path: Path | None) -> CliConfig:
    """Load CLI settings, translating invalid values into a config error.

    Raises:
        ForgeConfigError: If the configuration names an unknown encoder mode.
    """
    try:
        return load_cli_config(config_path)
    except ValueError as exc:
        raise ForgeConfigError(str(exc)) from exc


def _ensure_cwd_importable() -> None:
    """Make modules of the working directory importable, like ``python -m`` does."""
    cwd = str(Path.cwd())
    if cwd not in sys.path:
        sys.path.insert(0, cwd)


def import_module(name: str) -> ModuleType:
    """Import the module ``name``.

    Raises:
        ForgeImportError: If the module cannot be imported.
    """
    _ensure_cwd_importable()
    try:
        return importlib.import_module(name)
    except ImportError as exc:
        raise ForgeImportError(f"Cannot import module {name!r}: {exc}") from exc


def import_model_modules(modules: Iterable[str]) -> list[str]:
    """Import every model module (declaring models registers them).

    Args:
        modules: Module names, imported in order; duplicates are skipped.

    Returns:
        list[str]: The imported module names.
    """
    imported: list[str] = []
    for name in modules:
        if name in imported:
            continue
        import_module(name)
        logger.debug("Imported model module %s", name)
        imported.append(name)
    return imported


def resolve_target(spec: str) -> Callable[[], Any]:
    """Resolve a ``module:callable`` reference.

    Args:
        spec: The reference, e.g. ``"myapp.fixtures:sample_article"``.

    Returns:
        Callable[[], Any]: The zero-argument callable.

    Raises:
        ForgeUsageError: If ``spec`` is not of the form ``module:callable``.
        ForgeImportError: If the module or attribute cannot be found, or the
            attribute is not callable.
    """
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise ForgeUsageError(f"Invalid target {spec!r} (expected 'module:callable').")

    obj: Any = import_module(module_name)
    for part in attr_path.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise ForgeImportError(f"Module {module_name!r} has no attribute {attr_path!r}.") from exc
    if not callable(obj):
        raise ForgeImportError(f"Target {spec!r} is not callable.")
    return obj
