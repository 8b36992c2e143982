# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : errors.py
#   file_relpath : src/forge_jsonapi/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Forge JSON:API CLI.

Usage:
    Raise these exceptions in CLI commands to signal errors with standardized
    messages and exit codes. Library errors
    ([`forge_jsonapi.errors`][forge_jsonapi.errors]) are translated into these
    at the command boundary.

Styling:
    Exceptions prefer the project console if available (see `show()`); if no console
    is present in the Click context, they fall back to Click's default styling.
"""

from __future__ import annotations

from typing import IO, Any

import click

from forge_jsonapi.cli.exit_codes import ExitCode


class ForgeCliError(click.ClickException):
    """Base class for all Forge JSON:API CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorized in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available.

        Falls back to Click's default error display when no console is present.
        """
        ctx = click.get_current_context(silent=True)
        if ctx is not None and isinstance(getattr(ctx, "obj", None), dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))
                return
        super().show(file)


class ForgeUsageError(ForgeCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class ForgeConfigError(ForgeCliError):
    """Error for configuration errors (invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


class ForgeImportError(ForgeCliError):
    """Error when a model module or a target callable cannot be imported."""

    exit_code = ExitCode.IMPORT_ERROR


class ForgeEncodeError(ForgeCliError):
    """Error when the target object cannot be encoded."""

    exit_code = ExitCode.ENCODE_ERROR
