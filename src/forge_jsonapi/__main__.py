# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __main__.py
#   file_relpath : src/forge_jsonapi/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running the CLI via ``python -m forge_jsonapi``.

Delegates to [`forge_jsonapi.cli.main.cli`][], the same entry point as the
``forge-jsonapi`` console script.
"""

from __future__ import annotations

from forge_jsonapi.cli.main import cli

if __name__ == "__main__":
    cli()
