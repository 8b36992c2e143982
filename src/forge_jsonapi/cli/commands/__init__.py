# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __init__.py
#   file_relpath : src/forge_jsonapi/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Subcommands of the ``forge-jsonapi`` group."""
