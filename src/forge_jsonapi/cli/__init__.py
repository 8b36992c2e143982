# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __init__.py
#   file_relpath : src/forge_jsonapi/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forge JSON:API command line interface (developer tooling around the encoder)."""
