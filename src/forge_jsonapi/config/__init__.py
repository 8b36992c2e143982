# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __init__.py
#   file_relpath : src/forge_jsonapi/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Ambient configuration for Forge JSON:API.

Submodules:
- [`forge_jsonapi.config.logging`][] – TRACE-aware logger and colored output.
- [`forge_jsonapi.config.loaders`][] – TOML configuration for the CLI.

The mapping engine itself is configured in code through encoder options; see
[`forge_jsonapi.encoding.config`][].
"""
