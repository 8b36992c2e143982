# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : constants.py
#   file_relpath : src/forge_jsonapi/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forge JSON:API Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

TOOL_NAME: Final[str] = "forge-jsonapi"

try:
    FORGE_JSONAPI_VERSION: str = get_version(TOOL_NAME)
except PackageNotFoundError:  # running from a source checkout
    FORGE_JSONAPI_VERSION = "0.0.0"

# JSON:API version implemented by the encoder.
SPEC_VERSION: Final[str] = "1.1"

# The JSON:API media type (https://jsonapi.org/format/#content-negotiation).
MEDIA_TYPE: Final[str] = "application/vnd.api+json"

HEADER_CONTENT_TYPE: Final[str] = "Content-Type"
HEADER_ACCEPT: Final[str] = "Accept"

# Wire name of the timestamps nested attribute carried by every resource.
ATTR_TIMESTAMPS: Final[str] = "timestamps"

# Environment variable consulted by `setup_logging()`.
LOG_LEVEL_ENV_VAR: Final[str] = "FORGE_JSONAPI_LOG_LEVEL"

# CLI configuration discovery.
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
CONFIG_TOML_NAME: Final[str] = "forge-jsonapi.toml"
PYPROJECT_TOOL_SECTION: Final[str] = "forge-jsonapi"

VALUE_NOT_SET: Final[str] = "<not set>"
