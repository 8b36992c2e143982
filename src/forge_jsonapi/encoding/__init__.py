# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __init__.py
#   file_relpath : src/forge_jsonapi/encoding/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoder and its configuration presets."""

from __future__ import annotations

from .config import (
    EncoderConfig,
    EncoderMode,
    EncoderOption,
    ModeFlags,
    MutableEncoderConfig,
    build_config,
    encode_as_client,
    encode_as_server,
    encode_with_mode,
    encode_with_root_meta,
    mode_for_method,
)
from .encoder import Encoder, encode, encode_collection

__all__ = [
    "Encoder",
    "EncoderConfig",
    "EncoderMode",
    "EncoderOption",
    "ModeFlags",
    "MutableEncoderConfig",
    "build_config",
    "encode",
    "encode_as_client",
    "encode_as_server",
    "encode_collection",
    "encode_with_mode",
    "encode_with_root_meta",
    "mode_for_method",
]
