# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __init__.py
#   file_relpath : src/forge_jsonapi/model/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resource identity contract and base models."""

from __future__ import annotations

from .resource import Resource, ResourceIdentity, Timestamps, WrappedResource

__all__ = [
    "Resource",
    "ResourceIdentity",
    "Timestamps",
    "WrappedResource",
]
