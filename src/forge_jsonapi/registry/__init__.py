# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __init__.py
#   file_relpath : src/forge_jsonapi/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Metadata registry and declarative schema helpers.

This package exposes:

* [`forge_jsonapi.registry.MetadataRegistry`][] – the process-wide store of field
  mappings, queried by the encoder.
* The declaration factories (`attribute`, `nested_attribute`, `relationship`,
  `meta`, `wrapped`) and class decorators (`resource_schema`, `field_schema`).
"""

from __future__ import annotations

from .declarations import (
    attribute,
    field_schema,
    meta,
    nested_attribute,
    relationship,
    resource_schema,
    wrapped,
)
from .fields import FieldKind, FieldMapping
from .registry import FieldMeta, MetadataRegistry, SchemaMeta

__all__ = [
    "MetadataRegistry",
    "FieldKind",
    "FieldMapping",
    "FieldMeta",
    "SchemaMeta",
    "attribute",
    "nested_attribute",
    "relationship",
    "meta",
    "wrapped",
    "field_schema",
    "resource_schema",
]
