# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : __init__.py
#   file_relpath : src/forge_jsonapi/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Forge JSON:API package.

Forge JSON:API maps annotated domain objects to JSON:API documents. Models
declare their wire shape once (attributes, nested attributes, relationships,
meta) and the encoder turns instances, or collections of them, into documents
shaped for the request at hand (client create/update/delete or server read).

Example:
    ```python
    from forge_jsonapi import Resource, attribute, encode, encode_as_server, resource_schema

    @resource_schema("articles", attribute("title"))
    @dataclass(frozen=True)
    class Article(Resource):
        title: str | None = None

    doc = encode(Article(id="1", title="Hello"), encode_as_server())
    ```
"""

from __future__ import annotations

from forge_jsonapi.document import Document, Relationship, ResourceIdentifier, ResourceObject
from forge_jsonapi.encoding.config import (
    EncoderConfig,
    EncoderMode,
    encode_as_client,
    encode_as_server,
    encode_with_mode,
    encode_with_root_meta,
)
from forge_jsonapi.encoding.encoder import Encoder, encode, encode_collection
from forge_jsonapi.errors import (
    DuplicateFieldError,
    EncodeError,
    ForgeJsonApiError,
    RegistryError,
    UnexpectedValueTypeError,
    UnregisteredModelError,
)
from forge_jsonapi.http import HttpMethod
from forge_jsonapi.model.resource import Resource, ResourceIdentity, Timestamps, WrappedResource
from forge_jsonapi.registry.declarations import (
    attribute,
    field_schema,
    meta,
    nested_attribute,
    relationship,
    resource_schema,
    wrapped,
)
from forge_jsonapi.registry.registry import MetadataRegistry
from forge_jsonapi.serializers import request_headers, serialize_document
from forge_jsonapi.transformers import DateTransformer, TimeFormat, Transformer
from forge_jsonapi.values import UNSET

__all__ = [
    "UNSET",
    "DateTransformer",
    "Document",
    "DuplicateFieldError",
    "EncodeError",
    "Encoder",
    "EncoderConfig",
    "EncoderMode",
    "ForgeJsonApiError",
    "HttpMethod",
    "MetadataRegistry",
    "RegistryError",
    "Relationship",
    "Resource",
    "ResourceIdentifier",
    "ResourceIdentity",
    "ResourceObject",
    "TimeFormat",
    "Timestamps",
    "Transformer",
    "UnexpectedValueTypeError",
    "UnregisteredModelError",
    "WrappedResource",
    "attribute",
    "encode",
    "encode_as_client",
    "encode_as_server",
    "encode_collection",
    "encode_with_mode",
    "encode_with_root_meta",
    "field_schema",
    "meta",
    "nested_attribute",
    "relationship",
    "request_headers",
    "resource_schema",
    "serialize_document",
    "wrapped",
]
