# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : encoder.py
#   file_relpath : src/forge_jsonapi/encoding/encoder.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encode resources (or collections of them) into JSON:API documents.

Pipeline per resource body:
    1. Resolve the type discriminator (registered type, else the object's ``type``).
    2. Encode attributes and nested attributes.
    3. Strip the ``timestamps`` attribute when the configuration says so.
    4. Encode relationships as resource linkage.
    5. Encode resource meta.
    6. Keep or omit the ``id``.

After all bodies are built, related resources are harvested into ``included``
(when the configuration maps them) and the root ``meta`` is attached.

Included harvesting is transitive: related resources of related resources are
included too. A visited set keyed by ``(id, type)`` guarantees termination on
cyclic graphs and that each resource appears at most once, in first-seen order.
Primary resources are never repeated in ``included``.

Usage:
    ```python
    from forge_jsonapi import encode, encode_as_server

    doc = encode(article, encode_as_server())
    payload = doc.to_dict()
    ```
"""

from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Any

from forge_jsonapi.config.logging import get_logger
from forge_jsonapi.constants import ATTR_TIMESTAMPS
from forge_jsonapi.document import Document, ResourceObject
from forge_jsonapi.encoding.config import build_config
from forge_jsonapi.encoding.transform import (
    is_linkable,
    transform_attributes,
    transform_meta,
    transform_relationships,
)
from forge_jsonapi.errors import UnregisteredModelError
from forge_jsonapi.registry.fields import FieldKind
from forge_jsonapi.registry.registry import MetadataRegistry
from forge_jsonapi.values import ValueShape, classify_value, is_absent, read_field

if TYPE_CHECKING:
    from collections.abc import Iterable

    from forge_jsonapi.config.logging import ForgeLogger
    from forge_jsonapi.encoding.config import EncoderConfig, EncoderOption

logger: ForgeLogger = get_logger(__name__)

IncludedKey = tuple[Any, str]


class Encoder:
    """Stateless JSON:API encoder.

    Each call resolves a fresh [`EncoderConfig`][forge_jsonapi.encoding.config.EncoderConfig]
    from the given options (after the client-create default), so a single
    instance may be shared freely, including across threads.
    """

    def encode(self, resource: object | None, *options: EncoderOption) -> Document | None:
        """Encode a single resource.

        Args:
            resource: The resource to encode; ``None`` yields ``None``.
            *options: Encoder options (last wins).

        Returns:
            Document | None: The document, or ``None`` for a ``None`` input.

        Raises:
            UnregisteredModelError: If no type discriminator can be resolved.
            UnexpectedValueTypeError: If a nested attribute holds a scalar value.
        """
        if resource is None:
            return None

        config: EncoderConfig = build_config(*options)
        model_type: type = type(resource)
        logger.debug("Encoding %s with %r", model_type.__qualname__, config)

        body: ResourceObject = _encode_resource(model_type, resource, config)
        included: list[ResourceObject] | None = None
        if config.map_included:
            included = _harvest_included([(model_type, resource, body)], config)

        return Document(data=body, included=included, meta=_root_meta(config))

    def encode_collection(
        self, resources: Iterable[object] | None, *options: EncoderOption
    ) -> Document | None:
        """Encode a collection of resources.

        The model type is taken from the first element; every element is encoded
        with the same configuration (including id and timestamp stripping).

        Args:
            resources: The resources to encode; ``None`` yields ``None``.
            *options: Encoder options (last wins).

        Returns:
            Document | None: The document (``data`` is a list, possibly empty),
            or ``None`` for a ``None`` input.

        Raises:
            UnregisteredModelError: If no type discriminator can be resolved.
            UnexpectedValueTypeError: If a nested attribute holds a scalar value.
        """
        if resources is None:
            return None

        config: EncoderConfig = build_config(*options)
        items: list[object] = list(resources)
        if not items:
            logger.debug("Encoding empty collection")
            return Document(
                data=[],
                included=[] if config.map_included else None,
                meta=_root_meta(config),
            )

        model_type: type = type(items[0])
        logger.debug(
            "Encoding collection of %d %s with %r", len(items), model_type.__qualname__, config
        )

        primaries: list[tuple[type, object, ResourceObject]] = [
            (model_type, item, _encode_resource(model_type, item, config)) for item in items
        ]
        included: list[ResourceObject] | None = None
        if config.map_included:
            included = _harvest_included(primaries, config)

        return Document(
            data=[body for _, _, body in primaries],
            included=included,
            meta=_root_meta(config),
        )


def _resource_type(model_type: type, resource: object) -> str:
    """Return the type discriminator of ``resource``."""
    type_name: str | None = MetadataRegistry.resource_type(model_type)
    if type_name is not None:
        return type_name
    own: Any = read_field(resource, "type")
    if is_absent(own) or own == "":
        raise UnregisteredModelError(model_type)
    return str(own)


def _resource_id(resource: object) -> str | None:
    rid: Any = read_field(resource, "id")
    if is_absent(rid) or rid == "":
        return None
    return str(rid)


def _encode_resource(model_type: type, resource: object, config: EncoderConfig) -> ResourceObject:
    """Encode one resource body according to ``config``."""
    type_name: str = _resource_type(model_type, resource)

    attributes: dict[str, Any] = transform_attributes(model_type, resource)
    if config.must_have_empty_timestamps:
        attributes.pop(ATTR_TIMESTAMPS, None)

    relationships = transform_relationships(model_type, resource)
    meta: dict[str, Any] = transform_meta(model_type, resource)

    body = ResourceObject(
        type=type_name,
        id=None if config.must_have_empty_id else _resource_id(resource),
        attributes=attributes or None,
        relationships=relationships or None,
        meta=meta or None,
    )
    logger.trace("Encoded %s body %r", model_type.__qualname__, body.key)
    return body


def _related_objects(model_type: type, resource: object) -> list[tuple[type, object]]:
    """Return ``(model type, object)`` pairs for every loaded related object."""
    related: list[tuple[type, object]] = []
    for mapping in MetadataRegistry.lookup(model_type, FieldKind.RELATIONSHIP).values():
        value: Any = read_field(resource, mapping.key)
        match classify_value(value):
            case ValueShape.SEQUENCE:
                elements: list[Any] = [el for el in value if is_linkable(el)]
            case ValueShape.OBJECT | ValueShape.MAPPING:
                elements = [value]
            case _:
                continue
        target: type | None = mapping.resolve_target()
        for el in elements:
            related.append((target if target is not None else type(el), el))
    return related


def _harvest_included(
    primaries: list[tuple[type, object, ResourceObject]], config: EncoderConfig
) -> list[ResourceObject]:
    """Collect the related resources of ``primaries`` (transitively) for ``included``.

    Related objects are visited breadth-first: direct relationships of the
    primary data come first, in declaration order, followed by their own
    related resources.
    """
    visited: set[IncludedKey] = {body.key for _, _, body in primaries if body.id is not None}
    included: list[ResourceObject] = []
    queue: deque[tuple[type, object]] = deque()
    for model_type, resource, _ in primaries:
        queue.extend(_related_objects(model_type, resource))

    while queue:
        model_type, resource = queue.popleft()
        body: ResourceObject = _encode_resource(model_type, resource, config)
        if body.key in visited:
            continue
        visited.add(body.key)
        included.append(body)
        queue.extend(_related_objects(model_type, resource))

    logger.debug("Harvested %d included resource(s)", len(included))
    return included


def _root_meta(config: EncoderConfig) -> dict[str, Any] | None:
    return dict(config.root_meta) if config.root_meta is not None else None


_DEFAULT_ENCODER = Encoder()


def encode(resource: object | None, *options: EncoderOption) -> Document | None:
    """Encode a single resource with the shared default `Encoder`."""
    return _DEFAULT_ENCODER.encode(resource, *options)


def encode_collection(
    resources: Iterable[object] | None, *options: EncoderOption
) -> Document | None:
    """Encode a collection of resources with the shared default `Encoder`."""
    return _DEFAULT_ENCODER.encode_collection(resources, *options)
