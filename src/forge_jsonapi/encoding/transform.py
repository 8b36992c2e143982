# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : transform.py
#   file_relpath : src/forge_jsonapi/encoding/transform.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-section transforms: object fields → wire members.

Each transform reads the mappings of one
[`FieldKind`][forge_jsonapi.registry.fields.FieldKind] from the registry, reads
the owner properties from the source object and returns the encoded section.

Rules shared by all transforms:
- A missing property (`UNSET`) is absent and contributes no key.
- ``None`` is skipped everywhere except in relationships, where it encodes an
  explicitly cleared relationship (``{"data": null}``).
- Dictionary-like values are flattened into plain ``dict`` objects, and so are
  meta or nested objects whose mapping declares no target.
- Transformers are trusted: their output is copied unchanged.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from forge_jsonapi.config.logging import get_logger
from forge_jsonapi.document import Relationship, ResourceIdentifier
from forge_jsonapi.errors import UnexpectedValueTypeError, UnregisteredModelError
from forge_jsonapi.registry.fields import FieldKind
from forge_jsonapi.registry.registry import MetadataRegistry
from forge_jsonapi.values import ValueShape, classify_value, is_absent, read_field

if TYPE_CHECKING:
    from forge_jsonapi.config.logging import ForgeLogger
    from forge_jsonapi.registry.fields import FieldMapping

logger: ForgeLogger = get_logger(__name__)


def _encode_value(mapping: FieldMapping, value: Any, shape: ValueShape) -> Any:
    """Encode a present attribute-like value (mapping flattening, then transformer)."""
    if shape is ValueShape.MAPPING:
        return dict(value)
    if mapping.transformer is not None:
        return mapping.transformer.serialize(value)
    if shape is ValueShape.SEQUENCE:
        return list(value)
    return value


def transform_attributes(model_type: type, resource: object) -> dict[str, Any]:
    """Encode the ``attributes`` member, including nested attributes.

    Args:
        model_type: The model class whose mappings apply.
        resource: The source object.

    Returns:
        dict[str, Any]: Wire attribute name → encoded value.
    """
    properties: dict[str, Any] = {}

    for name, mapping in MetadataRegistry.lookup(model_type, FieldKind.ATTRIBUTE).items():
        value: Any = read_field(resource, mapping.key)
        shape: ValueShape = classify_value(value)
        match shape:
            case ValueShape.UNSET | ValueShape.NULL:
                continue
            case _:
                properties[name] = _encode_value(mapping, value, shape)

    properties.update(transform_nested_attributes(model_type, resource))
    return properties


def transform_nested_attributes(model_type: type, resource: object) -> dict[str, Any]:
    """Encode nested attributes (wrapped objects or arrays of them).

    Args:
        model_type: The model class whose mappings apply.
        resource: The source object.

    Returns:
        dict[str, Any]: Wire attribute name → encoded object or list of objects.

    Raises:
        UnexpectedValueTypeError: If a nested attribute holds a value that is
            neither an object nor a sequence.
    """
    properties: dict[str, Any] = {}

    for name, mapping in MetadataRegistry.lookup(model_type, FieldKind.NESTED_ATTRIBUTE).items():
        value: Any = read_field(resource, mapping.key)
        match classify_value(value):
            case ValueShape.UNSET | ValueShape.NULL:
                continue
            case ValueShape.SEQUENCE:
                properties[name] = [transform_wrapped(mapping, el) for el in value]
            case ValueShape.OBJECT | ValueShape.MAPPING:
                properties[name] = transform_wrapped(mapping, value)
            case _:
                raise UnexpectedValueTypeError(model_type, name, value)

    return properties


def transform_wrapped(mapping: FieldMapping, wrapped: Any) -> dict[str, Any] | None:
    """Encode one wrapped value using the ``wrapped()`` fields of the mapping's target.

    Without a declared target, a mapping or the object's own properties are
    copied into a plain ``dict``.

    Args:
        mapping: The nested-attribute or meta mapping owning the value.
        wrapped: The wrapped object (or plain mapping) to encode.

    Returns:
        dict[str, Any] | None: The encoded object, or ``None`` for an absent element.
    """
    if is_absent(wrapped):
        return None

    target: type | None = mapping.resolve_target()
    if target is None:
        if classify_value(wrapped) is ValueShape.MAPPING:
            return dict(wrapped)
        return dict(vars(wrapped))

    properties: dict[str, Any] = {}
    for sub_name, sub_mapping in MetadataRegistry.lookup(target, FieldKind.WRAPPED).items():
        sub_value: Any = read_field(wrapped, sub_mapping.key)
        shape: ValueShape = classify_value(sub_value)
        if shape in (ValueShape.UNSET, ValueShape.NULL):
            continue
        properties[sub_name] = _encode_value(sub_mapping, sub_value, shape)
    return properties


def transform_meta(model_type: type, resource: object) -> dict[str, Any]:
    """Encode the resource ``meta`` member.

    Same as nested attributes, except that dictionary values are flattened and
    scalar values are copied (through the transformer, if any).

    Args:
        model_type: The model class whose mappings apply.
        resource: The source object.

    Returns:
        dict[str, Any]: Wire meta name → encoded value.
    """
    properties: dict[str, Any] = {}

    for name, mapping in MetadataRegistry.lookup(model_type, FieldKind.META).items():
        value: Any = read_field(resource, mapping.key)
        shape: ValueShape = classify_value(value)
        match shape:
            case ValueShape.UNSET | ValueShape.NULL:
                continue
            case ValueShape.MAPPING:
                properties[name] = dict(value)
            case ValueShape.SEQUENCE if mapping.target is not None:
                properties[name] = [transform_wrapped(mapping, el) for el in value]
            case ValueShape.OBJECT:
                properties[name] = transform_wrapped(mapping, value)
            case _:
                properties[name] = _encode_value(mapping, value, shape)

    return properties


def is_linkable(value: Any) -> bool:
    """Return ``True`` when ``value`` can stand for a related resource (object or mapping)."""
    return classify_value(value) in (ValueShape.OBJECT, ValueShape.MAPPING)


def _identifier(related: Any, target: type | None) -> ResourceIdentifier:
    """Build the resource identifier of a related object.

    Raises:
        UnregisteredModelError: Neither the relationship target nor the related
            object provides a type discriminator.
    """
    rid: Any = read_field(related, "id")
    target_type: str | None = MetadataRegistry.resource_type(target) if target else None
    if target_type is None:
        own_type: Any = read_field(related, "type")
        if is_absent(own_type) or own_type == "":
            raise UnregisteredModelError(target if target is not None else type(related))
        target_type = str(own_type)
    return ResourceIdentifier(
        id=None if is_absent(rid) or rid == "" else str(rid),
        type=target_type,
    )


def _linked_elements(model_type: type, name: str, value: Any) -> list[Any]:
    """Return the linkable elements of a to-many value; ``None`` and scalars are dropped."""
    elements: list[Any] = []
    for el in value:
        if el is None:
            continue
        if not is_linkable(el):
            logger.warning(
                "%s.%s: ignoring relationship element of type %s",
                model_type.__qualname__,
                name,
                type(el).__name__,
            )
            continue
        elements.append(el)
    return elements


def transform_relationships(model_type: type, resource: object) -> dict[str, Relationship]:
    """Encode the ``relationships`` member as resource linkage.

    An absent relationship contributes no key ("not loaded"); ``None`` encodes
    an explicit clear. Identifiers use the *target* model's discriminator,
    falling back to the related object's own ``type``. Scalar values (and scalar
    elements of a to-many value) cannot be linked and are skipped with a warning.

    Args:
        model_type: The model class whose mappings apply.
        resource: The source object.

    Returns:
        dict[str, Relationship]: Wire relationship name → relationship object.

    Raises:
        UnregisteredModelError: A related object has no type discriminator.
    """
    properties: dict[str, Relationship] = {}

    for name, mapping in MetadataRegistry.lookup(model_type, FieldKind.RELATIONSHIP).items():
        value: Any = read_field(resource, mapping.key)
        target: type | None = mapping.resolve_target()

        match classify_value(value):
            case ValueShape.UNSET:
                continue
            case ValueShape.NULL:
                properties[name] = Relationship(data=None)
            case ValueShape.SEQUENCE:
                properties[name] = Relationship(
                    data=[
                        _identifier(el, target)
                        for el in _linked_elements(model_type, name, value)
                    ]
                )
            case ValueShape.OBJECT | ValueShape.MAPPING:
                properties[name] = Relationship(data=_identifier(value, target))
            case _:
                logger.warning(
                    "%s.%s: ignoring relationship value of type %s",
                    model_type.__qualname__,
                    name,
                    type(value).__name__,
                )

    return properties
