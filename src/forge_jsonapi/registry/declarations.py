# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : declarations.py
#   file_relpath : src/forge_jsonapi/registry/declarations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declarative schema front-end for the metadata registry.

Models declare their wire mapping once, at class definition time, with a class
decorator and a list of field declarations:

```python
from forge_jsonapi import Resource, attribute, nested_attribute, relationship, resource_schema


@resource_schema(
    "articles",
    attribute("summary"),
    attribute("tagsByKeyword", key="tags_by_keyword"),
    nested_attribute("info", ArticleInfo),
    relationship("author", Author),
    relationship("subarticles", lambda: Article, key="related_articles"),
)
@dataclass(frozen=True)
class Article(Resource):
    ...
```

`resource_schema` additionally registers the JSON:API ``type`` discriminator;
`field_schema` only registers fields and is used for base classes and for
wrapped value objects.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, TypeVar

from forge_jsonapi.registry.fields import FieldKind, FieldMapping
from forge_jsonapi.registry.registry import MetadataRegistry

if TYPE_CHECKING:
    from forge_jsonapi.registry.fields import TargetRef
    from forge_jsonapi.transformers import Transformer

T = TypeVar("T", bound=type)


def attribute(
    name: str,
    *,
    key: str | None = None,
    transformer: Transformer | None = None,
) -> FieldMapping:
    """Declare an attribute (scalar, array or dictionary value).

    Args:
        name: Wire field name.
        key: Owner property name (defaults to ``name``).
        transformer: Optional value transformer.

    Returns:
        The field declaration.
    """
    return FieldMapping(FieldKind.ATTRIBUTE, name, key or name, transformer=transformer)


def nested_attribute(name: str, target: TargetRef, *, key: str | None = None) -> FieldMapping:
    """Declare a nested attribute whose value is a wrapped object of class ``target``.

    Args:
        name: Wire field name.
        target: The wrapped value class (or a callable returning it).
        key: Owner property name (defaults to ``name``).

    Returns:
        The field declaration.
    """
    return FieldMapping(FieldKind.NESTED_ATTRIBUTE, name, key or name, target=target)


def relationship(name: str, target: TargetRef, *, key: str | None = None) -> FieldMapping:
    """Declare a to-one or to-many relationship to resources of class ``target``.

    Args:
        name: Wire field name.
        target: The related model class (or a callable returning it).
        key: Owner property name (defaults to ``name``).

    Returns:
        The field declaration.
    """
    return FieldMapping(FieldKind.RELATIONSHIP, name, key or name, target=target)


def meta(
    name: str,
    target: TargetRef | None = None,
    *,
    key: str | None = None,
    transformer: Transformer | None = None,
) -> FieldMapping:
    """Declare a field serialized under the resource's ``meta`` section.

    Args:
        name: Wire field name.
        target: Optional wrapped value class describing the payload's own fields.
        key: Owner property name (defaults to ``name``).
        transformer: Optional transformer for scalar meta values.

    Returns:
        The field declaration.
    """
    return FieldMapping(FieldKind.META, name, key or name, target=target, transformer=transformer)


def wrapped(
    name: str,
    *,
    key: str | None = None,
    transformer: Transformer | None = None,
) -> FieldMapping:
    """Declare a field of a wrapped value object.

    Args:
        name: Wire field name.
        key: Property name on the wrapped object (defaults to ``name``).
        transformer: Optional value transformer.

    Returns:
        The field declaration.
    """
    return FieldMapping(FieldKind.WRAPPED, name, key or name, transformer=transformer)


def field_schema(*fields: FieldMapping) -> Callable[[T], T]:
    """Class decorator registering ``fields`` for the decorated class.

    Args:
        *fields: Field declarations built with the factories of this module.

    Returns:
        A decorator returning the class unchanged.
    """

    def _decorator(model_type: T) -> T:
        for mapping in fields:
            MetadataRegistry.register(model_type, mapping.name, mapping)
        return model_type

    return _decorator


def resource_schema(type_name: str, *fields: FieldMapping) -> Callable[[T], T]:
    """Class decorator registering a resource model's ``type`` and ``fields``.

    Args:
        type_name: The JSON:API ``type`` discriminator.
        *fields: Field declarations built with the factories of this module.

    Returns:
        A decorator returning the class unchanged.
    """

    def _decorator(model_type: T) -> T:
        MetadataRegistry.register_type(model_type, type_name)
        return field_schema(*fields)(model_type)

    return _decorator
