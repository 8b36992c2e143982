# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : registry.py
#   file_relpath : src/forge_jsonapi/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Process-wide metadata registry for model field mappings.

The registry associates each model type with:

* its JSON:API ``type`` discriminator, and
* its field-mapping declarations, grouped by
  [`FieldKind`][forge_jsonapi.registry.fields.FieldKind] and keyed by wire field name.

Declarations are resolved through the model's inheritance chain (``__mro__``):
a subtype inherits every mapping of its bases and may not redeclare a field name
its bases already declare.

Typical usage:
    ```python
    from forge_jsonapi.registry import FieldKind, MetadataRegistry

    attrs = MetadataRegistry.lookup(Article, FieldKind.ATTRIBUTE)  # read-only proxy
    for name, mapping in attrs.items():
        print(name, mapping.key)

    for meta in MetadataRegistry.iter_meta():
        print(meta.type_name, [f.name for f in meta.fields])
    ```

Warning:
    Registration mutates global state shared across the process. It is meant to
    happen once, at model definition time (the declarative decorators in
    [`forge_jsonapi.registry.declarations`][forge_jsonapi.registry.declarations] do
    this). Encoding only ever reads the registry. In tests, pair temporary
    registrations with `MetadataRegistry.unregister` in a ``try/finally``.
"""

from __future__ import annotations

from dataclasses import dataclass
from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from forge_jsonapi.config.logging import get_logger
from forge_jsonapi.errors import DuplicateFieldError, RegistryError
from forge_jsonapi.registry.fields import FieldKind

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from forge_jsonapi.config.logging import ForgeLogger
    from forge_jsonapi.registry.fields import FieldMapping

logger: ForgeLogger = get_logger(__name__)

# Kinds sharing one member-name namespace. JSON:API forbids an attribute and a
# relationship with the same name; meta and wrapped fields live in their own objects.
_NAMESPACES: Final[dict[FieldKind, str]] = {
    FieldKind.ATTRIBUTE: "fields",
    FieldKind.NESTED_ATTRIBUTE: "fields",
    FieldKind.RELATIONSHIP: "fields",
    FieldKind.META: "meta",
    FieldKind.WRAPPED: "wrapped",
}


@dataclass(frozen=True)
class FieldMeta:
    """Stable, serializable metadata about one field mapping."""

    name: str
    kind: str
    key: str
    target: str = ""
    transformer: str = ""


@dataclass(frozen=True)
class SchemaMeta:
    """Stable, serializable metadata about a registered resource model.

    Attributes:
        type_name: The JSON:API ``type`` discriminator.
        model: Qualified ``module.Class`` name of the model.
        fields: All field mappings (inherited ones first).
    """

    type_name: str
    model: str
    fields: tuple[FieldMeta, ...] = ()


class MetadataRegistry:
    """Class-level registry of model field mappings.

    Notes:
        - Lookups never fail: a type with no mappings of a kind yields an empty mapping.
        - Returned mappings are `MappingProxyType` views and must not be mutated.
        - Thread safe via RLock; process-global state.
    """

    _lock = RLock()

    _fields: dict[type, dict[FieldKind, dict[str, FieldMapping]]] = {}
    _types: dict[type, str] = {}

    @classmethod
    def _declared_names(cls, model_type: type, namespace: str) -> set[str]:
        """Return names declared in ``namespace`` by ``model_type`` and its bases."""
        names: set[str] = set()
        for klass in model_type.__mro__:
            for kind, mappings in cls._fields.get(klass, {}).items():
                if _NAMESPACES[kind] == namespace:
                    names.update(mappings)
        return names

    @classmethod
    def register(cls, model_type: type, name: str, mapping: FieldMapping) -> None:
        """Register a field mapping for ``model_type`` under the wire name ``name``.

        Args:
            model_type (type): The model class declaring the field.
            name (str): Wire field name; must equal ``mapping.name``.
            mapping (FieldMapping): The declaration.

        Raises:
            RegistryError: If ``name`` and ``mapping.name`` disagree.
            DuplicateFieldError: If ``name`` is already declared (in the same
                namespace) by ``model_type`` or one of its bases.
        """
        if name != mapping.name:
            raise RegistryError(
                f"Wire name {name!r} does not match the mapping name {mapping.name!r}."
            )
        with cls._lock:
            if name in cls._declared_names(model_type, _NAMESPACES[mapping.kind]):
                raise DuplicateFieldError(model_type, name)
            kinds = cls._fields.setdefault(model_type, {})
            kinds.setdefault(mapping.kind, {})[name] = mapping
        logger.trace(
            "Registered %s %r on %s (key=%r)",
            mapping.kind.value,
            name,
            model_type.__qualname__,
            mapping.key,
        )

    @classmethod
    def register_type(cls, model_type: type, type_name: str) -> None:
        """Register the JSON:API ``type`` discriminator for ``model_type``.

        Args:
            model_type (type): The model class.
            type_name (str): The ``type`` member value for all its instances.

        Raises:
            RegistryError: If ``type_name`` is empty or a different discriminator
                is already registered for ``model_type``.
        """
        if not type_name:
            raise RegistryError(f"Empty JSON:API type for {model_type.__qualname__}.")
        with cls._lock:
            current: str | None = cls._types.get(model_type)
            if current is not None and current != type_name:
                raise RegistryError(
                    f"{model_type.__qualname__} is already registered as {current!r}."
                )
            cls._types[model_type] = type_name
        logger.debug("Registered resource type %r for %s", type_name, model_type.__qualname__)

    @classmethod
    def resource_type(cls, model_type: type) -> str | None:
        """Return the ``type`` discriminator of ``model_type`` (inherited if needed).

        Args:
            model_type (type): The model class.

        Returns:
            str | None: The discriminator, or ``None`` if neither the class nor
            any base registered one.
        """
        with cls._lock:
            for klass in model_type.__mro__:
                type_name: str | None = cls._types.get(klass)
                if type_name is not None:
                    return type_name
        return None

    @classmethod
    def lookup(cls, model_type: type, kind: FieldKind) -> Mapping[str, FieldMapping]:
        """Return all mappings of ``kind`` for ``model_type``, bases first.

        Args:
            model_type (type): The model class.
            kind (FieldKind): The declaration kind.

        Returns:
            Mapping[str, FieldMapping]: Read-only mapping of wire name to mapping;
            empty when nothing of that kind is declared.
        """
        merged: dict[str, FieldMapping] = {}
        with cls._lock:
            for klass in reversed(model_type.__mro__):
                merged.update(cls._fields.get(klass, {}).get(kind, {}))
        return MappingProxyType(merged)

    @classmethod
    def is_registered(cls, model_type: type) -> bool:
        """Return True if ``model_type`` (or a base) declares fields or a type."""
        with cls._lock:
            return any(k in cls._fields or k in cls._types for k in model_type.__mro__)

    @classmethod
    def model_types(cls) -> tuple[type, ...]:
        """Return model classes with a registered ``type``, sorted by discriminator."""
        with cls._lock:
            return tuple(sorted(cls._types, key=lambda k: (cls._types[k], k.__qualname__)))

    @classmethod
    def iter_meta(cls) -> Iterator[SchemaMeta]:
        """Iterate over stable metadata for registered resource models.

        Yields:
            SchemaMeta: Serializable metadata about each resource model.
        """
        for model_type in cls.model_types():
            fields: list[FieldMeta] = []
            for kind in FieldKind:
                for mapping in cls.lookup(model_type, kind).values():
                    fields.append(
                        FieldMeta(
                            name=mapping.name,
                            kind=kind.value,
                            key=mapping.key,
                            target=mapping.target_name,
                            transformer=repr(mapping.transformer) if mapping.transformer else "",
                        )
                    )
            yield SchemaMeta(
                type_name=cls._types[model_type],
                model=f"{model_type.__module__}.{model_type.__qualname__}",
                fields=tuple(fields),
            )

    @classmethod
    def unregister(cls, model_type: type) -> bool:
        """Drop every declaration made directly on ``model_type``.

        Args:
            model_type (type): The model class.

        Returns:
            bool: `True` if anything was removed, else `False`.

        Notes:
            Intended for test scaffolding; subclasses of ``model_type`` keep
            their own declarations.
        """
        with cls._lock:
            had_fields = cls._fields.pop(model_type, None) is not None
            had_type = cls._types.pop(model_type, None) is not None
        return had_fields or had_type
