# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : resource.py
#   file_relpath : src/forge_jsonapi/model/resource.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resource identity contract, wrapped value objects and the `Resource` base model.

Design:
    * [`ResourceIdentity`][forge_jsonapi.model.resource.ResourceIdentity] is the
      minimal read contract the encoder depends on (``id``, ``type`` and the three
      timestamps), independent of how a concrete model stores them.
    * [`WrappedResource`][forge_jsonapi.model.resource.WrappedResource] is an
      immutable property bag used for nested attributes and meta payloads. It has
      no identity of its own; its fields are described by ``wrapped()`` declarations.
    * [`Timestamps`][forge_jsonapi.model.resource.Timestamps] is an ordinary wrapped
      value embedded under every resource as the ``timestamps`` nested attribute.
    * [`Resource`][forge_jsonapi.model.resource.Resource] is a frozen dataclass;
      "updates" go through the ``with_*`` builders, which return new instances.
"""

from __future__ import annotations

import dataclasses
from dataclasses import FrozenInstanceError, dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

from forge_jsonapi.constants import ATTR_TIMESTAMPS
from forge_jsonapi.registry.declarations import field_schema, nested_attribute, wrapped
from forge_jsonapi.registry.registry import MetadataRegistry
from forge_jsonapi.transformers import DateTransformer, TimeFormat

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

W = TypeVar("W", bound="WrappedResource")
R = TypeVar("R", bound="Resource")


@runtime_checkable
class ResourceIdentity(Protocol):
    """Minimal read contract of every encodable resource.

    Attributes:
        id: Stable identifier; ``None`` for entities not yet persisted.
        type: JSON:API type discriminator, constant for a model type.
    """

    id: str | None
    type: str | None

    @property
    def created_at(self) -> datetime | None:
        """Creation instant."""
        ...

    @property
    def updated_at(self) -> datetime | None:
        """Last update instant."""
        ...

    @property
    def deleted_at(self) -> datetime | None:
        """Soft-deletion instant, if any."""
        ...


class WrappedResource:
    """Immutable property bag whose fields are mapped by ``wrapped()`` declarations.

    The constructor shallow-copies the input mapping and keyword arguments onto
    the instance. Assignment after construction raises
    ``dataclasses.FrozenInstanceError``; use `replace` instead.

    Example:
        ```python
        info = ArticleInfo({"title": "Hello"})
        renamed = info.replace(title="Hello again")
        ```
    """

    def __init__(self, data: Mapping[str, Any] | None = None, /, **props: Any) -> None:
        values: dict[str, Any] = dict(data) if data else {}
        values.update(props)
        for name, value in values.items():
            object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise FrozenInstanceError(f"cannot assign to field {name!r}")

    def __delattr__(self, name: str) -> None:
        raise FrozenInstanceError(f"cannot delete field {name!r}")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return vars(self) == vars(other)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        props = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({props})"

    def replace(self: W, **changes: Any) -> W:
        """Return a copy of this value with ``changes`` applied."""
        return type(self)(vars(self), **changes)

    def as_dict(self) -> dict[str, Any]:
        """Return a shallow copy of the instance properties."""
        return dict(vars(self))


_TIMESTAMP_FORMAT = DateTransformer(TimeFormat.ISO8601)


@field_schema(
    wrapped("createdAt", key="created_at", transformer=_TIMESTAMP_FORMAT),
    wrapped("updatedAt", key="updated_at", transformer=_TIMESTAMP_FORMAT),
    wrapped("deletedAt", key="deleted_at", transformer=_TIMESTAMP_FORMAT),
)
class Timestamps(WrappedResource):
    """Creation, update and optional deletion instants of a resource."""

    created_at: datetime | None = None
    updated_at: datetime | None = None
    deleted_at: datetime | None = None

    @classmethod
    def from_identity(cls, res: ResourceIdentity) -> Timestamps:
        """Copy the timestamps exposed by any `ResourceIdentity`."""
        return cls(
            created_at=res.created_at,
            updated_at=res.updated_at,
            deleted_at=res.deleted_at,
        )

    def with_created_at(self, created_at: datetime | None) -> Timestamps:
        """Return a copy with ``created_at`` replaced."""
        return self.replace(created_at=created_at)

    def with_updated_at(self, updated_at: datetime | None) -> Timestamps:
        """Return a copy with ``updated_at`` replaced."""
        return self.replace(updated_at=updated_at)

    def with_deleted_at(self, deleted_at: datetime | None) -> Timestamps:
        """Return a copy with ``deleted_at`` replaced."""
        return self.replace(deleted_at=deleted_at)


@field_schema(nested_attribute(ATTR_TIMESTAMPS, Timestamps))
@dataclass(frozen=True)
class Resource:
    """Base class of every resource model.

    Subclasses are frozen dataclasses decorated with
    [`resource_schema`][forge_jsonapi.registry.declarations.resource_schema].
    When ``type`` is not given, it is filled from the registered discriminator.
    An empty ``id`` is normalized to ``None`` (not yet persisted).

    Attributes:
        id: Stable identifier, ``None`` until the server assigns one.
        type: JSON:API type discriminator.
        timestamps: Creation/update/deletion instants.
    """

    id: str | None = None
    type: str | None = None
    timestamps: Timestamps | None = None

    def __post_init__(self) -> None:
        if not self.id:
            object.__setattr__(self, "id", None)
        if self.type is None:
            object.__setattr__(self, "type", MetadataRegistry.resource_type(self.__class__))

    @property
    def created_at(self) -> datetime | None:
        """Creation instant, or ``None`` without timestamps."""
        return self.timestamps.created_at if self.timestamps is not None else None

    @property
    def updated_at(self) -> datetime | None:
        """Last update instant, or ``None`` without timestamps."""
        return self.timestamps.updated_at if self.timestamps is not None else None

    @property
    def deleted_at(self) -> datetime | None:
        """Soft-deletion instant, or ``None``."""
        return self.timestamps.deleted_at if self.timestamps is not None else None

    def identifier(self) -> tuple[str | None, str | None]:
        """Return the ``(id, type)`` pair identifying this resource."""
        return (self.id, self.type)

    def with_id(self: R, id: str | None) -> R:  # noqa: A002
        """Return a copy with ``id`` replaced."""
        return dataclasses.replace(self, id=id)

    def with_type(self: R, type: str | None) -> R:  # noqa: A002
        """Return a copy with ``type`` replaced."""
        return dataclasses.replace(self, type=type)

    def with_timestamps(self: R, timestamps: Timestamps | None) -> R:
        """Return a copy with ``timestamps`` replaced."""
        return dataclasses.replace(self, timestamps=timestamps)

    def with_resource(self: R, res: ResourceIdentity) -> R:
        """Return a copy carrying the identity and timestamps of ``res``."""
        return dataclasses.replace(
            self,
            id=res.id,
            type=res.type,
            timestamps=Timestamps.from_identity(res),
        )
