# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : document.py
#   file_relpath : src/forge_jsonapi/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Wire-level JSON:API document produced by the encoder.

Shape (see https://jsonapi.org/format/#document-structure):

```
Document := {
  data: ResourceObject | ResourceObject[],
  included?: ResourceObject[],   // present only when included resources are mapped
  meta?: object                  // present only when a root meta was supplied
}
ResourceObject := {
  id?: string,                   // absent for client-create documents
  type: string,
  attributes?: {...},
  relationships?: { name: { data: {id,type} | [{id,type}] | null } },
  meta?: {...}
}
```

Documents are built fresh per encode call. Equality is structural, so encoding
the same resource twice with the same options compares equal.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class ResourceIdentifier:
    """Minimal ``{id, type}`` pair referencing a resource."""

    id: str | None
    type: str | None

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation (``id`` omitted when unknown)."""
        out: dict[str, Any] = {}
        if self.id is not None:
            out["id"] = self.id
        out["type"] = self.type
        return out


ResourceLinkage = Union[ResourceIdentifier, list[ResourceIdentifier], None]


@dataclass(frozen=True, slots=True)
class Relationship:
    """Relationship object carrying resource linkage.

    ``data=None`` encodes an explicitly cleared to-one relationship; an empty
    list encodes an empty to-many relationship.
    """

    data: ResourceLinkage

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation."""
        if self.data is None:
            return {"data": None}
        if isinstance(self.data, list):
            return {"data": [rid.to_dict() for rid in self.data]}
        return {"data": self.data.to_dict()}


@dataclass(frozen=True, slots=True)
class ResourceObject:
    """A resource body: identity plus attributes, relationships and meta.

    Attributes:
        type: JSON:API type discriminator.
        id: Resource id; ``None`` when omitted (client-create or unsaved).
        attributes: Encoded attributes, or ``None`` when there are none.
        relationships: Encoded relationships, or ``None`` when there are none.
        meta: Encoded resource meta, or ``None`` when there is none.
    """

    type: str
    id: str | None = None
    attributes: dict[str, Any] | None = None
    relationships: dict[str, Relationship] | None = None
    meta: dict[str, Any] | None = None

    @property
    def key(self) -> tuple[str | None, str]:
        """Return the ``(id, type)`` pair used to deduplicate included resources."""
        return (self.id, self.type)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation, omitting absent members."""
        out: dict[str, Any] = {}
        if self.id is not None:
            out["id"] = self.id
        out["type"] = self.type
        if self.attributes is not None:
            out["attributes"] = self.attributes
        if self.relationships is not None:
            out["relationships"] = {
                name: rel.to_dict() for name, rel in self.relationships.items()
            }
        if self.meta is not None:
            out["meta"] = self.meta
        return out


PrimaryData = Union[ResourceObject, list[ResourceObject]]


@dataclass(frozen=True, slots=True)
class Document:
    """Top-level JSON:API document.

    Attributes:
        data: The primary data (a single resource body or a list of them).
        included: Side-loaded related resources, or ``None`` when not mapped.
        meta: Top-level meta object, or ``None``.
    """

    data: PrimaryData
    included: list[ResourceObject] | None = None
    meta: dict[str, Any] | None = None

    @property
    def is_collection(self) -> bool:
        """Return True if the primary data is a list."""
        return isinstance(self.data, list)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire representation as plain JSON-compatible containers."""
        out: dict[str, Any] = {}
        if isinstance(self.data, list):
            out["data"] = [res.to_dict() for res in self.data]
        else:
            out["data"] = self.data.to_dict()
        if self.included is not None:
            out["included"] = [res.to_dict() for res in self.included]
        if self.meta is not None:
            out["meta"] = self.meta
        return out
