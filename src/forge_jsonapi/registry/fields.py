# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : fields.py
#   file_relpath : src/forge_jsonapi/registry/fields.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Field-mapping declarations stored in the metadata registry.

A [`FieldMapping`][forge_jsonapi.registry.fields.FieldMapping] associates a *wire
field name* with the owner property it is read from, an optional target model
class and an optional value transformer. Mappings are registered once per model
type (never per instance) and are immutable.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Union

if TYPE_CHECKING:
    from forge_jsonapi.transformers import Transformer

# A target is either the model class itself or a zero-argument callable returning it,
# which allows a model to reference itself (or a class defined later in the module).
TargetRef = Union[type, Callable[[], type]]


class FieldKind(str, Enum):
    """Kinds of field-mapping declarations.

    Attributes:
        ATTRIBUTE: Scalar, array or dictionary value serialized under ``attributes``.
        NESTED_ATTRIBUTE: Embedded wrapped object (or array of them) serialized
            inline under ``attributes``.
        RELATIONSHIP: Reference to another resource, serialized as resource identifier(s).
        META: Value serialized under the resource's ``meta`` section.
        WRAPPED: Field of a wrapped value object (nested attribute or meta payload).
    """

    ATTRIBUTE = "attribute"
    NESTED_ATTRIBUTE = "nested_attribute"
    RELATIONSHIP = "relationship"
    META = "meta"
    WRAPPED = "wrapped"


@dataclass(frozen=True, slots=True)
class FieldMapping:
    """Immutable mapping from a wire field name to an owner property.

    Attributes:
        kind: Declaration kind.
        name: Wire field name (the key used in the document).
        key: Owner property the value is read from. Defaults to ``name``.
        target: Target model class (or a callable returning it) for nested
            attributes, wrapped meta payloads and relationships.
        transformer: Optional value transformer applied on serialization.
    """

    kind: FieldKind
    name: str
    key: str = ""
    target: TargetRef | None = None
    transformer: Transformer | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("FieldMapping.name is required.")
        if not self.key:
            object.__setattr__(self, "key", self.name)

    def resolve_target(self) -> type | None:
        """Return the concrete target class, calling a deferred target if needed.

        Returns:
            The target class, or ``None`` when the mapping has no target.
        """
        if self.target is None:
            return None
        if isinstance(self.target, type):
            return self.target
        return self.target()

    @property
    def target_name(self) -> str:
        """Return the qualified name of the target class, or an empty string."""
        target: type | None = self.resolve_target()
        return target.__qualname__ if target is not None else ""
