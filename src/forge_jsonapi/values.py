# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : values.py
#   file_relpath : src/forge_jsonapi/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value primitives shared by the model layer and the encoder.

This module defines:
- the [`UNSET`][forge_jsonapi.values.UNSET] sentinel, which marks a field as
  *absent* ("not loaded") as opposed to ``None`` ("explicitly cleared");
- [`ValueShape`][forge_jsonapi.values.ValueShape], a small tagged variant over
  runtime values so the encoder can dispatch with ``match`` instead of scattering
  ``isinstance`` checks;
- [`read_field`][forge_jsonapi.values.read_field], the single accessor the encoder
  uses to read an owner property from an object or a mapping.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import date, datetime, time
from decimal import Decimal
from enum import Enum
from typing import Any, Final


class _UnsetType:
    """Type of the `UNSET` singleton."""

    _instance: _UnsetType | None = None

    def __new__(cls) -> _UnsetType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"

    def __reduce__(self) -> str:
        return "UNSET"


UNSET: Final[Any] = _UnsetType()


def is_unset(value: object) -> bool:
    """Return True if ``value`` is the `UNSET` sentinel."""
    return value is UNSET


def is_absent(value: object) -> bool:
    """Return True for ``None`` and `UNSET` (the encoder skips both for attributes)."""
    return value is None or value is UNSET


class ValueShape(Enum):
    """Runtime shape of a field value, as seen by the encoder.

    Attributes:
        UNSET: The field is absent (never set, or missing on the source object).
        NULL: The field is explicitly ``None``.
        SCALAR: Strings, numbers, booleans, dates and other leaf values.
        MAPPING: Dictionary-like values (flattened into plain JSON objects).
        SEQUENCE: Lists, tuples and other non-string sequences.
        OBJECT: Anything else carrying attributes (models, wrapped values).
    """

    UNSET = "unset"
    NULL = "null"
    SCALAR = "scalar"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    OBJECT = "object"


_SCALAR_TYPES: tuple[type, ...] = (
    str,
    bytes,
    bytearray,
    bool,
    int,
    float,
    complex,
    Decimal,
    datetime,
    date,
    time,
    Enum,
)


def classify_value(value: object) -> ValueShape:
    """Classify a runtime value into a [`ValueShape`][forge_jsonapi.values.ValueShape].

    Args:
        value: The value to classify.

    Returns:
        The value's shape. Strings and bytes are scalars, never sequences.
    """
    if value is UNSET:
        return ValueShape.UNSET
    if value is None:
        return ValueShape.NULL
    if isinstance(value, _SCALAR_TYPES):
        return ValueShape.SCALAR
    if isinstance(value, Mapping):
        return ValueShape.MAPPING
    if isinstance(value, (Sequence, set, frozenset)):
        return ValueShape.SEQUENCE
    if hasattr(value, "__dict__") or hasattr(type(value), "__slots__"):
        return ValueShape.OBJECT
    return ValueShape.SCALAR


def read_field(source: object, key: str) -> Any:
    """Read the owner property ``key`` from ``source``.

    Mappings are read by key, other objects by attribute. A missing property is
    reported as `UNSET` rather than raising: the registry performs no validation
    against the runtime shape of an object.

    Args:
        source: The object (or mapping) to read from.
        key: The owner property name.

    Returns:
        The property value, or `UNSET` if the property does not exist.
    """
    if isinstance(source, Mapping):
        return source.get(key, UNSET)
    return getattr(source, key, UNSET)
