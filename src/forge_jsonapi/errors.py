# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : errors.py
#   file_relpath : src/forge_jsonapi/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the Forge JSON:API mapping engine.

All library errors derive from [`ForgeJsonApiError`][forge_jsonapi.errors.ForgeJsonApiError]
and additionally subclass the closest builtin exception, so callers may catch
either the project hierarchy or the standard one (``ValueError``, ``TypeError``,
``LookupError``).

Usage:
    Registry errors signal a broken model declaration and are raised at class
    definition time. Encode errors signal a mismatch between the declared
    metadata and the runtime shape of an object (a programmer error); they are
    never used for the valid "nothing to encode" case.
"""

from __future__ import annotations


class ForgeJsonApiError(Exception):
    """Base class for all Forge JSON:API errors."""


class RegistryError(ForgeJsonApiError, ValueError):
    """Error for invalid field-mapping declarations."""


class DuplicateFieldError(RegistryError):
    """A wire field name is declared twice for a model type or one of its bases.

    Attributes:
        model_type: The model class receiving the duplicate declaration.
        name: The offending wire field name.
    """

    def __init__(self, model_type: type, name: str) -> None:
        self.model_type: type = model_type
        self.name: str = name
        super().__init__(
            f"Field {name!r} is already declared for {model_type.__qualname__} "
            "or one of its base types."
        )


class UnregisteredModelError(ForgeJsonApiError, LookupError):
    """A model has no registered `type` discriminator and the instance carries none."""

    def __init__(self, model_type: type) -> None:
        self.model_type: type = model_type
        super().__init__(
            f"No JSON:API type registered for {model_type.__qualname__}; "
            "declare it with @resource_schema(...) or set `type` on the instance."
        )


class EncodeError(ForgeJsonApiError, TypeError):
    """Error for objects that cannot be encoded with their declared metadata."""


class UnexpectedValueTypeError(EncodeError):
    """A nested attribute holds a value that is neither a sequence nor an object.

    Attributes:
        model_type: The owning model class.
        name: The wire field name of the nested attribute.
        value: The offending runtime value.
    """

    def __init__(self, model_type: type, name: str, value: object) -> None:
        self.model_type: type = model_type
        self.name: str = name
        self.value: object = value
        super().__init__(
            f"{model_type.__qualname__}.{name}: unexpected value of type "
            f"{type(value).__name__} for a nested attribute (expected an object "
            "or a sequence of objects)."
        )
