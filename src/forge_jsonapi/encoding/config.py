# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : config.py
#   file_relpath : src/forge_jsonapi/encoding/config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoder configuration: named presets resolved into encode flags.

Design:
    * Each encode call derives a *fresh* configuration from the options it is
      given; nothing is carried over between calls.
    * Options are plain callables applied in order to a
      [`MutableEncoderConfig`][forge_jsonapi.encoding.config.MutableEncoderConfig]
      (last wins). The default preset (client-create) is always applied first, so
      an encode call without options yields a safe "new resource" shape.
    * `MutableEncoderConfig.freeze()` returns the immutable
      [`EncoderConfig`][forge_jsonapi.encoding.config.EncoderConfig] consumed by the
      encoder, so transform steps never see a half-built configuration.

Presets:

| Preset | empty id | empty timestamps | map included |
|---|---|---|---|
| client-create (POST) | yes | yes | no |
| client-update (PATCH/PUT) | no | yes | no |
| client-delete (DELETE) | no | yes | no |
| server-read | no | no | yes |
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Final

from forge_jsonapi.http import HttpMethod

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True, slots=True)
class ModeFlags:
    """Flag triple of a preset.

    Attributes:
        empty_id: Omit ``id`` from resource bodies.
        empty_timestamps: Strip the ``timestamps`` nested attribute.
        map_included: Harvest related resources into ``included``.
    """

    empty_id: bool
    empty_timestamps: bool
    map_included: bool


class EncoderMode(str, Enum):
    """Named encoder presets.

    Attributes:
        CLIENT_CREATE: Client creating a resource (``POST``).
        CLIENT_UPDATE: Client updating a resource (``PATCH``/``PUT``).
        CLIENT_DELETE: Client deleting a resource (``DELETE``).
        SERVER_READ: Server producing a read response.
    """

    CLIENT_CREATE = "client-create"
    CLIENT_UPDATE = "client-update"
    CLIENT_DELETE = "client-delete"
    SERVER_READ = "server-read"

    @property
    def flags(self) -> ModeFlags:
        """Return the flag triple of this preset."""
        return _MODE_FLAGS[self]

    @classmethod
    def parse(cls, value: str | EncoderMode) -> EncoderMode:
        """Return the preset named ``value``.

        Accepts the canonical value (``"client-create"``), the member name
        (``"CLIENT_CREATE"``) or a short alias (``"create"``, ``"update"``,
        ``"delete"``, ``"read"``).

        Raises:
            ValueError: If ``value`` names no preset.
        """
        if isinstance(value, EncoderMode):
            return value
        key: str = value.strip().lower().replace("_", "-")
        key = _MODE_ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            choices = ", ".join(m.value for m in cls)
            raise ValueError(f"Unknown encoder mode {value!r} (expected one of: {choices})") from None


_MODE_FLAGS: Final[dict[EncoderMode, ModeFlags]] = {
    EncoderMode.CLIENT_CREATE: ModeFlags(empty_id=True, empty_timestamps=True, map_included=False),
    EncoderMode.CLIENT_UPDATE: ModeFlags(empty_id=False, empty_timestamps=True, map_included=False),
    EncoderMode.CLIENT_DELETE: ModeFlags(empty_id=False, empty_timestamps=True, map_included=False),
    EncoderMode.SERVER_READ: ModeFlags(empty_id=False, empty_timestamps=False, map_included=True),
}

_MODE_ALIASES: Final[dict[str, str]] = {
    "create": EncoderMode.CLIENT_CREATE.value,
    "update": EncoderMode.CLIENT_UPDATE.value,
    "delete": EncoderMode.CLIENT_DELETE.value,
    "read": EncoderMode.SERVER_READ.value,
    "server": EncoderMode.SERVER_READ.value,
}


def mode_for_method(method: str | HttpMethod) -> EncoderMode:
    """Return the client preset for an HTTP verb.

    ``POST`` creates, ``PATCH``/``PUT`` update, ``DELETE`` deletes; any other
    (read-only) verb resolves to the server-read flags.

    Args:
        method: The HTTP verb.

    Returns:
        EncoderMode: The matching preset.

    Raises:
        ValueError: If ``method`` is not a known HTTP verb.
    """
    match HttpMethod.parse(method):
        case HttpMethod.POST:
            return EncoderMode.CLIENT_CREATE
        case HttpMethod.PATCH | HttpMethod.PUT:
            return EncoderMode.CLIENT_UPDATE
        case HttpMethod.DELETE:
            return EncoderMode.CLIENT_DELETE
        case _:
            return EncoderMode.SERVER_READ


@dataclass(frozen=True, slots=True)
class EncoderConfig:
    """Immutable configuration consumed by the encoder.

    Attributes:
        must_have_empty_id: Omit ``id`` from resource bodies.
        must_have_empty_timestamps: Strip the ``timestamps`` attribute.
        map_included: Populate the document's ``included`` member.
        root_meta: Optional top-level ``meta`` object.
    """

    must_have_empty_id: bool = True
    must_have_empty_timestamps: bool = True
    map_included: bool = False
    root_meta: Mapping[str, Any] | None = None

    def thaw(self) -> MutableEncoderConfig:
        """Return a mutable builder initialized from this configuration."""
        return MutableEncoderConfig(
            must_have_empty_id=self.must_have_empty_id,
            must_have_empty_timestamps=self.must_have_empty_timestamps,
            map_included=self.map_included,
            root_meta=dict(self.root_meta) if self.root_meta is not None else None,
        )


@dataclass
class MutableEncoderConfig:
    """Mutable builder for `EncoderConfig`; encoder options write to it."""

    must_have_empty_id: bool = True
    must_have_empty_timestamps: bool = True
    map_included: bool = False
    root_meta: dict[str, Any] | None = field(default=None)

    def apply_mode(self, mode: EncoderMode) -> None:
        """Overwrite the three encode flags with those of ``mode``."""
        flags: ModeFlags = mode.flags
        self.must_have_empty_id = flags.empty_id
        self.must_have_empty_timestamps = flags.empty_timestamps
        self.map_included = flags.map_included

    def freeze(self) -> EncoderConfig:
        """Freeze this builder into an immutable `EncoderConfig`."""
        return EncoderConfig(
            must_have_empty_id=self.must_have_empty_id,
            must_have_empty_timestamps=self.must_have_empty_timestamps,
            map_included=self.map_included,
            root_meta=dict(self.root_meta) if self.root_meta is not None else None,
        )


EncoderOption = Callable[[MutableEncoderConfig], None]


def encode_as_client(method: str | HttpMethod) -> EncoderOption:
    """Option selecting the client preset matching the HTTP verb ``method``."""
    mode: EncoderMode = mode_for_method(method)

    def _apply(c: MutableEncoderConfig) -> None:
        c.apply_mode(mode)

    return _apply


def encode_as_server() -> EncoderOption:
    """Option selecting the server-read preset."""
    return encode_with_mode(EncoderMode.SERVER_READ)


def encode_with_mode(mode: str | EncoderMode) -> EncoderOption:
    """Option selecting a preset by name."""
    resolved: EncoderMode = EncoderMode.parse(mode)

    def _apply(c: MutableEncoderConfig) -> None:
        c.apply_mode(resolved)

    return _apply


def encode_with_root_meta(root_meta: Mapping[str, Any] | None) -> EncoderOption:
    """Option attaching ``root_meta`` as the document's top-level ``meta``.

    Combines with any preset. ``None`` leaves the document without a top-level
    ``meta``; an empty mapping is kept and encodes as ``"meta": {}``.
    """

    def _apply(c: MutableEncoderConfig) -> None:
        c.root_meta = dict(root_meta) if root_meta is not None else None

    return _apply


def default_options() -> list[EncoderOption]:
    """Return the options applied before the caller's (the client-create preset)."""
    return [encode_as_client(HttpMethod.POST)]


def build_config(*options: EncoderOption) -> EncoderConfig:
    """Resolve ``options`` (after the defaults) into a fresh `EncoderConfig`.

    Args:
        *options: Encoder options, applied in order (last wins).

    Returns:
        EncoderConfig: The frozen configuration.
    """
    builder = MutableEncoderConfig()
    for opt in (*default_options(), *options):
        opt(builder)
    return builder.freeze()
