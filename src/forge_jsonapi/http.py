# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : http.py
#   file_relpath : src/forge_jsonapi/http.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""HTTP verbs understood by the encoder presets.

The transport collaborator picks the preset from the request verb; see
[`encode_as_client`][forge_jsonapi.encoding.config.encode_as_client].
"""

from __future__ import annotations

from enum import Enum


class HttpMethod(str, Enum):
    """HTTP request methods."""

    GET = "GET"
    HEAD = "HEAD"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: str | HttpMethod) -> HttpMethod:
        """Return the member for ``value`` (case-insensitive).

        Raises:
            ValueError: If ``value`` is not a known HTTP method.
        """
        if isinstance(value, HttpMethod):
            return value
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise ValueError(f"Unknown HTTP method: {value!r}") from None
