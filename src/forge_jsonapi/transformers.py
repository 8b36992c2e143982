# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : transformers.py
#   file_relpath : src/forge_jsonapi/transformers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Value transformers attached to attribute and wrapped-field declarations.

A transformer is a paired ``serialize``/``deserialize`` callable. The encoder only
calls ``serialize``; ``deserialize`` is kept so the same declaration can be shared
with a decode counterpart.

The transformer is a trusted collaborator: its output is copied into the
document unchanged.

Example:
    ```python
    from forge_jsonapi import attribute
    from forge_jsonapi.transformers import DateTransformer, TimeFormat

    attribute("marketDate", key="market_date", transformer=DateTransformer(TimeFormat.DATE_ONLY))
    ```
"""

from __future__ import annotations

from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Transformer(Protocol):
    """Bidirectional value transformer."""

    def serialize(self, value: Any) -> Any:
        """Convert an in-memory value to its wire representation."""
        ...

    def deserialize(self, value: Any) -> Any:
        """Convert a wire value back to its in-memory representation."""
        ...


class TimeFormat(str, Enum):
    """Wire formats supported by [`DateTransformer`][forge_jsonapi.transformers.DateTransformer].

    Attributes:
        ISO8601: UTC instant with millisecond precision and a ``Z`` suffix
            (``2024-05-01T10:20:30.123Z``).
        RFC3339: ``datetime.isoformat()`` with the original UTC offset.
        TIMESTAMP: Unix epoch seconds as an integer.
        DATE_ONLY: Calendar date (``2024-05-01``).
        TIME_ONLY: Wall-clock time (``10:20:30``).
    """

    ISO8601 = "iso8601"
    RFC3339 = "rfc3339"
    TIMESTAMP = "timestamp"
    DATE_ONLY = "date"
    TIME_ONLY = "time"


_ISO8601_PARSE = "%Y-%m-%dT%H:%M:%S.%f%z"
_TIME_ONLY = "%H:%M:%S"


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DateTransformer:
    """Serialize ``datetime``/``date``/``time`` values to a fixed wire format.

    Attributes:
        fmt: The wire format.
    """

    __slots__ = ("fmt",)

    def __init__(self, fmt: TimeFormat = TimeFormat.ISO8601) -> None:
        self.fmt: TimeFormat = fmt

    def __repr__(self) -> str:
        return f"DateTransformer({self.fmt.value!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTransformer):
            return NotImplemented
        return self.fmt == other.fmt

    def __hash__(self) -> int:
        return hash((DateTransformer, self.fmt))

    def serialize(self, value: Any) -> Any:
        """Format ``value`` according to `fmt`.

        Args:
            value: A ``datetime``, ``date`` or ``time``. Other values are returned unchanged.

        Returns:
            The wire representation (a string, or an integer for `TimeFormat.TIMESTAMP`).
        """
        match self.fmt:
            case TimeFormat.DATE_ONLY if isinstance(value, date):
                return value.strftime("%Y-%m-%d")
            case TimeFormat.TIME_ONLY if isinstance(value, (datetime, time)):
                return value.strftime(_TIME_ONLY)
            case TimeFormat.TIMESTAMP if isinstance(value, datetime):
                return int(_as_utc(value).timestamp())
            case TimeFormat.RFC3339 if isinstance(value, datetime):
                return value.isoformat()
            case TimeFormat.ISO8601 if isinstance(value, datetime):
                utc = _as_utc(value)
                return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"
            case _:
                return value

    def deserialize(self, value: Any) -> Any:
        """Parse a wire value produced by `serialize`.

        Args:
            value: The wire value. ``None`` is returned unchanged.

        Returns:
            A ``datetime`` (``date``/``time`` for the date-only and time-only formats).

        Raises:
            ValueError: If the value does not match the configured format.
        """
        if value is None:
            return None
        match self.fmt:
            case TimeFormat.DATE_ONLY:
                return date.fromisoformat(str(value))
            case TimeFormat.TIME_ONLY:
                return datetime.strptime(str(value), _TIME_ONLY).time()
            case TimeFormat.TIMESTAMP:
                return datetime.fromtimestamp(int(value), tz=timezone.utc)
            case TimeFormat.RFC3339:
                return datetime.fromisoformat(str(value))
            case TimeFormat.ISO8601:
                return datetime.strptime(str(value).replace("Z", "+0000"), _ISO8601_PARSE)
