# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : utils.py
#   file_relpath : src/forge_jsonapi/cli/utils.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click-free helpers shared by the CLI commands."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from enum import Enum


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      MARKDOWN: GitHub-flavoured Markdown.
      JSON: A single JSON document (machine-readable).
      NDJSON: One JSON object per line (machine-readable).

    Notes:
      - Machine formats (``JSON`` and ``NDJSON``) must not include ANSI color.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"
    MARKDOWN = "markdown"

    @property
    def is_machine(self) -> bool:
        """Return True for JSON and NDJSON."""
        return self in (OutputFormat.JSON, OutputFormat.NDJSON)


def render_markdown_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    *,
    align: Mapping[int, str] | None = None,
) -> str:
    """Render a GitHub-flavoured Markdown table with padded columns.

    Args:
      headers: Column headers.
      rows: A sequence of row sequences (each row same length as ``headers``).
      align: Optional mapping of column index to alignment: ``"left"`` (default),
        ``"right"``, or ``"center"``.

    Returns:
      The Markdown table as a single string (ending with a newline).

    Raises:
      ValueError: If a row does not have as many cells as there are headers.
    """
    if not headers:
        return ""
    ncols = len(headers)
    for r in rows:
        if len(r) != ncols:
            raise ValueError("All rows must have the same number of columns as headers")

    widths = [len(str(h)) for h in headers]
    for r in rows:
        for i, cell in enumerate(r):
            widths[i] = max(widths[i], len(str(cell)))

    def _pad(text: str, w: int) -> str:
        return f"{text:<{w}}"

    def _sep_for(i: int) -> str:
        style = (align or {}).get(i, "left").lower()
        w = max(1, widths[i])
        if style == "right":
            return "-" * (w - 1) + ":" if w > 1 else ":"
        if style == "center":
            return ":" + ("-" * (w - 2) if w > 2 else "-") + ":"
        return "-" * w

    lines: list[str] = [
        "| " + " | ".join(_pad(str(headers[i]), widths[i]) for i in range(ncols)) + " |",
        "| " + " | ".join(_sep_for(i) for i in range(ncols)) + " |",
    ]
    for r in rows:
        lines.append("| " + " | ".join(_pad(str(r[i]), widths[i]) for i in range(ncols)) + " |")
    return "\n".join(lines) + "\n"
