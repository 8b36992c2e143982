# topmark:header:start
#
#   project      : Forge JSON:API
#   file         : loaders.py
#   file_relpath : src/forge_jsonapi/config/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML configuration for the Forge JSON:API command line.

Discovery order (first match wins):
    1. An explicit path (``--config``).
    2. ``forge-jsonapi.toml`` in the working directory (top-level table).
    3. ``pyproject.toml`` in the working directory (``[tool.forge-jsonapi]``).

Recognized keys:

```toml
[tool.forge-jsonapi]
models = ["myapp.models"]   # modules importing/declaring resource models
mode = "server-read"        # default encoder mode for `forge-jsonapi encode`
```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

import tomlkit
from tomlkit.exceptions import TOMLKitError

from forge_jsonapi.config.logging import get_logger
from forge_jsonapi.constants import CONFIG_TOML_NAME, PYPROJECT_TOML_NAME, PYPROJECT_TOOL_SECTION
from forge_jsonapi.encoding.config import EncoderMode

if TYPE_CHECKING:
    from forge_jsonapi.config.logging import ForgeLogger

logger: ForgeLogger = get_logger(__name__)

TomlTable = dict[str, Any]


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``forge-jsonapi.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content as plain Python containers.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        val: TomlTable = tomlkit.parse(text).unwrap()
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        val = {}
    except TOMLKitError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        val = {}
    return val


def get_list_value(table: TomlTable, key: str) -> list[str]:
    """Extract a list of strings from a TOML table (non-string items are dropped)."""
    value: Any | None = table.get(key)
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Extract an optional string value from a TOML table."""
    value: Any | None = table.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class CliConfig:
    """CLI settings resolved from TOML.

    Attributes:
        models: Importable module names declaring resource models.
        mode: Default encoder mode for ``encode`` (``None`` keeps the client-create default).
        source: The file the settings were read from, if any.
    """

    models: tuple[str, ...] = field(default_factory=tuple)
    mode: EncoderMode | None = None
    source: Path | None = None

    @classmethod
    def from_toml_dict(cls, table: TomlTable, *, source: Path | None = None) -> CliConfig:
        """Build a config from a (tool-section) TOML table.

        Raises:
            ValueError: If ``mode`` names no encoder preset.
        """
        mode_name: str | None = get_string_value_or_none(table, "mode")
        return cls(
            models=tuple(get_list_value(table, "models")),
            mode=EncoderMode.parse(mode_name) if mode_name else None,
            source=source,
        )


def _tool_section(path: Path, table: TomlTable) -> TomlTable:
    """Return the Forge JSON:API table of a parsed TOML document."""
    if path.name != PYPROJECT_TOML_NAME:
        return table
    tool: Any = table.get("tool", {})
    section: Any = tool.get(PYPROJECT_TOOL_SECTION, {}) if isinstance(tool, dict) else {}
    return section if isinstance(section, dict) else {}


def discover_config_file(cwd: Path | None = None) -> Path | None:
    """Return the first configuration file found in ``cwd`` (default: working directory)."""
    base: Path = cwd if cwd is not None else Path.cwd()
    dedicated: Path = base / CONFIG_TOML_NAME
    if dedicated.is_file():
        return dedicated
    pyproject: Path = base / PYPROJECT_TOML_NAME
    if pyproject.is_file():
        section: TomlTable = _tool_section(pyproject, load_toml_dict(pyproject))
        if section:
            return pyproject
    return None


def load_cli_config(path: Path | None = None, *, cwd: Path | None = None) -> CliConfig:
    """Load CLI settings from ``path`` or from the discovered configuration file.

    Args:
        path: Explicit configuration file; wins over discovery.
        cwd: Directory searched when ``path`` is ``None``.

    Returns:
        CliConfig: The resolved settings (defaults when no file is found).

    Raises:
        ValueError: If the configured ``mode`` names no encoder preset.
    """
    resolved: Path | None = path if path is not None else discover_config_file(cwd)
    if resolved is None:
        logger.debug("No configuration file found")
        return CliConfig()

    logger.info("Loading configuration from %s", resolved)
    section: TomlTable = _tool_section(resolved, load_toml_dict(resolved))
    return CliConfig.from_toml_dict(section, source=resolved)
