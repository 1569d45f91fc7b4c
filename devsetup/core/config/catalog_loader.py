"""
Catalog loader — reads the tool catalog YAML into domain models.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from devsetup.core.data import TOOLS_FILE
from devsetup.core.errors import ConfigError
from devsetup.core.models.tool import ToolCatalog

logger = logging.getLogger(__name__)


def load_catalog(path: Path | None = None) -> ToolCatalog:
    """Load and validate the tool catalog.

    Args:
        path: Explicit catalog path. Defaults to the packaged ``tools.yml``.

    Returns:
        Validated ToolCatalog.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    path = path or TOOLS_FILE

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read tool catalog {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        catalog = ToolCatalog.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid tool catalog {path}: {e}") from e

    seen: set[str] = set()
    for tool_id in catalog.ids:
        if tool_id in seen:
            raise ConfigError(f"Duplicate tool id in {path}: {tool_id}")
        seen.add(tool_id)

    logger.debug("Loaded %d tools from %s", len(catalog.tools), path)
    return catalog
