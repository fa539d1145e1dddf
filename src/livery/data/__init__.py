"""Bundled Livery resources: default configuration and JSON schemas."""

from __future__ import annotations

import json
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

CONFIG_SUBPACKAGE = "config"
SCHEMAS_SUBPACKAGE = "schemas"
CONFIG_SCHEMA = "config.schema.json"


def get_data_path(subpackage: str, filename: str = "") -> Path:
    """Filesystem path of a bundled resource, or of its directory when ``filename`` is empty.

    >>> get_data_path("config", "overlay.yaml").name
    'overlay.yaml'
    """
    root = Path(str(resources.files("livery.data") / subpackage))
    return root / filename if filename else root


def bundled_config_dir() -> Path:
    """Directory holding the default ``*.yaml`` config layers."""
    return get_data_path(CONFIG_SUBPACKAGE)


@lru_cache(maxsize=4)
def load_schema(filename: str = CONFIG_SCHEMA) -> dict[str, Any]:
    """Parsed JSON schema from ``data/schemas`` (cached for the process)."""
    text = get_data_path(SCHEMAS_SUBPACKAGE, filename).read_text(encoding="utf-8")
    return json.loads(text)


__all__ = ["bundled_config_dir", "get_data_path", "load_schema"]
