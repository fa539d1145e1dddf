"""YAML read helpers with advisory shared locks."""
from __future__ import annotations

import fcntl
from pathlib import Path
from typing import Any, List

import yaml

from .core import PathLike

YAML_SUFFIXES = (".yaml", ".yml")


def read_yaml(path: PathLike, default: Any = None, raise_on_error: bool = False) -> Any:
    """Read YAML with error handling.

    Returns default if the file is missing or invalid, unless raise_on_error is True.

    Examples:
        >>> config = read_yaml(Path("frontier.config.yaml"), default={})
        >>> assert isinstance(config, dict)
    """
    path = Path(path)
    if not path.exists():
        if raise_on_error:
            raise FileNotFoundError(f"File not found: {path}")
        return default

    try:
        with open(path, "r", encoding="utf-8") as f:
            fcntl.flock(f.fileno(), fcntl.LOCK_SH)
            try:
                data = yaml.safe_load(f)
            finally:
                fcntl.flock(f.fileno(), fcntl.LOCK_UN)
        return data if data is not None else default
    except (OSError, yaml.YAMLError):
        if raise_on_error:
            raise
        return default


def iter_yaml_files(directory: PathLike) -> List[Path]:
    """Return ``*.yaml``/``*.yml`` files directly under ``directory``, sorted by name."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    return sorted(
        (p for p in directory.iterdir() if p.is_file() and p.suffix in YAML_SUFFIXES),
        key=lambda p: p.name,
    )


__all__ = ["read_yaml", "iter_yaml_files"]
