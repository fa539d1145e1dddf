"""I/O utilities for Livery.

- Core: directory management
- YAML: locked reads and directory iteration
"""
from __future__ import annotations

from .core import PathLike, ensure_directory
from .yaml import iter_yaml_files, read_yaml

__all__ = [
    "PathLike",
    "ensure_directory",
    "iter_yaml_files",
    "read_yaml",
]
