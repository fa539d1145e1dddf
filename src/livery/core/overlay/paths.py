"""Overlay path computation.

Given a resolved module id, a brand and the project root:

    <root>/src/components/Button.tsx
        -> <root>/src/components/brands/<brand>/Button.tsx

Ids may arrive in dev-server form (``/@fs/<abs>`` or root-relative
``/src/...``) and with a query suffix; both are normalised before any
filesystem comparison.
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional, Union

from .query import strip_query

FS_PREFIX = "/@fs/"
VIRTUAL_PREFIXES = ("\0", "virtual:")

PathArg = Union[str, Path]


def is_virtual_id(module_id: str) -> bool:
    """True for ids owned by some virtual-module plugin (never overlaid)."""
    return strip_query(module_id).startswith(VIRTUAL_PREFIXES)


def to_project_fs_path(module_id: str, root: PathArg, source_dir: str = "src") -> str:
    """Undo dev-server id rewriting and drop the query."""
    path = strip_query(module_id)
    if path.startswith(FS_PREFIX):
        path = path[len(FS_PREFIX) - 1:]
    root_str = os.path.abspath(str(root))
    if path.startswith(root_str + os.sep):
        return path
    prefix = f"/{source_dir}/"
    if path.startswith(prefix):
        return os.path.join(root_str, path[1:])
    return path


def is_inside_source(module_id: str, root: PathArg, source_dir: str = "src") -> bool:
    abs_path = to_project_fs_path(module_id, root, source_dir)
    source_root = os.path.join(os.path.abspath(str(root)), source_dir)
    return abs_path.startswith(source_root + os.sep)


def brand_segment(brand: str, brands_dir_name: str = "brands") -> str:
    """``/brands/<brand>/`` using the platform separator."""
    return f"{os.sep}{brands_dir_name}{os.sep}{brand}{os.sep}"


def compute_overlay_path(
    resolved: str,
    brand: str,
    root: PathArg,
    *,
    source_dir: str = "src",
    brands_dir_name: str = "brands",
) -> str:
    """Return the brand overlay location for ``resolved``.

    Paths already inside ``brands/<brand>/`` are returned unchanged.
    """
    fs_path = to_project_fs_path(resolved, root, source_dir)
    parent, base = os.path.split(fs_path)
    if brand_segment(brand, brands_dir_name) in parent + os.sep:
        return fs_path
    return os.path.join(parent, brands_dir_name, brand, base)


def compute_base_path_from_overlay(
    resolved: str,
    brand: str,
    root: PathArg,
    *,
    source_dir: str = "src",
    brands_dir_name: str = "brands",
) -> Optional[str]:
    """Inverse of :func:`compute_overlay_path`.

    Strips the innermost ``brands/<brand>/`` segment; None when ``resolved``
    is not inside that brand's overlay tree.
    """
    fs_path = to_project_fs_path(resolved, root, source_dir)
    parent, base = os.path.split(fs_path)
    directory = parent + os.sep
    segment = brand_segment(brand, brands_dir_name)
    idx = directory.rfind(segment)
    if idx == -1:
        return None
    stripped = directory[:idx] + os.sep + directory[idx + len(segment):]
    return os.path.join(stripped, base)


__all__ = [
    "FS_PREFIX",
    "VIRTUAL_PREFIXES",
    "brand_segment",
    "compute_base_path_from_overlay",
    "compute_overlay_path",
    "is_inside_source",
    "is_virtual_id",
    "to_project_fs_path",
]
