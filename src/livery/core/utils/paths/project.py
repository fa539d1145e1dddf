"""Project configuration directory helpers."""
from __future__ import annotations

import os
from pathlib import Path

DEFAULT_PROJECT_CONFIG_DIR = ".livery"


def get_project_config_dir(repo_root: Path, *, create: bool = False) -> Path:
    """Return ``<repo_root>/.livery`` (or the ``LIVERY_paths__project_config_dir`` override)."""
    name = os.environ.get("LIVERY_paths__project_config_dir") or DEFAULT_PROJECT_CONFIG_DIR
    path = Path(repo_root) / name
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = ["DEFAULT_PROJECT_CONFIG_DIR", "get_project_config_dir"]
