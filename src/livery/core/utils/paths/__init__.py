"""Path utilities for Livery.

- Resolver: project root resolution
- Project: project config directory (.livery/) detection
"""
from __future__ import annotations

from .project import DEFAULT_PROJECT_CONFIG_DIR, get_project_config_dir
from .resolver import ProjectRootError, resolve_project_root

__all__ = [
    "DEFAULT_PROJECT_CONFIG_DIR",
    "get_project_config_dir",
    "ProjectRootError",
    "resolve_project_root",
]
