"""Project root resolution.

Resolution priority:
1. ``LIVERY_PROJECT_ROOT`` environment variable
2. Nearest ancestor of the working directory holding a project marker
   (``.livery/``, ``frontier.config.yaml`` or ``package.json``)
3. The working directory itself
"""
from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

from livery.core.exceptions import ProjectRootError

from .project import get_project_config_dir

PROJECT_MARKERS = ("frontier.config.yaml", "package.json")

# Cache for project root to avoid repeated filesystem walks
_PROJECT_ROOT_CACHE: Optional[Path] = None


def _has_marker(candidate: Path) -> bool:
    if get_project_config_dir(candidate).is_dir():
        return True
    return any((candidate / marker).is_file() for marker in PROJECT_MARKERS)


def resolve_project_root(start: Optional[Path] = None) -> Path:
    """Resolve the project root.

    Args:
        start: Directory to start the upward search from (defaults to CWD).

    Raises:
        ProjectRootError: If ``LIVERY_PROJECT_ROOT`` points at a missing path.
    """
    global _PROJECT_ROOT_CACHE

    # Environment override always wins, even over a populated cache.
    env_root = os.environ.get("LIVERY_PROJECT_ROOT")
    if env_root:
        env_path = Path(env_root).expanduser().resolve()
        if not env_path.is_dir():
            raise ProjectRootError(
                f"LIVERY_PROJECT_ROOT points at missing path: {env_path}",
                context={"path": str(env_path)},
            )
        return env_path

    if start is None and _PROJECT_ROOT_CACHE is not None:
        return _PROJECT_ROOT_CACHE

    origin = (start or Path.cwd()).resolve()
    root = origin
    for candidate in (origin, *origin.parents):
        if _has_marker(candidate):
            root = candidate
            break

    if start is None:
        _PROJECT_ROOT_CACHE = root
    return root


__all__ = ["ProjectRootError", "resolve_project_root", "PROJECT_MARKERS"]
