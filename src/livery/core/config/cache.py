"""Process-wide cache of merged configuration dicts.

All domain configs read through ``get_cached_config`` so a project's YAML
layers are parsed once per process. Cache keys fingerprint the LIVERY_*
environment and the mtimes of project config files, so edits made while a
dev server is running are picked up on the next load.
"""
from __future__ import annotations

import hashlib
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from livery.core.utils.profiling import span

_config_cache: Dict[str, Dict[str, Any]] = {}
_cache_clearers: Dict[str, Callable[[], None]] = {}


def _normalize_repo_root(repo_root: Optional[Path]) -> Path:
    if repo_root is None:
        from livery.core.utils.paths import resolve_project_root

        return resolve_project_root()
    return Path(repo_root).expanduser().resolve()


def _fingerprint_dir(directory: Path) -> list[tuple[str, int, int]]:
    from livery.core.utils.io import iter_yaml_files

    files: list[tuple[str, int, int]] = []
    for p in iter_yaml_files(directory):
        try:
            st = p.stat()
        except OSError:
            files.append((p.name, 0, 0))
            continue
        files.append((p.name, int(st.st_mtime_ns), int(st.st_size)))
    return files


def _cache_key(repo_root: Path) -> str:
    from livery.core.utils.paths import get_project_config_dir

    env_items = sorted(
        (k, os.environ.get(k, "")) for k in os.environ.keys() if k.startswith("LIVERY_")
    )
    env_fp = hashlib.sha256(repr(env_items).encode("utf-8")).hexdigest()[:12]

    project_dir = get_project_config_dir(repo_root, create=False)
    cfg_files = {
        "project": _fingerprint_dir(project_dir / "config"),
        "project_local": _fingerprint_dir(project_dir / "config.local"),
    }
    cfg_fp = hashlib.sha256(repr(cfg_files).encode("utf-8")).hexdigest()[:12]
    return f"{repo_root}:env={env_fp}:cfg={cfg_fp}"


def get_cached_config(repo_root: Optional[Path] = None) -> Dict[str, Any]:
    """Return the merged configuration for ``repo_root`` (cached, unvalidated)."""
    normalized_root = _normalize_repo_root(repo_root)
    key = _cache_key(normalized_root)

    from .manager import ConfigManager

    with span("config.cache.get"):
        if key not in _config_cache:
            with span("config.cache.miss"):
                manager = ConfigManager(repo_root=normalized_root)
                # The cached loader would come back here.
                _config_cache[key] = manager._load_config_uncached(validate=False)
        return _config_cache[key]


def clear_all_caches() -> None:
    """Drop cached configs, then run each registered clearer (schema cache, ...)."""
    _config_cache.clear()
    for clearer in list(_cache_clearers.values()):
        clearer()


def register_cache_clearer(name: str, clearer: Callable[[], None]) -> None:
    """Register an extra clearer to run inside ``clear_all_caches()``."""
    _cache_clearers[name] = clearer


def is_cached(repo_root: Optional[Path] = None) -> bool:
    return _cache_key(_normalize_repo_root(repo_root)) in _config_cache


__all__ = [
    "get_cached_config",
    "clear_all_caches",
    "register_cache_clearer",
    "is_cached",
]
