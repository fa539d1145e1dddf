"""Livery configuration system.

Usage:
    from livery.core.config import ConfigManager
    from livery.core.config.domains import OverlayConfig

    manager = ConfigManager(repo_root=Path("/path/to/site"))
    config = manager.load_config()

    overlay = OverlayConfig(repo_root=Path("/path/to/site"))
    brands_dir = overlay.brands_dir_name
"""
from __future__ import annotations

from .base import BaseDomainConfig
from .cache import clear_all_caches, get_cached_config, is_cached
from .domains import EntriesConfig, LoggingConfig, OverlayConfig
from .manager import ConfigManager

__all__ = [
    "BaseDomainConfig",
    "ConfigManager",
    "EntriesConfig",
    "LoggingConfig",
    "OverlayConfig",
    "clear_all_caches",
    "get_cached_config",
    "is_cached",
]
