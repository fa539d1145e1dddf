"""Common base for the per-section configuration accessors."""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .cache import get_cached_config


class BaseDomainConfig(ABC):
    """Read one top-level section of the merged Livery configuration.

    Subclasses name their section and expose typed ``cached_property``
    accessors over it::

        class OverlayConfig(BaseDomainConfig):
            def _config_section(self) -> str:
                return "overlay"

            @cached_property
            def source_dir(self) -> str:
                return self._text("sourceDir", "src")

    ``config`` bypasses the shared cache with an already merged mapping.
    """

    def __init__(self, repo_root: Optional[Path] = None, *, config: Optional[Dict[str, Any]] = None) -> None:
        self._repo_root = repo_root
        self._config = config if config is not None else get_cached_config(repo_root=repo_root)

    @abstractmethod
    def _config_section(self) -> str:
        ...

    @property
    def repo_root(self) -> Path:
        if self._repo_root:
            return Path(self._repo_root)
        from livery.core.utils.paths import resolve_project_root

        return resolve_project_root()

    @cached_property
    def section(self) -> Dict[str, Any]:
        return self._config.get(self._config_section()) or {}

    def _text(self, key: str, default: str, *, allow_empty: bool = False) -> str:
        """String value of ``key``; empty values fall back to ``default`` unless allowed."""
        value = self.section.get(key, default)
        if value is None or (value == "" and not allow_empty):
            return default
        return str(value)

    def _project_path(self, raw: Union[str, Path]) -> Path:
        """Absolute path for ``raw``, taken relative to the project root."""
        path = Path(str(raw)).expanduser()
        return path if path.is_absolute() else self.repo_root / path


__all__ = ["BaseDomainConfig"]
