"""Domain-specific configuration for Livery logging."""

from __future__ import annotations

from functools import cached_property
from pathlib import Path
from typing import Optional

from ..base import BaseDomainConfig


class LoggingConfig(BaseDomainConfig):
    def _config_section(self) -> str:
        return "logging"

    @cached_property
    def level(self) -> str:
        return self._text("level", "WARNING").upper()

    @cached_property
    def file(self) -> Optional[Path]:
        raw = self.section.get("file")
        if not raw:
            return None
        return self._project_path(raw)


__all__ = ["LoggingConfig"]
