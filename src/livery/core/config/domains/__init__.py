"""Domain-specific configuration accessors."""
from __future__ import annotations

from .entries import EntriesConfig
from .logging import LoggingConfig
from .overlay import OverlayConfig

__all__ = ["EntriesConfig", "LoggingConfig", "OverlayConfig"]
