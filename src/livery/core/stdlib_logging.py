"""Stdlib logging setup for the Livery CLI.

Library modules only create ``logging.getLogger(__name__)`` loggers; handlers
are installed here, by the CLI, never at import time.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from livery.core.utils.io import ensure_directory

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_LIVERY_HANDLERS: list[logging.Handler] = []


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(str(name).upper())
    return level if isinstance(level, int) else logging.INFO


def configure_stdlib_logging(*, level: str = "WARNING", log_path: Optional[Path] = None) -> None:
    """Route ``livery.*`` records to stderr, and to ``log_path`` when given.

    Re-running replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger("livery")
    for h in _LIVERY_HANDLERS:
        logger.removeHandler(h)
        h.close()
    _LIVERY_HANDLERS.clear()

    lvl = _level_from_name(level)
    logger.setLevel(lvl)
    fmt = logging.Formatter(_LOG_FORMAT)

    stream = logging.StreamHandler(sys.stderr)
    stream.setLevel(lvl)
    stream.setFormatter(fmt)
    logger.addHandler(stream)
    _LIVERY_HANDLERS.append(stream)

    if log_path is not None:
        resolved = Path(log_path).resolve()
        ensure_directory(resolved.parent)
        fh = logging.FileHandler(resolved, encoding="utf-8")
        fh.setLevel(lvl)
        fh.setFormatter(fmt)
        logger.addHandler(fh)
        _LIVERY_HANDLERS.append(fh)


def reset_stdlib_logging_for_tests() -> None:
    """Test-only: drop handlers installed by ``configure_stdlib_logging``."""
    logger = logging.getLogger("livery")
    for h in _LIVERY_HANDLERS:
        logger.removeHandler(h)
        h.close()
    _LIVERY_HANDLERS.clear()
    logger.setLevel(logging.NOTSET)


__all__ = ["configure_stdlib_logging", "reset_stdlib_logging_for_tests"]
