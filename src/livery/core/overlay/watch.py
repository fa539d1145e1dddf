"""File-watch driven cache invalidation.

Only events under the source tree whose path crosses a ``brands`` directory
can add or remove brands or overlay files, so only those trigger a rescan.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable, Union

from .types import WATCH_EVENT_KINDS, WatchEvent, WatchEventSource

logger = logging.getLogger(__name__)


def should_invalidate(
    event: WatchEvent,
    source_root: Union[str, Path],
    brands_dir_name: str = "brands",
) -> bool:
    """True when ``event`` touches a ``brands/`` subtree under ``source_root``.

    Kinds outside ``WATCH_EVENT_KINDS`` (host lifecycle notices such as
    ``ready`` or ``error``) never invalidate. The brands directory itself
    counts, so creating or deleting ``src/x/brands`` invalidates too.
    """
    if event.kind not in WATCH_EVENT_KINDS:
        return False
    path = os.path.abspath(event.path)
    root = os.path.abspath(str(source_root))
    if not path.startswith(root + os.sep):
        return False
    return f"{os.sep}{brands_dir_name}{os.sep}" in path + os.sep


class FileWatchInvalidator:
    """Turns watch events into overlay cache invalidations."""

    def __init__(
        self,
        source_root: Union[str, Path],
        on_invalidate: Callable[[], object],
        *,
        brands_dir_name: str = "brands",
    ) -> None:
        self.source_root = Path(source_root)
        self.brands_dir_name = brands_dir_name
        self._on_invalidate = on_invalidate
        self.invalidations = 0

    def handle(self, event: WatchEvent) -> bool:
        if not should_invalidate(event, self.source_root, self.brands_dir_name):
            return False
        logger.info("Brand tree changed (%s %s); rescanning", event.kind, event.path)
        self._on_invalidate()
        self.invalidations += 1
        return True

    def attach(self, source: WatchEventSource) -> "FileWatchInvalidator":
        source.subscribe(self.handle)
        return self


__all__ = ["FileWatchInvalidator", "should_invalidate"]
