"""Watchdog-backed :class:`~livery.core.overlay.types.WatchEventSource`.

Translates watchdog's created/modified/deleted/moved notifications into the
``add``/``change``/``unlink``/``addDir``/``unlinkDir`` stream the overlay
engine consumes. Callbacks run on the observer thread.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from .types import WatchCallback, WatchEvent

logger = logging.getLogger(__name__)


class _Handler(FileSystemEventHandler):
    def __init__(self, source: "WatchdogEventSource") -> None:
        super().__init__()
        self._source = source

    @staticmethod
    def _path(raw: Union[str, bytes]) -> str:
        return raw.decode() if isinstance(raw, bytes) else raw

    def on_created(self, event: FileSystemEvent) -> None:
        kind = "addDir" if event.is_directory else "add"
        self._source.emit(WatchEvent(kind, self._path(event.src_path)))

    def on_modified(self, event: FileSystemEvent) -> None:
        # Directory mtime bumps duplicate the child add/unlink events.
        if event.is_directory:
            return
        self._source.emit(WatchEvent("change", self._path(event.src_path)))

    def on_deleted(self, event: FileSystemEvent) -> None:
        kind = "unlinkDir" if event.is_directory else "unlink"
        self._source.emit(WatchEvent(kind, self._path(event.src_path)))

    def on_moved(self, event: FileSystemEvent) -> None:
        if event.is_directory:
            self._source.emit(WatchEvent("unlinkDir", self._path(event.src_path)))
            self._source.emit(WatchEvent("addDir", self._path(event.dest_path)))
        else:
            self._source.emit(WatchEvent("unlink", self._path(event.src_path)))
            self._source.emit(WatchEvent("add", self._path(event.dest_path)))


class WatchdogEventSource:
    """Recursive watchdog observer over one directory."""

    def __init__(self, root: Union[str, Path]) -> None:
        self.root = Path(root)
        self._callbacks: List[WatchCallback] = []
        self._observer: Optional[Observer] = None

    def subscribe(self, callback: WatchCallback) -> None:
        self._callbacks.append(callback)

    def emit(self, event: WatchEvent) -> None:
        logger.debug("watch event %s %s", event.kind, event.path)
        for callback in list(self._callbacks):
            callback(event)

    def start(self) -> None:
        if self._observer is not None:
            return
        observer = Observer()
        observer.schedule(_Handler(self), str(self.root), recursive=True)
        observer.start()
        self._observer = observer
        logger.info("Watching %s", self.root)

    def stop(self) -> None:
        if self._observer is None:
            return
        self._observer.stop()
        self._observer.join()
        self._observer = None

    def __enter__(self) -> "WatchdogEventSource":
        self.start()
        return self

    def __exit__(self, *exc: object) -> None:
        self.stop()


__all__ = ["WatchdogEventSource"]
