"""Types shared by the overlay engine and its host pipeline."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Literal, Mapping, Optional, Protocol

WatchEventKind = Literal["add", "change", "unlink", "addDir", "unlinkDir"]
WATCH_EVENT_KINDS = frozenset({"add", "change", "unlink", "addDir", "unlinkDir"})


@dataclass(frozen=True)
class ResolvedModule:
    """A module id produced by the host resolver: absolute path plus optional query."""

    id: str
    external: bool = False

    @property
    def path(self) -> str:
        return self.id.split("?", 1)[0]

    @property
    def query(self) -> str:
        return self.id.split("?", 1)[1] if "?" in self.id else ""


class ModuleResolver(Protocol):
    """Default module resolution supplied by the host pipeline.

    Exceptions raised here are the host's and propagate unchanged.
    """

    def resolve(
        self,
        specifier: str,
        importer: Optional[str],
        options: Mapping[str, Any],
    ) -> Optional[ResolvedModule]: ...


@dataclass(frozen=True)
class WatchEvent:
    kind: WatchEventKind
    path: str


WatchCallback = Callable[[WatchEvent], None]


class WatchEventSource(Protocol):
    """Filesystem notification stream the host shares with the overlay engine."""

    def subscribe(self, callback: WatchCallback) -> None: ...


__all__ = [
    "ModuleResolver",
    "ResolvedModule",
    "WATCH_EVENT_KINDS",
    "WatchCallback",
    "WatchEvent",
    "WatchEventKind",
    "WatchEventSource",
]
