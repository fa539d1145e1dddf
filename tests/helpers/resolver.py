"""A filesystem-backed stand-in for the host pipeline's module resolver."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Any, List, Mapping, Optional, Set, Tuple

from livery.core.overlay.types import ResolvedModule

EXTENSIONS = ("", ".tsx", ".ts", ".css")


class FakeResolver:
    """Resolves relative, absolute and ``/src/...`` specifiers against ``root``.

    Virtual ids resolve to themselves. The specifier's query is carried over
    to the resolved id. Every call is recorded in ``calls``.
    """

    def __init__(self, root: Path, *, fail_on: Optional[Set[str]] = None) -> None:
        self.root = Path(root)
        self.fail_on = fail_on or set()
        self.calls: List[Tuple[str, Optional[str], Mapping[str, Any]]] = []

    def _base_dir(self, importer: Optional[str]) -> str:
        if not importer:
            return str(self.root)
        path = importer.split("?", 1)[0]
        if path.startswith("/src/"):
            path = os.path.join(str(self.root), path[1:])
        return os.path.dirname(path)

    def resolve(
        self,
        specifier: str,
        importer: Optional[str],
        options: Mapping[str, Any],
    ) -> Optional[ResolvedModule]:
        self.calls.append((specifier, importer, dict(options)))
        path, sep, query = specifier.partition("?")
        if path in self.fail_on:
            raise RuntimeError(f"host resolver failed for {path}")
        if path.startswith(("\0", "virtual:")):
            return ResolvedModule(specifier)
        if path.startswith(("./", "../")):
            candidate = os.path.normpath(os.path.join(self._base_dir(importer), path))
        elif path.startswith("/src/"):
            candidate = os.path.join(str(self.root), path[1:])
        elif os.path.isabs(path):
            candidate = path
        else:
            return None
        for ext in EXTENSIONS:
            if os.path.isfile(candidate + ext):
                return ResolvedModule(candidate + ext + (sep + query if sep else ""))
        return None
