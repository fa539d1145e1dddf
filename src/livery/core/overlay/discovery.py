"""Brand discovery.

Any directory literally named ``brands`` anywhere under the source tree
contributes its immediate subdirectories as brand identifiers:

    src/components/brands/acme/Button.tsx  -> "acme"
    src/styles/brands/globex/theme.css     -> "globex"
"""
from __future__ import annotations

import logging
import os
from collections import deque
from pathlib import Path
from typing import Iterable, Set, Union

from livery.core.utils.profiling import span

logger = logging.getLogger(__name__)


class BrandScanner:
    """Breadth-first scan for ``brands/<name>/`` directories.

    The scanner holds no state between calls; caching belongs to
    :class:`~livery.core.overlay.registry.BrandRegistry`.
    """

    def __init__(
        self,
        brands_dir_name: str = "brands",
        vendor_dirs: Iterable[str] = ("node_modules",),
    ) -> None:
        self.brands_dir_name = brands_dir_name
        self.vendor_dirs = frozenset(vendor_dirs)

    def _skip(self, name: str) -> bool:
        return name in self.vendor_dirs or name.startswith(".")

    def _subdirectories(self, directory: str) -> list[os.DirEntry]:
        # Unreadable or vanished directories are skipped, never fatal.
        try:
            with os.scandir(directory) as it:
                return [e for e in it if e.is_dir()]
        except OSError as exc:
            logger.debug("Skipping unreadable directory %s: %s", directory, exc)
            return []

    def scan(self, source_root: Union[str, Path]) -> Set[str]:
        brands: Set[str] = set()
        with span("overlay.scan", root=str(source_root)):
            queue = deque([str(source_root)])
            while queue:
                current = queue.popleft()
                for entry in self._subdirectories(current):
                    if self._skip(entry.name):
                        continue
                    if entry.name == self.brands_dir_name:
                        brands.update(b.name for b in self._subdirectories(entry.path))
                    else:
                        queue.append(entry.path)
        logger.debug("Discovered brands under %s: %s", source_root, sorted(brands))
        return brands


def scan_brands(
    source_root: Union[str, Path],
    *,
    brands_dir_name: str = "brands",
    vendor_dirs: Iterable[str] = ("node_modules",),
) -> Set[str]:
    """One-shot convenience wrapper around :class:`BrandScanner`."""
    return BrandScanner(brands_dir_name, vendor_dirs).scan(source_root)


__all__ = ["BrandScanner", "scan_brands"]
