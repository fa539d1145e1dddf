"""Caches backing overlay resolution.

Both caches are owned by one overlay engine generation and are only ever
replaced or cleared together.
"""
from __future__ import annotations

import logging
import os
import threading
from pathlib import Path
from typing import Callable, Dict, Optional, Set, Union

from .discovery import BrandScanner

logger = logging.getLogger(__name__)


class BrandRegistry:
    """Memoizes :meth:`BrandScanner.scan` per source root.

    Every call returns a fresh copy so callers cannot corrupt the cached set.
    """

    def __init__(self, scanner: Optional[BrandScanner] = None) -> None:
        self.scanner = scanner if scanner is not None else BrandScanner()
        self._cache: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def get_brands(self, source_root: Union[str, Path]) -> Set[str]:
        key = os.path.abspath(str(source_root))
        with self._lock:
            cached = self._cache.get(key)
            if cached is not None:
                return set(cached)
        # Scan outside the lock; a concurrent miss for the same root just
        # scans twice and stores an equal set.
        found = self.scanner.scan(key)
        with self._lock:
            self._cache.setdefault(key, set(found))
            logger.info("Brand registry primed for %s: %s", key, sorted(found))
            return set(self._cache[key])

    def is_cached(self, source_root: Union[str, Path]) -> bool:
        with self._lock:
            return os.path.abspath(str(source_root)) in self._cache

    def invalidate(self) -> None:
        with self._lock:
            self._cache.clear()

    def fresh(self) -> "BrandRegistry":
        """Return an empty registry sharing this registry's scanner."""
        return BrandRegistry(self.scanner)


class PathExistenceCache:
    """Read-through memo of existence checks, positive and negative alike.

    A file created after its first lookup stays "missing" until the cache is
    cleared by a watch event under ``brands/``.
    """

    def __init__(self, check: Callable[[str], bool] = os.path.exists) -> None:
        self._check = check
        self._cache: Dict[str, bool] = {}
        self._lock = threading.Lock()

    def exists(self, path: Union[str, Path]) -> bool:
        key = str(path)
        with self._lock:
            hit = self._cache.get(key)
        if hit is not None:
            return hit
        result = bool(self._check(key))
        with self._lock:
            return self._cache.setdefault(key, result)

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()

    def fresh(self) -> "PathExistenceCache":
        return PathExistenceCache(self._check)


__all__ = ["BrandRegistry", "PathExistenceCache"]
