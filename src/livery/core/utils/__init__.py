"""Shared utilities for Livery (merge, profiling, I/O, paths)."""
from __future__ import annotations

from .merge import deep_merge, merge_arrays
from .profiling import Profiler, enable_profiler, span

__all__ = ["deep_merge", "merge_arrays", "Profiler", "enable_profiler", "span"]
