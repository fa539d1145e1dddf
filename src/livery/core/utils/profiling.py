"""Span timing for brand discovery, config loading and module resolution.

Code under measurement wraps itself in :func:`span`. Timings are only
collected while a :class:`Profiler` is installed with
:func:`enable_profiler` (the CLI does this for ``--profile``); otherwise
``span`` yields immediately, so per-request resolution stays cheap.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import asdict, dataclass, field
from time import perf_counter
from typing import Any, DefaultDict, Dict, Iterator, List, Optional


_CURRENT: ContextVar[Optional["Profiler"]] = ContextVar("livery_profiler", default=None)


@dataclass(frozen=True)
class SpanRecord:
    name: str
    duration_ms: float
    depth: int
    meta: Dict[str, Any] = field(default_factory=dict)


class Profiler:
    """Records finished spans with their nesting depth."""

    def __init__(self) -> None:
        self._records: List[SpanRecord] = []
        self._open = 0

    @property
    def spans(self) -> List[SpanRecord]:
        return list(self._records)

    @contextmanager
    def span(self, name: str, **meta: Any) -> Iterator[None]:
        depth = self._open
        self._open += 1
        started = perf_counter()
        try:
            yield
        finally:
            elapsed = (perf_counter() - started) * 1000.0
            self._open -= 1
            self._records.append(SpanRecord(name, elapsed, depth, dict(meta)))

    def summary_ms(self) -> Dict[str, float]:
        totals: DefaultDict[str, float] = defaultdict(float)
        for record in self._records:
            totals[record.name] += record.duration_ms
        return dict(totals)

    def counts(self) -> Dict[str, int]:
        return dict(Counter(record.name for record in self._records))

    def to_dict(self) -> Dict[str, Any]:
        return {"spans": [asdict(r) for r in self._records], "summary_ms": self.summary_ms()}

    def format_summary(self) -> str:
        counts = self.counts()
        totals = sorted(self.summary_ms().items(), key=lambda item: item[1], reverse=True)
        rows = [f"  {ms:9.2f} ms  x{counts[name]:<5d} {name}" for name, ms in totals]
        return "\n".join(["[livery][profile] span totals:", *rows])


@contextmanager
def enable_profiler(profiler: Profiler) -> Iterator[None]:
    token = _CURRENT.set(profiler)
    try:
        yield
    finally:
        _CURRENT.reset(token)


@contextmanager
def span(name: str, **meta: Any) -> Iterator[None]:
    profiler = _CURRENT.get()
    if profiler is None:
        yield
    else:
        with profiler.span(name, **meta):
            yield


def get_active_profiler() -> Optional[Profiler]:
    return _CURRENT.get()


__all__ = ["Profiler", "SpanRecord", "enable_profiler", "get_active_profiler", "span"]
