from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from livery.core.overlay.types import WatchCallback, WatchEvent
from livery.core.overlay.watch import FileWatchInvalidator, should_invalidate

SRC = "/work/site/src"


class ManualSource:
    def __init__(self) -> None:
        self.callbacks: List[WatchCallback] = []

    def subscribe(self, callback: WatchCallback) -> None:
        self.callbacks.append(callback)

    def emit(self, event: WatchEvent) -> None:
        for cb in self.callbacks:
            cb(event)


@pytest.mark.parametrize(
    "kind, path, expected",
    [
        ("add", "/work/site/src/components/brands/acme/Button.tsx", True),
        ("change", "/work/site/src/styles/brands/globex/theme.css", True),
        ("unlinkDir", "/work/site/src/components/brands/acme", True),
        ("addDir", "/work/site/src/components/brands", True),
        ("change", "/work/site/src/components/Button.tsx", False),
        ("add", "/work/site/src/components/brandsX/acme/Button.tsx", False),
        ("add", "/work/site/other/brands/acme/Button.tsx", False),
        ("add", "/work/site/src", False),
        ("ready", "/work/site/src/components/brands/acme/Button.tsx", False),
        ("error", "/work/site/src/components/brands", False),
    ],
)
def test_should_invalidate(kind: str, path: str, expected: bool) -> None:
    assert should_invalidate(WatchEvent(kind, path), SRC) is expected


def test_invalidator_calls_back_only_for_brand_events() -> None:
    calls = []
    source = ManualSource()
    inv = FileWatchInvalidator(SRC, lambda: calls.append(1)).attach(source)

    source.emit(WatchEvent("change", "/work/site/src/App.tsx"))
    source.emit(WatchEvent("add", "/work/site/src/ui/brands/acme/Nav.tsx"))
    source.emit(WatchEvent("unlink", "/work/site/src/ui/brands/acme/Nav.tsx"))

    assert len(calls) == 2
    assert inv.invalidations == 2


def test_custom_brands_dir_name(tmp_path: Path) -> None:
    event = WatchEvent("add", str(tmp_path / "src" / "themes" / "acme" / "x.css"))
    assert should_invalidate(event, tmp_path / "src", brands_dir_name="themes")
    assert not should_invalidate(event, tmp_path / "src")
