from __future__ import annotations

from pathlib import Path

import pytest

from helpers.resolver import FakeResolver
from livery.core.overlay.bridge import StyleBridge
from livery.core.overlay.engine import OverlayEngine
from livery.core.overlay.registry import PathExistenceCache
from livery.core.overlay.types import WatchEvent
from livery.core.overlay.watch import FileWatchInvalidator


@pytest.fixture
def resolver(site: Path) -> FakeResolver:
    return FakeResolver(site)


@pytest.fixture
def engine(site: Path, resolver: FakeResolver) -> OverlayEngine:
    return OverlayEngine(site, resolver)


def src(site: Path, rel: str) -> str:
    return str(site / "src" / rel)


def test_button_overlay_for_tagged_entry_and_base_for_untagged(site: Path, engine: OverlayEngine) -> None:
    entry = engine.resolve_id("/src/entry-client.tsx?brand=acme")
    assert entry == src(site, "entry-client.tsx") + "?brand=acme"

    app = engine.resolve_id("./App", entry)
    assert app == src(site, "App.tsx") + "?__brand=acme"

    button = engine.resolve_id("./components/Button", app)
    assert button == src(site, "components/brands/acme/Button.tsx") + "?__brand=acme"

    assert engine.resolve_id("./components/Button", src(site, "App.tsx")) is None


def test_no_brand_passes_through_to_default_resolution(site: Path, engine: OverlayEngine, resolver: FakeResolver) -> None:
    assert engine.resolve_id("./components/Button", src(site, "App.tsx")) is None
    assert engine.resolve_id("/src/App.tsx") is None
    assert engine.resolve_id("./App?brand=nobody", src(site, "entry-client.tsx")) is None
    assert resolver.calls == []


def test_base_without_overlay_is_tagged(site: Path, engine: OverlayEngine) -> None:
    result = engine.resolve_id("./components/Card", src(site, "App.tsx") + "?__brand=acme")
    assert result == src(site, "components/Card.tsx") + "?__brand=acme"


def test_overlay_importing_its_own_base_gets_the_base(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "components/brands/acme/Button.tsx")
    result = engine.resolve_id("../../Button", importer)
    assert result == src(site, "components/Button.tsx") + "?__brand=acme"


def test_imports_from_inside_an_overlay_stay_brand_scoped(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "components/brands/acme/Button.tsx")
    assert engine.resolve_id("../../Card", importer) == src(site, "components/Card.tsx") + "?__brand=acme"


def test_delegated_resolution_skips_self(site: Path, engine: OverlayEngine, resolver: FakeResolver) -> None:
    engine.resolve_id("./components/Button", src(site, "App.tsx") + "?__brand=acme", {"ssr": True})
    assert resolver.calls
    assert all(opts == {"ssr": True, "skip_self": True} for _, _, opts in resolver.calls)


def test_unresolvable_request_returns_none(site: Path, engine: OverlayEngine) -> None:
    assert engine.resolve_id("./missing", src(site, "App.tsx") + "?__brand=acme") is None


def test_virtual_and_external_results_are_not_overlaid(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "App.tsx") + "?__brand=acme"
    assert engine.resolve_id("virtual:icons", importer) == "virtual:icons"
    outside = site / "lib" / "util.ts"
    outside.parent.mkdir()
    outside.write_text("", encoding="utf-8")
    assert engine.resolve_id(str(outside), importer) == str(outside)


def test_host_resolver_errors_propagate(site: Path) -> None:
    engine = OverlayEngine(site, FakeResolver(site, fail_on={"./components/Button"}))
    with pytest.raises(RuntimeError, match="host resolver failed"):
        engine.resolve_id("./components/Button", src(site, "App.tsx") + "?__brand=acme")


# ---------------------------------------------------------------------------
# Style bridges
# ---------------------------------------------------------------------------


def test_css_module_without_overlay_is_unchanged(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "components/Button.tsx") + "?__brand=acme"
    assert engine.resolve_id("./Card.module.css", importer) == src(site, "components/Card.module.css")


def test_css_module_with_overlay_is_bridged(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "components/Button.tsx") + "?__brand=acme"
    bridge_id = engine.resolve_id("./Title.module.css", importer)

    bridge = StyleBridge.decode(bridge_id)
    assert bridge == StyleBridge(
        base=src(site, "components/Title.module.css"),
        overlay=src(site, "components/brands/acme/Title.module.css"),
        kind="module",
    )
    body = engine.load(bridge_id)
    assert "export default __merged;" in body
    assert "Title.module.css?livery-bridged" in body


def test_direct_overlay_import_is_bridged_with_recovered_base(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "components/Button.tsx") + "?__brand=acme"
    bridge_id = engine.resolve_id("./brands/acme/Title.module.css", importer)
    assert StyleBridge.decode(bridge_id).base == src(site, "components/Title.module.css")


def test_plain_stylesheet_is_bridged_base_first(site: Path, engine: OverlayEngine) -> None:
    bridge_id = engine.resolve_id("/src/styles/theme.css?brand=globex")
    body = engine.load(bridge_id)
    base = src(site, "styles/theme.css")
    overlay = src(site, "styles/brands/globex/theme.css")
    assert body == f'import "{base}?livery-bridged";\nimport "{overlay}?livery-bridged";\n'


def test_bridge_constituents_are_not_intercepted_again(site: Path, engine: OverlayEngine, resolver: FakeResolver) -> None:
    constituent = src(site, "styles/theme.css") + "?livery-bridged"
    assert engine.resolve_id(constituent, "\0livery-style-bridge:plain?base=x&overlay=y") is None
    assert resolver.calls == []


def test_bridge_falls_back_when_counterpart_does_not_resolve(site: Path) -> None:
    overlay = src(site, "components/brands/acme/Title.module.css")
    engine = OverlayEngine(site, FakeResolver(site, fail_on=set()))
    engine.resolver.resolve = _refusing(engine.resolver.resolve, overlay)  # type: ignore[method-assign]
    importer = src(site, "components/Button.tsx") + "?__brand=acme"
    assert engine.resolve_id("./Title.module.css", importer) == src(site, "components/Title.module.css")


def _refusing(resolve, refused: str):
    def wrapper(specifier, importer, options):
        if specifier == refused:
            return None
        return resolve(specifier, importer, options)

    return wrapper


# ---------------------------------------------------------------------------
# Bootstrap entries and frontier
# ---------------------------------------------------------------------------


def test_bootstrap_ids_resolve_to_themselves_and_load(engine: OverlayEngine) -> None:
    bootstrap = "/src/__brand__/acme/entry-client.ts"
    assert engine.resolve_id(bootstrap) == bootstrap
    assert engine.load(bootstrap) == "import '/src/entry-client.tsx?brand=acme'\n"


def test_bootstrap_for_unknown_brand_is_not_claimed(engine: OverlayEngine) -> None:
    assert engine.resolve_id("/src/__brand__/nobody/entry-client.ts") is None


def test_load_ignores_ordinary_modules(site: Path, engine: OverlayEngine) -> None:
    assert engine.load(src(site, "App.tsx")) is None


def test_frontier_is_redirected_to_brand_variant(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "App.tsx") + "?__brand=acme"
    assert engine.resolve_id("virtual:frontier", importer) == "virtual:frontier?brand=acme"
    assert engine.resolve_id("virtual:frontier", src(site, "App.tsx")) is None


def test_entry_maps_follow_discovered_brands(engine: OverlayEngine) -> None:
    maps = engine.entry_maps()
    assert set(maps["client"]) == {"main", "brand-acme", "brand-globex"}
    assert maps["server"]["entry-server-acme"] == "/src/entry-server.tsx?brand=acme"


# ---------------------------------------------------------------------------
# Cache coherence
# ---------------------------------------------------------------------------


def test_new_overlay_visible_after_brand_event(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "App.tsx") + "?__brand=acme"
    assert engine.resolve_id("./components/Card", importer) == src(site, "components/Card.tsx") + "?__brand=acme"

    created = site / "src" / "components" / "brands" / "acme" / "Card.tsx"
    created.write_text("export default 'acme card'\n", encoding="utf-8")
    # Negative existence results are memoized until invalidation.
    assert engine.resolve_id("./components/Card", importer) == src(site, "components/Card.tsx") + "?__brand=acme"

    FileWatchInvalidator(engine.source_root, engine.refresh).handle(WatchEvent("add", str(created)))
    assert engine.resolve_id("./components/Card", importer) == str(created) + "?__brand=acme"


def test_new_brand_visible_after_event(site: Path, engine: OverlayEngine) -> None:
    importer = src(site, "App.tsx") + "?brand=initech"
    assert engine.resolve_id("./components/Button", importer) is None

    overlay = site / "src" / "components" / "brands" / "initech" / "Button.tsx"
    overlay.parent.mkdir()
    overlay.write_text("", encoding="utf-8")
    FileWatchInvalidator(engine.source_root, engine.refresh).handle(WatchEvent("addDir", str(overlay.parent)))

    assert engine.resolve_id("./components/Button", importer) == str(overlay) + "?__brand=initech"


def test_invalidate_swaps_both_caches_together(site: Path, engine: OverlayEngine) -> None:
    engine.brands()
    engine.existence.exists("/nowhere")
    registry, existence = engine.registry, engine.existence

    engine.invalidate()

    assert engine.generation == 1
    assert engine.registry is not registry
    assert engine.existence is not existence
    assert len(engine.existence) == 0
    assert not engine.registry.is_cached(engine.source_root)


def test_sessions_do_not_share_caches(site: Path, resolver: FakeResolver) -> None:
    a = OverlayEngine(site, resolver)
    b = OverlayEngine(site, resolver, existence=PathExistenceCache(lambda p: False))
    importer = src(site, "App.tsx") + "?__brand=acme"

    assert a.resolve_id("./components/Button", importer).startswith(src(site, "components/brands/acme/"))
    assert b.resolve_id("./components/Button", importer) == src(site, "components/Button.tsx") + "?__brand=acme"


def test_injected_caches_are_kept_even_when_empty(site: Path, resolver: FakeResolver) -> None:
    checked = []

    def never(path: str) -> bool:
        checked.append(path)
        return False

    existence = PathExistenceCache(never)
    assert len(existence) == 0
    engine = OverlayEngine(site, resolver, existence=existence)
    assert engine.existence is existence

    importer = src(site, "App.tsx") + "?brand=acme"
    assert engine.resolve_id("./components/Button", importer) == src(site, "components/Button.tsx") + "?__brand=acme"
    assert checked == [src(site, "components/brands/acme/Button.tsx")]

    engine.invalidate()
    assert engine.existence is not existence
    engine.resolve_id("./components/Button", importer)
    assert len(checked) == 2
