"""The overlay engine: brand-aware module resolution for one build session.

Resolution of a request ``(specifier, importer)``:

1. Bridge constituents (marker query) are left to default resolution.
2. Per-brand bootstrap ids resolve to themselves.
3. ``virtual:frontier`` is redirected to its brand-scoped variant.
4. No inferable brand: pass through untouched.
5. Otherwise resolve normally, then substitute the brand overlay when it
   exists (or bridge it, for stylesheets) and tag the result with the brand
   so the modules it imports stay brand-scoped.

The brand registry and the path-existence cache form one *generation*.
Invalidation swaps in a fresh generation; each request reads the generation
once, so it never mixes a stale registry with a fresh existence cache.
"""
from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Set, Union

from livery.core.frontier import FRONTIER_ID
from livery.core.utils.profiling import span

from .bridge import StyleBridge, is_style_file, plan_style_bridge
from .discovery import BrandScanner
from .entries import (
    EntryMap,
    build_entry_maps,
    parse_brand_bootstrap_id,
    render_brand_bootstrap,
    tag_with_brand,
)
from .inference import InferenceInput, explain_brand
from .paths import (
    compute_base_path_from_overlay,
    compute_overlay_path,
    is_inside_source,
    is_virtual_id,
    to_project_fs_path,
)
from .query import RequestAnnotations, append_query, has_query_flag, strip_query
from .registry import BrandRegistry, PathExistenceCache
from .settings import OverlaySettings
from .types import ModuleResolver, ResolvedModule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Generation:
    number: int
    registry: BrandRegistry
    existence: PathExistenceCache


class OverlayEngine:
    """Brand overlay resolution bound to one project root and host resolver."""

    def __init__(
        self,
        root: Union[str, Path],
        resolver: ModuleResolver,
        settings: Optional[OverlaySettings] = None,
        *,
        registry: Optional[BrandRegistry] = None,
        existence: Optional[PathExistenceCache] = None,
    ) -> None:
        self.root = Path(os.path.abspath(str(root)))
        self.resolver = resolver
        self.settings = settings if settings is not None else OverlaySettings()
        if registry is None:
            registry = BrandRegistry(
                BrandScanner(self.settings.brands_dir_name, self.settings.vendor_dirs)
            )
        self._lock = threading.Lock()
        if existence is None:
            existence = PathExistenceCache()
        self._generation = _Generation(0, registry, existence)

    # ---------------------------------------------------------------------
    # Cache generations
    # ---------------------------------------------------------------------

    @property
    def source_root(self) -> Path:
        return self.settings.source_root(self.root)

    @property
    def generation(self) -> int:
        return self._generation.number

    @property
    def registry(self) -> BrandRegistry:
        return self._generation.registry

    @property
    def existence(self) -> PathExistenceCache:
        return self._generation.existence

    def brands(self) -> Set[str]:
        return self._generation.registry.get_brands(self.source_root)

    def invalidate(self) -> None:
        """Drop the brand registry and existence cache together."""
        with self._lock:
            current = self._generation
            self._generation = _Generation(
                current.number + 1,
                current.registry.fresh(),
                current.existence.fresh(),
            )
        logger.debug("Overlay caches invalidated (generation %d)", self._generation.number)

    def refresh(self) -> Set[str]:
        """Invalidate and rescan immediately."""
        self.invalidate()
        return self.brands()

    # ---------------------------------------------------------------------
    # Paths and entries
    # ---------------------------------------------------------------------

    def overlay_path(self, resolved: str, brand: str) -> str:
        return compute_overlay_path(
            resolved,
            brand,
            self.root,
            source_dir=self.settings.source_dir,
            brands_dir_name=self.settings.brands_dir_name,
        )

    def base_path(self, resolved: str, brand: str) -> Optional[str]:
        return compute_base_path_from_overlay(
            resolved,
            brand,
            self.root,
            source_dir=self.settings.source_dir,
            brands_dir_name=self.settings.brands_dir_name,
        )

    def entry_maps(self) -> Dict[str, EntryMap]:
        return build_entry_maps(self.settings, self.brands())

    # ---------------------------------------------------------------------
    # Resolution
    # ---------------------------------------------------------------------

    def _delegate(
        self, specifier: str, importer: Optional[str], options: Mapping[str, Any]
    ) -> Optional[ResolvedModule]:
        return self.resolver.resolve(specifier, importer, {**options, "skip_self": True})

    def _tag(self, module_id: str, brand: str) -> str:
        s = self.settings
        annotations = RequestAnnotations.parse(
            module_id, brand_key=s.brand_query_key, legacy_key=s.legacy_brand_query_key
        )
        if annotations.effective_brand == brand:
            return module_id
        return append_query(module_id, s.legacy_brand_query_key, brand)

    def infer_brand(self, specifier: str, importer: Optional[str], known: Set[str]) -> Optional[str]:
        s = self.settings
        match = explain_brand(
            InferenceInput(
                specifier=specifier,
                importer=importer,
                known_brands=known,
                brands_dir_name=s.brands_dir_name,
                brand_key=s.brand_query_key,
                legacy_key=s.legacy_brand_query_key,
            )
        )
        if match is None:
            return None
        rule, brand = match
        logger.debug("Brand %r for %s (rule: %s)", brand, specifier, rule)
        return brand

    def resolve_id(
        self,
        specifier: str,
        importer: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        """Return the id ``specifier`` should resolve to, or None for default resolution.

        Exceptions from the host resolver propagate unchanged.
        """
        opts: Mapping[str, Any] = options or {}
        s = self.settings
        with span("overlay.resolve_id"):
            if has_query_flag(specifier, s.bridge_marker):
                return None

            gen = self._generation
            known = gen.registry.get_brands(self.source_root)

            bootstrap_brand = parse_brand_bootstrap_id(
                specifier, source_dir=s.source_dir, bootstrap_dir=s.bootstrap_dir
            )
            if bootstrap_brand is not None and bootstrap_brand in known:
                return specifier

            brand = self.infer_brand(specifier, importer, known)

            if specifier == FRONTIER_ID:
                if brand is None:
                    return None
                scoped = tag_with_brand(FRONTIER_ID, brand, s.brand_query_key)
                resolved_frontier = self._delegate(scoped, importer, opts)
                return resolved_frontier.id if resolved_frontier is not None else scoped

            if brand is None:
                return None

            resolved = self._delegate(specifier, importer, opts)
            if resolved is None:
                return None
            if is_virtual_id(resolved.id) or not is_inside_source(resolved.id, self.root, s.source_dir):
                return resolved.id

            fs_path = to_project_fs_path(resolved.id, self.root, s.source_dir)
            if is_style_file(fs_path, s.style_extensions):
                return self._resolve_style(resolved, fs_path, brand, importer, opts, gen)

            candidate = self.overlay_path(resolved.id, brand)
            # An overlay importing its own base must get the base, not itself.
            importer_path = (
                to_project_fs_path(importer, self.root, s.source_dir) if importer else None
            )
            if candidate != fs_path and candidate != importer_path and gen.existence.exists(candidate):
                overlay = self._delegate(candidate, importer, opts)
                if overlay is not None:
                    if is_virtual_id(overlay.id):
                        return overlay.id
                    logger.debug("Overlay %s -> %s [%s]", fs_path, overlay.id, brand)
                    return self._tag(overlay.id, brand)
                logger.debug("Overlay candidate %s did not resolve; using base", candidate)

            return self._tag(resolved.id, brand)

    def _resolve_style(
        self,
        resolved: ResolvedModule,
        fs_path: str,
        brand: str,
        importer: Optional[str],
        options: Mapping[str, Any],
        gen: _Generation,
    ) -> str:
        s = self.settings
        bridge = plan_style_bridge(
            fs_path,
            brand,
            str(self.root),
            gen.existence.exists,
            source_dir=s.source_dir,
            brands_dir_name=s.brands_dir_name,
        )
        if bridge is None:
            return resolved.id
        other = bridge.overlay if bridge.base == fs_path else bridge.base
        if self._delegate(other, importer, options) is None:
            logger.warning("Style bridge for %s skipped: %s did not resolve", fs_path, other)
            return resolved.id
        logger.debug("Style bridge (%s) %s + %s [%s]", bridge.kind, bridge.base, bridge.overlay, brand)
        return bridge.encode()

    # ---------------------------------------------------------------------
    # Loading
    # ---------------------------------------------------------------------

    def load(self, module_id: str) -> Optional[str]:
        """Source text for bootstrap entries and style bridges, else None."""
        s = self.settings
        brand = parse_brand_bootstrap_id(
            strip_query(module_id), source_dir=s.source_dir, bootstrap_dir=s.bootstrap_dir
        )
        if brand is not None:
            return render_brand_bootstrap(s.client_entry, brand, s.brand_query_key)
        if StyleBridge.is_bridge_id(module_id):
            return StyleBridge.decode(module_id).render(s.bridge_marker)
        return None


__all__ = ["OverlayEngine"]
