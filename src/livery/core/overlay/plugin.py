"""Host-pipeline hook surface for brand overlays.

A host build pipeline drives :class:`BrandOverlayPlugin` through the hooks
below, in this order::

    plugin = BrandOverlayPlugin(resolver=host)
    inputs = plugin.on_config()            # build inputs per target
    plugin.on_configured(project_root)     # primes the brand registry
    plugin.on_dev_server_start(watcher)    # dev only
    plugin.on_transform_index_html(html, url)
    plugin.on_resolve_id(specifier, importer, options)
    plugin.on_load(module_id)
"""
from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union
from urllib.parse import parse_qs, urlsplit

from livery.core.exceptions import EngineNotConfiguredError

from .discovery import BrandScanner
from .engine import OverlayEngine
from .entries import EntryMap, build_entry_maps, tag_with_brand
from .settings import OverlaySettings
from .types import ModuleResolver, WatchEventSource
from .watch import FileWatchInvalidator

logger = logging.getLogger(__name__)


class BrandOverlayPlugin:
    name = "livery-brand-overlay"
    enforce = "pre"

    def __init__(
        self,
        resolver: Optional[ModuleResolver] = None,
        *,
        repo_root: Optional[Union[str, Path]] = None,
        settings: Optional[OverlaySettings] = None,
    ) -> None:
        self._resolver = resolver
        self._repo_root = Path(repo_root) if repo_root is not None else None
        self._settings = settings
        self._engine: Optional[OverlayEngine] = None
        self.invalidator: Optional[FileWatchInvalidator] = None

    @property
    def engine(self) -> OverlayEngine:
        if self._engine is None:
            raise EngineNotConfiguredError(
                "Brand overlay plugin used before on_configured()",
                context={"plugin": self.name},
            )
        return self._engine

    def _settings_for(self, root: Path) -> OverlaySettings:
        if self._settings is None:
            self._settings = OverlaySettings.from_config(root)
        return self._settings

    def on_config(self) -> Dict[str, EntryMap]:
        """Build inputs for the client and server targets.

        Runs before the host has resolved its root, so brands are scanned
        directly rather than through the engine's registry.
        """
        root = (self._repo_root or Path.cwd()).resolve()
        s = self._settings_for(root)
        brands = BrandScanner(s.brands_dir_name, s.vendor_dirs).scan(s.source_root(root))
        return build_entry_maps(s, brands)

    def on_configured(
        self,
        resolved_root: Union[str, Path],
        resolver: Optional[ModuleResolver] = None,
    ) -> None:
        if resolver is not None:
            self._resolver = resolver
        if self._resolver is None:
            raise EngineNotConfiguredError(
                "No module resolver supplied to the brand overlay plugin",
                context={"plugin": self.name},
            )
        root = Path(resolved_root).resolve()
        self._repo_root = root
        self._engine = OverlayEngine(root, self._resolver, self._settings_for(root))
        brands = self._engine.brands()
        logger.info("Brand overlays active for %d brand(s): %s", len(brands), ", ".join(sorted(brands)))

    def on_dev_server_start(self, watcher: WatchEventSource) -> FileWatchInvalidator:
        engine = self.engine
        self.invalidator = FileWatchInvalidator(
            engine.source_root,
            engine.refresh,
            brands_dir_name=engine.settings.brands_dir_name,
        ).attach(watcher)
        return self.invalidator

    def on_transform_index_html(self, html: str, request_url: Optional[str], *, dev: bool = True) -> str:
        """Point the dev client entry script at the brand named in the page URL."""
        if not dev or not request_url or self._engine is None:
            return html
        s = self._engine.settings
        try:
            query = urlsplit(request_url).query
        except ValueError:
            return html
        brand = (parse_qs(query).get(s.brand_query_key) or [""])[0]
        if not brand or brand not in self._engine.brands():
            return html
        pattern = re.compile(
            r'(<script\s+type="module"\s+src=")(' + re.escape(s.client_entry) + r')("\s*></script>)'
        )
        tagged = tag_with_brand(s.client_entry, brand, s.brand_query_key)
        return pattern.sub(lambda m: m.group(1) + tagged + m.group(3), html, count=1)

    def on_resolve_id(
        self,
        specifier: str,
        importer: Optional[str] = None,
        options: Optional[Mapping[str, Any]] = None,
    ) -> Optional[str]:
        return self.engine.resolve_id(specifier, importer, options)

    def on_load(self, module_id: str) -> Optional[str]:
        return self.engine.load(module_id)


__all__ = ["BrandOverlayPlugin"]
