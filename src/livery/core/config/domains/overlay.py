"""Domain-specific configuration for brand overlay resolution."""
from __future__ import annotations

from functools import cached_property
from typing import Tuple

from ..base import BaseDomainConfig


class OverlayConfig(BaseDomainConfig):
    """Accessor for the ``overlay`` section."""

    def _config_section(self) -> str:
        return "overlay"

    @cached_property
    def source_dir(self) -> str:
        return self._text("sourceDir", "src").strip("/")

    @cached_property
    def brands_dir_name(self) -> str:
        return self._text("brandsDirName", "brands")

    @cached_property
    def vendor_dirs(self) -> Tuple[str, ...]:
        return tuple(str(d) for d in (self.section.get("vendorDirs") or ["node_modules"]))

    @cached_property
    def style_extensions(self) -> Tuple[str, ...]:
        raw = self.section.get("styleExtensions") or [".css"]
        return tuple(str(ext).lower() for ext in raw)

    @cached_property
    def bridge_marker(self) -> str:
        return self._text("bridgeMarker", "livery-bridged")

    @cached_property
    def brand_query_key(self) -> str:
        return self._text("brandQueryKey", "brand")

    @cached_property
    def legacy_brand_query_key(self) -> str:
        return self._text("legacyBrandQueryKey", "__brand")


__all__ = ["OverlayConfig"]
