"""Immutable overlay settings captured once per build session."""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class OverlaySettings:
    """Everything the overlay engine reads from configuration.

    Built from the ``overlay`` and ``entries`` config sections so the engine
    itself never touches the config cache during resolution.
    """

    source_dir: str = "src"
    brands_dir_name: str = "brands"
    vendor_dirs: Tuple[str, ...] = ("node_modules",)
    style_extensions: Tuple[str, ...] = (
        ".css", ".scss", ".sass", ".less", ".styl", ".stylus", ".pcss", ".postcss",
    )
    bridge_marker: str = "livery-bridged"
    brand_query_key: str = "brand"
    legacy_brand_query_key: str = "__brand"
    client_entry: str = "/src/entry-client.tsx"
    server_entry: str = "/src/entry-server.tsx"
    client_name: str = "main"
    server_name: str = "entry-server"
    brand_client_prefix: str = "brand-"
    brand_server_prefix: str = "entry-server-"
    bootstrap_dir: str = "__brand__"

    def source_root(self, repo_root: Path) -> Path:
        return Path(repo_root) / self.source_dir

    @classmethod
    def from_config(
        cls,
        repo_root: Path,
        config: Optional[Dict[str, Any]] = None,
    ) -> "OverlaySettings":
        """Load settings from the layered Livery configuration of ``repo_root``."""
        from livery.core.config.domains import EntriesConfig, OverlayConfig

        overlay = OverlayConfig(repo_root=repo_root, config=config)
        entries = EntriesConfig(repo_root=repo_root, config=config)
        return cls(
            source_dir=overlay.source_dir,
            brands_dir_name=overlay.brands_dir_name,
            vendor_dirs=overlay.vendor_dirs,
            style_extensions=overlay.style_extensions,
            bridge_marker=overlay.bridge_marker,
            brand_query_key=overlay.brand_query_key,
            legacy_brand_query_key=overlay.legacy_brand_query_key,
            client_entry=entries.client_entry,
            server_entry=entries.server_entry,
            client_name=entries.client_name,
            server_name=entries.server_name,
            brand_client_prefix=entries.brand_client_prefix,
            brand_server_prefix=entries.brand_server_prefix,
            bootstrap_dir=entries.bootstrap_dir,
        )


__all__ = ["OverlaySettings"]
