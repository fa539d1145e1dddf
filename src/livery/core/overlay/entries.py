"""Per-brand build inputs.

Client builds get one bundle graph per brand, each rooted at a virtual
bootstrap module that re-imports the default client entry tagged with the
brand. Server builds reuse the server entry with a brand query since server
rendering resolves per request.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Dict, Iterable, Optional
from urllib.parse import quote

if TYPE_CHECKING:
    from .settings import OverlaySettings

EntryMap = Dict[str, str]


def brand_bootstrap_id(brand: str, *, source_dir: str = "src", bootstrap_dir: str = "__brand__") -> str:
    return f"/{source_dir}/{bootstrap_dir}/{brand}/entry-client.ts"


def parse_brand_bootstrap_id(
    module_id: str, *, source_dir: str = "src", bootstrap_dir: str = "__brand__"
) -> Optional[str]:
    """Return the brand named by a bootstrap id, or None."""
    pattern = rf"^/{re.escape(source_dir)}/{re.escape(bootstrap_dir)}/([^/?]+)/entry-client\.ts$"
    match = re.match(pattern, module_id)
    return match.group(1) if match else None


def tag_with_brand(specifier: str, brand: str, key: str = "brand") -> str:
    sep = "&" if "?" in specifier else "?"
    return f"{specifier}{sep}{key}={quote(brand, safe='')}"


def render_brand_bootstrap(default_entry: str, brand: str, key: str = "brand") -> str:
    return f"import '{tag_with_brand(default_entry, brand, key)}'\n"


def build_client_entries(
    default_entry: str,
    brands: Iterable[str],
    *,
    default_name: str = "main",
    brand_prefix: str = "brand-",
    source_dir: str = "src",
    bootstrap_dir: str = "__brand__",
) -> EntryMap:
    entries: EntryMap = {default_name: default_entry}
    for brand in sorted(brands):
        entries[f"{brand_prefix}{brand}"] = brand_bootstrap_id(
            brand, source_dir=source_dir, bootstrap_dir=bootstrap_dir
        )
    return entries


def build_server_entries(
    default_entry: str,
    brands: Iterable[str],
    *,
    default_name: str = "entry-server",
    brand_prefix: str = "entry-server-",
    key: str = "brand",
) -> EntryMap:
    entries: EntryMap = {default_name: default_entry}
    for brand in sorted(brands):
        entries[f"{brand_prefix}{brand}"] = tag_with_brand(default_entry, brand, key)
    return entries


def build_entry_maps(settings: "OverlaySettings", brands: Iterable[str]) -> Dict[str, EntryMap]:
    """Client and server entry maps for ``brands`` under ``settings``."""
    brands = list(brands)
    return {
        "client": build_client_entries(
            settings.client_entry,
            brands,
            default_name=settings.client_name,
            brand_prefix=settings.brand_client_prefix,
            source_dir=settings.source_dir,
            bootstrap_dir=settings.bootstrap_dir,
        ),
        "server": build_server_entries(
            settings.server_entry,
            brands,
            default_name=settings.server_name,
            brand_prefix=settings.brand_server_prefix,
            key=settings.brand_query_key,
        ),
    }


__all__ = [
    "EntryMap",
    "build_entry_maps",
    "brand_bootstrap_id",
    "build_client_entries",
    "build_server_entries",
    "parse_brand_bootstrap_id",
    "render_brand_bootstrap",
    "tag_with_brand",
]
