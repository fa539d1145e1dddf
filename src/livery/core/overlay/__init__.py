"""Brand overlay package: discovery, caches, inference, bridges and the engine.

Note: the watchdog-backed watch source lives in
livery.core.overlay.watchdog_source and is imported on demand.
"""
from __future__ import annotations

# Discovery and caches
from .discovery import BrandScanner, scan_brands
from .registry import BrandRegistry, PathExistenceCache

# Paths and queries
from .paths import (
    FS_PREFIX,
    VIRTUAL_PREFIXES,
    compute_base_path_from_overlay,
    compute_overlay_path,
    is_virtual_id,
    to_project_fs_path,
)
from .query import RequestAnnotations, append_query, strip_query

# Inference
from .inference import RULES, InferenceInput, explain_brand, infer_brand

# Style bridges
from .bridge import BRIDGE_PREFIX, StyleBridge, plan_style_bridge, style_kind

# Entries
from .entries import (
    EntryMap,
    brand_bootstrap_id,
    build_client_entries,
    build_entry_maps,
    build_server_entries,
)

# Watch
from .watch import FileWatchInvalidator, should_invalidate

# Engine and host hooks
from .settings import OverlaySettings
from .types import ModuleResolver, ResolvedModule, WatchEvent, WatchEventSource
from .engine import OverlayEngine
from .plugin import BrandOverlayPlugin

__all__ = [
    "BRIDGE_PREFIX",
    "BrandOverlayPlugin",
    "BrandRegistry",
    "BrandScanner",
    "EntryMap",
    "FS_PREFIX",
    "FileWatchInvalidator",
    "InferenceInput",
    "ModuleResolver",
    "OverlayEngine",
    "OverlaySettings",
    "PathExistenceCache",
    "RULES",
    "RequestAnnotations",
    "ResolvedModule",
    "StyleBridge",
    "VIRTUAL_PREFIXES",
    "WatchEvent",
    "WatchEventSource",
    "append_query",
    "brand_bootstrap_id",
    "build_client_entries",
    "build_entry_maps",
    "build_server_entries",
    "compute_base_path_from_overlay",
    "compute_overlay_path",
    "explain_brand",
    "infer_brand",
    "is_virtual_id",
    "plan_style_bridge",
    "scan_brands",
    "should_invalidate",
    "strip_query",
    "style_kind",
    "to_project_fs_path",
]
