"""
Livery brands resolve command.

SUMMARY: Show where a source file's brand overlay lives and whether it exists

Accepts absolute paths, root-relative ids (/src/...) and paths relative to the
project root.
"""

from __future__ import annotations

import argparse
import os
from pathlib import Path

from livery.cli import OutputFormatter, add_brand_arg, add_json_flag, add_repo_root_flag, load_settings
from livery.core.overlay.bridge import is_style_file, plan_style_bridge
from livery.core.overlay.discovery import BrandScanner
from livery.core.overlay.paths import (
    compute_base_path_from_overlay,
    compute_overlay_path,
    to_project_fs_path,
)

SUMMARY = "Show the brand overlay path for a source file"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("path", help="Source file (absolute, /src/..., or relative to the project root)")
    add_brand_arg(parser, required=True)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def _absolute(raw: str, root: Path, source_dir: str) -> str:
    path = to_project_fs_path(raw, root, source_dir)
    if not os.path.isabs(path):
        path = os.path.join(str(root), path)
    return os.path.normpath(path)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    root, s = load_settings(args)
    known = BrandScanner(s.brands_dir_name, s.vendor_dirs).scan(s.source_root(root))

    path = _absolute(args.path, root, s.source_dir)
    kw = {"source_dir": s.source_dir, "brands_dir_name": s.brands_dir_name}
    overlay = compute_overlay_path(path, args.brand, root, **kw)
    base = compute_base_path_from_overlay(path, args.brand, root, **kw)
    bridge = None
    if is_style_file(path, s.style_extensions):
        bridge = plan_style_bridge(path, args.brand, str(root), os.path.exists, **kw)

    result = {
        "path": path,
        "brand": args.brand,
        "knownBrand": args.brand in known,
        "overlay": overlay,
        "overlayExists": os.path.exists(overlay),
        "isOverlay": overlay == path,
        "base": base,
        "styleBridge": None if bridge is None else {"kind": bridge.kind, "base": bridge.base, "overlay": bridge.overlay},
    }

    if formatter.json_mode:
        formatter.json_output(result)
        return 0

    if not result["knownBrand"]:
        formatter.text(f"Warning: brand '{args.brand}' is not discovered under {s.source_root(root)}")
    formatter.text(f"{path} [{args.brand}]")
    formatter.text_kv("overlay", overlay)
    formatter.text_kv("overlay exists", result["overlayExists"])
    if base is not None:
        formatter.text_kv("base", base)
    if bridge is not None:
        formatter.text_kv("style bridge", bridge.kind)
    return 0
