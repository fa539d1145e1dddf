"""
Livery brands entries command.

SUMMARY: Show the client and server build inputs, one per brand
"""

from __future__ import annotations

import argparse

from livery.cli import OutputFormatter, add_json_flag, add_repo_root_flag, load_settings
from livery.core.overlay.discovery import BrandScanner
from livery.core.overlay.entries import build_entry_maps

SUMMARY = "Show per-brand client and server build inputs"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--target",
        choices=["client", "server", "all"],
        default="all",
        help="Build target to show (default: all)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    root, s = load_settings(args)
    brands = BrandScanner(s.brands_dir_name, s.vendor_dirs).scan(s.source_root(root))
    maps = build_entry_maps(s, brands)
    if args.target != "all":
        maps = {args.target: maps[args.target]}

    if formatter.json_mode:
        formatter.json_output(maps)
        return 0

    for target, entries in maps.items():
        formatter.text(f"{target}:")
        for name, spec in entries.items():
            formatter.text_kv(name, spec)
    return 0
