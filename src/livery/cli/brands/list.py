"""
Livery brands list command.

SUMMARY: List brands discovered under the source tree
"""

from __future__ import annotations

import argparse

from livery.cli import OutputFormatter, add_json_flag, add_repo_root_flag, load_settings
from livery.core.overlay.discovery import BrandScanner

SUMMARY = "List brands discovered under the source tree"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    root, settings = load_settings(args)
    source_root = settings.source_root(root)
    brands = sorted(BrandScanner(settings.brands_dir_name, settings.vendor_dirs).scan(source_root))

    if formatter.json_mode:
        formatter.json_output({"sourceRoot": str(source_root), "brands": brands})
        return 0

    if not brands:
        formatter.text(f"No brands found under {source_root}")
        return 0
    formatter.text(f"{len(brands)} brand(s) under {source_root}:")
    for brand in brands:
        formatter.text(f"  {brand}")
    return 0
