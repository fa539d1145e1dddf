"""
Livery frontier show command.

SUMMARY: Print the generated virtual:frontier component-loader module
"""

from __future__ import annotations

import argparse

from livery.cli import OutputFormatter, add_brand_arg, add_json_flag, add_repo_root_flag, get_repo_root
from livery.core.config.domains import EntriesConfig
from livery.core.frontier import build_frontier_module, list_available_entries, read_frontier_config
from livery.core.overlay.settings import OverlaySettings
from livery.core.overlay.discovery import BrandScanner

SUMMARY = "Print the generated component-loader module"


def register_args(parser: argparse.ArgumentParser) -> None:
    add_brand_arg(parser)
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    root = get_repo_root(args)
    s = OverlaySettings.from_config(root)
    config_path = EntriesConfig(repo_root=root).frontier_config_path

    config = read_frontier_config(config_path)
    if config is None:
        formatter.error(FileNotFoundError(str(config_path)), f"No usable frontier config at {config_path}")
        return 1

    brands = BrandScanner(s.brands_dir_name, s.vendor_dirs).scan(s.source_root(root))
    if args.brand and args.brand not in brands:
        formatter.error(ValueError(args.brand), f"Unknown brand: {args.brand}")
        return 1
    module = build_frontier_module(
        config.entrypoints, brands, args.brand, s.brand_query_key, s.source_dir
    )

    if formatter.json_mode:
        formatter.json_output({
            "name": config.name,
            "routes": list_available_entries(config, s.source_dir),
            "module": module,
        })
    else:
        formatter.text(module.rstrip("\n"))
    return 0
