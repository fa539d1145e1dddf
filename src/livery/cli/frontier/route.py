"""
Livery frontier route command.

SUMMARY: Show which frontier entrypoint serves a request URL
"""

from __future__ import annotations

import argparse

from livery.cli import OutputFormatter, add_json_flag, add_repo_root_flag, get_repo_root
from livery.core.config.domains import EntriesConfig
from livery.core.frontier import (
    read_frontier_config,
    resolve_component_path_from_url,
    resolve_entry_name_from_url,
)
from livery.core.overlay.settings import OverlaySettings

SUMMARY = "Map a request URL to its frontier entrypoint"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", help="Request URL or path (e.g. /admin/users?brand=acme)")
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    root = get_repo_root(args)
    config = read_frontier_config(EntriesConfig(repo_root=root).frontier_config_path)

    source_dir = OverlaySettings.from_config(root).source_dir

    entry = resolve_entry_name_from_url(args.url, config, source_dir)
    component = resolve_component_path_from_url(args.url, config, source_dir)

    if formatter.json_mode:
        formatter.json_output({"url": args.url, "entry": entry, "component": component})
    else:
        formatter.text(f"{args.url} -> {entry}")
        formatter.text_kv("component", component or "(none)")
    return 0
