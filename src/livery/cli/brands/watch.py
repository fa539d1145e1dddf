"""
Livery brands watch command.

SUMMARY: Watch the source tree and rescan brands when a brands/ subtree changes
"""

from __future__ import annotations

import argparse
import time

from livery.cli import OutputFormatter, add_json_flag, add_repo_root_flag, format_json, load_settings
from livery.core.overlay.discovery import BrandScanner
from livery.core.overlay.registry import BrandRegistry
from livery.core.overlay.watch import FileWatchInvalidator
from livery.core.overlay.watchdog_source import WatchdogEventSource

SUMMARY = "Watch brands/ subtrees and report rescans"


def register_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop after this many seconds (default: until interrupted)",
    )
    add_json_flag(parser)
    add_repo_root_flag(parser)


def main(args: argparse.Namespace) -> int:
    formatter = OutputFormatter(json_mode=getattr(args, "json", False))
    root, s = load_settings(args)
    source_root = s.source_root(root)
    registry = BrandRegistry(BrandScanner(s.brands_dir_name, s.vendor_dirs))

    def rescan() -> None:
        registry.invalidate()
        brands = sorted(registry.get_brands(source_root))
        if formatter.json_mode:
            # One JSON document per line so the stream can be tailed.
            formatter.text(format_json({"event": "rescan", "brands": brands}, indent=None))
        else:
            formatter.text(f"brands: {', '.join(brands) or '(none)'}")

    invalidator = FileWatchInvalidator(source_root, rescan, brands_dir_name=s.brands_dir_name)
    source = WatchdogEventSource(source_root)
    invalidator.attach(source)

    if not formatter.json_mode:
        formatter.text(f"Watching {source_root} (Ctrl-C to stop)")
    rescan()
    deadline = None if args.timeout is None else time.monotonic() + args.timeout
    with source:
        while deadline is None or time.monotonic() < deadline:
            time.sleep(0.2)

    if not formatter.json_mode:
        formatter.text(f"{invalidator.invalidations} rescan(s) triggered")
    return 0
