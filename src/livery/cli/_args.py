"""Common CLI argument registration helpers."""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_repo_root_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--repo-root",
        type=str,
        help="Override project root path",
    )


def add_brand_arg(parser: argparse.ArgumentParser, *, required: bool = False) -> None:
    """Add --brand for commands scoped to one brand."""
    parser.add_argument(
        "--brand",
        required=required,
        help="Brand identifier (a directory name under some brands/ folder)",
    )


__all__ = ["add_json_flag", "add_repo_root_flag", "add_brand_arg"]
