"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from livery.core.overlay.settings import OverlaySettings
from livery.core.utils.paths import resolve_project_root


def get_repo_root(args: argparse.Namespace) -> Path:
    """Project root from ``--repo-root``, else auto-detected."""
    if getattr(args, "repo_root", None):
        return Path(args.repo_root).resolve()
    return resolve_project_root()


def load_settings(args: argparse.Namespace) -> tuple[Path, OverlaySettings]:
    """Project root plus the overlay settings configured for it."""
    root = get_repo_root(args)
    return root, OverlaySettings.from_config(root)


__all__ = ["get_repo_root", "load_settings"]
