"""Core filesystem helpers."""
from __future__ import annotations

from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def ensure_directory(path: PathLike, create: bool = True) -> Path:
    """Ensure ``path`` is a directory, creating it when ``create`` is True.

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if not create:
        raise FileNotFoundError(f"Directory does not exist: {path}")

    path.mkdir(parents=True, exist_ok=True)
    return path


__all__ = ["PathLike", "ensure_directory"]
