"""Filesystem helpers reused across multiple layers."""

from __future__ import annotations

import os
import shutil
from pathlib import Path

from aikeedo_installer.config.settings import DIRECTORY_MODE


def ensure_directory(directory: Path) -> Path:
    """Ensure ``directory`` exists as a folder and return it."""

    if directory.exists():
        if not directory.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {directory}")
        return directory

    directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
    return directory


def is_directory_empty(directory: Path) -> bool:
    """Return whether ``directory`` has no entries."""

    with os.scandir(directory) as entries:
        return next(entries, None) is None


def remove_path(path: Path) -> None:
    """Delete a file, symlink or directory tree."""

    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def remove_empty_directories(directory: Path) -> None:
    """Recursively remove empty directories starting from the given root."""

    if not directory.exists():
        return

    for root, _, _ in os.walk(str(directory), topdown=False):
        root_path = Path(root)
        try:
            if root_path.exists() and not any(root_path.iterdir()):
                root_path.rmdir()
        except OSError:
            continue


__all__ = [
    "ensure_directory",
    "is_directory_empty",
    "remove_empty_directories",
    "remove_path",
]
