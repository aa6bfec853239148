"""Filesystem adapter for placement use cases."""

from __future__ import annotations

import glob
import os
import shutil
from collections.abc import Iterator
from pathlib import Path

from aikeedo_installer.platform.filesystem import (
    ensure_directory,
    is_directory_empty,
    remove_empty_directories,
    remove_path,
)

from ...usecases.ports import FileSystemGateway


def _raise_walk_error(error: OSError) -> None:
    raise error


class LocalFileSystemGateway(FileSystemGateway):
    """Thin wrapper around the local filesystem."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def is_dir(self, path: Path) -> bool:
        return path.is_dir()

    def ensure_directory(self, path: Path) -> Path:
        return ensure_directory(path)

    def copy_file(self, source: Path, destination: Path) -> None:
        _ = shutil.copy2(source, destination)

    def copy_tree(self, source: Path, destination: Path) -> None:
        _ = shutil.copytree(source, destination, dirs_exist_ok=True)

    def walk(self, root: Path) -> Iterator[Path]:
        for current, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
            dirnames.sort()
            base = Path(current)
            for name in sorted([*dirnames, *filenames]):
                yield base / name

    def glob(self, pattern: str) -> list[Path]:
        return sorted(Path(match) for match in glob.glob(pattern))

    def remove(self, path: Path) -> None:
        remove_path(path)

    def is_empty_dir(self, path: Path) -> bool:
        return path.is_dir() and is_directory_empty(path)

    def remove_dir(self, path: Path) -> None:
        path.rmdir()

    def remove_empty_directories(self, root: Path) -> None:
        remove_empty_directories(root)


__all__ = ["LocalFileSystemGateway"]
