"""Summary: Ports defining placement use case dependencies.
Why: Decouple use cases from concrete adapters so tests and swaps stay simple."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..domain.models import PackageMappings


@runtime_checkable
class FileSystemGateway(Protocol):
    """Filesystem primitives needed to place and remove assets."""

    def exists(self, path: Path) -> bool:
        """Return True if the path exists."""
        ...

    def is_dir(self, path: Path) -> bool:
        """Return True when the path is a directory."""
        ...

    def ensure_directory(self, path: Path) -> Path:
        """Create ``path`` and any missing ancestors."""
        ...

    def copy_file(self, source: Path, destination: Path) -> None:
        """Copy a single file byte-for-byte."""
        ...

    def copy_tree(self, source: Path, destination: Path) -> None:
        """Copy a directory recursively, merging into an existing destination."""
        ...

    def walk(self, root: Path) -> Iterator[Path]:
        """Yield every entry below ``root``, parents before children, sorted."""
        ...

    def glob(self, pattern: str) -> list[Path]:
        """Return sorted single-level matches for an absolute pattern."""
        ...

    def remove(self, path: Path) -> None:
        """Delete a file or a directory tree."""
        ...

    def is_empty_dir(self, path: Path) -> bool:
        """Return True when ``path`` is a directory without entries."""
        ...

    def remove_dir(self, path: Path) -> None:
        """Remove an empty directory."""
        ...

    def remove_empty_directories(self, root: Path) -> None:
        """Recursively prune empty directories from ``root`` downward."""
        ...


@runtime_checkable
class MappingRepository(Protocol):
    """Durable record of the destinations written for each package."""

    def merge(self, package_key: str, mappings: Mapping[str, Path]) -> None:
        """Replace the package's record with ``mappings``."""
        ...

    def lookup(self, display_name: str, canonical_name: str) -> PackageMappings | None:
        """Find the package's record, tolerating historical key shapes."""
        ...

    def remove(self, package_key: str) -> None:
        """Drop the package's record."""
        ...


__all__ = ["FileSystemGateway", "MappingRepository"]
