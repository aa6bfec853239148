"""Exceptions raised while placing or removing package assets."""

from __future__ import annotations

from pathlib import Path


class PlacementError(Exception):
    """Base exception for asset placement failures."""


class InvalidEntryError(PlacementError):
    """Raised when a declared public entry has an unsupported shape."""

    def __init__(self, raw: object) -> None:
        super().__init__(f"Invalid public entry format: {raw!r}")
        self.raw: object = raw


class CopyError(PlacementError):
    """Raised when a source cannot be copied to its destination."""

    def __init__(self, source: Path, destination: Path, reason: str) -> None:
        super().__init__(f"Failed to copy {source} to {destination}: {reason}")
        self.source: Path = source
        self.destination: Path = destination
        self.reason: str = reason


class MappingStoreError(PlacementError):
    """Raised when the mapping document cannot be read, decoded or written."""


__all__ = [
    "CopyError",
    "InvalidEntryError",
    "MappingStoreError",
    "PlacementError",
]
