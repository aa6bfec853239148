"""
Summary: Public API for placing package assets into the web root.
Why: Give the host adapter and the CLI one import path for the placement feature.
"""

from __future__ import annotations

from .adapters.filesystem.local import LocalFileSystemGateway
from .adapters.mapping.json_store import JsonMappingStore
from .domain.errors import CopyError, InvalidEntryError, MappingStoreError, PlacementError
from .domain.models import (
    LegacyEntry,
    PackageDescriptor,
    PackageMappings,
    PackageType,
    PlacementAction,
    PlacementReport,
    SourceTargetEntry,
)
from .domain.path_resolver import PathResolver
from .usecases.orchestrator import PlacementOrchestrator

__all__ = [
    "CopyError",
    "InvalidEntryError",
    "JsonMappingStore",
    "LegacyEntry",
    "LocalFileSystemGateway",
    "MappingStoreError",
    "PackageDescriptor",
    "PackageMappings",
    "PackageType",
    "PathResolver",
    "PlacementAction",
    "PlacementError",
    "PlacementOrchestrator",
    "PlacementReport",
    "SourceTargetEntry",
]
