"""Host-facing entry points: installer location, lifecycle plugin and manifests."""

from __future__ import annotations

from .events import (
    InstallOperation,
    PackageEvent,
    UninstallOperation,
    UpdateOperation,
    package_from_operation,
)
from .installer import PackageInstaller
from .manifest import ManifestError, load_package_manifest
from .plugin import AssetPlugin

__all__ = [
    "AssetPlugin",
    "InstallOperation",
    "ManifestError",
    "PackageEvent",
    "PackageInstaller",
    "UninstallOperation",
    "UpdateOperation",
    "load_package_manifest",
    "package_from_operation",
]
