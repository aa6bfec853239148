"""Data structures describing packages, declared entries and placement results."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from aikeedo_installer.config.settings import (
    PLUGIN_PACKAGE_TYPE,
    PUBLIC_EXTRA_KEY,
    THEME_PACKAGE_TYPE,
)


class PackageType(StrEnum):
    """Package types whose assets are placed into the web root."""

    PLUGIN = PLUGIN_PACKAGE_TYPE
    THEME = THEME_PACKAGE_TYPE

    @staticmethod
    def from_value(value: str | None) -> "PackageType | None":
        """Return the matching type, or ``None`` for any other package type."""

        for package_type in PackageType:
            if package_type.value == value:
                return package_type
        return None


@dataclass(slots=True)
class PackageDescriptor:
    """Package metadata supplied by the host package manager.

    ``pretty_name`` is the display name as the author wrote it
    (``Vendor/Project``); ``name`` is the canonical identity, which the host
    lower-cases.
    """

    pretty_name: str
    type: str
    extra: Mapping[str, Any] = field(default_factory=dict)
    name: str = ""
    install_dir: Path | None = None

    def __post_init__(self) -> None:
        if not self.name:
            self.name = self.pretty_name.lower()

    @property
    def vendor(self) -> str:
        return self.pretty_name.split("/", 1)[0]

    @property
    def package_type(self) -> PackageType | None:
        return PackageType.from_value(self.type)

    @property
    def is_supported(self) -> bool:
        return self.package_type is not None

    @property
    def declared_entries(self) -> Sequence[object]:
        """Raw ``extra.public`` entries; empty when absent or not a list."""

        raw = self.extra.get(PUBLIC_EXTRA_KEY)
        if not isinstance(raw, (list, tuple)) or not raw:
            return ()
        return tuple(raw)


@dataclass(slots=True, frozen=True)
class LegacyEntry:
    """Bare path string; keeps its full relative structure under the package dir."""

    path: str

    @property
    def source(self) -> str:
        return self.path


@dataclass(slots=True, frozen=True)
class SourceTargetEntry:
    """``{"source": ..., "target": ...}`` entry; ``target`` may be absent."""

    source: str
    target: str | None = None


Entry = LegacyEntry | SourceTargetEntry


class TargetKind(StrEnum):
    """Rows of the destination resolution table."""

    DEFAULT = "default"
    PACKAGE_DOT = "package_dot"
    WEBROOT_SHORTHAND = "webroot_shorthand"
    WEBROOT_PATH = "webroot_path"
    PACKAGE_PATH = "package_path"
    LEGACY = "legacy"


@dataclass(slots=True, frozen=True)
class ResolvedDestination:
    """Absolute destination computed for a declared entry."""

    path: Path
    kind: TargetKind
    is_directory: bool = False


@dataclass(slots=True)
class CopyOutcome:
    """Result of copying one source to one destination."""

    source: Path
    destination: Path
    copied: bool
    is_directory: bool = False
    message: str | None = None


class PlacementEvent(StrEnum):
    """Structured event identifiers for placement logs."""

    PACKAGE_START = "placement.package.start"
    PACKAGE_COMPLETE = "placement.package.complete"
    COPY_FILE = "placement.copy.file"
    COPY_DIRECTORY = "placement.copy.directory"
    REMOVE = "placement.remove"
    SKIP = "placement.skip"
    ERROR = "placement.error"


class PlacementAction(StrEnum):
    INSTALL = "install"
    UNINSTALL = "uninstall"
    UPDATE = "update"


@dataclass(slots=True)
class PlacementReport:
    """Outcome of one lifecycle step for one package."""

    package: str
    action: PlacementAction
    copied: dict[str, Path] = field(default_factory=dict)
    removed: list[Path] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def extend(self, other: "PlacementReport") -> None:
        """Fold ``other`` into this report."""

        self.copied.update(other.copied)
        self.removed.extend(other.removed)
        self.warnings.extend(other.warnings)
        self.errors.extend(other.errors)


@dataclass(slots=True, frozen=True)
class PackageMappings:
    """Recorded destinations for a package, re-qualified to absolute paths."""

    key: str
    destinations: dict[str, Path]


__all__ = [
    "CopyOutcome",
    "Entry",
    "LegacyEntry",
    "PackageDescriptor",
    "PackageMappings",
    "PackageType",
    "PlacementAction",
    "PlacementEvent",
    "PlacementReport",
    "ResolvedDestination",
    "SourceTargetEntry",
    "TargetKind",
]
