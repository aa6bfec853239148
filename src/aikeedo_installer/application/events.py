"""Lifecycle operations and events delivered by the host package manager."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from aikeedo_installer.features.placement import PackageDescriptor

POST_PACKAGE_INSTALL: Final[str] = "post-package-install"
POST_PACKAGE_UPDATE: Final[str] = "post-package-update"
PRE_PACKAGE_UNINSTALL: Final[str] = "pre-package-uninstall"


@dataclass(slots=True, frozen=True)
class InstallOperation:
    package: PackageDescriptor
    operation_type: str = "install"


@dataclass(slots=True, frozen=True)
class UpdateOperation:
    initial_package: PackageDescriptor
    target_package: PackageDescriptor
    operation_type: str = "update"


@dataclass(slots=True, frozen=True)
class UninstallOperation:
    package: PackageDescriptor
    operation_type: str = "uninstall"


Operation = InstallOperation | UpdateOperation | UninstallOperation


@dataclass(slots=True, frozen=True)
class PackageEvent:
    """A named host event wrapping one operation."""

    name: str
    operation: object


def package_from_operation(operation: object) -> PackageDescriptor | None:
    """Return the package an operation acts on.

    Updates act on the target (new) package. Unknown operations yield
    ``None``.
    """

    match operation:
        case InstallOperation(package=package):
            return package
        case UpdateOperation(target_package=package):
            return package
        case UninstallOperation(package=package):
            return package
        case _:
            return None


__all__ = [
    "InstallOperation",
    "Operation",
    "POST_PACKAGE_INSTALL",
    "POST_PACKAGE_UPDATE",
    "PRE_PACKAGE_UNINSTALL",
    "PackageEvent",
    "UninstallOperation",
    "UpdateOperation",
    "package_from_operation",
]
