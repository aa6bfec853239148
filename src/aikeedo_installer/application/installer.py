"""Install location for Aikeedo plugin and theme packages."""

from __future__ import annotations

from pathlib import Path
from typing import final

from aikeedo_installer.config.settings import (
    INSTALL_BASE_DIR,
    PLUGIN_INSTALL_DIR_NAME,
    THEME_INSTALL_DIR_NAME,
)
from aikeedo_installer.features.placement import PackageDescriptor, PackageType


@final
class PackageInstaller:
    """Tell the host where packages of the supported types are installed."""

    def __init__(self, project_root: Path) -> None:
        self.project_root = project_root

    def supports(self, package_type: str) -> bool:
        return PackageType.from_value(package_type) is not None

    def install_path(self, package: PackageDescriptor) -> Path:
        """``<project>/public/content/{plugins|themes}/<vendor>/<project>``."""

        directory = (
            THEME_INSTALL_DIR_NAME
            if package.package_type is PackageType.THEME
            else PLUGIN_INSTALL_DIR_NAME
        )
        return self.project_root / INSTALL_BASE_DIR / directory / package.pretty_name


__all__ = ["PackageInstaller"]
