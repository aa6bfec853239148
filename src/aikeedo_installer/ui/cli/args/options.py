"""Command line argument options."""

from dataclasses import dataclass
from pathlib import Path
from typing import Literal, final

from aikeedo_installer.config import InstallerConfig
from aikeedo_installer.features.placement import PlacementAction


@final
@dataclass(slots=True)
class PackageArgs:
    """Command line arguments for the ``install``, ``update`` and ``uninstall`` subcommands."""

    command: Literal["install", "update", "uninstall"]
    action: PlacementAction
    package_dir: Path
    config: InstallerConfig
    verbose: bool
    quiet: bool


@final
@dataclass(slots=True)
class MappingsArgs:
    """Command line arguments for the ``mappings`` subcommand."""

    command: Literal["mappings"]
    package: str | None
    config: InstallerConfig
    quiet: bool


CLIArgs = PackageArgs | MappingsArgs

__all__ = ["CLIArgs", "MappingsArgs", "PackageArgs"]
