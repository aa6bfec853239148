"""Command execution package for CLI."""

from aikeedo_installer.ui.cli.commands.mappings import MappingsCommand
from aikeedo_installer.ui.cli.commands.package import PackageCommand

__all__ = ["MappingsCommand", "PackageCommand"]
