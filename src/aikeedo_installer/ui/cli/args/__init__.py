"""Command line argument handling package."""

from aikeedo_installer.ui.cli.args.parser import ArgumentParser
from aikeedo_installer.ui.cli.args.options import CLIArgs, MappingsArgs, PackageArgs

__all__ = ["ArgumentParser", "CLIArgs", "MappingsArgs", "PackageArgs"]
