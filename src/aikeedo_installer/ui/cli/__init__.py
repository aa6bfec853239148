"""Command line interface for the asset installer."""

from aikeedo_installer.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
