"""Rich renderers for CLI output."""

from aikeedo_installer.ui.cli.display.mappings import MappingsDisplay
from aikeedo_installer.ui.cli.display.report import ReportDisplay

__all__ = ["MappingsDisplay", "ReportDisplay"]
