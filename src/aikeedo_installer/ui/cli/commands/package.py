"""Install, update and uninstall commands for a single package directory."""

from __future__ import annotations

from typing import final

from aikeedo_installer.application import AssetPlugin, load_package_manifest
from aikeedo_installer.features.placement import PlacementReport
from aikeedo_installer.ui.cli.args.options import PackageArgs
from aikeedo_installer.ui.cli.display.report import ReportDisplay


@final
class PackageCommand:
    """Run one lifecycle hook for the package checked out in ``package_dir``."""

    def __init__(self, args: PackageArgs) -> None:
        self.args = args
        self.plugin = AssetPlugin()
        self.display = ReportDisplay()

    def execute(self) -> PlacementReport | None:
        """Execute the command.

        Raises:
            ManifestError: If the package's composer.json cannot be used.
        """

        package = load_package_manifest(self.args.package_dir)
        self.plugin.activate(self.args.config)
        report = self.plugin.handle(self.args.action, package)
        self.display.show_report(report, quiet=self.args.quiet)
        return report
