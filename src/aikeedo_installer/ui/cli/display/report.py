"""Display utilities for placement reports."""

from __future__ import annotations

from typing import final

from rich.console import Console
from rich.markup import escape

from aikeedo_installer.features.placement import PlacementReport


@final
class ReportDisplay:
    """Render a package placement report in the CLI."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(self, report: PlacementReport | None, *, quiet: bool = False) -> None:
        """Print a summary of what was copied, removed and skipped."""

        if quiet:
            return

        if report is None:
            self.console.print("[yellow]Package type is not handled; nothing to do.[/yellow]")
            return

        self.console.print(f"\n[bold]{report.action.value.capitalize()} Summary: {escape(report.package)}[/bold]")
        self.console.print(f"[green]Copied: {len(report.copied)}[/green]")
        self.console.print(f"[green]Removed: {len(report.removed)}[/green]")
        if report.warnings:
            self.console.print(f"[yellow]Warnings: {len(report.warnings)}[/yellow]")
            for warning in report.warnings:
                self.console.print(f"[yellow]  • {escape(warning)}[/yellow]")
        if report.errors:
            self.console.print(f"[red]Errors: {len(report.errors)}[/red]")
            for error in report.errors:
                self.console.print(f"[red]  • {escape(error)}[/red]")
