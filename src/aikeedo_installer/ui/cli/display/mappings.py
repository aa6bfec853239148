"""Display utilities for the recorded file mappings."""

from __future__ import annotations

from collections.abc import Mapping
from typing import final

from rich.console import Console
from rich.markup import escape
from rich.table import Table


@final
class MappingsDisplay:
    """Render the mapping document as one table per package."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_mappings(self, document: Mapping[str, Mapping[str, str]], *, quiet: bool = False) -> None:
        if quiet:
            return

        if not document:
            self.console.print("[yellow]No file mappings recorded.[/yellow]")
            return

        for package, records in sorted(document.items()):
            table = Table(title=escape(package), show_lines=False)
            table.add_column("Source", style="cyan")
            table.add_column("Destination (relative to web root)", style="green")
            for source, destination in records.items():
                table.add_row(escape(source), escape(destination))
            self.console.print(table)
