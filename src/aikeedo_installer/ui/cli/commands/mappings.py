"""Show the recorded file mappings."""

from __future__ import annotations

from typing import final

from aikeedo_installer.features.placement import JsonMappingStore
from aikeedo_installer.ui.cli.args.options import MappingsArgs
from aikeedo_installer.ui.cli.display.mappings import MappingsDisplay


@final
class MappingsCommand:
    """Print the mapping document, optionally narrowed to one package."""

    def __init__(self, args: MappingsArgs) -> None:
        self.args = args
        self.store = JsonMappingStore(args.config.mappings_file, args.config.web_root)
        self.display = MappingsDisplay()

    def execute(self) -> dict[str, dict[str, str]]:
        """Execute the command and return the rendered records.

        Raises:
            MappingStoreError: If the mapping document cannot be read.
        """

        document = self.store.load()
        if self.args.package is not None:
            key = self.store.find_key(document, self.args.package, self.args.package.lower())
            document = {key: document[key]} if key is not None else {}
        self.display.show_mappings(document, quiet=self.args.quiet)
        return document
