"""Command line interface for the asset installer."""

import sys
from typing import final

from aikeedo_installer.application import ManifestError
from aikeedo_installer.features.placement import PlacementError
from aikeedo_installer.platform.logging import logger
from aikeedo_installer.ui.cli.args import ArgumentParser
from aikeedo_installer.ui.cli.args.options import CLIArgs, PackageArgs
from aikeedo_installer.ui.cli.commands import MappingsCommand, PackageCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: list[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            if isinstance(args, PackageArgs):
                report = PackageCommand(args).execute()
                if report is not None and not report.succeeded:
                    sys.exit(1)
                return

            _ = MappingsCommand(args).execute()
            return

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except (ManifestError, PlacementError) as e:
            logger.error("%s", e)
            sys.exit(1)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures exit through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0


if __name__ == "__main__":
    sys.exit(main())
