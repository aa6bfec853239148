"""Command line argument parser."""

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import final

from aikeedo_installer.config import ConfigError, InstallerConfig
from aikeedo_installer.features.placement import PlacementAction
from aikeedo_installer.platform.logging import logger, setup_logger
from aikeedo_installer.ui.cli.args.options import CLIArgs, MappingsArgs, PackageArgs

_PACKAGE_COMMANDS: dict[str, PlacementAction] = {
    "install": PlacementAction.INSTALL,
    "update": PlacementAction.UPDATE,
    "uninstall": PlacementAction.UNINSTALL,
}


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            description="Place the public assets of Aikeedo plugins and themes into the web root.",
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        subparsers = parser.add_subparsers(dest="command", required=True)

        helps = {
            "install": "Copy a package's declared public files and record them",
            "update": "Remove previously recorded files, then copy the package's files again",
            "uninstall": "Remove every file recorded for a package",
        }
        for command, help_text in helps.items():
            package_parser = subparsers.add_parser(command, help=help_text)
            _ = package_parser.add_argument(
                "package_dir",
                type=str,
                help="Directory containing the package's composer.json",
                metavar="PACKAGE_DIR",
            )
            ArgumentParser._add_common_options(package_parser)

        mappings_parser = subparsers.add_parser(
            "mappings",
            help="Show the recorded file mappings",
        )
        _ = mappings_parser.add_argument(
            "package",
            nargs="?",
            default=None,
            help="Only show mappings for this package (vendor/project)",
            metavar="PACKAGE",
        )
        ArgumentParser._add_common_options(mappings_parser)

        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: If the package directory is missing or the configuration is invalid.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        is_quiet = bool(getattr(parsed_args, "quiet", False))
        is_verbose = bool(getattr(parsed_args, "verbose", False))

        if is_quiet:
            log_level = logging.ERROR
        elif is_verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        try:
            configuration = InstallerConfig.load(
                project_root=parsed_args.project_root,
                web_root=parsed_args.web_root,
                vendor_dir=parsed_args.vendor_dir,
            )
        except ConfigError as exc:
            logger.error("%s", exc)
            sys.exit(1)

        _ = setup_logger(log_file=configuration.log_file, console_level=log_level)

        command: str = parsed_args.command
        if command in _PACKAGE_COMMANDS:
            package_dir = Path(parsed_args.package_dir)
            if not package_dir.is_dir():
                logger.error("Package directory does not exist: %s", package_dir)
                sys.exit(1)
            return PackageArgs(
                command=command,
                action=_PACKAGE_COMMANDS[command],
                package_dir=package_dir.resolve(),
                config=configuration,
                verbose=is_verbose,
                quiet=is_quiet,
            )

        return MappingsArgs(
            command="mappings",
            package=parsed_args.package,
            config=configuration,
            quiet=is_quiet,
        )

    @staticmethod
    def _add_common_options(parser: argparse.ArgumentParser) -> None:
        """Apply location options shared by every subcommand."""

        _ = parser.add_argument(
            "--project-root",
            type=str,
            help="Project root (defaults to the current directory)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--web-root",
            type=str,
            help="Web root receiving public files (defaults to PUBLIC_DIR or ./public)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--vendor-dir",
            type=str,
            help="Dependency directory holding the mappings file (defaults to ./vendor)",
            metavar="PATH",
        )
        _ = parser.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )
        _ = parser.add_argument(
            "--verbose",
            action="store_true",
            help="Show every copied and skipped entry",
        )
