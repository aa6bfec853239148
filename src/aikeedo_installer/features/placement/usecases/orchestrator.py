"""Use cases placing and removing the public assets of one package."""

from __future__ import annotations

from collections.abc import Iterable
from logging import Logger, getLogger
from pathlib import Path

from ..domain.entries import parse_entry
from ..domain.errors import InvalidEntryError, MappingStoreError, PlacementError
from ..domain.models import (
    CopyOutcome,
    Entry,
    PackageDescriptor,
    PlacementAction,
    PlacementEvent,
    PlacementReport,
    ResolvedDestination,
)
from ..domain.path_resolver import PathResolver, contains_glob, is_within
from .copy_engine import CopyEngine
from .glob_expander import GlobExpander, GlobMode
from .ports import FileSystemGateway, MappingRepository


class PlacementOrchestrator:
    """Drive install, update and uninstall of declared assets for a package.

    Every declared entry is processed in isolation: a malformed entry, a
    missing source or a failed copy is recorded in the report and the
    remaining entries still run. Files already copied are never rolled back,
    even when the mapping document cannot be written afterwards.
    """

    _filesystem: FileSystemGateway
    _mappings: MappingRepository
    _resolver: PathResolver
    _expander: GlobExpander
    _copier: CopyEngine
    _logger: Logger

    def __init__(
        self,
        *,
        web_root: Path,
        filesystem: FileSystemGateway,
        mappings: MappingRepository,
        logger: Logger | None = None,
        resolver: PathResolver | None = None,
        expander: GlobExpander | None = None,
        copier: CopyEngine | None = None,
    ) -> None:
        self.web_root = web_root
        self._filesystem = filesystem
        self._mappings = mappings
        self._logger = logger or getLogger(__name__)
        self._resolver = resolver or PathResolver(web_root)
        self._expander = expander or GlobExpander(filesystem, self._logger)
        self._copier = copier or CopyEngine(filesystem, self._logger)

    def install(self, package: PackageDescriptor) -> PlacementReport:
        """Copy every declared entry and persist what was written."""

        report = PlacementReport(package=package.pretty_name, action=PlacementAction.INSTALL)
        if not package.is_supported:
            return report

        entries = package.declared_entries
        if not entries:
            return report

        if package.install_dir is None:
            message = f"No install directory known for package {package.pretty_name}"
            self._logger.error(message)
            report.errors.append(message)
            return report

        self._log_package(PlacementEvent.PACKAGE_START, package.pretty_name)
        package_dir = self._resolver.package_dir_for(package.pretty_name)
        for raw in entries:
            self._place_entry(raw, package, package.install_dir, package_dir, report)

        if report.copied:
            try:
                self._mappings.merge(package.pretty_name, report.copied)
            except MappingStoreError as exc:
                message = f"Failed to store file mappings for package {package.pretty_name}: {exc}"
                self._logger.error(message)
                report.errors.append(message)

        self._log_package(PlacementEvent.PACKAGE_COMPLETE, package.pretty_name, report)
        return report

    def uninstall(self, package: PackageDescriptor) -> PlacementReport:
        """Delete every recorded destination and forget the package."""

        report = PlacementReport(package=package.pretty_name, action=PlacementAction.UNINSTALL)
        if not package.is_supported:
            return report

        try:
            record = self._mappings.lookup(package.pretty_name, package.name)
        except MappingStoreError as exc:
            message = f"Could not read file mappings for package {package.pretty_name}: {exc}"
            self._logger.warning(message)
            report.warnings.append(message)
            return report

        if record is None:
            return report

        for destination in record.destinations.values():
            self._remove_destination(destination, package.pretty_name, report)

        self._remove_package_directories(package.pretty_name, report)

        try:
            self._mappings.remove(record.key)
        except MappingStoreError as exc:
            message = f"Failed to update file mappings for package {package.pretty_name}: {exc}"
            self._logger.error(message)
            report.errors.append(message)

        self._log_package(PlacementEvent.PACKAGE_COMPLETE, package.pretty_name, report)
        return report

    def update(self, package: PackageDescriptor) -> PlacementReport:
        """Remove what the previous version placed, then place the new version."""

        report = PlacementReport(package=package.pretty_name, action=PlacementAction.UPDATE)
        report.extend(self.uninstall(package))
        report.extend(self.install(package))
        return report

    def _place_entry(
        self,
        raw: object,
        package: PackageDescriptor,
        install_dir: Path,
        package_dir: Path,
        report: PlacementReport,
    ) -> None:
        name = package.pretty_name
        try:
            entry = parse_entry(raw)
            destination = self._resolver.resolve(entry, package_dir)
            if destination.path == self.web_root:
                self._skip(report, name, f"Refusing to place {entry.source} onto the web root itself")
                return
            if not is_within(destination.path, self.web_root):
                message = f"Refusing to place {entry.source} outside the web root at {destination.path}"
                self._skip(report, name, message)
                return

            if contains_glob(entry.source):
                outcomes = self._place_glob(entry, install_dir, destination, name, report)
                self._collect(outcomes, report)
                return

            source_path = install_dir / entry.source
            if not self._filesystem.exists(source_path):
                self._skip(report, name, f"Source path {source_path} does not exist for package {name}")
                return

            if self._filesystem.is_dir(source_path) and self._filesystem.exists(destination.path):
                self._collect(self._merge_directory(source_path, destination.path, name), report)
                return

            outcome = self._copier.copy(source_path, destination.path, package=name)
            report.copied[entry.source] = outcome.destination
        except InvalidEntryError:
            self._skip(report, name, f"Invalid public entry format in package {name}")
        except (PlacementError, OSError) as exc:
            message = f"Error processing entry for package {name}: {exc}"
            self._logger.error(
                message,
                extra={"placement_event": PlacementEvent.ERROR, "package": name, "reason": str(exc)},
            )
            report.errors.append(message)

    def _place_glob(
        self,
        entry: Entry,
        install_dir: Path,
        destination: ResolvedDestination,
        package: str,
        report: PlacementReport,
    ) -> list[CopyOutcome]:
        expansion = self._expander.expand(install_dir, entry.source, package=package)
        if expansion.empty:
            report.warnings.append(f"No entries matched {entry.source} for package {package}")
            return []

        if expansion.mode is GlobMode.CONTENTS:
            return self._copier.copy_tree_contents(
                expansion.root,
                expansion.matches,
                destination.path,
                package=package,
            )

        return self._copier.copy_matches(
            expansion.matches,
            destination.path,
            into_directory=self._expander.targets_directory(destination, expansion.matches),
            package=package,
        )

    def _merge_directory(self, source: Path, destination: Path, package: str) -> list[CopyOutcome]:
        """Copy a directory into one that already exists, file by file."""

        self._logger.info(
            "Merging %s into existing %s; recording each copied file",
            source,
            destination,
            extra={"package": package, "source_path": source, "target_path": destination},
        )
        matches = self._expander.expand_directory(source)
        return self._copier.copy_tree_contents(source, matches, destination, package=package)

    def _collect(self, outcomes: Iterable[CopyOutcome], report: PlacementReport) -> None:
        for outcome in outcomes:
            if outcome.copied:
                report.copied[str(outcome.source)] = outcome.destination
            else:
                report.errors.append(f"Error copying {outcome.source}: {outcome.message}")

    def _remove_destination(self, destination: Path, package: str, report: PlacementReport) -> None:
        if destination == self.web_root:
            self._skip(report, package, "Refusing to remove the web root itself")
            return
        if not is_within(destination, self.web_root):
            self._skip(report, package, f"Refusing to remove {destination} outside the web root")
            return

        try:
            if not self._filesystem.exists(destination):
                self._logger.debug("File %s does not exist (may have been already removed)", destination)
                return
            self._filesystem.remove(destination)
        except OSError as exc:
            message = f"Error removing {destination}: {exc}"
            self._logger.error(
                message,
                extra={
                    "placement_event": PlacementEvent.ERROR,
                    "package": package,
                    "target_path": destination,
                    "reason": str(exc),
                },
            )
            report.errors.append(message)
            return

        self._logger.info(
            "Removed %s during uninstallation of %s",
            destination,
            package,
            extra={"placement_event": PlacementEvent.REMOVE, "package": package, "target_path": destination},
        )
        report.removed.append(destination)
        self._prune_empty_parents(destination, package, report)

    def _prune_empty_parents(self, destination: Path, package: str, report: PlacementReport) -> None:
        """Remove directories emptied by a removal, stopping below the web root."""

        parent = destination.parent
        try:
            while parent != self.web_root and is_within(parent, self.web_root):
                if not self._filesystem.is_empty_dir(parent):
                    return
                self._filesystem.remove_dir(parent)
                self._logger.debug("Removed empty directory %s", parent)
                parent = parent.parent
        except OSError as exc:
            message = f"Error removing directory {parent}: {exc}"
            self._logger.warning(message, extra={"package": package})
            report.warnings.append(message)

    def _remove_package_directories(self, package: str, report: PlacementReport) -> None:
        """Prune the package asset dir and, when it empties, its vendor dir."""

        package_dir = self._resolver.package_dir_for(package)
        vendor_dir = package_dir.parent
        try:
            if self._filesystem.is_dir(package_dir):
                self._filesystem.remove_empty_directories(package_dir)
                if not self._filesystem.exists(package_dir):
                    self._logger.info("Removed empty directory %s during uninstallation of %s", package_dir, package)
            if not self._filesystem.exists(package_dir) and self._filesystem.is_empty_dir(vendor_dir):
                self._filesystem.remove_dir(vendor_dir)
                self._logger.info("Removed empty vendor directory %s", vendor_dir)
        except OSError as exc:
            message = f"Error removing directories: {exc}"
            self._logger.warning(message)
            report.warnings.append(message)

    def _skip(self, report: PlacementReport, package: str, message: str) -> None:
        self._logger.warning(message, extra={"package": package})
        report.warnings.append(message)

    def _log_package(
        self,
        event: PlacementEvent,
        package: str,
        report: PlacementReport | None = None,
    ) -> None:
        extra: dict[str, object] = {"placement_event": event, "package": package}
        if report is not None:
            extra.update(
                copied=len(report.copied),
                removed=len(report.removed),
                warnings=len(report.warnings),
                errors=len(report.errors),
            )
        self._logger.debug("%s %s", event.value, package, extra=extra)


__all__ = ["PlacementOrchestrator"]
