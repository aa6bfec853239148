"""Copy resolved sources to their destinations.

Every copy creates the missing ancestors of its destination first. Single
copies raise :class:`CopyError`; the batch helpers isolate each entry and
report failures as outcomes with ``copied=False``.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Sequence
from logging import Logger, getLogger
from pathlib import Path

from ..domain.errors import CopyError
from ..domain.models import CopyOutcome, PlacementEvent
from .glob_expander import GlobMatch
from .ports import FileSystemGateway


class CopyEngine:
    """Create destination directories and copy files or directory trees."""

    _filesystem: FileSystemGateway
    _logger: Logger

    def __init__(self, filesystem: FileSystemGateway, logger: Logger | None = None) -> None:
        self._filesystem = filesystem
        self._logger = logger or getLogger(__name__)

    def copy(
        self,
        source: Path,
        destination: Path,
        *,
        package: str = "",
        level: int = logging.INFO,
    ) -> CopyOutcome:
        """Copy ``source`` (file or directory) to ``destination``.

        Raises:
            CopyError: If a directory cannot be created or the copy fails.
        """

        is_directory = self._filesystem.is_dir(source)
        self._prepare(destination if is_directory else destination.parent, source, destination)

        try:
            if is_directory:
                self._filesystem.copy_tree(source, destination)
            else:
                self._filesystem.copy_file(source, destination)
        except (OSError, shutil.Error) as exc:
            raise CopyError(source, destination, str(exc)) from exc

        event = PlacementEvent.COPY_DIRECTORY if is_directory else PlacementEvent.COPY_FILE
        self._logger.log(
            level,
            "Copied %s from %s to %s",
            "directory" if is_directory else "file",
            source,
            destination,
            extra={
                "placement_event": event,
                "package": package,
                "source_path": source,
                "target_path": destination,
            },
        )
        return CopyOutcome(source=source, destination=destination, copied=True, is_directory=is_directory)

    def copy_matches(
        self,
        matches: Sequence[GlobMatch],
        destination: Path,
        *,
        into_directory: bool,
        package: str = "",
    ) -> list[CopyOutcome]:
        """Copy pattern matches, each below or onto ``destination``."""

        outcomes: list[CopyOutcome] = []
        for match in matches:
            target = destination / match.relative if into_directory else destination
            outcomes.append(self._copy_isolated(match.path, target, package))
        return outcomes

    def copy_tree_contents(
        self,
        root: Path,
        matches: Sequence[GlobMatch],
        destination: Path,
        *,
        package: str = "",
    ) -> list[CopyOutcome]:
        """Mirror the walked contents of ``root`` below ``destination``.

        Only files and newly created directories produce outcomes, so merging
        into an existing tree never claims what was already there.

        Raises:
            CopyError: If ``destination`` itself cannot be created.
        """

        self._prepare(destination, root, destination)

        outcomes: list[CopyOutcome] = []
        for match in matches:
            target = destination / match.relative
            if not match.is_directory:
                outcomes.append(self._copy_isolated(match.path, target, package))
                continue
            if self._filesystem.is_dir(target):
                # Directories that were already there are not recorded.
                continue
            try:
                self._prepare(target, match.path, target)
            except CopyError as exc:
                outcomes.append(self._failed(match.path, target, exc, package, is_directory=True))
                continue
            outcomes.append(CopyOutcome(source=match.path, destination=target, copied=True, is_directory=True))

        self._logger.debug("Copied directory contents from %s to %s", root, destination)
        return outcomes

    def _copy_isolated(self, source: Path, destination: Path, package: str) -> CopyOutcome:
        try:
            return self.copy(source, destination, package=package, level=logging.DEBUG)
        except CopyError as exc:
            return self._failed(source, destination, exc, package)

    def _prepare(self, directory: Path, source: Path, destination: Path) -> None:
        try:
            _ = self._filesystem.ensure_directory(directory)
        except OSError as exc:
            raise CopyError(source, destination, f"failed to create directory {directory}: {exc}") from exc

    def _failed(
        self,
        source: Path,
        destination: Path,
        error: CopyError,
        package: str,
        *,
        is_directory: bool = False,
    ) -> CopyOutcome:
        self._logger.error(
            "Error copying %s: %s",
            source,
            error.reason,
            extra={
                "placement_event": PlacementEvent.ERROR,
                "package": package,
                "source_path": source,
                "target_path": destination,
                "reason": error.reason,
            },
        )
        return CopyOutcome(
            source=source,
            destination=destination,
            copied=False,
            is_directory=is_directory,
            message=error.reason,
        )


__all__ = ["CopyEngine"]
