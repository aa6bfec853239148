"""Expand wildcard sources into concrete filesystem entries.

Two modes exist. A pattern ending in ``*``-only segments (``dist/*``,
``dist/**/*``) means "the contents of ``dist``": the directory is walked
recursively and every entry keeps its path relative to ``dist``. Any other
wildcard is matched one level deep and matches keep their path relative to
the package install directory.
"""

from __future__ import annotations

import glob
import re
from dataclasses import dataclass, field
from enum import StrEnum
from logging import Logger, getLogger
from pathlib import Path

from ..domain.errors import PlacementError
from ..domain.models import PlacementEvent, ResolvedDestination
from ..domain.path_resolver import is_contents_pattern, strip_trailing_wildcards
from .ports import FileSystemGateway


class GlobMode(StrEnum):
    CONTENTS = "contents"
    PATTERN = "pattern"


@dataclass(slots=True, frozen=True)
class GlobMatch:
    """A matched entry and the path it keeps below the destination."""

    path: Path
    relative: Path
    is_directory: bool


@dataclass(slots=True)
class GlobExpansion:
    mode: GlobMode
    root: Path
    matches: list[GlobMatch] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.matches


class GlobExpander:
    """Turn a wildcard source into the list of entries to copy."""

    _filesystem: FileSystemGateway
    _logger: Logger

    def __init__(self, filesystem: FileSystemGateway, logger: Logger | None = None) -> None:
        self._filesystem = filesystem
        self._logger = logger or getLogger(__name__)

    def expand(self, install_dir: Path, pattern: str, *, package: str = "") -> GlobExpansion:
        """Expand ``pattern`` relative to ``install_dir``.

        Missing directories, empty matches and invalid patterns produce an
        empty expansion. A walk that fails part-way raises
        :class:`PlacementError`.
        """

        if is_contents_pattern(pattern):
            return self._expand_contents(install_dir, pattern, package)
        return self._expand_pattern(install_dir, pattern, package)

    @staticmethod
    def contents_root(install_dir: Path, pattern: str) -> Path:
        """Directory whose contents a ``dist/*`` style pattern selects."""

        return install_dir / strip_trailing_wildcards(pattern)

    def targets_directory(self, destination: ResolvedDestination, matches: list[GlobMatch]) -> bool:
        """Return whether matches go *into* ``destination`` rather than onto it."""

        if destination.is_directory or self._filesystem.is_dir(destination.path):
            return True
        return len(matches) > 1 or any(match.is_directory for match in matches)

    def expand_directory(self, root: Path) -> list[GlobMatch]:
        """List everything below ``root``, parents before children.

        Raises:
            PlacementError: If the walk fails part-way.
        """

        try:
            return [
                GlobMatch(
                    path=path,
                    relative=path.relative_to(root),
                    is_directory=self._filesystem.is_dir(path),
                )
                for path in self._filesystem.walk(root)
            ]
        except OSError as exc:
            raise PlacementError(f"Error walking directory contents of {root}: {exc}") from exc

    def _expand_contents(self, install_dir: Path, pattern: str, package: str) -> GlobExpansion:
        root = self.contents_root(install_dir, pattern)
        expansion = GlobExpansion(mode=GlobMode.CONTENTS, root=root)

        if not self._filesystem.is_dir(root):
            self._logger.warning(
                "Source directory %s does not exist for package %s",
                root,
                package,
                extra={
                    "placement_event": PlacementEvent.SKIP,
                    "package": package,
                    "source_path": root,
                    "reason": "missing source directory",
                },
            )
            return expansion

        expansion.matches.extend(self.expand_directory(root))
        return expansion

    def _expand_pattern(self, install_dir: Path, pattern: str, package: str) -> GlobExpansion:
        expansion = GlobExpansion(mode=GlobMode.PATTERN, root=install_dir)
        # Only the pattern part may contain wildcards.
        full_pattern = str(Path(glob.escape(str(install_dir))) / pattern)

        try:
            found = self._filesystem.glob(full_pattern)
        except (re.error, OSError, ValueError) as exc:
            self._logger.warning(
                "Invalid glob pattern %s for package %s: %s",
                pattern,
                package,
                exc,
                extra={
                    "placement_event": PlacementEvent.SKIP,
                    "package": package,
                    "source_path": pattern,
                    "reason": "invalid pattern",
                },
            )
            return expansion

        if not found:
            self._logger.debug("No files matched pattern %s for package %s", pattern, package)
            return expansion

        for path in found:
            if not self._filesystem.exists(path):
                continue
            expansion.matches.append(
                GlobMatch(
                    path=path,
                    relative=path.relative_to(install_dir),
                    is_directory=self._filesystem.is_dir(path),
                )
            )
        return expansion


__all__ = ["GlobExpander", "GlobExpansion", "GlobMatch", "GlobMode"]
