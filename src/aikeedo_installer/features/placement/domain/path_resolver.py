"""Destination resolution for declared public entries.

The target of a ``{source, target}`` entry is always the final destination
path; the source basename is only used when the target is absent or one of
the shorthand values. Rows are evaluated in order:

| target          | destination                                  |
|-----------------|----------------------------------------------|
| absent          | ``<package_dir>/<basename(source)>``         |
| ``""`` or ``.`` | ``<package_dir>/<basename(source)>``         |
| ``/`` or ``/.`` | ``<web_root>/<basename(source)>``            |
| ``/path``       | ``<web_root>/path``                          |
| ``path``        | ``<package_dir>/path``                       |

A bare string entry keeps its full relative path below the package dir.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Final

from aikeedo_installer.config.settings import PACKAGE_ASSET_DIR_NAME

from .models import Entry, LegacyEntry, ResolvedDestination, SourceTargetEntry, TargetKind

_TRAILING_WILDCARD_SEGMENTS: Final[re.Pattern[str]] = re.compile(r"(?:/\*+)+/?$")
_WILDCARD_CHARS: Final[re.Pattern[str]] = re.compile(r"[?*\[\]]")
_GLOB_MARKERS: Final[tuple[str, ...]] = ("*", "?", "[")

WEBROOT_SHORTHANDS: Final[frozenset[str]] = frozenset({"/", "/."})
PACKAGE_SHORTHANDS: Final[frozenset[str]] = frozenset({"", "."})


def contains_glob(path: str) -> bool:
    """Return whether ``path`` contains any wildcard character."""

    return any(marker in path for marker in _GLOB_MARKERS)


def is_contents_pattern(pattern: str) -> bool:
    """Return whether ``pattern`` ends with ``*``-only segments (``dist/*``)."""

    return _TRAILING_WILDCARD_SEGMENTS.search(pattern) is not None


def strip_trailing_wildcards(pattern: str) -> str:
    """Drop trailing ``*``-only segments: ``dist/**/*`` becomes ``dist``."""

    return _TRAILING_WILDCARD_SEGMENTS.sub("", pattern)


def strip_glob_suffix(pattern: str) -> str:
    """Reduce a pattern to a plain path usable for a basename."""

    return _WILDCARD_CHARS.sub("", strip_trailing_wildcards(pattern))


def source_basename(source: str) -> str:
    return PurePosixPath(strip_glob_suffix(source)).name


def is_within(path: Path, root: Path) -> bool:
    """Return whether ``path`` lies at or below ``root`` without ``..`` escapes."""

    if not path.is_relative_to(root):
        return False
    return ".." not in path.relative_to(root).parts


@dataclass(frozen=True, slots=True)
class _Rule:
    kind: TargetKind
    matches: Callable[[str | None], bool]
    build: Callable[["PathResolver", SourceTargetEntry, Path], Path]


def _package_basename(resolver: "PathResolver", entry: SourceTargetEntry, package_dir: Path) -> Path:
    del resolver
    return package_dir / source_basename(entry.source)


def _webroot_basename(resolver: "PathResolver", entry: SourceTargetEntry, package_dir: Path) -> Path:
    del package_dir
    return resolver.web_root / source_basename(entry.source)


def _webroot_target(resolver: "PathResolver", entry: SourceTargetEntry, package_dir: Path) -> Path:
    del package_dir
    assert entry.target is not None
    return resolver.web_root / entry.target.lstrip("/")


def _package_target(resolver: "PathResolver", entry: SourceTargetEntry, package_dir: Path) -> Path:
    del resolver
    assert entry.target is not None
    return package_dir / entry.target.lstrip("/")


RULES: Final[tuple[_Rule, ...]] = (
    _Rule(TargetKind.DEFAULT, lambda target: target is None, _package_basename),
    _Rule(TargetKind.PACKAGE_DOT, lambda target: target in PACKAGE_SHORTHANDS, _package_basename),
    _Rule(TargetKind.WEBROOT_SHORTHAND, lambda target: target in WEBROOT_SHORTHANDS, _webroot_basename),
    _Rule(
        TargetKind.WEBROOT_PATH,
        lambda target: target is not None and target.startswith("/"),
        _webroot_target,
    ),
    _Rule(TargetKind.PACKAGE_PATH, lambda target: target is not None, _package_target),
)


class PathResolver:
    """Compute destinations below the web root without touching the disk."""

    def __init__(self, web_root: Path) -> None:
        self.web_root: Path = web_root

    def package_dir_for(self, package_name: str) -> Path:
        """Default asset directory: ``<web_root>/e/<vendor>/<project>``."""

        return self.web_root.joinpath(PACKAGE_ASSET_DIR_NAME, *package_name.split("/"))

    def resolve(self, entry: Entry, package_dir: Path) -> ResolvedDestination:
        if isinstance(entry, LegacyEntry):
            return self._resolve_legacy(entry, package_dir)

        for rule in RULES:
            if rule.matches(entry.target):
                return ResolvedDestination(
                    path=rule.build(self, entry, package_dir),
                    kind=rule.kind,
                    is_directory=is_contents_pattern(entry.source),
                )
        raise AssertionError(f"No resolution rule matched target {entry.target!r}")

    @staticmethod
    def _resolve_legacy(entry: LegacyEntry, package_dir: Path) -> ResolvedDestination:
        # Glob matches are placed by their path relative to the install dir,
        # so a pattern entry lands in the package dir itself.
        if is_contents_pattern(entry.path):
            destination = package_dir / strip_trailing_wildcards(entry.path)
            return ResolvedDestination(path=destination, kind=TargetKind.LEGACY, is_directory=True)
        if contains_glob(entry.path):
            return ResolvedDestination(path=package_dir, kind=TargetKind.LEGACY, is_directory=True)
        return ResolvedDestination(path=package_dir / entry.path, kind=TargetKind.LEGACY)


__all__ = [
    "PACKAGE_SHORTHANDS",
    "PathResolver",
    "RULES",
    "WEBROOT_SHORTHANDS",
    "contains_glob",
    "is_contents_pattern",
    "is_within",
    "source_basename",
    "strip_glob_suffix",
    "strip_trailing_wildcards",
]
