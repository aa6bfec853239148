"""
Summary: Normalize raw ``extra.public`` items into typed entries.
Why: Reject malformed items up front so later stages only see valid shapes.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import PurePosixPath

from .errors import InvalidEntryError
from .models import Entry, LegacyEntry, SourceTargetEntry


def is_contained_source(source: str) -> bool:
    """Return whether ``source`` stays inside the package install directory.

    Absolute paths and paths with a ``..`` segment are rejected.
    """

    path = PurePosixPath(source.replace("\\", "/"))
    return not path.is_absolute() and ".." not in path.parts


def parse_entry(raw: object) -> Entry:
    """Convert one declared item into an entry.

    A bare string becomes a :class:`LegacyEntry`; a mapping with a string
    ``source`` (and an optional string ``target``) becomes a
    :class:`SourceTargetEntry`. Sources must be relative to the package.

    Raises:
        InvalidEntryError: If ``raw`` matches neither shape or its source
            points outside the package.
    """

    if isinstance(raw, str):
        if not raw.strip() or not is_contained_source(raw):
            raise InvalidEntryError(raw)
        return LegacyEntry(path=raw)

    if isinstance(raw, Mapping):
        source = raw.get("source")
        if not isinstance(source, str) or not source.strip() or not is_contained_source(source):
            raise InvalidEntryError(raw)
        target = raw.get("target")
        if target is not None and not isinstance(target, str):
            raise InvalidEntryError(raw)
        return SourceTargetEntry(source=source, target=target)

    raise InvalidEntryError(raw)


__all__ = ["is_contained_source", "parse_entry"]
