"""JSON document recording the destinations written for every package.

The document is a single object keyed by package display name. Each value
maps an original source path to the destination relative to the web root,
so the record stays valid when the web root moves::

    {
        "acme/chat": {
            "dist": "e/acme/chat/dist",
            "assets": "static/assets"
        }
    }
"""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Mapping
from logging import Logger, getLogger
from pathlib import Path
from typing import Any

from aikeedo_installer.config.settings import MAPPINGS_FILE_MODE, MAPPINGS_JSON_INDENT

from ...domain.errors import MappingStoreError
from ...domain.models import PackageMappings
from ...usecases.ports import MappingRepository

MappingDocument = dict[str, dict[str, str]]


class JsonMappingStore(MappingRepository):
    """Read-modify-write store over one JSON file shared by all packages."""

    path: Path
    web_root: Path
    _logger: Logger

    def __init__(self, path: Path, web_root: Path, logger: Logger | None = None) -> None:
        self.path = path
        self.web_root = web_root
        self._logger = logger or getLogger(__name__)

    def load(self) -> MappingDocument:
        """Read the whole document; a missing file is an empty document.

        Raises:
            MappingStoreError: If the file cannot be read or decoded.
        """

        if not self.path.exists():
            return {}

        try:
            content = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise MappingStoreError(f"Failed to read mappings file {self.path}: {exc}") from exc

        if not content.strip():
            self._logger.debug("Mappings file %s is empty", self.path)
            return {}

        try:
            decoded: Any = json.loads(content)
        except json.JSONDecodeError as exc:
            raise MappingStoreError(f"Failed to decode mappings file {self.path}: {exc}") from exc

        # An emptied document may have been written as a JSON list.
        if decoded == []:
            return {}
        if not isinstance(decoded, dict):
            raise MappingStoreError(f"Mappings file {self.path} does not contain a JSON object")

        document: MappingDocument = {}
        for key, value in decoded.items():
            if isinstance(value, Mapping):
                document[str(key)] = {str(source): str(target) for source, target in value.items()}
            elif value == []:
                document[str(key)] = {}
            else:
                self._logger.warning("Ignoring malformed mapping record for %s in %s", key, self.path)
        return document

    def save(self, document: MappingDocument) -> None:
        """Replace the file with ``document`` in a single rename.

        Raises:
            MappingStoreError: If the document cannot be encoded or written.
        """

        try:
            payload = json.dumps(document, indent=MAPPINGS_JSON_INDENT, ensure_ascii=False)
        except (TypeError, ValueError) as exc:
            raise MappingStoreError(f"Failed to encode mappings: {exc}") from exc

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    _ = handle.write(payload + "\n")
                os.chmod(temp_name, MAPPINGS_FILE_MODE)
                os.replace(temp_name, self.path)
            except BaseException:
                Path(temp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise MappingStoreError(f"Failed to write mappings file {self.path}: {exc}") from exc

    def merge(self, package_key: str, mappings: Mapping[str, Path]) -> None:
        document = self.load()
        document[package_key] = {
            source: self.to_relative(destination) for source, destination in mappings.items()
        }
        self.save(document)

    @staticmethod
    def find_key(document: Mapping[str, Any], display_name: str, canonical_name: str) -> str | None:
        """Locate a package record by display name, canonical name, then case-insensitively."""

        if display_name in document:
            return display_name
        if canonical_name in document:
            return canonical_name

        wanted = {display_name.casefold(), canonical_name.casefold()}
        for key in document:
            if key.casefold() in wanted:
                return key
        return None

    def lookup(self, display_name: str, canonical_name: str) -> PackageMappings | None:
        document = self.load()
        key = self.find_key(document, display_name, canonical_name)
        if key is None:
            self._logger.debug(
                "No file mappings found for package %s (tried %s and %s)",
                display_name,
                display_name,
                canonical_name,
            )
            return None

        if key not in (display_name, canonical_name):
            self._logger.debug(
                "Found package mapping with different case: %s (looking for %s)",
                key,
                display_name,
            )

        destinations = {source: self.to_absolute(stored) for source, stored in document[key].items()}
        return PackageMappings(key=key, destinations=destinations)

    def remove(self, package_key: str) -> None:
        document = self.load()
        if package_key not in document:
            return
        del document[package_key]
        self.save(document)

    def to_relative(self, destination: Path) -> str:
        """Express ``destination`` relative to the web root when it lives below it."""

        try:
            return destination.relative_to(self.web_root).as_posix()
        except ValueError:
            self._logger.debug(
                "Target path %s does not contain webroot %s, storing as-is",
                destination,
                self.web_root,
            )
            return str(destination)

    def to_absolute(self, stored: str) -> Path:
        """Re-qualify a stored destination against the web root."""

        path = Path(stored)
        if path.is_absolute():
            return path
        return self.web_root / stored


__all__ = ["JsonMappingStore", "MappingDocument"]
