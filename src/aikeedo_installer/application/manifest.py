"""Read package metadata from a ``composer.json`` manifest."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Final

from aikeedo_installer.features.placement import PackageDescriptor

MANIFEST_FILE_NAME: Final[str] = "composer.json"


class ManifestError(Exception):
    """Raised when a package manifest is missing or unusable."""


def load_package_manifest(package_dir: Path) -> PackageDescriptor:
    """Build a descriptor for the package checked out in ``package_dir``.

    The package's install directory is ``package_dir`` itself.

    Raises:
        ManifestError: If the manifest is missing, not valid JSON, or lacks a
            ``vendor/project`` name.
    """

    manifest_path = package_dir / MANIFEST_FILE_NAME
    try:
        raw: Any = json.loads(manifest_path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise ManifestError(f"No {MANIFEST_FILE_NAME} found in {package_dir}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise ManifestError(f"Failed to read {manifest_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ManifestError(f"{manifest_path} does not contain a JSON object")

    name = raw.get("name")
    if not isinstance(name, str) or name.count("/") != 1:
        raise ManifestError(f"{manifest_path} must declare a 'vendor/project' name")

    extra = raw.get("extra")
    return PackageDescriptor(
        pretty_name=name,
        type=str(raw.get("type") or "library"),
        extra=extra if isinstance(extra, dict) else {},
        install_dir=package_dir.resolve(),
    )


__all__ = ["MANIFEST_FILE_NAME", "ManifestError", "load_package_manifest"]
