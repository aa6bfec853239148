"""Shared path utilities for configuration and placement locations.

This module centralizes how the installer discovers the directories it
works with.

Policy (relative to the project root by default):
- Web root: ``<project_root>/public`` unless overridden by ``PUBLIC_DIR``.
- Vendor dir: ``<project_root>/vendor`` unless overridden by
  ``COMPOSER_VENDOR_DIR``.
- Config: ``<project_root>/aikeedo-installer.toml`` unless overridden by
  ``AIKEEDO_INSTALLER_CONFIG``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final

from aikeedo_installer.config.settings import (
    CONFIG_FILE_NAME,
    DEFAULT_VENDOR_DIR_NAME,
    DEFAULT_WEB_ROOT_NAME,
    MAPPINGS_FILE_NAME,
)

ENV_PUBLIC_DIR: Final[str] = "PUBLIC_DIR"
ENV_VENDOR_DIR: Final[str] = "COMPOSER_VENDOR_DIR"
ENV_CONFIG_PATH: Final[str] = "AIKEEDO_INSTALLER_CONFIG"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
    base: Path | None = None,
) -> Path:
    """Resolve a path honoring explicit and environment overrides.

    Relative candidates are anchored at ``base`` (the current working
    directory when omitted).
    """

    anchor = base or Path.cwd()

    def _absolute(candidate: Path | str) -> Path:
        path = Path(candidate).expanduser()
        if not path.is_absolute():
            path = anchor / path
        return path.resolve()

    if explicit_path is not None and str(explicit_path).strip():
        return _absolute(explicit_path)

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = (mapping.get(env_var) or "").strip()
        if candidate:
            return _absolute(candidate)

    return _absolute(default_factory())


def default_project_root() -> Path:
    """Return the project root, which is the directory the host runs in."""

    return Path.cwd().resolve()


def default_web_root(project_root: Path) -> Path:
    """Get the default web root below ``project_root``."""

    return project_root / DEFAULT_WEB_ROOT_NAME


def default_vendor_dir(project_root: Path) -> Path:
    """Get the default dependency directory below ``project_root``."""

    return project_root / DEFAULT_VENDOR_DIR_NAME


def default_config_path(project_root: Path, env: Mapping[str, str] | None = None) -> Path:
    """Get the path of the optional TOML configuration file."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=ENV_CONFIG_PATH,
        default_factory=lambda: project_root / CONFIG_FILE_NAME,
        base=project_root,
    )


def mappings_file_path(vendor_dir: Path) -> Path:
    """Return the location of the persisted mapping document."""

    return vendor_dir / MAPPINGS_FILE_NAME


__all__ = [
    "ENV_CONFIG_PATH",
    "ENV_PUBLIC_DIR",
    "ENV_VENDOR_DIR",
    "default_config_path",
    "default_project_root",
    "default_vendor_dir",
    "default_web_root",
    "mappings_file_path",
    "resolve_overridable_path",
]
