"""Configuration management for the asset installer."""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from aikeedo_installer.config.paths import (
    ENV_PUBLIC_DIR,
    ENV_VENDOR_DIR,
    default_config_path,
    default_project_root,
    default_vendor_dir,
    default_web_root,
    mappings_file_path,
    resolve_overridable_path,
)
from aikeedo_installer.platform.logging import logger

_PATH_KEYS: tuple[str, ...] = ("web_root", "vendor_dir", "log_file")


class ConfigError(Exception):
    """Base exception for installer configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the TOML document cannot be parsed."""


class ConfigValidationError(ConfigError):
    """Raised when the parsed document is semantically invalid."""


@dataclass(slots=True, frozen=True)
class InstallerConfig:
    """Resolved locations used by every placement component.

    The web root is resolved once here and passed explicitly to the
    resolver, the mapping store and the orchestrator.
    """

    project_root: Path
    web_root: Path
    vendor_dir: Path
    log_file: Path | None = None

    @property
    def mappings_file(self) -> Path:
        """Location of the persisted mapping document."""

        return mappings_file_path(self.vendor_dir)

    @classmethod
    def load(
        cls,
        *,
        project_root: Path | str | None = None,
        env: Mapping[str, str] | None = None,
        config_path: Path | None = None,
        web_root: Path | str | None = None,
        vendor_dir: Path | str | None = None,
    ) -> "InstallerConfig":
        """Build the configuration from arguments, environment and TOML.

        Precedence for every location is: explicit argument, environment
        variable, configuration file, built-in default.

        Raises:
            ConfigParseError: If the configuration file is not valid TOML.
            ConfigValidationError: If a configured value has the wrong type.
        """
        root = (
            Path(project_root).expanduser().resolve()
            if project_root is not None
            else default_project_root()
        )
        environment = env if env is not None else os.environ
        file_path = config_path or default_config_path(root, environment)
        file_values = _read_config_file(file_path)

        resolved_web_root = resolve_overridable_path(
            explicit_path=web_root,
            env=environment,
            env_var=ENV_PUBLIC_DIR,
            default_factory=lambda: Path(file_values.get("web_root") or default_web_root(root)),
            base=root,
        )
        resolved_vendor_dir = resolve_overridable_path(
            explicit_path=vendor_dir,
            env=environment,
            env_var=ENV_VENDOR_DIR,
            default_factory=lambda: Path(file_values.get("vendor_dir") or default_vendor_dir(root)),
            base=root,
        )

        log_file: Path | None = None
        if file_values.get("log_file"):
            log_file = resolve_overridable_path(
                explicit_path=file_values["log_file"],
                env=None,
                env_var=None,
                default_factory=lambda: root,
                base=root,
            )

        return cls(
            project_root=root,
            web_root=resolved_web_root,
            vendor_dir=resolved_vendor_dir,
            log_file=log_file,
        )


def _read_config_file(path: Path) -> dict[str, str]:
    """Read the optional TOML configuration file.

    Args:
        path: Location of the configuration file.

    Returns:
        dict[str, str]: Non-empty path values keyed by setting name. A
        missing file yields an empty dictionary.
    """
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as handle:
            raw: dict[str, Any] = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigParseError(f"Failed to parse configuration file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigParseError(f"Failed to read configuration file {path}: {exc}") from exc

    values: dict[str, str] = {}
    for key in _PATH_KEYS:
        value = raw.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ConfigValidationError(
                f"Configuration value '{key}' must be a string, got {type(value).__name__}"
            )
        if value.strip():
            values[key] = value.strip()

    unknown = sorted(set(raw) - set(_PATH_KEYS))
    if unknown:
        logger.warning("Ignoring unknown configuration keys in %s: %s", path, ", ".join(unknown))

    logger.debug("Configuration loaded from %s", path)
    return values


__all__ = [
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "InstallerConfig",
]
