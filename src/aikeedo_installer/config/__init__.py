"""Configuration loading and shared constants."""

from __future__ import annotations

from .config import ConfigError, ConfigParseError, ConfigValidationError, InstallerConfig

__all__ = [
    "ConfigError",
    "ConfigParseError",
    "ConfigValidationError",
    "InstallerConfig",
]
