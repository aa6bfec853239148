"""Where: src/aikeedo_installer/config/settings.py
What: Fixed names and constants shared by the installer layers.
Why: Keep directory conventions and file names in one place so the
    resolver, the store and the host adapter agree on them.
"""

from __future__ import annotations

from typing import Final

# Package types handled by the installer ---------------------------------------

PLUGIN_PACKAGE_TYPE: Final[str] = "aikeedo-plugin"
THEME_PACKAGE_TYPE: Final[str] = "aikeedo-theme"

# Key under the package ``extra`` section listing public assets.
PUBLIC_EXTRA_KEY: Final[str] = "public"


# Directory layout ---------------------------------------------------------------

DEFAULT_WEB_ROOT_NAME: Final[str] = "public"
DEFAULT_VENDOR_DIR_NAME: Final[str] = "vendor"

# Per-package assets land in ``<web_root>/e/<vendor>/<project>``.
PACKAGE_ASSET_DIR_NAME: Final[str] = "e"

# Base directory for package sources, relative to the project root.
INSTALL_BASE_DIR: Final[str] = "public/content"
PLUGIN_INSTALL_DIR_NAME: Final[str] = "plugins"
THEME_INSTALL_DIR_NAME: Final[str] = "themes"

DIRECTORY_MODE: Final[int] = 0o755


# Persistence ----------------------------------------------------------------------

MAPPINGS_FILE_NAME: Final[str] = "aikeedo-file-mappings.json"
CONFIG_FILE_NAME: Final[str] = "aikeedo-installer.toml"
MAPPINGS_JSON_INDENT: Final[int] = 4
MAPPINGS_FILE_MODE: Final[int] = 0o644


__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_VENDOR_DIR_NAME",
    "DEFAULT_WEB_ROOT_NAME",
    "DIRECTORY_MODE",
    "INSTALL_BASE_DIR",
    "MAPPINGS_FILE_MODE",
    "MAPPINGS_FILE_NAME",
    "MAPPINGS_JSON_INDENT",
    "PACKAGE_ASSET_DIR_NAME",
    "PLUGIN_INSTALL_DIR_NAME",
    "PLUGIN_PACKAGE_TYPE",
    "PUBLIC_EXTRA_KEY",
    "THEME_INSTALL_DIR_NAME",
    "THEME_PACKAGE_TYPE",
]
