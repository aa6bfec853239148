"""Rich console handler rendering placement events.

Where: platform/logging/handlers.py
What: Style structured placement log records with icons and compact paths.
Why: Keep console formatting separate from logger setup.
"""

from __future__ import annotations

import logging
import sys
from pathlib import PurePath, PurePosixPath, PureWindowsPath
from typing import Any, ClassVar

if sys.version_info >= (3, 12):
    from typing import override
else:
    from typing_extensions import override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class PlacementRichHandler(RichHandler):
    """Rich handler that renders placement events with compact paths."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "placement.package.start": ("📦", "cyan"),
        "placement.package.complete": ("✅", "green"),
        "placement.copy.file": ("📄", "blue"),
        "placement.copy.directory": ("📁", "blue"),
        "placement.remove": ("🗑️", "magenta"),
        "placement.skip": ("↪️", "yellow"),
        "placement.error": ("⛔", "red"),
    }
    _EVENT_PREFIXES: ClassVar[dict[str, str]] = {
        "placement.package.start": "Placing assets for ",
        "placement.package.complete": "Finished ",
        "placement.copy.file": "Copied file ",
        "placement.copy.directory": "Copied directory ",
        "placement.remove": "Removed ",
        "placement.skip": "Skipped ",
        "placement.error": "Failed ",
    }
    _PATH_SEGMENT_LIMIT: ClassVar[int] = 4

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = False
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_path(self, path: str) -> Text:
        """Format a path with coloured separators and ellipsis truncation."""

        pure_path = self._to_pure_path(path)
        separator = "\\" if isinstance(pure_path, PureWindowsPath) else "/"
        anchor = pure_path.anchor
        body_parts = [part for part in pure_path.parts if part and part != anchor]

        truncated = len(body_parts) > self._PATH_SEGMENT_LIMIT
        if truncated:
            body_parts = body_parts[-self._PATH_SEGMENT_LIMIT:]

        display = ""
        if anchor and not truncated:
            display = anchor if isinstance(pure_path, PureWindowsPath) else separator
        if truncated:
            display = "…" + separator
        display += separator.join(body_parts)
        return self._style_path_string(display or ".", separator)

    @staticmethod
    def _to_pure_path(raw_path: str) -> PurePath:
        if "\\" in raw_path:
            return PureWindowsPath(raw_path)
        return PurePosixPath(raw_path)

    @staticmethod
    def _style_path_string(path_string: str, separator: str) -> Text:
        text = Text()
        for char in path_string:
            if char == separator or char == "…":
                _ = text.append(char, style=Style(color="magenta"))
            else:
                _ = text.append(char, style=Style(color="white"))
        return text

    def _render_placement_message(self, record: logging.LogRecord) -> Text | None:
        """Render structured placement events with dedicated styling."""

        event = getattr(record, "placement_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        prefix = self._EVENT_PREFIXES.get(event)
        if prefix:
            _ = body.append(prefix)

        package = getattr(record, "package", None)
        source_path = getattr(record, "source_path", None)
        target_path = getattr(record, "target_path", None)

        if event.startswith("placement.package"):
            if package:
                _ = body.append(str(package))
            summary: list[str] = []
            for key in ("copied", "removed", "warnings", "errors"):
                value = getattr(record, key, None)
                if isinstance(value, int):
                    summary.append(f"{key}={value}")
            if summary:
                _ = body.append(" [" + ", ".join(summary) + "]")
        else:
            if package and not (source_path or target_path):
                _ = body.append(str(package))
            if source_path:
                _ = body.append_text(self._format_path(str(source_path)))
            if target_path:
                if source_path:
                    _ = body.append(" → ")
                _ = body.append_text(self._format_path(str(target_path)))
            reason = getattr(record, "reason", None)
            if reason:
                _ = body.append(f" ({reason})")

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        placement_text = self._render_placement_message(record)
        if placement_text is not None:
            return placement_text
        return super().render_message(record, message)


__all__ = ["PlacementRichHandler"]
