"""Shared pytest fixtures for placement tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from aikeedo_installer.features.placement import (
    JsonMappingStore,
    LocalFileSystemGateway,
    PackageDescriptor,
    PlacementOrchestrator,
)

PackageFactory = Callable[..., PackageDescriptor]


@pytest.fixture
def web_root(tmp_path: Path) -> Path:
    """Provide an empty web root."""

    root = tmp_path / "public"
    root.mkdir()
    return root


@pytest.fixture
def install_dir(tmp_path: Path) -> Path:
    """Provide the directory a package's sources were installed into."""

    directory = tmp_path / "packages" / "acme" / "chat"
    directory.mkdir(parents=True)
    return directory


@pytest.fixture
def mappings_file(tmp_path: Path) -> Path:
    return tmp_path / "vendor" / "aikeedo-file-mappings.json"


@pytest.fixture
def store(mappings_file: Path, web_root: Path) -> JsonMappingStore:
    return JsonMappingStore(mappings_file, web_root)


@pytest.fixture
def orchestrator(web_root: Path, store: JsonMappingStore) -> PlacementOrchestrator:
    return PlacementOrchestrator(
        web_root=web_root,
        filesystem=LocalFileSystemGateway(),
        mappings=store,
    )


@pytest.fixture
def make_package(install_dir: Path) -> PackageFactory:
    """Build descriptors for ``acme/chat`` with the given public entries."""

    def _factory(
        public: Any = None,
        *,
        pretty_name: str = "acme/chat",
        package_type: str = "aikeedo-plugin",
        name: str = "",
        directory: Path | None = None,
    ) -> PackageDescriptor:
        extra: dict[str, Any] = {} if public is None else {"public": public}
        return PackageDescriptor(
            pretty_name=pretty_name,
            type=package_type,
            extra=extra,
            name=name,
            install_dir=directory or install_dir,
        )

    return _factory


def _write_file(path: Path, content: str = "data") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    _ = path.write_text(content, encoding="utf-8")
    return path


def _snapshot(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() for p in root.rglob("*") if p.is_file()}


def _tree(root: Path) -> set[str]:
    return {p.relative_to(root).as_posix() + ("/" if p.is_dir() else "") for p in root.rglob("*")}


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Create a file and its parents: ``write_file(path, content="data")``."""

    return _write_file


@pytest.fixture
def snapshot() -> Callable[[Path], set[str]]:
    """Relative paths of every file below a root."""

    return _snapshot


@pytest.fixture
def tree() -> Callable[[Path], set[str]]:
    """Relative paths of every file and directory below a root; directories end in ``/``."""

    return _tree
