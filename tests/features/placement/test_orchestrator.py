"""
Summary: Exercise install, update and uninstall of declared assets end to end.
Why: Placement must be reversible and tolerant of one bad entry among many.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from aikeedo_installer.features.placement import (
    JsonMappingStore,
    MappingStoreError,
    PackageDescriptor,
    PlacementAction,
    PlacementOrchestrator,
)

PackageFactory = Callable[..., PackageDescriptor]


def _mappings(path: Path) -> object:
    return json.loads(path.read_text(encoding="utf-8"))


def test_legacy_entry_keeps_relative_structure(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "widget" / "dist" / "file.js")

    report = orchestrator.install(make_package(["widget/dist/file.js"]))

    assert report.succeeded
    assert (web_root / "e" / "acme" / "chat" / "widget" / "dist" / "file.js").is_file()
    assert _mappings(mappings_file) == {
        "acme/chat": {"widget/dist/file.js": "e/acme/chat/widget/dist/file.js"}
    }


def test_target_is_the_final_directory_path(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "assets" / "img" / "logo.svg")
    _ = write_file(install_dir / "assets" / "app.css")

    report = orchestrator.install(make_package([{"source": "assets", "target": "/static/assets"}]))

    assert report.copied == {"assets": web_root / "static" / "assets"}
    assert (web_root / "static" / "assets" / "img" / "logo.svg").is_file()
    assert (web_root / "static" / "assets" / "app.css").is_file()
    assert not (web_root / "static" / "assets" / "assets").exists()
    assert _mappings(mappings_file) == {"acme/chat": {"assets": "static/assets"}}


def test_absent_target_uses_package_dir_and_basename(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "build" / "dist" / "main.js")

    _ = orchestrator.install(make_package([{"source": "build/dist"}]))

    assert (web_root / "e" / "acme" / "chat" / "dist" / "main.js").is_file()


def test_file_target_renames_the_file(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "js" / "app.js", "bundle")

    _ = orchestrator.install(make_package([{"source": "js/app.js", "target": "/app.min.js"}]))

    assert (web_root / "app.min.js").read_text(encoding="utf-8") == "bundle"


def test_fresh_install_creates_mapping_with_one_key(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "a.js")
    _ = write_file(install_dir / "b.js")
    assert not mappings_file.exists()

    _ = orchestrator.install(make_package(["a.js", {"source": "b.js", "target": "js/b.js"}]))

    document = _mappings(mappings_file)
    assert isinstance(document, dict)
    assert list(document) == ["acme/chat"]
    assert document["acme/chat"] == {"a.js": "e/acme/chat/a.js", "b.js": "e/acme/chat/js/b.js"}


def test_malformed_entry_is_skipped_and_others_proceed(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
    caplog: pytest.LogCaptureFixture,
) -> None:
    _ = write_file(install_dir / "a.js")

    with caplog.at_level(logging.WARNING):
        report = orchestrator.install(make_package([42, {"target": "/x"}, "a.js"]))

    assert report.succeeded
    assert report.warnings.count("Invalid public entry format in package acme/chat") == 2
    assert (web_root / "e" / "acme" / "chat" / "a.js").is_file()
    assert "Invalid public entry format in package acme/chat" in caplog.text


def test_missing_source_is_a_warning(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    mappings_file: Path,
) -> None:
    report = orchestrator.install(make_package(["missing.js"]))

    assert report.succeeded
    assert report.warnings == [
        f"Source path {install_dir / 'missing.js'} does not exist for package acme/chat"
    ]
    assert not mappings_file.exists()


def test_contents_glob_mirrors_into_target(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
    snapshot: Callable[[Path], set[str]],
) -> None:
    _ = write_file(install_dir / "dist" / "index.html")
    _ = write_file(install_dir / "dist" / "css" / "app.css")

    report = orchestrator.install(make_package([{"source": "dist/*", "target": "/assets"}]))

    assert report.succeeded
    assert snapshot(web_root) == {"assets/index.html", "assets/css/app.css"}
    document = _mappings(mappings_file)
    assert isinstance(document, dict)
    assert document["acme/chat"][str(install_dir / "dist" / "index.html")] == "assets/index.html"


def test_legacy_wildcard_keeps_match_paths(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
    snapshot: Callable[[Path], set[str]],
) -> None:
    _ = write_file(install_dir / "js" / "a.min.js")
    _ = write_file(install_dir / "js" / "a.js")

    _ = orchestrator.install(make_package(["js/*.min.js"]))

    assert snapshot(web_root) == {"e/acme/chat/js/a.min.js"}


def test_glob_without_matches_is_a_warning(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
) -> None:
    report = orchestrator.install(make_package(["*.none"]))

    assert report.succeeded
    assert report.copied == {}
    assert report.warnings == ["No entries matched *.none for package acme/chat"]


def test_placing_onto_web_root_is_refused(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    web_root: Path,
    write_file: Callable[..., Path],
    install_dir: Path,
) -> None:
    _ = write_file(install_dir / "index.php")

    report = orchestrator.install(make_package([{"source": ".", "target": "/"}]))

    assert report.copied == {}
    assert any("web root itself" in warning for warning in report.warnings)
    assert list(web_root.iterdir()) == []


def test_unsupported_type_is_ignored(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "a.js")
    package = make_package(["a.js"], package_type="library")

    install = orchestrator.install(package)
    uninstall = orchestrator.uninstall(package)

    assert install.copied == {} and install.warnings == [] and install.errors == []
    assert uninstall.removed == []
    assert list(web_root.iterdir()) == []
    assert not mappings_file.exists()


def test_theme_packages_are_supported(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "style.css")

    _ = orchestrator.install(make_package(["style.css"], package_type="aikeedo-theme"))

    assert (web_root / "e" / "acme" / "chat" / "style.css").is_file()


def test_missing_install_dir_is_an_error(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
) -> None:
    package = make_package(["a.js"])
    package.install_dir = None

    report = orchestrator.install(package)

    assert not report.succeeded
    assert report.errors == ["No install directory known for package acme/chat"]


def test_persistence_failure_keeps_copied_files(
    orchestrator: PlacementOrchestrator,
    store: JsonMappingStore,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
    mocker: MockerFixture,
) -> None:
    _ = write_file(install_dir / "a.js")
    _ = mocker.patch.object(store, "merge", side_effect=MappingStoreError("disk full"))

    report = orchestrator.install(make_package(["a.js"]))

    assert not report.succeeded
    assert "disk full" in report.errors[0]
    assert (web_root / "e" / "acme" / "chat" / "a.js").is_file()


def test_copy_error_is_isolated_to_its_entry(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "a.js")
    _ = write_file(install_dir / "b.js")
    # A file where a directory is needed makes the first copy fail.
    _ = write_file(web_root / "blocked")

    report = orchestrator.install(
        make_package([{"source": "a.js", "target": "/blocked/a.js"}, "b.js"])
    )

    assert len(report.errors) == 1
    assert report.errors[0].startswith("Error processing entry for package acme/chat")
    assert (web_root / "e" / "acme" / "chat" / "b.js").is_file()


def test_install_then_uninstall_restores_web_root(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
    tree: Callable[[Path], set[str]],
) -> None:
    _ = write_file(web_root / "index.php")
    (web_root / "uploads").mkdir()
    _ = write_file(install_dir / "widget" / "dist" / "file.js")
    _ = write_file(install_dir / "dist" / "index.html")
    _ = write_file(install_dir / "dist" / "css" / "app.css")
    _ = write_file(install_dir / "assets" / "logo.svg")
    before = tree(web_root)
    package = make_package(
        [
            "widget/dist/file.js",
            {"source": "dist/*", "target": "/assets"},
            {"source": "assets", "target": "/static/assets"},
        ]
    )

    _ = orchestrator.install(package)
    report = orchestrator.uninstall(package)

    assert report.succeeded
    assert report.action is PlacementAction.UNINSTALL
    assert tree(web_root) == before
    assert not (web_root / "e" / "acme").exists()
    assert _mappings(mappings_file) == {}


def test_uninstall_leaves_other_packages_alone(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    tmp_path: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
) -> None:
    other_dir = tmp_path / "packages" / "acme" / "forms"
    _ = write_file(install_dir / "a.js")
    _ = write_file(other_dir / "f.js")
    chat = make_package(["a.js"])
    forms = make_package(["f.js"], pretty_name="acme/forms", directory=other_dir)

    _ = orchestrator.install(chat)
    _ = orchestrator.install(forms)
    _ = orchestrator.uninstall(chat)

    assert (web_root / "e" / "acme" / "forms" / "f.js").is_file()
    assert not (web_root / "e" / "acme" / "chat").exists()
    assert _mappings(mappings_file) == {"acme/forms": {"f.js": "e/acme/forms/f.js"}}


def test_double_uninstall_is_a_no_op(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "a.js")
    package = make_package(["a.js"])
    _ = orchestrator.install(package)

    first = orchestrator.uninstall(package)
    second = orchestrator.uninstall(package)

    assert len(first.removed) == 1
    assert second.removed == [] and second.warnings == [] and second.errors == []


def test_uninstall_tolerates_already_deleted_files(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "a.js")
    package = make_package(["a.js"])
    _ = orchestrator.install(package)
    (web_root / "e" / "acme" / "chat" / "a.js").unlink()

    report = orchestrator.uninstall(package)

    assert report.succeeded
    assert report.removed == []


def test_uninstall_finds_record_case_insensitively(
    orchestrator: PlacementOrchestrator,
    store: JsonMappingStore,
    make_package: PackageFactory,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
) -> None:
    placed = write_file(web_root / "e" / "acme" / "chat" / "a.js")
    store.merge("ACME/Chat", {"a.js": placed})

    report = orchestrator.uninstall(make_package(["a.js"]))

    assert report.removed == [placed]
    assert _mappings(mappings_file) == {}


def test_unreadable_mappings_make_uninstall_a_warning(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    mappings_file: Path,
) -> None:
    mappings_file.parent.mkdir(parents=True)
    _ = mappings_file.write_text("{broken", encoding="utf-8")

    report = orchestrator.uninstall(make_package(["a.js"]))

    assert report.succeeded
    assert len(report.warnings) == 1


def test_update_replaces_previous_files(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
    snapshot: Callable[[Path], set[str]],
) -> None:
    _ = write_file(install_dir / "a.js")
    _ = orchestrator.install(make_package(["a.js"]))
    (install_dir / "a.js").unlink()
    _ = write_file(install_dir / "b.js")

    report = orchestrator.update(make_package(["b.js"]))

    assert report.action is PlacementAction.UPDATE
    assert report.removed == [web_root / "e" / "acme" / "chat" / "a.js"]
    assert snapshot(web_root) == {"e/acme/chat/b.js"}
    assert _mappings(mappings_file) == {"acme/chat": {"b.js": "e/acme/chat/b.js"}}


def test_absolute_source_cannot_publish_host_files(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    tmp_path: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
) -> None:
    secret = write_file(tmp_path / "outside" / "secret.txt", "private")

    report = orchestrator.install(make_package([{"source": str(secret), "target": "/leak.txt"}]))

    assert report.copied == {}
    assert report.warnings == ["Invalid public entry format in package acme/chat"]
    assert not (web_root / "leak.txt").exists()
    assert not mappings_file.exists()


def test_parent_segments_in_source_are_rejected(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    tmp_path: Path,
    web_root: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(tmp_path / "packages" / "acme" / "secret.txt")

    report = orchestrator.install(make_package(["../secret.txt", {"source": "../secret.txt", "target": "/"}]))

    assert report.copied == {}
    assert len(report.warnings) == 2
    assert list(web_root.iterdir()) == []


def test_target_escaping_web_root_is_refused(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    tmp_path: Path,
    write_file: Callable[..., Path],
) -> None:
    _ = write_file(install_dir / "a.js")

    report = orchestrator.install(
        make_package(
            [
                {"source": "a.js", "target": "/../escaped.js"},
                {"source": "a.js", "target": "../../../../x.js"},
            ]
        )
    )

    assert report.copied == {}
    assert all("outside the web root" in warning for warning in report.warnings)
    assert len(report.warnings) == 2
    assert not (tmp_path / "escaped.js").exists()


def test_uninstall_never_removes_outside_web_root(
    orchestrator: PlacementOrchestrator,
    store: JsonMappingStore,
    make_package: PackageFactory,
    tmp_path: Path,
    write_file: Callable[..., Path],
) -> None:
    keep = write_file(tmp_path / "keep.txt")
    store.merge("acme/chat", {"a.js": keep})

    report = orchestrator.uninstall(make_package(["a.js"]))

    assert keep.is_file()
    assert report.removed == []
    assert report.warnings == [f"Refusing to remove {keep} outside the web root"]


def test_uninstall_keeps_files_already_in_a_merged_directory(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    mappings_file: Path,
    write_file: Callable[..., Path],
    tree: Callable[[Path], set[str]],
) -> None:
    _ = write_file(web_root / "static" / "site.css")
    _ = write_file(install_dir / "assets" / "app.css")
    _ = write_file(install_dir / "assets" / "img" / "logo.svg")
    before = tree(web_root)
    package = make_package([{"source": "assets", "target": "/static"}])

    report = orchestrator.install(package)

    assert (web_root / "static" / "img" / "logo.svg").is_file()
    document = _mappings(mappings_file)
    assert isinstance(document, dict)
    assert document["acme/chat"] == {
        str(install_dir / "assets" / "app.css"): "static/app.css",
        str(install_dir / "assets" / "img"): "static/img",
        str(install_dir / "assets" / "img" / "logo.svg"): "static/img/logo.svg",
    }
    assert report.succeeded

    _ = orchestrator.uninstall(package)

    assert tree(web_root) == before


def test_contents_glob_leaves_existing_subdirectories(
    orchestrator: PlacementOrchestrator,
    make_package: PackageFactory,
    install_dir: Path,
    web_root: Path,
    write_file: Callable[..., Path],
    tree: Callable[[Path], set[str]],
) -> None:
    _ = write_file(web_root / "assets" / "css" / "site.css")
    _ = write_file(install_dir / "dist" / "css" / "app.css")
    before = tree(web_root)
    package = make_package([{"source": "dist/*", "target": "/assets"}])

    _ = orchestrator.install(package)
    assert (web_root / "assets" / "css" / "app.css").is_file()

    _ = orchestrator.uninstall(package)

    assert tree(web_root) == before
