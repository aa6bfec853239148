"""Host-facing plugin wiring the placement feature into package lifecycle events."""

from __future__ import annotations

import dataclasses
from logging import Logger, getLogger
from typing import final

from aikeedo_installer.config import InstallerConfig
from aikeedo_installer.features.placement import (
    JsonMappingStore,
    LocalFileSystemGateway,
    PackageDescriptor,
    PlacementAction,
    PlacementOrchestrator,
    PlacementReport,
)
from aikeedo_installer.features.placement.usecases.ports import FileSystemGateway

from .events import (
    POST_PACKAGE_INSTALL,
    POST_PACKAGE_UPDATE,
    PRE_PACKAGE_UNINSTALL,
    PackageEvent,
    package_from_operation,
)
from .installer import PackageInstaller


@final
class AssetPlugin:
    """Application façade the host package manager talks to.

    ``activate`` must run before any hook. Hooks never raise into the host:
    failures are logged and kept in the returned report.
    """

    _filesystem: FileSystemGateway
    _logger: Logger
    _config: InstallerConfig | None
    _installer: PackageInstaller | None
    _orchestrator: PlacementOrchestrator | None

    def __init__(
        self,
        *,
        filesystem: FileSystemGateway | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._filesystem = filesystem or LocalFileSystemGateway()
        self._logger = logger or getLogger(__name__)
        self._config = None
        self._installer = None
        self._orchestrator = None

    @property
    def installer(self) -> PackageInstaller:
        if self._installer is None:
            raise RuntimeError("AssetPlugin has not been activated")
        return self._installer

    @property
    def orchestrator(self) -> PlacementOrchestrator:
        if self._orchestrator is None:
            raise RuntimeError("AssetPlugin has not been activated")
        return self._orchestrator

    def activate(self, config: InstallerConfig) -> None:
        """Build the installer, mapping store and orchestrator for ``config``."""

        self._config = config
        self._installer = PackageInstaller(config.project_root)
        store = JsonMappingStore(config.mappings_file, config.web_root, self._logger)
        self._orchestrator = PlacementOrchestrator(
            web_root=config.web_root,
            filesystem=self._filesystem,
            mappings=store,
            logger=self._logger,
        )
        self._logger.debug("Using webroot: %s", config.web_root)

    def deactivate(self) -> None:
        """Nothing to release."""

    def uninstall(self) -> None:
        """Recorded mappings stay on disk when the plugin itself is removed."""

    @staticmethod
    def subscribed_events() -> dict[str, str]:
        return {
            POST_PACKAGE_INSTALL: "on_package_install",
            POST_PACKAGE_UPDATE: "on_package_update",
            PRE_PACKAGE_UNINSTALL: "on_package_uninstall",
        }

    def dispatch(self, event: PackageEvent) -> None:
        """Route a host event to its hook; unknown events are ignored."""

        method_name = self.subscribed_events().get(event.name)
        if method_name is None:
            self._logger.debug("Ignoring unsubscribed event %s", event.name)
            return
        getattr(self, method_name)(event)

    def on_package_install(self, event: PackageEvent) -> None:
        self._handle_event(PlacementAction.INSTALL, event)

    def on_package_update(self, event: PackageEvent) -> None:
        self._handle_event(PlacementAction.UPDATE, event)

    def on_package_uninstall(self, event: PackageEvent) -> None:
        self._handle_event(PlacementAction.UNINSTALL, event)

    def handle(self, action: PlacementAction, package: PackageDescriptor) -> PlacementReport | None:
        """Run ``action`` for ``package``; unsupported packages return ``None``."""

        if not self.installer.supports(package.type):
            return None

        if package.install_dir is None:
            package = dataclasses.replace(package, install_dir=self.installer.install_path(package))

        try:
            if action is PlacementAction.INSTALL:
                return self.orchestrator.install(package)
            if action is PlacementAction.UPDATE:
                return self.orchestrator.update(package)
            return self.orchestrator.uninstall(package)
        except Exception as exc:
            message = f"Error handling {action.value} for package {package.pretty_name}: {exc}"
            self._logger.exception(message)
            return PlacementReport(package=package.pretty_name, action=action, errors=[message])

    def _handle_event(self, action: PlacementAction, event: PackageEvent) -> None:
        package = package_from_operation(event.operation)
        if package is None:
            return
        _ = self.handle(action, package)


__all__ = ["AssetPlugin"]
