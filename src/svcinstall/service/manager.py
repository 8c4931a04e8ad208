"""Dispatch of service operations to the backend for an init system."""

import logging
import os
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import replace
from pathlib import Path

from svcinstall.service.backends import create_default_backends
from svcinstall.service.base import ServiceBackend
from svcinstall.service.detect import detect_init_system
from svcinstall.service.errors import (
    ForcedInitSystemError,
    UnsupportedInitSystemError,
)
from svcinstall.service.process import CommandRunner
from svcinstall.service.types import (
    InstallOptions,
    ServiceInstallResult,
    ServiceUninstallResult,
    UninstallOptions,
)

logger = logging.getLogger(__name__)

Detector = Callable[[], Awaitable[str]]


def prepare_install_options(options: InstallOptions) -> InstallOptions:
    """Fill in home, user and working directory from the caller's environment."""
    return replace(
        options,
        home=options.home or os.environ.get("HOME") or str(Path.home()),
        user=options.user or os.environ.get("USER"),
        cwd=options.cwd or os.getcwd(),
    )


def prepare_uninstall_options(options: UninstallOptions) -> UninstallOptions:
    return replace(
        options,
        home=options.home or os.environ.get("HOME") or str(Path.home()),
    )


class ServiceManager:
    """Routes install, uninstall and generate calls to a backend.

    The registry is passed in rather than held globally, so each manager is
    independent.

    Example:
        manager = ServiceManager(create_default_backends())
        result = await manager.install(InstallOptions(name="web", cmd="./serve"))
    """

    def __init__(
        self,
        backends: Mapping[str, ServiceBackend],
        detector: Detector | None = None,
    ) -> None:
        """Initialize the service manager.

        Args:
            backends: Mapping of init system identifier to backend.
            detector: Coroutine function returning the host's init system,
                or None to inspect the real host.
        """
        self._backends = dict(backends)
        self._detector = detector or detect_init_system

    @property
    def init_systems(self) -> list[str]:
        """Registered init system identifiers."""
        return list(self._backends)

    def get_backend(self, init_system: str) -> ServiceBackend:
        """Look up the backend for an init system.

        Raises:
            UnsupportedInitSystemError: If nothing is registered for it.
        """
        backend = self._backends.get(init_system)
        if backend is None:
            raise UnsupportedInitSystemError(init_system)
        return backend

    async def resolve(self, init_system: str | None = None) -> ServiceBackend:
        """Resolve the backend for a forced or detected init system."""
        if init_system is None:
            init_system = await self._detector()
            logger.debug("Detected init system %s", init_system)
        backend = self.get_backend(init_system)
        logger.debug("Using %s backend for %s", backend.name, init_system)
        return backend

    async def install(
        self,
        options: InstallOptions,
        only_generate: bool = False,
        init_system: str | None = None,
    ) -> ServiceInstallResult:
        """Install a service, or generate its file when only_generate is set.

        Args:
            options: Install options; missing defaults are filled in.
            only_generate: Render without writing or running anything.
            init_system: Force a backend. Only allowed with only_generate.

        Raises:
            ForcedInitSystemError: If init_system is given for a real install.
        """
        if init_system and not only_generate:
            raise ForcedInitSystemError(
                "Manually selecting an init system is not possible while installing."
            )
        backend = await self.resolve(init_system)
        return await backend.install(prepare_install_options(options), only_generate)

    async def generate(
        self, options: InstallOptions, init_system: str | None = None
    ) -> str:
        """Render the service file without any existence check or side effect."""
        backend = await self.resolve(init_system)
        return backend.render(prepare_install_options(options))

    async def uninstall(
        self, options: UninstallOptions, init_system: str | None = None
    ) -> ServiceUninstallResult:
        backend = await self.resolve(init_system)
        return await backend.uninstall(prepare_uninstall_options(options))


def create_service_manager(runner: CommandRunner | None = None) -> ServiceManager:
    """Build a manager over the built-in backends and the host detector."""
    runner = runner or CommandRunner()

    async def detect() -> str:
        return await detect_init_system(runner)

    return ServiceManager(create_default_backends(runner), detector=detect)
