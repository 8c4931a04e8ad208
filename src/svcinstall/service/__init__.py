"""OS service installation for arbitrary commands.

Provides one interface over the native init systems:
- systemd units on Linux
- sysvinit / docker-init scripts
- upstart jobs
- launchd agents and daemons on macOS
- Windows services via sc.exe

Example:
    from svcinstall.service import InstallOptions, install_service

    result = await install_service(InstallOptions(name="web", cmd="./serve"))
    for step in result.manual_steps or []:
        print(step.text, step.command)
"""

from svcinstall.service.backends import create_default_backends
from svcinstall.service.base import ServiceBackend
from svcinstall.service.detect import detect_init_system
from svcinstall.service.errors import (
    CommandFailedError,
    ForcedInitSystemError,
    InvalidServiceConfigError,
    MissingUserError,
    ServiceError,
    ServiceExistsError,
    ServiceNotFoundError,
    UnsupportedInitSystemError,
)
from svcinstall.service.manager import ServiceManager, create_service_manager
from svcinstall.service.process import CommandRunner
from svcinstall.service.types import (
    CommandResult,
    InstallOptions,
    ManualStep,
    ServiceInstallResult,
    ServiceUninstallResult,
    UninstallOptions,
)


async def install_service(
    options: InstallOptions,
    only_generate: bool = False,
    init_system: str | None = None,
) -> ServiceInstallResult:
    """Install a command as a service using the host's init system."""
    return await create_service_manager().install(options, only_generate, init_system)


async def uninstall_service(
    options: UninstallOptions, init_system: str | None = None
) -> ServiceUninstallResult:
    """Uninstall a service using the host's (or a forced) init system."""
    return await create_service_manager().uninstall(options, init_system)


async def generate_config(
    options: InstallOptions, init_system: str | None = None
) -> str:
    """Render the service file for the host's (or a forced) init system."""
    return await create_service_manager().generate(options, init_system)


__all__ = [
    "CommandFailedError",
    "CommandResult",
    "CommandRunner",
    "ForcedInitSystemError",
    "InvalidServiceConfigError",
    "InstallOptions",
    "ManualStep",
    "MissingUserError",
    "ServiceBackend",
    "ServiceError",
    "ServiceExistsError",
    "ServiceInstallResult",
    "ServiceManager",
    "ServiceNotFoundError",
    "ServiceUninstallResult",
    "UninstallOptions",
    "UnsupportedInitSystemError",
    "create_default_backends",
    "create_service_manager",
    "detect_init_system",
    "generate_config",
    "install_service",
    "uninstall_service",
]
