"""svcinstall - install any command as an OS service."""

from svcinstall.service import (
    InstallOptions,
    ManualStep,
    ServiceError,
    ServiceInstallResult,
    ServiceUninstallResult,
    UninstallOptions,
    generate_config,
    install_service,
    uninstall_service,
)

__all__ = [
    "InstallOptions",
    "ManualStep",
    "ServiceError",
    "ServiceInstallResult",
    "ServiceUninstallResult",
    "UninstallOptions",
    "generate_config",
    "install_service",
    "uninstall_service",
]
