"""Backend registry construction."""

from svcinstall.service.backends.launchd import LaunchdBackend
from svcinstall.service.backends.systemd import SystemdBackend
from svcinstall.service.backends.sysvinit import SysvinitBackend
from svcinstall.service.backends.upstart import UpstartBackend
from svcinstall.service.backends.windows import WindowsBackend
from svcinstall.service.base import ServiceBackend
from svcinstall.service.process import CommandRunner

SYSTEMD = "systemd"
SYSVINIT = "sysvinit"
DOCKER_INIT = "docker-init"
UPSTART = "upstart"
LAUNCHD = "launchd"
WINDOWS = "windows"
OPENRC = "openrc"


def create_default_backends(
    runner: CommandRunner | None = None,
) -> dict[str, ServiceBackend]:
    """Build the registry of built-in backends.

    sysvinit and docker-init share one init-script backend instance.

    Args:
        runner: Command runner shared by all backends.

    Returns:
        Mapping of init system identifier to backend.
    """
    runner = runner or CommandRunner()
    init_scripts = SysvinitBackend(runner)
    return {
        SYSTEMD: SystemdBackend(runner),
        SYSVINIT: init_scripts,
        DOCKER_INIT: init_scripts,
        UPSTART: UpstartBackend(runner),
        LAUNCHD: LaunchdBackend(runner),
        WINDOWS: WindowsBackend(runner),
    }


__all__ = [
    "DOCKER_INIT",
    "LAUNCHD",
    "LaunchdBackend",
    "OPENRC",
    "SYSTEMD",
    "SYSVINIT",
    "SystemdBackend",
    "SysvinitBackend",
    "UPSTART",
    "UpstartBackend",
    "WINDOWS",
    "WindowsBackend",
    "create_default_backends",
]
