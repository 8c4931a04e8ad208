"""Init system detection for the current host."""

import logging
import sys
from pathlib import Path

from svcinstall.service import fs
from svcinstall.service.backends import (
    DOCKER_INIT,
    LAUNCHD,
    OPENRC,
    SYSTEMD,
    SYSVINIT,
    UPSTART,
    WINDOWS,
)
from svcinstall.service.errors import UnsupportedInitSystemError
from svcinstall.service.process import CommandRunner

logger = logging.getLogger(__name__)

INITCTL_PATH = Path("/sbin/initctl")
UPSTART_JOB_DIR = Path("/etc/init")


async def detect_init_system(
    runner: CommandRunner | None = None,
    platform: str | None = None,
) -> str:
    """Detect which init system supervises services on this host.

    Detection order:
    1. macOS: launchd
    2. Windows: windows
    3. Otherwise, the command name of PID 1:
       systemd, docker-init, init (upstart if initctl and /etc/init exist,
       else sysvinit), openrc

    The result is never cached.

    Args:
        runner: Command runner used to query PID 1.
        platform: Platform string to check instead of sys.platform.

    Returns:
        Init system identifier.

    Raises:
        UnsupportedInitSystemError: If PID 1 matches nothing known.
    """
    platform = platform or sys.platform
    if platform == "darwin":
        return LAUNCHD
    if platform == "win32":
        return WINDOWS

    runner = runner or CommandRunner()
    result = await runner.run("ps", "-p", "1", "-o", "comm=")
    comm = result.stdout.strip()
    logger.debug("PID 1 command name: %r", comm)

    if "systemd" in comm:
        return SYSTEMD
    # docker-init also contains "init", so it has to be matched first
    if "docker-init" in comm:
        return DOCKER_INIT
    if "init" in comm:
        if await fs.is_file(INITCTL_PATH) and await fs.is_dir(UPSTART_JOB_DIR):
            return UPSTART
        return SYSVINIT
    if "openrc" in comm:
        return OPENRC

    raise UnsupportedInitSystemError()
