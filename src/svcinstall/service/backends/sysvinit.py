"""SysV init script backend, also used for docker-init containers.

Scripts are written to /etc/init.d. When that directory is writable (for
example when running as root inside a container) the script is installed and
started directly; otherwise the steps are returned for the operator.
"""

import logging
import os
from pathlib import Path

from svcinstall.service import fs
from svcinstall.service.base import DESCRIPTION_SUFFIX, ServiceBackend, sudo_command
from svcinstall.service.process import CommandRunner
from svcinstall.service.runtime import build_path_value
from svcinstall.service.types import (
    InstallOptions,
    ManualStep,
    ServiceInstallResult,
    ServiceUninstallResult,
    UninstallOptions,
)

logger = logging.getLogger(__name__)

INIT_DIR = Path("/etc/init.d")
PID_DIR = "/var/run"

NO_ROOT_NOTICE = (
    "The service installer does not have (and should not have) root "
    "permissions, so the next steps have to be carried out manually."
)


class SysvinitBackend(ServiceBackend):
    """Init script backend for sysvinit and docker-init hosts."""

    def __init__(
        self, runner: CommandRunner | None = None, init_dir: Path = INIT_DIR
    ) -> None:
        super().__init__(runner)
        self.init_dir = init_dir

    @property
    def name(self) -> str:
        return "sysvinit"

    def script_path(self, name: str) -> Path:
        return self.init_dir / name

    def can_write(self) -> bool:
        """Whether the init directory can be written without escalation."""
        return os.access(self.init_dir, os.W_OK)

    def render(self, options: InstallOptions) -> str:
        name = options.name
        pid_file = f"{PID_DIR}/{name}.pid"
        env_lines = "".join(f"export {entry}\n" for entry in options.env or [])
        return f"""#!/bin/sh
### BEGIN INIT INFO
# Provides:          {name}
# Required-Start:    $remote_fs $syslog
# Required-Stop:     $remote_fs $syslog
# Default-Start:     2 3 4 5
# Default-Stop:      0 1 6
# Short-Description: {name} {DESCRIPTION_SUFFIX}
# Description:       Start {name} service
### END INIT INFO

PATH={build_path_value(options.path)}
{env_lines}
SERVICE_COMMAND="{options.cmd}"

case "$1" in
  start)
    echo "Starting {name}..."
    $SERVICE_COMMAND &
    echo $! > {pid_file}
    ;;
  stop)
    echo "Stopping {name}..."
    PID=$(cat {pid_file})
    kill $PID
    rm {pid_file}
    ;;
  restart)
    $0 stop
    $0 start
    ;;
  status)
    if [ -e {pid_file} ]; then
      echo "{name} is running"
    else
      echo "{name} is not running"
    fi
    ;;
  *)
    echo "Usage: $0 {{start|stop|restart|status}}"
    exit 1
    ;;
esac

exit 0
"""

    async def install(
        self, options: InstallOptions, only_generate: bool = False
    ) -> ServiceInstallResult:
        script_path = self.script_path(options.name)
        await self._ensure_absent(options.name, script_path)

        content = self.render(options)

        if only_generate:
            return ServiceInstallResult(
                service_path=str(script_path),
                service_file_content=content,
            )

        if not self.can_write():
            temp_path = await fs.write_temp_file("svc-init", content)
            return ServiceInstallResult(
                service_path=str(temp_path),
                service_file_content=content,
                manual_steps=[
                    ManualStep(NO_ROOT_NOTICE),
                    ManualStep(
                        "Step 1: The init script has been saved to a temporary file, "
                        "copy this file to the correct location using the following command:",
                        sudo_command("cp", temp_path, script_path),
                    ),
                    ManualStep(
                        "Step 2: Make the script executable:",
                        sudo_command("chmod", "+x", script_path),
                    ),
                    ManualStep(
                        "Step 3: Enable the service to start at boot:",
                        sudo_command("update-rc.d", options.name, "defaults"),
                    ),
                    ManualStep(
                        "Step 4: Start the service now:",
                        sudo_command("service", options.name, "start"),
                    ),
                ],
            )

        await fs.write_text(script_path, content)
        await fs.make_executable(script_path)
        await self._run_step(
            "Failed to enable service.",
            ["update-rc.d", options.name, "defaults"],
            rollback_path=script_path,
        )
        await self._run_step(
            "Failed to start service.",
            ["service", options.name, "start"],
            rollback_path=script_path,
            reload_argv=["update-rc.d", "-f", options.name, "remove"],
        )
        logger.info("Installed init script %s", script_path)

        return ServiceInstallResult(
            service_path=str(script_path),
            service_file_content=content,
        )

    async def uninstall(self, options: UninstallOptions) -> ServiceUninstallResult:
        script_path = self.script_path(options.name)
        await self._ensure_present(options.name, script_path)

        if not self.can_write():
            return ServiceUninstallResult(
                service_path=str(script_path),
                manual_steps=[
                    ManualStep(NO_ROOT_NOTICE),
                    ManualStep(
                        "Step 1: Stop the service (if it's running):",
                        sudo_command("service", options.name, "stop"),
                    ),
                    ManualStep(
                        "Step 2: Disable the service from starting at boot:",
                        sudo_command("update-rc.d", "-f", options.name, "remove"),
                    ),
                    ManualStep(
                        "Step 3: Remove the init script:",
                        sudo_command("rm", script_path),
                    ),
                ],
            )

        await self._run_step(
            "Failed to stop service.", ["service", options.name, "stop"]
        )
        await self._run_step(
            "Failed to disable service.",
            ["update-rc.d", "-f", options.name, "remove"],
        )
        await fs.remove(script_path)

        return ServiceUninstallResult(service_path=str(script_path))
