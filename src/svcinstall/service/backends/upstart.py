"""Upstart job backend.

Jobs live in /etc/init, which always needs root, so install and uninstall
both return manual steps.
"""

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

JOB_DIR = Path("/etc/init")

# At most RESPAWN_COUNT respawns within RESPAWN_INTERVAL seconds
RESPAWN_COUNT = 10
RESPAWN_INTERVAL = 5


class UpstartBackend(ServiceBackend):
    """Upstart job configuration backend."""

    def __init__(
        self, runner: CommandRunner | None = None, job_dir: Path = JOB_DIR
    ) -> None:
        super().__init__(runner)
        self.job_dir = job_dir

    @property
    def name(self) -> str:
        return "upstart"

    def job_path(self, name: str) -> Path:
        return self.job_dir / f"{name}.conf"

    def render(self, options: InstallOptions) -> str:
        name = options.name
        env_lines = "".join(f"env {entry}\n" for entry in options.env or [])
        return f"""# {name} {DESCRIPTION_SUFFIX}

description "{name} service"
author "Service user"

start on (filesystem and net-device-up IFACE!=lo)
stop on runlevel [!2345]

respawn
respawn limit {RESPAWN_COUNT} {RESPAWN_INTERVAL}

env PATH={build_path_value(options.path)}
{env_lines}
env SERVICE_COMMAND="{options.cmd}"

exec $SERVICE_COMMAND
"""

    async def install(
        self, options: InstallOptions, only_generate: bool = False
    ) -> ServiceInstallResult:
        job_path = self.job_path(options.name)
        await self._ensure_absent(options.name, job_path)

        content = self.render(options)

        if only_generate:
            return ServiceInstallResult(
                service_path=str(job_path),
                service_file_content=content,
            )

        temp_path = await fs.write_temp_file("svc-upstart", content)
        return ServiceInstallResult(
            service_path=str(temp_path),
            service_file_content=content,
            manual_steps=[
                ManualStep(
                    "The upstart configuration has been saved to a temporary file, "
                    "copy this file to the correct location using the following command:",
                    sudo_command("cp", temp_path, job_path),
                ),
                ManualStep(
                    "Start the service now:",
                    sudo_command("start", options.name),
                ),
            ],
        )

    async def uninstall(self, options: UninstallOptions) -> ServiceUninstallResult:
        job_path = self.job_path(options.name)
        await self._ensure_present(options.name, job_path)

        return ServiceUninstallResult(
            service_path=str(job_path),
            manual_steps=[
                ManualStep(
                    "Stop the service (if it's running):",
                    sudo_command("stop", options.name),
                ),
                ManualStep(
                    "Remove the job configuration:",
                    sudo_command("rm", job_path),
                ),
                ManualStep(
                    "Reload the upstart configuration:",
                    "sudo initctl reload-configuration",
                ),
            ],
        )
