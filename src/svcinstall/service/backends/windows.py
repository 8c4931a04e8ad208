"""Windows backend using a batch wrapper registered with sc.exe.

The batch file sets up PATH and the extra environment, then hands the command
to the SCM bridge in svcinstall.service.winservice. Registration goes through
an elevation prompt (PowerShell Start-Process -Verb RunAs), so there is no
separate user/system split here.
"""

import logging
from pathlib import Path

from svcinstall.service import fs
from svcinstall.service.base import ServiceBackend
from svcinstall.service.runtime import build_path_value, get_exec_path, resolve_cwd
from svcinstall.service.types import (
    InstallOptions,
    ServiceInstallResult,
    ServiceUninstallResult,
    UninstallOptions,
)

logger = logging.getLogger(__name__)

SERVICE_SUBDIR = ".service"
BRIDGE_MODULE = "svcinstall.service.winservice"


def elevated_sc_argv(sc_args: str) -> list[str]:
    """Build a PowerShell invocation that runs sc.exe through UAC.

    PowerShell waits for sc.exe and exits with its status, so a failed or
    declined registration surfaces as a non-zero exit.
    """
    quoted = sc_args.replace("'", "''")
    script = (
        f"$p = Start-Process sc.exe -ArgumentList '{quoted}' "
        "-Verb RunAs -Wait -PassThru; exit $p.ExitCode"
    )
    return ["powershell.exe", "-NoProfile", "-Command", script]


class WindowsBackend(ServiceBackend):
    """Windows Service Control Manager backend."""

    @property
    def name(self) -> str:
        return "windows"

    def batch_path(self, name: str, home: str | None) -> Path:
        return Path(home or Path.home()) / SERVICE_SUBDIR / f"{name}.bat"

    def render(self, options: InstallOptions) -> str:
        path_value = build_path_value(options.path, separator=";")
        lines = [
            "@echo off",
            f'cd /d "{resolve_cwd(options.cwd)}"',
            f'set "PATH={path_value};%PATH%"',
            *(f'set "{entry}"' for entry in options.env or []),
            f'"{get_exec_path()}" -m {BRIDGE_MODULE} '
            f"--service-name {options.name} -- {options.cmd}",
            "",
        ]
        return "\n".join(lines)

    async def install(
        self, options: InstallOptions, only_generate: bool = False
    ) -> ServiceInstallResult:
        batch_path = self.batch_path(options.name, options.home)
        await self._ensure_absent(options.name, batch_path)

        content = self.render(options)

        if only_generate:
            return ServiceInstallResult(
                service_path=str(batch_path),
                service_file_content=content,
            )

        await fs.write_text(batch_path, content, mkdir=True)

        sc_args = (
            f'create {options.name} binPath="cmd.exe /C {batch_path}" '
            f'start= auto DisplayName= "{options.name}" obj= LocalSystem'
        )
        await self._run_step(
            "Failed to install service.",
            elevated_sc_argv(sc_args),
            rollback_path=batch_path,
        )
        logger.info("Registered Windows service %s", options.name)

        return ServiceInstallResult(
            service_path=str(batch_path),
            service_file_content=content,
        )

    async def uninstall(self, options: UninstallOptions) -> ServiceUninstallResult:
        batch_path = self.batch_path(options.name, options.home)
        await self._ensure_present(options.name, batch_path)

        await self._run_step(
            "Failed to uninstall service.",
            elevated_sc_argv(f"delete {options.name}"),
        )
        await fs.remove(batch_path)

        return ServiceUninstallResult(service_path=str(batch_path))
