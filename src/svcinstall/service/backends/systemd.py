"""Systemd backend for Linux.

User services live in ~/.config/systemd/user and are installed directly with
systemctl --user. System services live in /etc/systemd/system and need root,
so they are returned as manual steps.
"""

import logging
from pathlib import Path

from svcinstall.service import fs
from svcinstall.service.base import DESCRIPTION_SUFFIX, ServiceBackend, sudo_command
from svcinstall.service.errors import CommandFailedError, MissingUserError
from svcinstall.service.process import CommandRunner
from svcinstall.service.runtime import build_path_value, resolve_cwd
from svcinstall.service.types import (
    InstallOptions,
    ManualStep,
    ServiceInstallResult,
    ServiceUninstallResult,
    UninstallOptions,
)

logger = logging.getLogger(__name__)

SYSTEM_UNIT_DIR = Path("/etc/systemd/system")
USER_UNIT_SUBDIR = Path(".config") / "systemd" / "user"

RESTART_SEC = 30


class SystemdBackend(ServiceBackend):
    """Systemd unit backend.

    Uses systemctl --user for user services, and loginctl to enable linger so
    user services keep running after logout.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        system_unit_dir: Path = SYSTEM_UNIT_DIR,
    ) -> None:
        super().__init__(runner)
        self.system_unit_dir = system_unit_dir

    @property
    def name(self) -> str:
        return "systemd"

    def user_unit_path(self, name: str, home: str | None) -> Path:
        return Path(home or Path.home()) / USER_UNIT_SUBDIR / f"{name}.service"

    def system_unit_path(self, name: str) -> Path:
        return self.system_unit_dir / f"{name}.service"

    def render(self, options: InstallOptions) -> str:
        lines = [
            "[Unit]",
            f"Description={options.name} {DESCRIPTION_SUFFIX}",
            "",
            "[Service]",
            f'ExecStart=/bin/sh -c "{options.cmd}"',
            "Restart=always",
            f"RestartSec={RESTART_SEC}",
            f"Environment=PATH={build_path_value(options.path)}",
            *(f"Environment={entry}" for entry in options.env or []),
            f"WorkingDirectory={resolve_cwd(options.cwd)}",
        ]
        if options.system and options.user:
            lines.append(f"User={options.user}")
        wanted_by = "multi-user.target" if options.system else "default.target"
        lines += ["", "[Install]", f"WantedBy={wanted_by}", ""]
        return "\n".join(lines)

    async def install(
        self, options: InstallOptions, only_generate: bool = False
    ) -> ServiceInstallResult:
        user_path = self.user_unit_path(options.name, options.home)
        system_path = self.system_unit_path(options.name)
        service_path = system_path if options.system else user_path

        await self._ensure_absent(options.name, user_path, system_path)

        if not options.system and not only_generate:
            await self._enable_linger(options.user)

        content = self.render(options)

        if only_generate:
            return ServiceInstallResult(
                service_path=str(service_path),
                service_file_content=content,
            )

        if options.system:
            temp_path = await fs.write_temp_file("cfg", content)
            return ServiceInstallResult(
                service_path=str(temp_path),
                service_file_content=content,
                manual_steps=[
                    ManualStep(
                        "The systemd configuration has been saved to a temporary file. "
                        "Copy this file to the correct location using the following command:",
                        sudo_command("cp", temp_path, service_path),
                    ),
                    ManualStep(
                        "Reload the systemd configuration:",
                        "sudo systemctl daemon-reload",
                    ),
                    ManualStep(
                        "Enable the service:",
                        sudo_command("systemctl", "enable", options.name),
                    ),
                    ManualStep(
                        "Start the service now:",
                        sudo_command("systemctl", "start", options.name),
                    ),
                ],
            )

        await fs.write_text(service_path, content, mkdir=True)

        reload_argv = ["systemctl", "--user", "daemon-reload"]
        await self._run_step(
            "Failed to reload daemon.",
            reload_argv,
            rollback_path=service_path,
            reload_argv=reload_argv,
        )
        await self._run_step(
            "Failed to enable service.",
            ["systemctl", "--user", "enable", options.name],
            rollback_path=service_path,
            reload_argv=reload_argv,
        )
        await self._run_step(
            "Failed to start service.",
            ["systemctl", "--user", "start", options.name],
            rollback_path=service_path,
            reload_argv=reload_argv,
        )
        logger.info("Installed user service %s", options.name)

        return ServiceInstallResult(
            service_path=str(service_path),
            service_file_content=content,
        )

    async def uninstall(self, options: UninstallOptions) -> ServiceUninstallResult:
        if options.system:
            service_path = self.system_unit_path(options.name)
        else:
            service_path = self.user_unit_path(options.name, options.home)

        await self._ensure_present(options.name, service_path)

        if options.system:
            return ServiceUninstallResult(
                service_path=str(service_path),
                manual_steps=[
                    ManualStep(
                        "Please run this command to stop the service:",
                        sudo_command("systemctl", "stop", options.name),
                    ),
                    ManualStep(
                        "Please run the following command to remove the service:",
                        sudo_command("rm", service_path),
                    ),
                    ManualStep(
                        "And this command to reload the systemctl daemon:",
                        "sudo systemctl daemon-reload",
                    ),
                ],
            )

        # Stop and disable before removing the unit, then reload regardless
        stop = await self.runner.run("systemctl", "--user", "stop", options.name)
        disable = await self.runner.run(
            "systemctl", "--user", "disable", options.name
        )
        await fs.remove(service_path)
        await self._run_step(
            "Could not reload the systemd user daemon.",
            ["systemctl", "--user", "daemon-reload"],
        )
        for result in (stop, disable):
            if not result.ok:
                raise CommandFailedError(
                    f"Removed '{service_path}', but '{' '.join(result.argv)}' failed.",
                    result,
                )

        return ServiceUninstallResult(service_path=str(service_path))

    async def _enable_linger(self, user: str | None) -> None:
        """Let user services run without an active login session."""
        if not user:
            raise MissingUserError(
                "Username not found in $USER, must be specified using the "
                "--user flag or via the user option."
            )
        await self._run_step(
            "Failed to enable linger for user mode.",
            ["loginctl", "enable-linger", user],
        )
