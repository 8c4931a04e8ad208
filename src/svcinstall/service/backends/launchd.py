"""Launchd backend for macOS.

User agents are written to ~/Library/LaunchAgents and loaded with launchctl.
System daemons belong in /Library/LaunchDaemons and are returned as manual
steps.
"""

import logging
import plistlib
import re
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

from svcinstall.service import fs
from svcinstall.service.base import ServiceBackend, split_env_entry, sudo_command
from svcinstall.service.errors import InvalidServiceConfigError
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

SYSTEM_DAEMON_DIR = Path("/Library/LaunchDaemons")
USER_AGENT_SUBDIR = Path("Library") / "LaunchAgents"

# Characters plist XML cannot carry
CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f]")

# What plistlib writes for the empty environment dict, replaced after dumping
ENV_PLACEHOLDER = "\t<key>EnvironmentVariables</key>\n\t<dict/>\n"


class LaunchdBackend(ServiceBackend):
    """Launchd property list backend.

    The command line is split on whitespace into ProgramArguments. Quoted
    arguments containing spaces are not supported.
    """

    def __init__(
        self,
        runner: CommandRunner | None = None,
        system_daemon_dir: Path = SYSTEM_DAEMON_DIR,
    ) -> None:
        super().__init__(runner)
        self.system_daemon_dir = system_daemon_dir

    @property
    def name(self) -> str:
        return "launchd"

    def user_plist_path(self, name: str, home: str | None) -> Path:
        return Path(home or Path.home()) / USER_AGENT_SUBDIR / f"{name}.plist"

    def system_plist_path(self, name: str) -> Path:
        return self.system_daemon_dir / f"{name}.plist"

    def render(self, options: InstallOptions) -> str:
        """Render the property list.

        EnvironmentVariables is written by hand so that every env entry keeps
        its own key, in input order and after PATH, duplicates included.

        Raises:
            InvalidServiceConfigError: If a value contains control characters.
        """
        plist: dict[str, Any] = {
            "Label": options.name,
            "ProgramArguments": options.cmd.split(),
            "EnvironmentVariables": {},
            "WorkingDirectory": resolve_cwd(options.cwd),
            "RunAtLoad": True,
            "KeepAlive": True,
        }
        if options.system and options.user:
            plist["UserName"] = options.user

        try:
            content = plistlib.dumps(plist, sort_keys=False).decode("utf-8")
        except ValueError as e:
            raise InvalidServiceConfigError(
                f"Cannot write launchd configuration for '{options.name}': {e}"
            ) from e
        return content.replace(ENV_PLACEHOLDER, self._render_environment(options), 1)

    def _render_environment(self, options: InstallOptions) -> str:
        entries = [("PATH", build_path_value(options.path))]
        entries += [split_env_entry(entry) for entry in options.env or []]

        lines = ["\t<key>EnvironmentVariables</key>", "\t<dict>"]
        for key, value in entries:
            if CONTROL_CHARS.search(key) or CONTROL_CHARS.search(value):
                raise InvalidServiceConfigError(
                    f"Environment variable {key!r} contains control characters."
                )
            lines.append(f"\t\t<key>{escape(key)}</key>")
            lines.append(f"\t\t<string>{escape(value)}</string>")
        lines.append("\t</dict>")
        return "\n".join(lines) + "\n"

    async def install(
        self, options: InstallOptions, only_generate: bool = False
    ) -> ServiceInstallResult:
        user_path = self.user_plist_path(options.name, options.home)
        system_path = self.system_plist_path(options.name)
        plist_path = system_path if options.system else user_path

        # Never shadow an existing service, whichever mode it was installed in
        await self._ensure_absent(options.name, user_path, system_path)

        content = self.render(options)

        if only_generate:
            return ServiceInstallResult(
                service_path=str(plist_path),
                service_file_content=content,
            )

        if options.system:
            temp_path = await fs.write_temp_file("svc-launchd", content)
            return ServiceInstallResult(
                service_path=str(temp_path),
                service_file_content=content,
                manual_steps=[
                    ManualStep(
                        "The launchd configuration has been saved to a temporary file. "
                        "Copy this file to the correct location using the following command:",
                        sudo_command("cp", temp_path, plist_path),
                    ),
                    ManualStep(
                        "Load the service:",
                        sudo_command("launchctl", "load", plist_path),
                    ),
                ],
            )

        await fs.write_text(plist_path, content, mkdir=True)
        await self._run_step(
            "Failed to load service.",
            ["launchctl", "load", str(plist_path)],
            rollback_path=plist_path,
        )
        logger.info("Loaded launch agent %s", options.name)

        return ServiceInstallResult(
            service_path=str(plist_path),
            service_file_content=content,
        )

    async def uninstall(self, options: UninstallOptions) -> ServiceUninstallResult:
        if options.system:
            plist_path = self.system_plist_path(options.name)
        else:
            plist_path = self.user_plist_path(options.name, options.home)

        await self._ensure_present(options.name, plist_path)

        if options.system:
            return ServiceUninstallResult(
                service_path=str(plist_path),
                manual_steps=[
                    ManualStep(
                        "Unload the service (if it's running):",
                        sudo_command("launchctl", "unload", plist_path),
                    ),
                    ManualStep(
                        "Remove the service configuration:",
                        sudo_command("rm", plist_path),
                    ),
                ],
            )

        await self._run_step(
            "Failed to unload service.",
            ["launchctl", "unload", str(plist_path)],
        )
        await fs.remove(plist_path)

        return ServiceUninstallResult(service_path=str(plist_path))
