"""Abstract base for init-system backends."""

import logging
import shlex
from abc import ABC, abstractmethod
from collections.abc import Sequence
from pathlib import Path

from svcinstall.service import fs
from svcinstall.service.errors import (
    CommandFailedError,
    ServiceExistsError,
    ServiceNotFoundError,
)
from svcinstall.service.process import CommandRunner
from svcinstall.service.types import (
    CommandResult,
    InstallOptions,
    ServiceInstallResult,
    ServiceUninstallResult,
    UninstallOptions,
)

logger = logging.getLogger(__name__)

# Appended to descriptions so existing installations keep recognisable names
DESCRIPTION_SUFFIX = "(Deno Service)"


class ServiceBackend(ABC):
    """Abstract interface for init-system backends.

    A backend renders the native configuration file for an init system and
    performs (or describes) the steps that register it:
    - systemd units
    - sysvinit init scripts (also used under docker-init)
    - upstart jobs
    - launchd property lists
    - Windows batch wrappers registered with sc.exe

    Backends never escalate privileges. Where root is needed, they write the
    file to a temporary location and return manual steps instead.
    """

    def __init__(self, runner: CommandRunner | None = None) -> None:
        self.runner = runner or CommandRunner()

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name (e.g., 'systemd', 'launchd')."""
        ...

    @abstractmethod
    def render(self, options: InstallOptions) -> str:
        """Render the native service file for the given options."""
        ...

    @abstractmethod
    async def install(
        self, options: InstallOptions, only_generate: bool = False
    ) -> ServiceInstallResult:
        """Install the service, or only generate its file.

        Args:
            options: Completed install options.
            only_generate: Return the rendered file without touching the
                filesystem or running commands.

        Raises:
            ServiceExistsError: If a service file is already present.
            CommandFailedError: If a post-install command fails. Any written
                file has been rolled back.
        """
        ...

    @abstractmethod
    async def uninstall(self, options: UninstallOptions) -> ServiceUninstallResult:
        """Remove the service, or describe how to.

        Raises:
            ServiceNotFoundError: If no service file exists.
            CommandFailedError: If a removal command fails.
        """
        ...

    async def _ensure_absent(self, name: str, *paths: Path) -> None:
        """Fail if any candidate service file already exists."""
        for path in paths:
            if await fs.exists(path):
                raise ServiceExistsError(name, str(path))

    async def _ensure_present(self, name: str, path: Path) -> None:
        if not await fs.exists(path):
            raise ServiceNotFoundError(name, str(path))

    async def _run_step(
        self,
        message: str,
        argv: Sequence[str],
        *,
        rollback_path: Path | None = None,
        reload_argv: Sequence[str] | None = None,
    ) -> CommandResult:
        """Run one post-install command, rolling back if it fails.

        Args:
            message: Error message used if the command fails.
            argv: Command to run.
            rollback_path: File to delete when the command fails.
            reload_argv: Command run after deleting the file, such as a
                daemon reload or deregistration.

        Raises:
            CommandFailedError: If the command exits non-zero.
        """
        result = await self.runner.run(*argv)
        if result.ok:
            return result

        rollback_error = None
        if rollback_path is not None:
            rollback_error = await self._rollback(rollback_path, reload_argv)
            message = f"{message} Rolled back any changes."
        raise CommandFailedError(message, result, rollback_error=rollback_error)

    async def _rollback(
        self, path: Path, reload_argv: Sequence[str] | None = None
    ) -> str | None:
        """Best-effort removal of a written service file.

        Returns:
            A description of what went wrong, or None if the rollback
            completed. Failures are logged, never raised.
        """
        try:
            await fs.remove(path)
        except OSError as e:
            message = f"Could not remove '{path}' while rolling back: {e}"
            logger.warning(message)
            return message

        if reload_argv is not None:
            result = await self.runner.run(*reload_argv)
            if not result.ok:
                message = f"Failed to reload while rolling back: {result.output}"
                logger.warning(message)
                return message
        return None


def split_env_entry(entry: str) -> tuple[str, str]:
    """Split a NAME=VALUE entry on the first '='."""
    key, _, value = entry.partition("=")
    return key, value


def sudo_command(*argv: str | Path) -> str:
    """Shell-quoted command line for a manual step that needs root."""
    return shlex.join(["sudo", *(str(arg) for arg in argv)])
