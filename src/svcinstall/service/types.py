"""Option and result records passed through the service core."""

from dataclasses import dataclass


@dataclass
class InstallOptions:
    """Inputs for installing or generating a service.

    Attributes:
        system: True for a machine-wide service, False for a per-user one.
        name: Service identifier, used for file names and service names.
        cmd: Full command line the service runs. Passed through verbatim.
        user: Account to run as. Required for user-mode systemd (linger).
        home: Base directory for per-user paths.
        cwd: Working directory of the spawned command.
        path: Extra PATH entries, placed before the interpreter directory.
        env: Extra ``NAME=VALUE`` entries, order preserved, no dedup.
    """

    name: str
    cmd: str
    system: bool = False
    user: str | None = None
    home: str | None = None
    cwd: str | None = None
    path: list[str] | None = None
    env: list[str] | None = None


@dataclass
class UninstallOptions:
    """Inputs for removing a service."""

    name: str
    system: bool = False
    home: str | None = None


@dataclass
class ManualStep:
    """An instruction the operator must carry out, optionally with a command."""

    text: str
    command: str | None = None


@dataclass
class ServiceInstallResult:
    """Outcome of an install or generate call.

    ``manual_steps`` is None when everything was done automatically, otherwise
    a non-empty list that must be followed in order.
    """

    service_path: str | None
    service_file_content: str
    manual_steps: list[ManualStep] | None = None


@dataclass
class ServiceUninstallResult:
    """Outcome of an uninstall call."""

    service_path: str | None
    manual_steps: list[ManualStep] | None = None


@dataclass
class CommandResult:
    """Captured result of an external command."""

    argv: list[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def output(self) -> str:
        """Most useful captured output, stderr first."""
        return self.stderr.strip() or self.stdout.strip()
