"""Shared test fixtures and factories."""

import logging
import tempfile
from pathlib import Path

import pytest

from svcinstall.config.paths import get_svcinstall_home
from svcinstall.service.types import CommandResult, InstallOptions, UninstallOptions

EXEC_PATH = Path("/opt/runtime/bin/python3")
EXEC_DIR = str(EXEC_PATH.parent)


# =============================================================================
# Process Fixtures
# =============================================================================


class FakeRunner:
    """Command runner that records argv and returns canned results.

    Every command succeeds unless a result was registered for its exact argv.
    """

    def __init__(self) -> None:
        self.calls: list[list[str]] = []
        self._results: dict[tuple[str, ...], CommandResult] = {}

    def set_result(
        self,
        *argv: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        self._results[argv] = CommandResult(
            argv=list(argv), returncode=returncode, stdout=stdout, stderr=stderr
        )

    def fail(self, *argv: str, stderr: str = "boom") -> None:
        self.set_result(*argv, returncode=1, stderr=stderr)

    async def run(self, *argv: str) -> CommandResult:
        self.calls.append(list(argv))
        return self._results.get(argv, CommandResult(argv=list(argv), returncode=0))


@pytest.fixture
def runner() -> FakeRunner:
    """Recording command runner."""
    return FakeRunner()


@pytest.fixture(autouse=True)
def fixed_exec_path(monkeypatch):
    """Pin the interpreter path that ends up in rendered files."""
    monkeypatch.setattr(
        "svcinstall.service.runtime.get_exec_path", lambda: EXEC_PATH
    )
    monkeypatch.setattr(
        "svcinstall.service.backends.windows.get_exec_path", lambda: EXEC_PATH
    )
    return EXEC_PATH


# =============================================================================
# Options Fixtures
# =============================================================================


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Home directory for per-user service files."""
    path = tmp_path / "home" / "u"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def install_options(home: Path) -> InstallOptions:
    """User-mode install options for a service called test-service."""
    return InstallOptions(
        name="test-service",
        cmd="run app.ts",
        home=str(home),
        user="u",
        cwd="/srv/app",
    )


@pytest.fixture
def uninstall_options(home: Path) -> UninstallOptions:
    return UninstallOptions(name="test-service", home=str(home))


# =============================================================================
# Config and CLI Fixtures
# =============================================================================


@pytest.fixture
def svcinstall_home(tmp_path: Path, monkeypatch) -> Path:
    """Point SVCINSTALL_HOME at an empty temporary directory."""
    path = tmp_path / "svcinstall-home"
    path.mkdir()
    monkeypatch.setenv("SVCINSTALL_HOME", str(path))
    get_svcinstall_home.cache_clear()
    yield path
    get_svcinstall_home.cache_clear()


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner(env={"NO_COLOR": "1"})


@pytest.fixture(autouse=True)
def temp_root(tmp_path: Path, monkeypatch) -> Path:
    """Keep temporary service files inside the test's tmp_path."""
    path = tmp_path / "tmp"
    path.mkdir()
    monkeypatch.setattr(tempfile, "tempdir", str(path))
    return path


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by the CLI under test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
