"""Tests for the upstart job backend."""

from dataclasses import replace
from pathlib import Path

import pytest

from svcinstall.service.backends.upstart import UpstartBackend
from svcinstall.service.errors import ServiceExistsError, ServiceNotFoundError
from svcinstall.service.types import InstallOptions, UninstallOptions
from tests.conftest import EXEC_DIR


@pytest.fixture
def job_dir(tmp_path: Path) -> Path:
    path = tmp_path / "etc" / "init"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def backend(runner, job_dir) -> UpstartBackend:
    return UpstartBackend(runner, job_dir=job_dir)


@pytest.fixture
def options() -> InstallOptions:
    return InstallOptions(name="worker", cmd="/usr/bin/worker --queue jobs")


class TestUpstartRender:
    def test_job_stanzas(self, backend, options):
        content = backend.render(options)

        assert content.startswith("# worker (Deno Service)\n")
        assert "start on (filesystem and net-device-up IFACE!=lo)\n" in content
        assert "stop on runlevel [!2345]\n" in content
        assert "respawn\nrespawn limit 10 5\n" in content
        assert f"env PATH={EXEC_DIR}\n" in content
        assert 'env SERVICE_COMMAND="/usr/bin/worker --queue jobs"\n' in content
        assert content.endswith("exec $SERVICE_COMMAND\n")

    def test_env_lines(self, backend, options):
        content = backend.render(replace(options, env=["A=1", "B=2"]))
        assert "env A=1\nenv B=2\n" in content


class TestUpstartInstall:
    @pytest.mark.asyncio
    async def test_generate_only(self, backend, runner, options, job_dir):
        result = await backend.install(options, only_generate=True)

        assert result.service_path == str(job_dir / "worker.conf")
        assert result.manual_steps is None
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_install_always_returns_steps(
        self, backend, runner, options, job_dir, temp_root
    ):
        result = await backend.install(options)

        temp_path = Path(result.service_path)
        assert temp_path.is_relative_to(temp_root)
        assert temp_path.read_text() == result.service_file_content
        assert [step.command for step in result.manual_steps] == [
            f"sudo cp {temp_path} {job_dir / 'worker.conf'}",
            "sudo start worker",
        ]
        assert not (job_dir / "worker.conf").exists()
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_existing_job_blocks_install(self, backend, options, job_dir):
        (job_dir / "worker.conf").write_text("original")

        with pytest.raises(ServiceExistsError):
            await backend.install(options)


class TestUpstartUninstall:
    @pytest.mark.asyncio
    async def test_uninstall_returns_steps(self, backend, runner, job_dir):
        job = job_dir / "worker.conf"
        job.write_text("exec true\n")

        result = await backend.uninstall(UninstallOptions(name="worker"))

        assert result.service_path == str(job)
        assert [step.command for step in result.manual_steps] == [
            "sudo stop worker",
            f"sudo rm {job}",
            "sudo initctl reload-configuration",
        ]
        assert job.exists()
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_missing_job(self, backend):
        with pytest.raises(ServiceNotFoundError):
            await backend.uninstall(UninstallOptions(name="worker"))
