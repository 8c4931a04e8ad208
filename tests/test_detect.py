"""Tests for init system detection."""

from pathlib import Path

import pytest

from svcinstall.service import detect
from svcinstall.service.detect import detect_init_system
from svcinstall.service.errors import UnsupportedInitSystemError

PS_ARGV = ("ps", "-p", "1", "-o", "comm=")


@pytest.fixture
def no_upstart(tmp_path: Path, monkeypatch):
    monkeypatch.setattr(detect, "INITCTL_PATH", tmp_path / "missing" / "initctl")
    monkeypatch.setattr(detect, "UPSTART_JOB_DIR", tmp_path / "missing" / "init")


@pytest.fixture
def with_upstart(tmp_path: Path, monkeypatch):
    initctl = tmp_path / "sbin" / "initctl"
    initctl.parent.mkdir()
    initctl.write_text("")
    job_dir = tmp_path / "etc" / "init"
    job_dir.mkdir(parents=True)
    monkeypatch.setattr(detect, "INITCTL_PATH", initctl)
    monkeypatch.setattr(detect, "UPSTART_JOB_DIR", job_dir)


class TestDetectInitSystem:
    """Tests for detect_init_system."""

    @pytest.mark.asyncio
    async def test_macos_is_launchd(self, runner):
        assert await detect_init_system(runner, platform="darwin") == "launchd"
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_windows(self, runner):
        assert await detect_init_system(runner, platform="win32") == "windows"
        assert runner.calls == []

    @pytest.mark.asyncio
    async def test_systemd(self, runner):
        runner.set_result(*PS_ARGV, stdout="systemd\n")

        assert await detect_init_system(runner, platform="linux") == "systemd"
        assert runner.calls == [list(PS_ARGV)]

    @pytest.mark.asyncio
    async def test_docker_init_matched_before_init(self, runner, with_upstart):
        runner.set_result(*PS_ARGV, stdout="docker-init\n")
        assert await detect_init_system(runner, platform="linux") == "docker-init"

    @pytest.mark.asyncio
    async def test_init_with_upstart_markers(self, runner, with_upstart):
        runner.set_result(*PS_ARGV, stdout="init\n")
        assert await detect_init_system(runner, platform="linux") == "upstart"

    @pytest.mark.asyncio
    async def test_init_without_upstart_markers(self, runner, no_upstart):
        runner.set_result(*PS_ARGV, stdout="init\n")
        assert await detect_init_system(runner, platform="linux") == "sysvinit"

    @pytest.mark.asyncio
    async def test_openrc(self, runner):
        runner.set_result(*PS_ARGV, stdout="openrc\n")
        assert await detect_init_system(runner, platform="linux") == "openrc"

    @pytest.mark.asyncio
    async def test_unknown_pid1(self, runner):
        runner.set_result(*PS_ARGV, stdout="tini\n")

        with pytest.raises(UnsupportedInitSystemError, match="Unsupported init system"):
            await detect_init_system(runner, platform="linux")

    @pytest.mark.asyncio
    async def test_ps_failure_is_unsupported(self, runner):
        runner.set_result(*PS_ARGV, returncode=127, stderr="ps: command not found")

        with pytest.raises(UnsupportedInitSystemError):
            await detect_init_system(runner, platform="linux")

    @pytest.mark.asyncio
    async def test_not_cached(self, runner):
        runner.set_result(*PS_ARGV, stdout="systemd\n")
        await detect_init_system(runner, platform="linux")
        await detect_init_system(runner, platform="linux")

        assert len(runner.calls) == 2
