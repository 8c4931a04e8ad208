"""Tests shared by every backend's renderer."""

from pathlib import Path

import pytest

from svcinstall.service.backends import create_default_backends
from svcinstall.service.base import sudo_command
from svcinstall.service.types import InstallOptions

BACKENDS = ["systemd", "sysvinit", "upstart", "launchd", "windows"]


@pytest.fixture
def options(home: Path) -> InstallOptions:
    return InstallOptions(
        name="web",
        cmd="node server.js --port 8080",
        home=str(home),
        user="u",
        cwd="/srv/web",
        path=["/usr/local/bin"],
        env=["NODE_ENV=production", "X=2", "X=1"],
    )


class TestRenderDeterminism:
    @pytest.mark.parametrize("init_system", BACKENDS)
    def test_same_options_render_identically(self, runner, options, init_system):
        backend = create_default_backends(runner)[init_system]

        first = backend.render(options)
        second = backend.render(options)

        assert first.encode() == second.encode()

    @pytest.mark.parametrize("init_system", BACKENDS)
    def test_fresh_backends_render_identically(self, runner, options, init_system):
        first = create_default_backends(runner)[init_system].render(options)
        second = create_default_backends(runner)[init_system].render(options)

        assert first == second

    @pytest.mark.parametrize("init_system", BACKENDS)
    def test_rendering_runs_nothing(self, runner, options, init_system):
        create_default_backends(runner)[init_system].render(options)
        assert runner.calls == []


class TestSudoCommand:
    def test_plain_arguments(self):
        assert sudo_command("systemctl", "enable", "web") == "sudo systemctl enable web"

    def test_paths_with_spaces_are_quoted(self):
        command = sudo_command("cp", Path("/tmp/a b/cfg"), Path("/etc/x.service"))
        assert command == "sudo cp '/tmp/a b/cfg' /etc/x.service"
