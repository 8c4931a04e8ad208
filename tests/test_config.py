"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from svcinstall.config import (
    DefaultsConfig,
    SvcConfig,
    get_config_path,
    get_svcinstall_home,
    load_config,
)


class TestConfigPaths:
    def test_env_override(self, svcinstall_home: Path):
        assert get_svcinstall_home() == svcinstall_home.resolve()
        assert get_config_path() == svcinstall_home.resolve() / "config.toml"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv("SVCINSTALL_HOME", raising=False)
        get_svcinstall_home.cache_clear()
        try:
            assert get_svcinstall_home() == Path.home() / ".config" / "svcinstall"
        finally:
            get_svcinstall_home.cache_clear()


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_default_file_gives_defaults(self, svcinstall_home: Path):
        config = load_config()

        assert config == SvcConfig()
        assert config.defaults.path == []

    def test_missing_explicit_file(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")

    def test_loads_default_file(self, svcinstall_home: Path):
        (svcinstall_home / "config.toml").write_text('log_level = "DEBUG"\n')
        assert load_config().log_level == "DEBUG"

    def test_full_file(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text(
            """
log_level = "INFO"
init_system = "systemd"

[defaults]
user = "svc"
home = "/home/svc"
path = ["/usr/local/bin"]
env = ["NODE_ENV=production"]
"""
        )

        config = load_config(path)

        assert config.log_level == "INFO"
        assert config.init_system == "systemd"
        assert config.defaults == DefaultsConfig(
            user="svc",
            home="/home/svc",
            path=["/usr/local/bin"],
            env=["NODE_ENV=production"],
        )

    def test_rejects_env_without_equals(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('[defaults]\nenv = ["BROKEN"]\n')

        with pytest.raises(ValidationError, match="NAME=VALUE"):
            load_config(path)

    def test_rejects_unknown_log_level(self, tmp_path: Path):
        path = tmp_path / "config.toml"
        path.write_text('log_level = "LOUD"\n')

        with pytest.raises(ValidationError):
            load_config(path)
