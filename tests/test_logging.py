"""Tests for logging configuration."""

import logging

from svcinstall.logging import ComponentFormatter, configure_logging, resolve_level


def make_record(name: str) -> logging.LogRecord:
    return logging.LogRecord(name, logging.INFO, __file__, 1, "hello", None, None)


class TestComponentFormatter:
    def test_extracts_component(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        record = make_record("svcinstall.service.backends.systemd")
        assert formatter.format(record) == "service | hello"

    def test_foreign_logger(self):
        formatter = ComponentFormatter("%(component)s | %(message)s")
        assert formatter.format(make_record("asyncio")) == "asyncio | hello"


class TestResolveLevel:
    def test_argument_wins(self, monkeypatch):
        monkeypatch.setenv("SVCINSTALL_LOG_LEVEL", "ERROR")
        assert resolve_level("debug") == "DEBUG"

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("SVCINSTALL_LOG_LEVEL", "info")
        assert resolve_level() == "INFO"

    def test_default(self, monkeypatch):
        monkeypatch.delenv("SVCINSTALL_LOG_LEVEL", raising=False)
        assert resolve_level() == "WARNING"

    def test_unknown_falls_back(self):
        assert resolve_level("chatty") == "WARNING"


class TestConfigureLogging:
    def test_plain_handler(self):
        configure_logging("DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0], logging.StreamHandler)

    def test_rich_handler(self):
        from rich.logging import RichHandler

        configure_logging("INFO", use_rich=True)

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0], RichHandler)
