"""CLI command modules."""

from svcinstall.cli.commands import service

__all__ = ["service"]
