"""Configuration module."""

from svcinstall.config.loader import load_config
from svcinstall.config.models import DefaultsConfig, SvcConfig
from svcinstall.config.paths import get_config_path, get_svcinstall_home

__all__ = [
    "DefaultsConfig",
    "SvcConfig",
    "get_config_path",
    "get_svcinstall_home",
    "load_config",
]
