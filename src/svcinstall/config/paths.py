"""Path management for svcinstall settings.

The settings directory can be overridden with the SVCINSTALL_HOME environment
variable.

Default locations:
- Linux/macOS: ~/.config/svcinstall
- Windows: %USERPROFILE%\\.config\\svcinstall
"""

import os
from functools import lru_cache
from pathlib import Path

ENV_VAR = "SVCINSTALL_HOME"


@lru_cache(maxsize=1)
def get_svcinstall_home() -> Path:
    """Get the settings directory.

    Resolution order:
    1. SVCINSTALL_HOME environment variable (if set)
    2. ~/.config/svcinstall
    """
    if env_home := os.environ.get(ENV_VAR):
        return Path(env_home).expanduser().resolve()
    return Path.home() / ".config" / "svcinstall"


def get_config_path() -> Path:
    """Get the default config file path."""
    return get_svcinstall_home() / "config.toml"
