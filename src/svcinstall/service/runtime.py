"""Facts about the running interpreter that end up in service files.

Services start with a minimal environment, so generated files carry an
absolute interpreter path and a PATH that includes its directory.
"""

import os
import sys
from pathlib import Path


def get_exec_path() -> Path:
    """Absolute, symlink-resolved path of the running interpreter."""
    return Path(sys.executable).resolve()


def get_exec_dir() -> Path:
    """Directory containing the running interpreter."""
    return get_exec_path().parent


def build_path_value(entries: list[str] | None, separator: str = ":") -> str:
    """Join caller PATH entries followed by the interpreter directory."""
    return separator.join([*(entries or []), str(get_exec_dir())])


def resolve_cwd(cwd: str | None) -> str:
    """Working directory for the service, defaulting to the caller's."""
    return cwd or os.getcwd()
