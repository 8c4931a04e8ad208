"""Configuration loading from TOML files."""

import logging
import tomllib
from pathlib import Path

from svcinstall.config.models import SvcConfig
from svcinstall.config.paths import get_config_path

logger = logging.getLogger(__name__)


def load_config(path: Path | None = None) -> SvcConfig:
    """Load configuration from a TOML file.

    Args:
        path: Explicit path to config file. If None, the default location is
            used when it exists, and built-in defaults otherwise.

    Returns:
        Validated SvcConfig instance.

    Raises:
        FileNotFoundError: If an explicit path does not exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        pydantic.ValidationError: If the content is invalid.
    """
    if path is not None:
        config_path = Path(path).expanduser()
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        config_path = get_config_path()
        if not config_path.exists():
            return SvcConfig()

    logger.debug("Loading config from %s", config_path)
    with config_path.open("rb") as f:
        raw_config = tomllib.load(f)

    return SvcConfig.model_validate(raw_config)
