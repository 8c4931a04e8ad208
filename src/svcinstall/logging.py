"""Centralized logging configuration for svcinstall.

The CLI calls configure_logging() once at startup. Library code only creates
module loggers and never configures handlers itself.

Logging Levels:
- DEBUG: External commands and their exit status, detection details
- INFO: Files written or removed, services registered
- WARNING: Rollback failures and other secondary problems
- ERROR: Failures reported to the user
"""

import logging
import os

ENV_VAR = "SVCINSTALL_LOG_LEVEL"
DEFAULT_LEVEL = "WARNING"
LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class ComponentFormatter(logging.Formatter):
    """Formatter that extracts component name from logger path.

    Converts full module paths to short component names:
    - svcinstall.service.backends.systemd -> service
    - svcinstall.cli.commands.service -> cli
    - svcinstall.config.loader -> config
    """

    def format(self, record: logging.LogRecord) -> str:
        parts = record.name.split(".")
        if len(parts) >= 2 and parts[0] == "svcinstall":
            record.component = parts[1]
        else:
            record.component = parts[0]
        return super().format(record)


def resolve_level(level: str | None = None) -> str:
    """Resolve a level name from the argument or the environment.

    Unknown names fall back to the default level.
    """
    if level is None:
        level = os.environ.get(ENV_VAR, DEFAULT_LEVEL)
    level = level.upper()
    if level not in LEVELS:
        level = DEFAULT_LEVEL
    return level


def configure_logging(level: str | None = None, use_rich: bool = False) -> None:
    """Configure logging for svcinstall.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
            If None, uses SVCINSTALL_LOG_LEVEL env var or WARNING.
        use_rich: Use Rich handler for colorful output.
    """
    log_level = getattr(logging, resolve_level(level))

    if use_rich:
        from rich.console import Console
        from rich.logging import RichHandler

        handler: logging.Handler = RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=False,
            show_path=False,
            show_time=True,
            markup=False,
        )
        handler.setFormatter(ComponentFormatter("%(component)s | %(message)s"))
    else:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                datefmt="%H:%M:%S",
            )
        )

    logging.basicConfig(level=log_level, handlers=[handler], force=True)
