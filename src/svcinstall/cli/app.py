"""Main CLI application."""

import tomllib
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from svcinstall.cli.commands import service
from svcinstall.cli.console import error
from svcinstall.config import load_config
from svcinstall.logging import configure_logging

app = typer.Typer(
    name="svcinstall",
    help="Install any command as an OS service (systemd, sysvinit, upstart, launchd, Windows)",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            help="Path to configuration file",
        ),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            help="Log level (DEBUG, INFO, WARNING, ERROR)",
        ),
    ] = None,
) -> None:
    """Install, uninstall or generate OS service definitions."""
    try:
        svc_config = load_config(config)
    except FileNotFoundError as e:
        error(str(e))
        raise typer.Exit(1) from None
    except (tomllib.TOMLDecodeError, ValidationError) as e:
        error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from None

    configure_logging(level=log_level or svc_config.log_level, use_rich=True)
    ctx.obj = svc_config


service.register(app)
