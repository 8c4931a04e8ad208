"""Install, uninstall and generate commands."""

import asyncio
from typing import Annotated, NoReturn

import typer

from svcinstall.cli.console import error, print_manual_steps, success, warning
from svcinstall.config.models import SvcConfig
from svcinstall.service import (
    CommandFailedError,
    InstallOptions,
    ServiceError,
    UninstallOptions,
    create_service_manager,
)

NameOption = Annotated[
    str | None, typer.Option("--name", "-n", help="Name of the service")
]
SystemOption = Annotated[
    bool,
    typer.Option("--system", "-s", help="Install system-wide instead of per user"),
]
HomeOption = Annotated[
    str | None, typer.Option("--home", "-H", help="Home directory for user services")
]
ForceOption = Annotated[
    str | None,
    typer.Option(
        "--force",
        "-f",
        help="Use this init system instead of detecting it (generate/uninstall only)",
    ),
]
CmdOption = Annotated[
    str | None, typer.Option("--cmd", "-c", help="Command the service runs")
]
CwdOption = Annotated[
    str | None, typer.Option("--cwd", "-w", help="Working directory of the service")
]
UserOption = Annotated[
    str | None, typer.Option("--user", "-u", help="User to run the service as")
]
PathOption = Annotated[
    list[str] | None,
    typer.Option("--path", "-p", help="Directory to add to PATH (repeatable)"),
]
EnvOption = Annotated[
    list[str] | None,
    typer.Option("--env", "-e", help="Environment variable NAME=VALUE (repeatable)"),
]
CommandArgument = Annotated[
    list[str] | None,
    typer.Argument(help="Command the service runs, given after --"),
]


def _fail(msg: str) -> NoReturn:
    error(msg)
    raise typer.Exit(1)


def _get_config(ctx: typer.Context) -> SvcConfig:
    return ctx.obj if isinstance(ctx.obj, SvcConfig) else SvcConfig()


def _build_install_options(
    config: SvcConfig,
    *,
    name: str | None,
    cmd: str | None,
    command: list[str] | None,
    system: bool,
    user: str | None,
    home: str | None,
    cwd: str | None,
    path: list[str] | None,
    env: list[str] | None,
) -> InstallOptions:
    """Validate CLI input and merge it with configured defaults."""
    if not name:
        _fail("Service name must be specified.")

    full_cmd = cmd or " ".join(command or [])
    if not full_cmd:
        _fail("Specify a command using '--cmd'")

    for entry in env or []:
        if "=" not in entry:
            _fail("Environment variables must be specified like '--env NAME=VALUE'.")

    defaults = config.defaults
    return InstallOptions(
        name=name,
        cmd=full_cmd,
        system=system,
        user=user or defaults.user,
        home=home or defaults.home,
        cwd=cwd,
        path=[*defaults.path, *(path or [])] or None,
        env=[*defaults.env, *(env or [])] or None,
    )


def register(app: typer.Typer) -> None:
    """Register service commands."""

    @app.command("install")
    def install(
        ctx: typer.Context,
        name: NameOption = None,
        cmd: CmdOption = None,
        system: SystemOption = False,
        user: UserOption = None,
        home: HomeOption = None,
        cwd: CwdOption = None,
        path: PathOption = None,
        env: EnvOption = None,
        force: ForceOption = None,
        command: CommandArgument = None,
    ) -> None:
        """Install a command as a service."""
        options = _build_install_options(
            _get_config(ctx),
            name=name,
            cmd=cmd,
            command=command,
            system=system,
            user=user,
            home=home,
            cwd=cwd,
            path=path,
            env=env,
        )
        manager = create_service_manager()
        try:
            result = asyncio.run(manager.install(options, init_system=force))
        except (ServiceError, OSError) as e:
            if isinstance(e, CommandFailedError) and e.rollback_error:
                warning(e.rollback_error)
            _fail(f"Could not install service, error: {e}")

        if result.manual_steps:
            print_manual_steps(
                "To complete the installation, carry out these manual steps:",
                result.manual_steps,
            )
        else:
            success(
                f"Service '{options.name}' successfully installed at "
                f"'{result.service_path}'."
            )

    @app.command("generate")
    def generate(
        ctx: typer.Context,
        name: NameOption = None,
        cmd: CmdOption = None,
        system: SystemOption = False,
        user: UserOption = None,
        home: HomeOption = None,
        cwd: CwdOption = None,
        path: PathOption = None,
        env: EnvOption = None,
        force: ForceOption = None,
        command: CommandArgument = None,
    ) -> None:
        """Print the service file that install would write."""
        config = _get_config(ctx)
        options = _build_install_options(
            config,
            name=name,
            cmd=cmd,
            command=command,
            system=system,
            user=user,
            home=home,
            cwd=cwd,
            path=path,
            env=env,
        )
        manager = create_service_manager()
        try:
            result = asyncio.run(
                manager.install(
                    options,
                    only_generate=True,
                    init_system=force or config.init_system,
                )
            )
        except (ServiceError, OSError) as e:
            _fail(f"Could not generate service, error: {e}")

        typer.echo(result.service_file_content, nl=False)

    @app.command("uninstall")
    def uninstall(
        ctx: typer.Context,
        name: NameOption = None,
        system: SystemOption = False,
        home: HomeOption = None,
        force: ForceOption = None,
    ) -> None:
        """Uninstall a service."""
        config = _get_config(ctx)
        if not name:
            _fail("Service name must be specified.")

        options = UninstallOptions(
            name=name, system=system, home=home or config.defaults.home
        )
        manager = create_service_manager()
        try:
            result = asyncio.run(
                manager.uninstall(options, init_system=force or config.init_system)
            )
        except (ServiceError, OSError) as e:
            _fail(f"Could not uninstall service, error: {e}")

        if result.manual_steps:
            print_manual_steps(
                "To complete the uninstallation, carry out these manual steps:",
                result.manual_steps,
            )
        else:
            success(
                f"Service '{options.name}' at '{result.service_path}' "
                "is now uninstalled."
            )
