"""Shared console utilities for CLI commands."""

from rich.console import Console
from rich.markup import escape

from svcinstall.service.types import ManualStep

# Shared console instance for all CLI commands
console = Console()


def error(msg: str) -> None:
    """Print an error message in red."""
    console.print(f"[red]{escape(msg)}[/red]", soft_wrap=True)


def warning(msg: str) -> None:
    """Print a warning message in yellow."""
    console.print(f"[yellow]{escape(msg)}[/yellow]", soft_wrap=True)


def success(msg: str) -> None:
    """Print a success message in green."""
    console.print(f"[green]{escape(msg)}[/green]", soft_wrap=True)


def print_manual_steps(heading: str, steps: list[ManualStep]) -> None:
    """Print numbered manual steps with their commands highlighted.

    Args:
        heading: Line printed above the steps.
        steps: Steps in the order they must be carried out.
    """
    console.print(f"[bold]{escape(heading)}[/bold]")
    for index, step in enumerate(steps, start=1):
        console.print(f"[cyan]{index}. {escape(step.text)}[/cyan]", soft_wrap=True)
        if step.command:
            console.print(
                f"   [yellow]Command:[/yellow] {escape(step.command)}", soft_wrap=True
            )
