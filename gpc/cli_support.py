"""Shared utilities for the gpc CLI."""
from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table
import typer

from gpc.models.source import ProjectResult

# Errors go to stderr so stdout stays clean for the success message
err_console = Console(stderr=True)


def handle_cli_error(
    e: Exception,
    console: Console = err_console,
    verbose: bool = False,
    exit_code: int = 1,
) -> None:
    """Report a failed run and exit.

    Args:
        e: Exception to handle
        console: Rich console for output (stderr by default)
        verbose: Show exception traceback if True
        exit_code: Exit code to use
    """
    console.print(f"[red]Error creating the project:[/red] {escape(str(e))}", soft_wrap=True)
    if verbose:
        console.print_exception()
    raise typer.Exit(exit_code)


def print_success(console: Console, message: str, prefix: str = "✓") -> None:
    """Print success message with consistent formatting.

    Args:
        console: Rich console for output
        message: Success message
        prefix: Prefix symbol (default: ✓)
    """
    console.print(f"[green]{prefix}[/green] {message}", soft_wrap=True)


def print_info(console: Console, message: str, prefix: str = "ℹ") -> None:
    """Print info message with consistent formatting."""
    console.print(f"[cyan]{prefix}[/cyan] {message}", soft_wrap=True)


def print_summary(console: Console, result: ProjectResult) -> None:
    """Show where the project went and which values were used."""
    print_info(console, f"Project directory: {escape(str(result.destination))}")
    print_info(console, f"Rendered {len(result.rendered_files)} template file(s)")

    if result.variables:
        table = Table(title="Variables", show_header=True, header_style="bold")
        table.add_column("Name", style="cyan")
        table.add_column("Value")
        for name, value in result.variables.items():
            table.add_row(escape(name), escape(repr(value)))
        console.print(table)
