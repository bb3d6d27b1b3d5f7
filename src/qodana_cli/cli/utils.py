"""Shared utilities for CLI commands."""

from __future__ import annotations

from typing import NoReturn

import typer
from rich.console import Console
from rich.table import Table

from qodana_cli.models.outcome import ExitCode
from qodana_cli.models.report import Finding
from qodana_cli.utils.errors import (
    BackendError,
    ConfigError,
    ExecutionError,
    QodanaError,
    ScanCancelled,
)

# Shared console instance
console = Console()

_EXIT_CODES: dict[type[QodanaError], ExitCode] = {
    ConfigError: ExitCode.CONFIG_FAILURE,
    BackendError: ExitCode.EXECUTION_FAILURE,
    ExecutionError: ExitCode.EXECUTION_FAILURE,
    ScanCancelled: ExitCode.CANCELLED,
}


def exit_code_for(error: QodanaError) -> int:
    """Map an error to the process exit code reported for it."""
    for error_type, code in _EXIT_CODES.items():
        if isinstance(error, error_type):
            return int(code)
    return int(ExitCode.EXECUTION_FAILURE)


def fail(error: QodanaError) -> NoReturn:
    """Print an error and exit with its mapped code."""
    if isinstance(error, ScanCancelled):
        console.print(f"[yellow]{error.message}[/yellow]")
    else:
        console.print(f"[red]Error:[/red] {error.message}")
        cause = error.details.get("cause")
        if cause and cause not in error.message:
            console.print(f"  caused by: {cause}")
    raise typer.Exit(exit_code_for(error))


def print_output(text: str) -> None:
    """Forward analyzer output verbatim."""
    console.out(text, end="", highlight=False)


def severity_style(severity: str) -> str:
    """Get Rich style for a SARIF level.

    Args:
        severity: Level value (error, warning, note)

    Returns:
        Rich style string
    """
    styles = {
        "error": "red",
        "warning": "yellow",
        "note": "blue",
        "none": "dim",
    }
    return styles.get(severity.lower(), "white")


def print_problems(problems: list[Finding], title: str = "Problems") -> None:
    """Print findings as a table."""
    if not problems:
        console.print("[green]No problems found![/green]")
        return

    table = Table(title=title)
    table.add_column("Severity")
    table.add_column("Rule", style="bold")
    table.add_column("Location")
    table.add_column("Message")

    for problem in problems:
        style = severity_style(problem.level.value)
        table.add_row(
            f"[{style}]{problem.level.value.upper()}[/{style}]",
            problem.rule_id,
            problem.location,
            problem.message,
        )
    console.print(table)
