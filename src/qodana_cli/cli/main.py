"""Main CLI entry point for qodana-cli."""

import typer
from rich.console import Console

from qodana_cli.cli import init, pull, scan, view

app = typer.Typer(
    name="qodana",
    help="Run Qodana linters locally or in CI.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

# Register subcommands
app.command(name="scan")(scan.scan_cmd)
app.command(name="pull")(pull.pull_cmd)
app.command(name="init")(init.init_cmd)
app.command(name="view")(view.view_cmd)
app.command(name="show")(view.show_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    qodana: run Qodana static analysis and gate builds on the result.

    - [bold]scan[/bold]: Analyze a project and check the fail threshold
    - [bold]pull[/bold]: Pull the configured linter image
    - [bold]init[/bold]: Detect and configure the project's linter
    - [bold]view[/bold]: Print problems from a SARIF report
    - [bold]show[/bold]: Open the HTML report of the last scan
    """
    from qodana_cli.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging(level="INFO")


@app.command()
def version() -> None:
    """Show the qodana-cli version."""
    from qodana_cli import __version__

    console.print(f"qodana version {__version__}")


if __name__ == "__main__":
    app()
