"""CLI command for pulling the linter image."""

from pathlib import Path
from typing import Optional

import typer

from qodana_cli.cli.utils import console, fail
from qodana_cli.utils.errors import QodanaError


def pull_cmd(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-i", help="Root directory of the project"),
    linter: Optional[str] = typer.Option(None, "--linter", "-l", help="Linter Docker image to pull"),
) -> None:
    """
    Pull the linter image configured for a project.

    Example:
        qodana pull -i .
    """
    from qodana_cli.backends.docker import DockerBackend
    from qodana_cli.core.resolver import resolve

    try:
        options = resolve(project_dir, {"linter": linter}, save_detected=True)
        if options.linter is None:
            console.print(f"Project uses the native IDE {options.ide}, nothing to pull")
            return

        with console.status(f"Pulling {options.linter}..."):
            DockerBackend().pull_image(options.linter)
    except QodanaError as e:
        fail(e)

    console.print(f"[green]Pulled[/green] {options.linter}")
