"""CLI command for configuring a project."""

from pathlib import Path

import typer

from qodana_cli.cli.utils import console, fail
from qodana_cli.models.outcome import ExitCode
from qodana_cli.utils.errors import QodanaError


def init_cmd(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-i", help="Root directory of the project"),
    force: bool = typer.Option(False, "--force", "-f", help="Detect the linter again even if one is configured"),
) -> None:
    """
    Configure a project for Qodana.

    Detects the project's main language and writes the matching linter
    to qodana.yaml. An existing configuration is kept unless --force.

    Example:
        qodana init -i .
    """
    from qodana_cli.core.inspector import ProjectInspector
    from qodana_cli.core.resolver import load_project_config, save_project_config
    from qodana_cli.models.options import ProjectConfig

    if not project_dir.is_dir():
        console.print(f"[red]Error:[/red] Project directory does not exist: {project_dir}")
        raise typer.Exit(int(ExitCode.CONFIG_FAILURE))

    try:
        config = load_project_config(project_dir)
    except QodanaError as e:
        fail(e)

    if config is not None and (config.linter or config.ide) and not force:
        console.print(f"Project is configured to use [bold]{config.linter or config.ide}[/bold]")
        return

    with console.status("Inspecting project..."):
        linter = ProjectInspector().detect(project_dir)

    if linter is None:
        console.print("[red]Error:[/red] No supported languages found, set the linter in qodana.yaml manually")
        raise typer.Exit(int(ExitCode.CONFIG_FAILURE))

    base = config or ProjectConfig()
    path = save_project_config(project_dir, base.model_copy(update={"linter": linter, "ide": None}))
    console.print(f"Configured [bold]{linter}[/bold] in {path}")
