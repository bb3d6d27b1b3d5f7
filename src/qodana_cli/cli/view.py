"""CLI commands for looking at reports."""

from pathlib import Path
from typing import Optional

import typer

from qodana_cli.cli.utils import console, print_problems
from qodana_cli.models.outcome import ExitCode


def view_cmd(
    report_file: Path = typer.Option(
        Path("qodana.sarif.json"),
        "--sarif-file",
        "-f",
        help="Path to the SARIF report",
    ),
) -> None:
    """
    Print the problems of a SARIF report.

    Example:
        qodana view -f results/qodana.sarif.json
    """
    from qodana_cli.models.report import AnalysisReport

    try:
        report = AnalysisReport.from_file(report_file)
    except (OSError, ValueError) as e:
        console.print(f"[red]Error:[/red] Failed to read {report_file}: {e}")
        raise typer.Exit(int(ExitCode.EXECUTION_FAILURE))

    title = f"{report.tool_name} {report.tool_version}".strip() or "Problems"
    print_problems(report.findings, title=title)


def show_cmd(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-i", help="Root directory of the project"),
    results_dir: Optional[Path] = typer.Option(None, "--results-dir", "-o", help="Directory with analysis results"),
    dir_only: bool = typer.Option(False, "--dir-only", "-d", help="Only print the report directory"),
) -> None:
    """
    Open the HTML report of the last scan.

    Example:
        qodana show -i . -d
    """
    from qodana_cli.core.resolver import get_system_dir

    results = results_dir or get_system_dir(project_dir.expanduser().resolve()) / "results"
    report_dir = results / "report"

    if not report_dir.is_dir():
        console.print(
            f"[red]Error:[/red] No report found in {report_dir}, run `qodana scan --save-report` first"
        )
        raise typer.Exit(int(ExitCode.EXECUTION_FAILURE))

    if dir_only:
        console.print(str(report_dir), soft_wrap=True)
        return

    typer.launch(str(report_dir / "index.html"))
