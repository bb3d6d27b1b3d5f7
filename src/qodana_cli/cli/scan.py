"""CLI command for scanning a project."""

import signal
from pathlib import Path
from typing import Any, List, Optional

import typer
from rich.panel import Panel

from qodana_cli.cli.utils import console, fail, print_output, print_problems
from qodana_cli.models.outcome import ScanOutcome
from qodana_cli.utils.errors import QodanaError


def _interrupt(signum: int, frame: object) -> None:
    raise KeyboardInterrupt


def scan_cmd(
    project_dir: Path = typer.Option(Path("."), "--project-dir", "-i", help="Root directory of the project"),
    results_dir: Optional[Path] = typer.Option(None, "--results-dir", "-o", help="Directory for analysis results"),
    cache_dir: Optional[Path] = typer.Option(None, "--cache-dir", help="Directory for the analyzer cache"),
    linter: Optional[str] = typer.Option(None, "--linter", "-l", help="Linter Docker image to run"),
    ide: Optional[str] = typer.Option(None, "--ide", help="Native IDE to run (QDJVM, QDPY, ...)"),
    source_directory: Optional[str] = typer.Option(None, "--source-directory", "-d", help="Directory inside the project to analyze"),
    profile_name: Optional[str] = typer.Option(None, "--profile-name", "-n", help="Inspection profile name"),
    profile_path: Optional[str] = typer.Option(None, "--profile-path", "-p", help="Inspection profile file"),
    run_promo: Optional[str] = typer.Option(None, "--run-promo", help="Run promo inspections (true/false)"),
    script: Optional[str] = typer.Option(None, "--script", help="Analyzer script to run"),
    baseline: Optional[str] = typer.Option(None, "--baseline", "-b", help="Baseline SARIF report"),
    baseline_include_absent: bool = typer.Option(False, "--baseline-include-absent", help="Count findings absent from the baseline"),
    properties: Optional[List[str]] = typer.Option(None, "--property", help="Analyzer property key=value (repeatable)"),
    fail_threshold: Optional[int] = typer.Option(None, "--fail-threshold", min=0, help="Fail when this many problems are found"),
    save_report: bool = typer.Option(False, "--save-report", "-s", help="Generate the HTML report"),
    disable_sanity: bool = typer.Option(False, "--disable-sanity", help="Skip sanity inspections"),
    apply_fixes: bool = typer.Option(False, "--apply-fixes", help="Apply available quick-fixes"),
    cleanup: bool = typer.Option(False, "--cleanup", help="Run project cleanup"),
    changes: bool = typer.Option(False, "--changes", help="Analyze only changed files"),
    send_report: bool = typer.Option(False, "--send-report", help="Upload the report to Qodana Cloud"),
    analysis_id: Optional[str] = typer.Option(None, "--analysis-id", help="Unique report identifier"),
    show_report: bool = typer.Option(False, "--show-report", "-w", help="Serve the report after the run"),
    port: Optional[int] = typer.Option(None, "--port", help="Host port for the report server"),
    env: Optional[List[str]] = typer.Option(None, "--env", "-e", help="Container environment NAME=value (repeatable)"),
    volumes: Optional[List[str]] = typer.Option(None, "--volume", "-v", help="Extra mount host:container[:mode] (repeatable)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="User (uid:gid) to run the linter as"),
    token: Optional[str] = typer.Option(None, "--token", envvar="QODANA_TOKEN", help="Qodana Cloud token"),
    clear_cache: bool = typer.Option(False, "--clear-cache", help="Erase the cache before the run"),
    skip_pull: bool = typer.Option(False, "--skip-pull", help="Do not pull the linter image"),
    print_problems_flag: bool = typer.Option(False, "--print-problems", help="Print counted problems"),
) -> None:
    """
    Scan a project with a Qodana linter.

    Options given here override the project's qodana.yaml. The exit
    code is 0 below the fail threshold, 255 when it is reached, 1 when
    the analyzer could not run and 2 for invalid configuration.

    Example:
        qodana scan -i . --fail-threshold 10 --print-problems
    """
    from qodana_cli.core.pipeline import ScanPipeline
    from qodana_cli.core.resolver import resolve

    overrides: dict[str, Any] = {
        "results_dir": results_dir,
        "cache_dir": cache_dir,
        "linter": linter,
        "ide": ide,
        "source_directory": source_directory,
        "profile_name": profile_name,
        "profile_path": profile_path,
        "run_promo": run_promo,
        "script": script,
        "baseline": baseline,
        "baseline_include_absent": baseline_include_absent or None,
        "properties": properties or None,
        "fail_threshold": fail_threshold,
        "save_report": save_report or None,
        "disable_sanity": disable_sanity or None,
        "apply_fixes": apply_fixes or None,
        "cleanup": cleanup or None,
        "changes": changes or None,
        "send_report": send_report or None,
        "analysis_id": analysis_id,
        "show_report": show_report or None,
        "port": port,
        "env": env or None,
        "volumes": volumes or None,
        "user": user,
        "token": token,
        "clear_cache": clear_cache or None,
        "skip_pull": skip_pull or None,
        "print_problems": print_problems_flag or None,
    }

    try:
        options = resolve(project_dir, overrides, save_detected=True)
    except QodanaError as e:
        fail(e)

    previous = signal.signal(signal.SIGTERM, _interrupt)
    try:
        outcome = ScanPipeline(on_output=print_output).scan(options)
    except QodanaError as e:
        fail(e)
    finally:
        signal.signal(signal.SIGTERM, previous)

    if options.print_problems:
        print_problems(outcome.problems)
    _print_summary(outcome)

    raise typer.Exit(outcome.exit_code)


def _print_summary(outcome: ScanOutcome) -> None:
    """Print the threshold verdict."""
    console.print()
    if outcome.passed:
        status = "[bold green]PASSED[/bold green]"
    else:
        status = "[bold red]FAILED[/bold red]"

    console.print(
        Panel(
            f"[bold]Status:[/bold] {status}\n"
            f"[bold]Problems:[/bold] {outcome.problem_count} counted, {outcome.total_count} reported\n"
            f"[bold]Report:[/bold] {outcome.report_path}",
            title="Qodana",
        )
    )
    console.print(outcome.summary())
