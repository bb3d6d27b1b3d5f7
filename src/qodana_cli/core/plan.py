"""Execution plan construction."""

from __future__ import annotations

from qodana_cli.models.common import BackendKind
from qodana_cli.models.options import ScanOptions
from qodana_cli.models.plan import CacheHandle, ExecutionPlan, Mount
from qodana_cli.utils.errors import validate_env_entry, validate_volume_entry

CONTAINER_PROJECT_DIR = "/data/project"
CONTAINER_RESULTS_DIR = "/data/results"
CONTAINER_CACHE_DIR = "/data/cache"
CONTAINER_REPORT_PORT = "8080/tcp"


def _environment(options: ScanOptions, backend: BackendKind) -> dict[str, str]:
    environment: dict[str, str] = {}
    if backend == BackendKind.DOCKER:
        environment["QODANA_ENV"] = "cli"
    if options.token:
        environment["QODANA_TOKEN"] = options.token
    for entry in options.env:
        name, value = validate_env_entry(entry)
        environment[name] = value
    return environment


def build_plan(options: ScanOptions, cache: CacheHandle, args: list[str]) -> ExecutionPlan:
    """Combine resolved options, the prepared cache and analyzer arguments.

    Args:
        options: Resolved scan options
        cache: Prepared cache handle
        args: Analyzer arguments from the option compiler

    Returns:
        Plan for the backend selected by the options
    """
    backend = options.backend_kind
    environment = _environment(options, backend)

    if backend == BackendKind.NATIVE:
        return ExecutionPlan(
            backend=backend,
            target=options.ide or "",
            args=list(args),
            project_dir=options.project_dir,
            results_dir=options.results_dir,
            cache=cache,
            environment=environment,
            working_dir=str(options.project_dir),
        )

    mounts = [
        Mount(source=str(options.project_dir), target=CONTAINER_PROJECT_DIR),
        Mount(source=str(options.results_dir), target=CONTAINER_RESULTS_DIR),
        Mount(source=str(cache.path), target=CONTAINER_CACHE_DIR),
    ]
    for entry in options.volumes:
        source, target, mode = validate_volume_entry(entry)
        mounts.append(Mount(source=source, target=target, mode=mode))

    ports = {CONTAINER_REPORT_PORT: options.port} if options.show_report else {}

    return ExecutionPlan(
        backend=backend,
        target=options.linter or "",
        args=list(args),
        project_dir=options.project_dir,
        results_dir=options.results_dir,
        cache=cache,
        mounts=mounts,
        environment=environment,
        ports=ports,
        user=options.user,
        working_dir=CONTAINER_PROJECT_DIR,
        skip_pull=options.skip_pull,
    )
