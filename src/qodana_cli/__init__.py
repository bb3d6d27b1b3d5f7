"""qodana-cli: run Qodana static analysis locally and in CI.

This package resolves which linter to run for a project, runs it either
in a Docker container or through a natively installed IDE, and turns
the resulting SARIF report into a pass/fail exit code:

- **Resolver**: merge qodana.yaml, command-line options and defaults
- **Option compiler**: build the analyzer's command line
- **Backends**: run the linter in Docker or natively
- **Cache manager**: keep the analyzer cache between runs
- **Evaluator**: count problems against the baseline and fail threshold

Usage:
    # Library API
    from qodana_cli import ScanPipeline, resolve

    options = resolve("path/to/project", {"fail_threshold": 10})
    outcome = ScanPipeline().scan(options)
    print(outcome.summary())

CLI:
    qodana scan -i <project> --fail-threshold 10
    qodana pull -i <project>
    qodana init -i <project>
    qodana view -f <report.sarif.json>
    qodana show -i <project>
"""

__version__ = "0.1.0"

# Core classes
from qodana_cli.core.cache import CacheManager
from qodana_cli.core.evaluator import ResultEvaluator
from qodana_cli.core.inspector import ProjectInspector
from qodana_cli.core.options import compile_options
from qodana_cli.core.pipeline import ScanPipeline, run_scan
from qodana_cli.core.resolver import resolve

# Models (commonly used)
from qodana_cli.models.options import ProjectConfig, ScanOptions
from qodana_cli.models.outcome import ExitCode, ScanOutcome, ScanStatus
from qodana_cli.models.plan import CacheHandle, ExecutionPlan, ExecutionResult
from qodana_cli.models.report import AnalysisReport, Finding

# Backends
from qodana_cli.backends import Backend, DockerBackend, NativeBackend, get_backend

__all__ = [
    # Version
    "__version__",
    # Core
    "CacheManager",
    "ResultEvaluator",
    "ProjectInspector",
    "compile_options",
    "ScanPipeline",
    "run_scan",
    "resolve",
    # Models
    "ProjectConfig",
    "ScanOptions",
    "ExitCode",
    "ScanOutcome",
    "ScanStatus",
    "CacheHandle",
    "ExecutionPlan",
    "ExecutionResult",
    "AnalysisReport",
    "Finding",
    # Backends
    "Backend",
    "DockerBackend",
    "NativeBackend",
    "get_backend",
]
