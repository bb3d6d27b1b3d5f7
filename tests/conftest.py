"""Shared test fixtures for qodana-cli tests."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from qodana_cli.backends.base import ReadyHandle
from qodana_cli.models.common import BackendKind
from qodana_cli.models.options import ScanOptions
from qodana_cli.models.plan import ExecutionPlan, ExecutionResult


def sarif_result(
    rule_id: str,
    uri: str = "src/hello.py",
    line: int = 1,
    message: str = "Problem",
    level: str = "warning",
    **extra: Any,
) -> dict[str, Any]:
    """Build a SARIF result object."""
    result = {
        "ruleId": rule_id,
        "level": level,
        "message": {"text": message},
        "locations": [
            {
                "physicalLocation": {
                    "artifactLocation": {"uri": uri},
                    "region": {"startLine": line},
                }
            }
        ],
    }
    result.update(extra)
    return result


def write_sarif(path: Path, results: list[dict[str, Any]]) -> Path:
    """Write a minimal SARIF document."""
    path.parent.mkdir(parents=True, exist_ok=True)
    document = {
        "version": "2.1.0",
        "runs": [
            {
                "tool": {"driver": {"name": "QDPY", "fullName": "Qodana for Python", "version": "2022.1"}},
                "results": results,
            }
        ],
    }
    path.write_text(json.dumps(document))
    return path


@pytest.fixture
def project_dir(tmp_path) -> Path:
    """Create a small Python project."""
    project = tmp_path / "project"
    project.mkdir()
    (project / "hello.py").write_text('print("Hello")\n')
    return project


@pytest.fixture
def make_options(tmp_path, project_dir) -> Callable[..., ScanOptions]:
    """Factory for ScanOptions rooted in the temp directory."""

    def factory(**overrides: Any) -> ScanOptions:
        values: dict[str, Any] = {
            "project_dir": project_dir,
            "results_dir": tmp_path / "results",
            "cache_dir": tmp_path / "cache",
            "linter": "jetbrains/qodana-python:2022.1",
        }
        if "ide" in overrides:
            values.pop("linter")
        values.update(overrides)
        return ScanOptions(**values)

    return factory


@pytest.fixture
def sample_findings() -> list[dict[str, Any]]:
    """Five distinct findings."""
    return [
        sarif_result("PyUnresolvedReferences", line=1, message="Unresolved reference 'foo'", level="error"),
        sarif_result("PyUnusedLocal", line=4, message="Local variable 'x' is not used"),
        sarif_result("PyShadowingNames", line=9, message="Shadows name 'y'"),
        sarif_result("PyTypeChecker", uri="src/util.py", line=2, message="Expected int"),
        sarif_result("SpellCheckingInspection", uri="src/util.py", line=7, message="Typo: 'helo'", level="note"),
    ]


class FakeBackend:
    """Backend that writes a canned report instead of running a linter."""

    def __init__(
        self,
        exit_code: int = 0,
        results: list[dict[str, Any]] | None = None,
        output: str = "Analyzing...\n",
        write_report: bool = True,
    ) -> None:
        self.exit_code = exit_code
        self.results = results or []
        self.output = output
        self.write_report = write_report
        self.calls: list[str] = []
        self.plan: ExecutionPlan | None = None

    def prepare(self, plan: ExecutionPlan, on_output=None) -> ReadyHandle:
        self.calls.append("prepare")
        self.plan = plan
        return ReadyHandle(plan, on_output)

    def run(self, handle: ReadyHandle) -> ExecutionResult:
        self.calls.append("run")
        handle.on_output(self.output)
        if self.write_report:
            write_sarif(handle.plan.results_dir / "qodana.sarif.json", self.results)
        return ExecutionResult(exit_code=self.exit_code, stdout=self.output, backend=handle.plan.backend)

    def teardown(self, handle: ReadyHandle) -> None:
        self.calls.append("teardown")


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def docker_result() -> Callable[..., ExecutionResult]:
    def factory(exit_code: int = 0, stderr: str = "") -> ExecutionResult:
        return ExecutionResult(exit_code=exit_code, stderr=stderr, backend=BackendKind.DOCKER)

    return factory
