"""Scan outcome and process exit codes."""

from enum import Enum, IntEnum
from pathlib import Path

from pydantic import BaseModel, Field

from qodana_cli.models.report import Finding


class ExitCode(IntEnum):
    """Process exit codes. The values are a stable interface for CI."""

    SUCCESS = 0
    EXECUTION_FAILURE = 1
    CONFIG_FAILURE = 2
    CANCELLED = 130
    THRESHOLD_EXCEEDED = 255


class ScanStatus(str, Enum):
    """How a completed analysis compares to the fail threshold."""

    SUCCESS = "success"
    THRESHOLD_EXCEEDED = "threshold_exceeded"


class ScanOutcome(BaseModel):
    """Result of evaluating an analyzer run."""

    model_config = {"frozen": True}

    status: ScanStatus = Field(description="Threshold verdict")
    problem_count: int = Field(description="Counted (actionable) problems")
    fail_threshold: int | None = Field(default=None, description="Threshold that was applied")
    report_path: Path | None = Field(default=None, description="Analyzer report")
    problems: list[Finding] = Field(default_factory=list, description="Counted problems")
    total_count: int = Field(default=0, description="Findings in the report before filtering")

    @property
    def exit_code(self) -> int:
        if self.status == ScanStatus.THRESHOLD_EXCEEDED:
            return int(ExitCode.THRESHOLD_EXCEEDED)
        return int(ExitCode.SUCCESS)

    @property
    def passed(self) -> bool:
        return self.status == ScanStatus.SUCCESS

    def summary(self) -> str:
        """One-line human-readable verdict."""
        if self.fail_threshold is None:
            return f"Found {self.problem_count} problem(s), fail threshold not set"
        if self.passed:
            return (
                f"Found {self.problem_count} problem(s), "
                f"below the fail threshold of {self.fail_threshold}"
            )
        return (
            f"Found {self.problem_count} problem(s), "
            f"fail threshold of {self.fail_threshold} reached"
        )
