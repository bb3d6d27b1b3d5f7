"""Result and threshold evaluation."""

from __future__ import annotations

from pathlib import Path

from qodana_cli.models.options import ScanOptions
from qodana_cli.models.outcome import ScanOutcome, ScanStatus
from qodana_cli.models.plan import ExecutionResult
from qodana_cli.models.report import AnalysisReport, BaselineState, Finding
from qodana_cli.utils.errors import ConfigError, ExecutionError
from qodana_cli.utils.logging import get_logger

logger = get_logger("evaluator")

OUT_OF_MEMORY_EXIT_CODE = 137


class ResultEvaluator:
    """Turns an analyzer run into a pass/fail outcome.

    The evaluator reads the SARIF report the analyzer left in the
    results directory, drops findings already known from the baseline
    and compares the remaining count with the fail threshold. Reports
    are never modified.

    Example:
        evaluator = ResultEvaluator()
        outcome = evaluator.evaluate(result, options)
        sys.exit(outcome.exit_code)
    """

    def evaluate(self, result: ExecutionResult, options: ScanOptions) -> ScanOutcome:
        """Evaluate an execution result against the configured threshold.

        Args:
            result: What the backend observed
            options: Options the scan ran with

        Returns:
            ScanOutcome with the counted problems

        Raises:
            ExecutionError: If the analyzer produced no usable report
            ConfigError: If the configured baseline cannot be read
        """
        report_path = options.report_path
        if not report_path.is_file():
            if result.exit_code != 0:
                raise ExecutionError(self._crash_message(result, report_path), result.exit_code, str(report_path))
            raise ExecutionError(
                f"Analyzer exited successfully but wrote no report to {report_path}",
                result.exit_code,
                str(report_path),
            )

        report = self.load_report(report_path)
        if result.exit_code != 0:
            logger.info(f"Analyzer exited with code {result.exit_code}, evaluating its report")

        baseline = self.load_baseline(options) if options.has_baseline else None
        problems = self.count_problems(report, baseline, options.baseline_include_absent)
        return self.apply_threshold(problems, options.fail_threshold, report_path, total=len(report))

    def load_report(self, path: Path) -> AnalysisReport:
        """Parse the analyzer report.

        Raises:
            ExecutionError: If the report is unreadable or not SARIF
        """
        try:
            return AnalysisReport.from_file(path)
        except (OSError, ValueError) as e:
            raise ExecutionError(f"Failed to read report {path}: {e}", report_path=str(path)) from e

    def load_baseline(self, options: ScanOptions) -> AnalysisReport:
        """Parse the baseline report.

        Relative paths are resolved against the project directory, the
        way the analyzer resolves them.

        Raises:
            ConfigError: If the baseline is missing or malformed
        """
        path = Path(options.baseline)
        if not path.is_absolute():
            path = options.project_dir / path
        try:
            return AnalysisReport.from_file(path)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to read baseline {path}: {e}", config_key="baseline") from e

    def count_problems(
        self,
        report: AnalysisReport,
        baseline: AnalysisReport | None,
        include_absent: bool,
    ) -> list[Finding]:
        """Select the findings that count towards the threshold.

        ``baseline`` and ``include_absent`` vary independently: without
        a baseline nothing is suppressed, and with ``include_absent``
        the baseline does not suppress anything either.
        """
        actionable = [f for f in report.findings if not f.suppressed]
        if baseline is None or include_absent:
            return actionable

        known = baseline.key_counts
        counted: list[Finding] = []
        for f in actionable:
            if f.baseline_state in (BaselineState.UNCHANGED, BaselineState.ABSENT):
                continue
            # each baseline entry absorbs one occurrence
            if known[f.key] > 0:
                known[f.key] -= 1
                continue
            counted.append(f)
        logger.debug(f"Baseline suppressed {len(actionable) - len(counted)} of {len(actionable)} findings")
        return counted

    def apply_threshold(
        self,
        problems: list[Finding],
        fail_threshold: int | None,
        report_path: Path | None = None,
        total: int | None = None,
    ) -> ScanOutcome:
        """Compare the problem count with the threshold.

        The run fails when a threshold is set and the count reaches it.
        """
        count = len(problems)
        if fail_threshold is not None and count >= fail_threshold:
            status = ScanStatus.THRESHOLD_EXCEEDED
        else:
            status = ScanStatus.SUCCESS

        return ScanOutcome(
            status=status,
            problem_count=count,
            fail_threshold=fail_threshold,
            report_path=report_path,
            problems=problems,
            total_count=count if total is None else total,
        )

    @staticmethod
    def _crash_message(result: ExecutionResult, report_path: Path) -> str:
        message = f"Analyzer ({result.backend.value}) exited with code {result.exit_code} and wrote no report to {report_path}"
        if result.exit_code == OUT_OF_MEMORY_EXIT_CODE:
            message += "; it was likely killed for running out of memory, increase the memory available to it"
        tail = (result.stderr or result.stdout).strip().splitlines()[-5:]
        if tail:
            message += "\n" + "\n".join(tail)
        return message
