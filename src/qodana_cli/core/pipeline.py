"""Scan pipeline: options -> analyzer run -> outcome."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

from qodana_cli.backends import Backend, OutputSink, get_backend
from qodana_cli.core.cache import CacheManager
from qodana_cli.core.evaluator import ResultEvaluator
from qodana_cli.core.options import compile_options
from qodana_cli.core.plan import build_plan
from qodana_cli.core.resolver import resolve
from qodana_cli.models.options import ScanOptions
from qodana_cli.models.outcome import ScanOutcome
from qodana_cli.utils.errors import ConfigError
from qodana_cli.utils.logging import get_logger_with_context


class ScanPipeline:
    """Runs one scan through every stage, in order.

    compile options -> prepare cache -> build plan -> backend
    prepare/run/teardown -> evaluate. Each stage fails fast and nothing
    is retried here; the backend is torn down even when a later step
    fails or the run is cancelled.

    Example:
        pipeline = ScanPipeline(on_output=sys.stdout.write)
        outcome = pipeline.scan(options)
        print(outcome.summary())
    """

    def __init__(
        self,
        backend_factory: Callable[[ScanOptions], Backend] = get_backend,
        cache_manager: CacheManager | None = None,
        evaluator: ResultEvaluator | None = None,
        on_output: OutputSink | None = None,
    ) -> None:
        self._backend_factory = backend_factory
        self._cache = cache_manager or CacheManager()
        self._evaluator = evaluator or ResultEvaluator()
        self._on_output = on_output

    def scan(self, options: ScanOptions) -> ScanOutcome:
        """Run the analyzer described by the options and evaluate its report.

        Raises:
            ConfigError: If the results directory or baseline is unusable
            BackendError: If the analyzer runtime is unavailable
            ExecutionError: If the analyzer produced no usable report
            ScanCancelled: If the run was interrupted
        """
        target = options.linter or options.ide
        logger = get_logger_with_context("pipeline", target=target, backend=options.backend_kind.value)

        args = compile_options(options)
        cache = self._cache.prepare_cache(options)
        if options.clear_cache:
            self._cache.invalidate(cache)

        self._prepare_results(options)
        plan = build_plan(options, cache, args)

        backend = self._backend_factory(options)
        logger.info(f"Analyzing {options.project_dir}")
        handle = backend.prepare(plan, self._on_output)
        try:
            result = backend.run(handle)
        finally:
            backend.teardown(handle)

        logger.debug(f"Analyzer finished in {result.duration:.1f}s with code {result.exit_code}")
        outcome = self._evaluator.evaluate(result, options)
        logger.info(outcome.summary())
        return outcome

    @staticmethod
    def _prepare_results(options: ScanOptions) -> None:
        results = options.results_dir
        if results.exists() and not results.is_dir():
            raise ConfigError(f"Results path is not a directory: {results}", config_key="results_dir")
        results.mkdir(parents=True, exist_ok=True)
        # A report left over from a previous run must not be mistaken
        # for this run's output.
        options.report_path.unlink(missing_ok=True)


def run_scan(
    project_dir: Path | str,
    overrides: dict[str, Any] | None = None,
    on_output: OutputSink | None = None,
) -> ScanOutcome:
    """Resolve options for a project and scan it.

    Args:
        project_dir: Project root
        overrides: Options given on the command line
        on_output: Receives analyzer output while it runs

    Returns:
        ScanOutcome of the run
    """
    options = resolve(project_dir, overrides)
    return ScanPipeline(on_output=on_output).scan(options)
