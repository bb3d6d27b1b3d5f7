"""Unit tests for the scan pipeline."""

import pytest

from conftest import FakeBackend, sarif_result, write_sarif

from qodana_cli.core.pipeline import ScanPipeline
from qodana_cli.models.outcome import ScanStatus
from qodana_cli.utils.errors import BackendError, ConfigError, ExecutionError, ScanCancelled


class FailingBackend(FakeBackend):
    """Backend whose run raises."""

    def __init__(self, error: Exception) -> None:
        super().__init__()
        self.error = error

    def run(self, handle):
        self.calls.append("run")
        raise self.error


def pipeline_for(backend, **kwargs):
    return ScanPipeline(backend_factory=lambda options: backend, **kwargs)


class TestScanPipeline:
    """Tests for ScanPipeline."""

    def test_stage_order(self, make_options, fake_backend):
        """Test prepare, run and teardown happen once, in order."""
        pipeline_for(fake_backend).scan(make_options())
        assert fake_backend.calls == ["prepare", "run", "teardown"]

    def test_plan_carries_compiled_options(self, make_options, fake_backend):
        """Test the backend receives the compiled analyzer arguments."""
        pipeline_for(fake_backend).scan(make_options(save_report=True, fail_threshold=3))
        assert fake_backend.plan.args == ["--save-report", "--fail-threshold", "3"]

    def test_output_forwarded(self, make_options):
        """Test analyzer output reaches the caller's sink."""
        chunks = []
        backend = FakeBackend(output="Inspecting files\n")
        pipeline_for(backend, on_output=chunks.append).scan(make_options())
        assert chunks == ["Inspecting files\n"]

    def test_outcome(self, make_options, sample_findings):
        """Test the report is evaluated against the threshold."""
        backend = FakeBackend(exit_code=255, results=sample_findings)
        outcome = pipeline_for(backend).scan(make_options(fail_threshold=5))
        assert outcome.status == ScanStatus.THRESHOLD_EXCEEDED
        assert outcome.problem_count == 5

    def test_teardown_after_run_failure(self, make_options):
        """Test teardown runs when the backend fails."""
        backend = FailingBackend(BackendError("container died"))
        with pytest.raises(BackendError):
            pipeline_for(backend).scan(make_options())
        assert backend.calls == ["prepare", "run", "teardown"]

    def test_teardown_after_cancel(self, make_options):
        """Test teardown runs when the scan is cancelled."""
        backend = FailingBackend(ScanCancelled())
        with pytest.raises(ScanCancelled):
            pipeline_for(backend).scan(make_options())
        assert backend.calls[-1] == "teardown"

    def test_stale_report_removed(self, make_options):
        """Test a report from a previous run is not evaluated."""
        options = make_options()
        write_sarif(options.report_path, [sarif_result("Old")])
        backend = FakeBackend(exit_code=1, write_report=False)
        with pytest.raises(ExecutionError):
            pipeline_for(backend).scan(options)
        assert not options.report_path.exists()

    def test_clear_cache(self, make_options, fake_backend):
        """Test the cache is empty when the backend starts."""
        options = make_options(clear_cache=True)
        options.cache_dir.mkdir(parents=True)
        (options.cache_dir / "stale").write_text("x")

        pipeline_for(fake_backend).scan(options)

        assert options.cache_dir.is_dir()
        assert list(options.cache_dir.iterdir()) == []

    def test_cache_kept_by_default(self, make_options, fake_backend):
        """Test the cache survives between runs."""
        options = make_options()
        options.cache_dir.mkdir(parents=True)
        (options.cache_dir / "index").write_text("x")
        pipeline_for(fake_backend).scan(options)
        assert (options.cache_dir / "index").exists()

    def test_results_path_is_file(self, make_options, fake_backend, tmp_path):
        """Test a file in place of the results directory fails before running."""
        blocker = tmp_path / "results-file"
        blocker.write_text("")
        with pytest.raises(ConfigError, match="not a directory"):
            pipeline_for(fake_backend).scan(make_options(results_dir=blocker))
        assert fake_backend.calls == []

    def test_prepare_failure_skips_run(self, make_options):
        """Test nothing runs when the backend cannot be prepared."""

        class Unavailable(FakeBackend):
            def prepare(self, plan, on_output=None):
                raise BackendError("Docker unavailable")

        backend = Unavailable()
        with pytest.raises(BackendError):
            pipeline_for(backend).scan(make_options())
        assert backend.calls == []
