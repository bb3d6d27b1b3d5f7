"""Native backend running a locally installed IDE distribution."""

from __future__ import annotations

import os
import shutil
import subprocess
import sys
from pathlib import Path

from qodana_cli.backends.base import OutputSink, ReadyHandle
from qodana_cli.backends.stream import OutputPump
from qodana_cli.knowledge import get_native_ides
from qodana_cli.models.common import BackendKind
from qodana_cli.models.plan import ExecutionPlan, ExecutionResult
from qodana_cli.utils.errors import BackendError, ScanCancelled
from qodana_cli.utils.logging import get_logger_with_context

TERMINATE_GRACE = 10.0


class NativeBackend:
    """Backend for IDE distributions installed on the machine.

    The analyzer is started directly on the project directory; there
    are no mounts. The launcher is looked up in ``QODANA_DIST`` (the
    distribution root or its ``bin`` directory) and then on PATH.

    Example:
        backend = NativeBackend()
        handle = backend.prepare(plan)
        result = backend.run(handle)
    """

    def __init__(
        self,
        dist_dir: Path | str | None = None,
        platform: str | None = None,
        terminate_grace: float = TERMINATE_GRACE,
    ) -> None:
        """Initialize the native backend.

        Args:
            dist_dir: IDE distribution root. Defaults to $QODANA_DIST
            platform: Platform name as in ``sys.platform``, for lookups
            terminate_grace: Seconds to wait after terminate before killing
        """
        if dist_dir is None:
            dist_dir = os.environ.get("QODANA_DIST") or None
        self._dist_dir = Path(dist_dir) if dist_dir else None
        self._platform = platform or sys.platform
        self._terminate_grace = terminate_grace

    def find_launcher(self, ide: str) -> Path:
        """Locate the launcher for an IDE identifier.

        Raises:
            BackendError: If the identifier is unknown, unsupported on
                this platform, or no installation is found
        """
        known = get_native_ides()
        entry = known.get(ide.upper())
        if entry is None:
            raise BackendError(
                f"Unknown IDE {ide!r}, expected one of: {', '.join(sorted(known))}",
                backend=BackendKind.NATIVE.value,
            )

        if not any(self._platform.startswith(p) for p in entry["platforms"]):
            raise BackendError(
                f"{ide} is not supported on {self._platform}",
                backend=BackendKind.NATIVE.value,
            )

        launchers: list[str] = entry["launchers"]
        if self._dist_dir is not None:
            for directory in (self._dist_dir / "bin", self._dist_dir):
                for name in launchers:
                    candidate = directory / name
                    if candidate.is_file() and os.access(candidate, os.X_OK):
                        return candidate

        for name in launchers:
            found = shutil.which(name)
            if found:
                return Path(found)

        where = f"{self._dist_dir} or PATH" if self._dist_dir else "PATH (set QODANA_DIST to the IDE directory)"
        raise BackendError(
            f"No {ide} installation found, looked for {', '.join(launchers)} in {where}",
            backend=BackendKind.NATIVE.value,
        )

    def command(self, launcher: Path, plan: ExecutionPlan) -> list[str]:
        """Build the analyzer command line."""
        return [
            str(launcher),
            "qodana",
            "--cache-dir",
            str(plan.cache.path),
            *plan.args,
            str(plan.project_dir),
            str(plan.results_dir),
        ]

    def prepare(self, plan: ExecutionPlan, on_output: OutputSink | None = None) -> ReadyHandle:
        """Resolve the launcher for the planned IDE.

        Raises:
            BackendError: If no usable installation is found
        """
        launcher = self.find_launcher(plan.target)
        get_logger_with_context("backends.native", ide=plan.target).debug(f"Using launcher {launcher}")
        handle = ReadyHandle(plan, on_output)
        handle.resource = {"launcher": launcher, "process": None}
        return handle

    def run(self, handle: ReadyHandle) -> ExecutionResult:
        """Start the analyzer process and wait for it to exit.

        Raises:
            BackendError: If the process cannot be started
            ScanCancelled: If interrupted; the process is terminated first
        """
        plan = handle.plan
        logger = get_logger_with_context("backends.native", ide=plan.target)
        cmd = self.command(handle.resource["launcher"], plan)

        env = os.environ.copy()
        env.update(plan.environment)

        handle.start_clock()
        try:
            process = subprocess.Popen(
                cmd,
                cwd=plan.working_dir or None,
                env=env,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except OSError as e:
            raise BackendError(f"Failed to start {cmd[0]}: {e}", backend="native", cause=e) from e

        handle.resource["process"] = process
        logger.debug(f"Started process {process.pid}")

        out = OutputPump(iter(process.stdout.readline, b""), handle.on_output, name="stdout").start()
        err = OutputPump(iter(process.stderr.readline, b""), handle.on_output, name="stderr").start()
        try:
            exit_code = process.wait()
        except KeyboardInterrupt:
            logger.warning("Interrupted, terminating analyzer")
            self._terminate(process)
            out.join(self._terminate_grace)
            err.join(self._terminate_grace)
            raise ScanCancelled(f"Scan with {plan.target} cancelled") from None

        stdout = out.join()
        stderr = err.join()
        logger.info(f"Analyzer exited with code {exit_code}")

        return ExecutionResult(
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            duration=handle.elapsed,
            backend=BackendKind.NATIVE,
        )

    def teardown(self, handle: ReadyHandle) -> None:
        """Make sure the analyzer process is gone and its pipes closed."""
        if not handle.resource:
            return
        process = handle.resource.get("process")
        if process is None:
            return
        if process.poll() is None:
            self._terminate(process)
        for stream in (process.stdout, process.stderr):
            if stream is not None:
                stream.close()
        handle.resource["process"] = None

    def _terminate(self, process: subprocess.Popen) -> None:
        process.terminate()
        try:
            process.wait(timeout=self._terminate_grace)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()
