"""Base backend protocol and types."""

from __future__ import annotations

import time
from typing import Any, Callable, Protocol, runtime_checkable

from qodana_cli.models.plan import ExecutionPlan, ExecutionResult

OutputSink = Callable[[str], None]


def discard_output(text: str) -> None:
    """Output sink that drops everything."""


class ReadyHandle:
    """A prepared, not yet finished, analyzer invocation.

    Backends attach whatever runtime objects they need (a container, a
    process) to the handle between ``prepare`` and ``teardown``.
    """

    def __init__(self, plan: ExecutionPlan, on_output: OutputSink | None = None) -> None:
        self.plan = plan
        self.on_output = on_output or discard_output
        self.started_at: float | None = None
        self.resource: Any = None

    def start_clock(self) -> None:
        self.started_at = time.monotonic()

    @property
    def elapsed(self) -> float:
        if self.started_at is None:
            return 0.0
        return time.monotonic() - self.started_at


@runtime_checkable
class Backend(Protocol):
    """Protocol for analyzer execution backends.

    A backend runs the analyzer described by an ExecutionPlan and
    reports what happened. The scan pipeline only talks to this
    protocol, so new execution strategies plug in without touching it.

    To implement a custom backend:
    1. Create a class that implements this protocol
    2. Stream analyzer output to ``handle.on_output`` while it runs
    3. Release everything in ``teardown``, also after failures

    Example:
        class RemoteBackend:
            def prepare(self, plan, on_output=None):
                return ReadyHandle(plan, on_output)

            def run(self, handle):
                ...  # submit and wait
                return ExecutionResult(exit_code=0, backend=handle.plan.backend)

            def teardown(self, handle):
                ...
    """

    def prepare(self, plan: ExecutionPlan, on_output: OutputSink | None = None) -> ReadyHandle:
        """Make everything the run needs available.

        Raises:
            BackendError: If the runtime or the analyzer is unavailable
        """
        ...

    def run(self, handle: ReadyHandle) -> ExecutionResult:
        """Run the analyzer once and wait for it to finish.

        A non-zero exit code is returned, never raised or retried.

        Raises:
            BackendError: If the analyzer could not be started
            ScanCancelled: If interrupted; the analyzer is stopped first
        """
        ...

    def teardown(self, handle: ReadyHandle) -> None:
        """Release resources held by the handle."""
        ...
