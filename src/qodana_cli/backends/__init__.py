"""Analyzer execution backends."""

from __future__ import annotations

from qodana_cli.backends.base import Backend, OutputSink, ReadyHandle, discard_output
from qodana_cli.backends.docker import DockerBackend
from qodana_cli.backends.native import NativeBackend
from qodana_cli.models.common import BackendKind
from qodana_cli.models.options import ScanOptions


def get_backend(options: ScanOptions) -> Backend:
    """Create the backend that runs the configured analyzer."""
    if options.backend_kind == BackendKind.DOCKER:
        return DockerBackend()
    return NativeBackend()


__all__ = [
    "Backend",
    "OutputSink",
    "ReadyHandle",
    "discard_output",
    "DockerBackend",
    "NativeBackend",
    "get_backend",
]
