"""Utility functions for qodana-cli."""

from qodana_cli.utils.hashing import compute_hash, project_id, short_hash
from qodana_cli.utils.logging import configure_logging, get_logger, get_logger_with_context
from qodana_cli.utils.errors import (
    QodanaError,
    ConfigError,
    BackendError,
    ExecutionError,
    NetworkError,
    ScanCancelled,
    retry,
    validate_env_entry,
    validate_volume_entry,
)

__all__ = [
    # Hashing
    "compute_hash",
    "project_id",
    "short_hash",
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    # Errors
    "QodanaError",
    "ConfigError",
    "BackendError",
    "ExecutionError",
    "NetworkError",
    "ScanCancelled",
    "retry",
    "validate_env_entry",
    "validate_volume_entry",
]
