"""Error handling utilities for qodana-cli."""

from __future__ import annotations

import functools
import time
from typing import Any, Callable, TypeVar

from qodana_cli.models.common import ScanError

T = TypeVar("T")


class QodanaError(Exception):
    """Base exception for qodana-cli."""

    def __init__(self, message: str, code: str = "UNKNOWN_ERROR", details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_scan_error(self) -> ScanError:
        """Convert to ScanError model."""
        return ScanError(code=self.code, message=self.message, details=self.details)


class ConfigError(QodanaError):
    """Configuration is malformed or contradictory."""

    def __init__(self, message: str, config_key: str | None = None, path: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        if path:
            details["path"] = path
        super().__init__(message, code="CONFIG_ERROR", details=details)


class BackendError(QodanaError):
    """The analyzer runtime could not be reached or prepared."""

    def __init__(self, message: str, backend: str | None = None, cause: Exception | None = None):
        details: dict[str, Any] = {}
        if backend:
            details["backend"] = backend
        if cause is not None:
            details["cause"] = str(cause)
        super().__init__(message, code="BACKEND_ERROR", details=details)
        self.cause = cause


class ExecutionError(QodanaError):
    """The analyzer ran but did not produce a usable report."""

    def __init__(self, message: str, exit_code: int | None = None, report_path: str | None = None):
        details: dict[str, Any] = {}
        if exit_code is not None:
            details["exit_code"] = exit_code
        if report_path:
            details["report_path"] = report_path
        super().__init__(message, code="EXECUTION_ERROR", details=details)
        self.exit_code = exit_code


class NetworkError(QodanaError):
    """Network operation failed."""

    def __init__(self, message: str, reference: str | None = None):
        details = {"reference": reference} if reference else {}
        super().__init__(message, code="NETWORK_ERROR", details=details)


class ScanCancelled(QodanaError):
    """The scan was interrupted by the caller."""

    def __init__(self, message: str = "Scan cancelled"):
        super().__init__(message, code="CANCELLED")


def retry(
    max_attempts: int = 3,
    delay: float = 1.0,
    backoff: float = 2.0,
    exceptions: tuple[type[Exception], ...] = (Exception,),
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator to retry a function on failure.

    Args:
        max_attempts: Maximum number of attempts
        delay: Initial delay between retries in seconds
        backoff: Multiplier for delay after each retry
        exceptions: Tuple of exceptions to catch and retry

    Returns:
        Decorated function with retry logic
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception: Exception | None = None
            current_delay = delay

            for attempt in range(max_attempts):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    last_exception = e
                    if attempt < max_attempts - 1:
                        time.sleep(current_delay)
                        current_delay *= backoff

            if last_exception:
                raise last_exception
            raise RuntimeError("Retry failed without exception")

        return wrapper

    return decorator


def validate_env_entry(entry: str) -> tuple[str, str]:
    """Validate a NAME=value environment entry.

    Args:
        entry: Environment entry to validate

    Returns:
        Tuple of (name, value)

    Raises:
        ConfigError: If the entry is invalid
    """
    if "=" not in entry:
        raise ConfigError(f"Environment entry must be NAME=value: {entry!r}", config_key="env")

    name, value = entry.split("=", 1)
    if not name:
        raise ConfigError("Environment variable name cannot be empty", config_key="env")

    if not name[0].isalpha() and name[0] != "_":
        raise ConfigError(
            f"Environment variable name must start with a letter or underscore: {name}",
            config_key="env",
        )

    for char in name:
        if not (char.isalnum() or char == "_"):
            raise ConfigError(
                f"Environment variable name contains invalid character: {char}",
                config_key="env",
            )
    return name, value


def validate_volume_entry(entry: str) -> tuple[str, str, str]:
    """Validate a host:container[:mode] volume entry.

    Args:
        entry: Volume entry to validate

    Returns:
        Tuple of (host path, container path, mode)

    Raises:
        ConfigError: If the entry is invalid
    """
    parts = entry.split(":")
    if len(parts) < 2 or not parts[0] or not parts[1]:
        raise ConfigError(f"Volume must be host:container[:mode]: {entry!r}", config_key="volumes")
    if len(parts) > 3:
        raise ConfigError(f"Volume has too many components: {entry!r}", config_key="volumes")

    mode = parts[2] if len(parts) == 3 else "rw"
    if mode not in ("rw", "ro"):
        raise ConfigError(f"Volume mode must be rw or ro: {entry!r}", config_key="volumes")
    return parts[0], parts[1], mode
