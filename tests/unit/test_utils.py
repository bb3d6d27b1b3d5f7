"""Unit tests for logging and hashing helpers."""

import logging

from qodana_cli.utils.hashing import compute_hash, project_id, short_hash
from qodana_cli.utils.logging import (
    StructuredFormatter,
    configure_logging,
    get_logger,
    get_logger_with_context,
)


class TestHashing:
    """Tests for hashing helpers."""

    def test_compute_hash(self):
        """Test sha256 hex digests."""
        assert compute_hash(b"") == "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"

    def test_short_hash(self):
        """Test truncation."""
        assert short_hash("abcdef0123456789") == "abcdef012345"
        assert short_hash("abcdef", 3) == "abc"

    def test_project_id_stable(self, project_dir):
        """Test the same directory always has the same id."""
        assert project_id(project_dir) == project_id(str(project_dir) + "/.")
        assert len(project_id(project_dir)) == 8

    def test_project_id_distinct(self, tmp_path):
        """Test different directories get different ids."""
        assert project_id(tmp_path / "a") != project_id(tmp_path / "b")


class TestLogging:
    """Tests for logging helpers."""

    def test_get_logger_prefix(self):
        """Test module loggers live under the package logger."""
        assert get_logger("pipeline").name == "qodana_cli.pipeline"
        assert get_logger("qodana_cli.backends").name == "qodana_cli.backends"

    def test_configure_logging(self):
        """Test the package logger level and handler."""
        configure_logging(level="DEBUG")
        logger = logging.getLogger("qodana_cli")
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, StructuredFormatter)
        configure_logging(level="WARNING")
        assert logger.level == logging.WARNING

    def test_context_fields_formatted(self):
        """Test context fields are appended as key=value."""
        record = logging.LogRecord("qodana_cli.x", logging.INFO, __file__, 1, "Pulling", None, None)
        record.extra_fields = {"image": "jetbrains/qodana-go:2022.1"}
        text = StructuredFormatter("%(message)s").format(record)
        assert text == "Pulling image=jetbrains/qodana-go:2022.1"

    def test_adapter_carries_context(self):
        """Test the adapter attaches its context to every record."""
        adapter = get_logger_with_context("backends.docker", image="x")
        msg, kwargs = adapter.process("hello", {})
        assert msg == "hello"
        assert kwargs["extra"]["extra_fields"] == {"image": "x"}
