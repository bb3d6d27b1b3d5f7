"""Unit tests for the cache manager."""

import pytest

from qodana_cli.core.cache import CacheManager
from qodana_cli.utils.errors import ConfigError
from qodana_cli.utils.hashing import project_id


class TestCacheManager:
    """Tests for CacheManager."""

    @pytest.fixture
    def manager(self):
        return CacheManager()

    def test_prepare_creates_directory(self, manager, make_options, tmp_path):
        """Test the cache directory is created on first use."""
        options = make_options(cache_dir=tmp_path / "deep" / "cache")
        handle = manager.prepare_cache(options)
        assert handle.path.is_dir()
        assert handle.path == tmp_path / "deep" / "cache"
        assert handle.project_id == project_id(options.project_dir)

    def test_prepare_reuses_contents(self, manager, make_options):
        """Test an existing cache is handed over untouched."""
        options = make_options()
        handle = manager.prepare_cache(options)
        (handle.path / "index").mkdir()
        (handle.path / "index" / "data.bin").write_bytes(b"\x00\x01")

        again = manager.prepare_cache(options)
        assert again == handle
        assert (again.path / "index" / "data.bin").read_bytes() == b"\x00\x01"

    def test_invalidate_empties_directory(self, manager, make_options):
        """Test invalidation removes files, directories and symlinks."""
        options = make_options()
        handle = manager.prepare_cache(options)
        (handle.path / "a.txt").write_text("a")
        (handle.path / "nested" / "deeper").mkdir(parents=True)
        (handle.path / "nested" / "deeper" / "b.txt").write_text("b")
        (handle.path / "link").symlink_to(handle.path / "nested")

        manager.invalidate(handle)

        assert handle.path.is_dir()
        assert list(handle.path.iterdir()) == []

    def test_invalidate_then_prepare_is_empty(self, manager, make_options):
        """Test a cleared cache reaches the backend empty."""
        options = make_options()
        handle = manager.prepare_cache(options)
        (handle.path / "stale").write_text("x")

        manager.invalidate(handle)
        prepared = manager.prepare_cache(options)

        assert list(prepared.path.iterdir()) == []

    def test_invalidate_missing_directory(self, manager, make_options):
        """Test invalidating a removed cache recreates it."""
        options = make_options()
        handle = manager.prepare_cache(options)
        handle.path.rmdir()
        manager.invalidate(handle)
        assert handle.path.is_dir()

    def test_cache_path_is_file(self, manager, make_options, tmp_path):
        """Test a file in place of the cache directory is rejected."""
        blocker = tmp_path / "cache-file"
        blocker.write_text("not a directory")
        with pytest.raises(ConfigError, match="not a directory"):
            manager.prepare_cache(make_options(cache_dir=blocker))

    def test_invalidate_does_not_touch_symlink_target(self, manager, make_options, tmp_path):
        """Test only the link is removed, not what it points to."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "keep.txt").write_text("keep")

        handle = manager.prepare_cache(make_options())
        (handle.path / "link").symlink_to(outside)
        manager.invalidate(handle)

        assert (outside / "keep.txt").exists()
