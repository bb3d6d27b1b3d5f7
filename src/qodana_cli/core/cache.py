"""Cache directory lifecycle."""

from __future__ import annotations

import shutil

from qodana_cli.models.options import ScanOptions
from qodana_cli.models.plan import CacheHandle
from qodana_cli.utils.errors import ConfigError
from qodana_cli.utils.hashing import project_id
from qodana_cli.utils.logging import get_logger

logger = get_logger("cache")


class CacheManager:
    """Owns the analyzer cache directory of a project.

    The directory is handed to the backend as-is; its contents belong
    to the analyzer and are never inspected here. Nothing expires: the
    cache grows until :meth:`invalidate` is called. Two scans must not
    share a cache directory at the same time.

    Example:
        manager = CacheManager()
        handle = manager.prepare_cache(options)
        if options.clear_cache:
            manager.invalidate(handle)
    """

    def prepare_cache(self, options: ScanOptions) -> CacheHandle:
        """Create the cache directory if missing and return its handle.

        Raises:
            ConfigError: If the cache path exists but is not a directory
        """
        path = options.cache_dir
        if path.exists() and not path.is_dir():
            raise ConfigError(f"Cache path is not a directory: {path}", config_key="cache_dir")

        created = not path.exists()
        path.mkdir(parents=True, exist_ok=True)
        handle = CacheHandle(path=path, project_id=project_id(options.project_dir))
        logger.debug(f"{'Created' if created else 'Reusing'} cache {path} for project {handle.project_id}")
        return handle

    def invalidate(self, handle: CacheHandle) -> None:
        """Remove everything inside the cache directory, keeping the directory."""
        if not handle.path.exists():
            handle.path.mkdir(parents=True, exist_ok=True)
            return

        removed = 0
        for entry in handle.path.iterdir():
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
            removed += 1
        logger.info(f"Cleared cache {handle.path} ({removed} entries)")
