"""Autoload cache invalidation.

The framework caches its class map in ``config_autoload.yml.php`` files
below the cache directory. Removing them makes the next request rescan
the model directories and pick up newly generated classes.
"""

import logging
from pathlib import Path
from typing import Optional

from model_builder.utils.finder import FileEnumerator, FileFinder

logger = logging.getLogger(__name__)

AUTOLOAD_CACHE_NAME = "config_autoload.yml.php"


class AutoloadReloader:
    """Removes cached autoload class maps from a cache directory."""

    def __init__(self, cache_dir: str, finder: Optional[FileEnumerator] = None) -> None:
        self.cache_dir = cache_dir
        self.finder = finder or FileFinder()

    def __call__(self) -> list[str]:
        """Delete every autoload cache file and return their paths."""
        removed = self.finder.find(self.cache_dir, name=AUTOLOAD_CACHE_NAME, type="file")
        for path in removed:
            Path(path).unlink()
            logger.debug("Removed autoload cache %s", path)
        logger.info("Reloaded autoload (%d cache files removed)", len(removed))
        return removed
