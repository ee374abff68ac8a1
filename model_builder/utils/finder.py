"""File enumeration with name, type and prune filters.

FileEnumerator is the capability the build task depends on, so tests
can drive the task with an in-memory fake. FileFinder is the
filesystem-backed implementation.
"""

import fnmatch
import logging
import os
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

logger = logging.getLogger(__name__)

Roots = Union[str, Path, Iterable[Union[str, Path]]]


class FileEnumerator(Protocol):
    """Finds paths below one or more roots."""

    def find(
        self,
        roots: Roots,
        name: Optional[str] = None,
        type: Optional[str] = None,
        prune: Iterable[str] = (),
    ) -> list[str]: ...


class FileFinder:
    """Walks directory trees and filters the entries found.

    ``type`` is ``"file"``, ``"dir"`` or None for both. ``name`` is a
    shell-style glob matched against the entry's base name. Directories
    whose name appears in ``prune`` are neither returned nor descended
    into.
    """

    def find(
        self,
        roots: Roots,
        name: Optional[str] = None,
        type: Optional[str] = None,
        prune: Iterable[str] = (),
    ) -> list[str]:
        """Return the sorted, de-duplicated paths matching the filters.

        Args:
            roots: A root directory or an iterable of them. Missing roots
                are skipped.
            name: Optional glob for entry base names.
            type: ``"file"``, ``"dir"`` or None.
            prune: Directory names to skip entirely.

        Returns:
            Matching paths as strings.
        """
        if type not in (None, "file", "dir"):
            raise ValueError(f"Unknown entry type: {type}")

        if isinstance(roots, (str, Path)):
            roots = [roots]
        pruned = set(prune)

        found: set[str] = set()
        for root in roots:
            root_path = Path(root)
            if not root_path.is_dir():
                logger.debug("Skipping missing root %s", root_path)
                continue

            for dirpath, dirnames, filenames in os.walk(root_path):
                dirnames[:] = sorted(d for d in dirnames if d not in pruned)
                if type != "file":
                    found.update(
                        os.path.join(dirpath, d)
                        for d in dirnames
                        if name is None or fnmatch.fnmatchcase(d, name)
                    )
                if type != "dir":
                    found.update(
                        os.path.join(dirpath, f)
                        for f in filenames
                        if name is None or fnmatch.fnmatchcase(f, name)
                    )

        return sorted(found)
