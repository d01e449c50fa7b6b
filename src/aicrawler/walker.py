#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Deterministic, lazy directory traversal."""

from collections.abc import Iterable, Iterator
import os
from pathlib import Path

from aicrawler.errors import DirectoryTraversalError
from aicrawler.ignore import IgnoreFilter
from aicrawler.logger import logger
from aicrawler.metadata import FileEntry


class DirectoryWalker:
    """Walks a directory tree depth-first, yielding files in a fixed order.

    Entries at each level are sorted by name (plain codepoint order). Hidden
    entries and entries matched by the ignore filter are skipped; a skipped
    directory is never descended into.
    """

    def __init__(
        self,
        root: Path,
        ignore_filter: IgnoreFilter,
        exclude: Iterable[Path] = (),
        follow_symlinks: bool = False,
    ) -> None:
        self.root = root
        self.ignore_filter = ignore_filter
        self.follow_symlinks = follow_symlinks
        self._excluded: frozenset[Path] = frozenset(exclude)

    def __iter__(self) -> Iterator[FileEntry]:
        return self.walk()

    def walk(self) -> Iterator[FileEntry]:
        """Yield every included file under the root.

        Raises:
            DirectoryTraversalError: If a directory cannot be listed.
        """
        logger.info("walk.start", root=str(self.root))
        visited: set[Path] = {self.root.resolve()} if self.follow_symlinks else set()
        yield from self._walk_directory(self.root, "", visited)

    def _list_entries(self, directory: Path) -> list[os.DirEntry[str]]:
        try:
            with os.scandir(directory) as it:
                return sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.error("walk.directory.list_failed", path=str(directory), error=str(e))
            raise DirectoryTraversalError(f"Cannot list directory '{directory}': {e}") from e

    def _walk_directory(  # noqa: C901
        self, directory: Path, relative_prefix: str, visited: set[Path]
    ) -> Iterator[FileEntry]:
        for entry in self._list_entries(directory):
            if entry.name.startswith("."):
                logger.debug("walk.entry.hidden", name=entry.name, directory=str(directory))
                continue

            entry_path = Path(entry.path)
            if entry_path in self._excluded:
                logger.debug("walk.entry.excluded_output", path=str(entry_path))
                continue

            relative_path = f"{relative_prefix}{entry.name}"

            try:
                if entry.is_symlink() and not self.follow_symlinks:
                    logger.debug("walk.symlink.skipped", path=relative_path)
                    continue
                is_dir = entry.is_dir(follow_symlinks=self.follow_symlinks)
                is_file = not is_dir and entry.is_file(follow_symlinks=self.follow_symlinks)
            except OSError as e:
                logger.warning("walk.entry.stat_failed", path=relative_path, error=str(e))
                continue

            if self.ignore_filter.matches(relative_path, is_dir=is_dir):
                logger.debug("walk.entry.ignored", path=relative_path, is_dir=is_dir)
                continue

            if is_file:
                yield FileEntry(path=entry_path, relative_path=relative_path)
            elif is_dir:
                if self.follow_symlinks:
                    real_dir = entry_path.resolve()
                    if real_dir in visited:
                        logger.debug("walk.directory.revisit_skipped", path=relative_path)
                        continue
                    visited.add(real_dir)
                yield from self._walk_directory(entry_path, f"{relative_path}/", visited)
            else:
                logger.debug("walk.entry.not_regular", path=relative_path)


# 🐝📁🔚
