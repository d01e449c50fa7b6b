#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Ignore-rule loading and matching for a single source directory."""

from collections.abc import Iterable
from pathlib import Path, PurePath

import pathspec

from aicrawler.config import IGNORE_FILE_NAMES
from aicrawler.logger import logger


def _read_rule_lines(rule_file: Path) -> list[str] | None:
    """Read the pattern lines of one ignore file.

    Returns:
        The non-blank, non-comment lines, or None when the file is absent
        or unreadable.
    """
    try:
        with rule_file.open("r", encoding="utf-8", errors="ignore") as f_in:
            return [line.rstrip("\r\n") for line in f_in if line.strip() and not line.startswith("#")]
    except FileNotFoundError:
        logger.debug("ignore.file.absent", path=str(rule_file))
    except OSError as e:
        logger.warning("ignore.file.unreadable", path=str(rule_file), error=str(e))
    return None


class IgnoreFilter:
    """Layered gitignore-style rules rooted at one directory.

    Rules from ``.gitignore`` are loaded first and rules from ``.aiignore``
    are appended after them, so a negation in ``.aiignore`` can re-include
    something ``.gitignore`` excluded. The last matching pattern wins.
    """

    def __init__(
        self,
        directory: Path,
        lines: Iterable[str] = (),
        sources: Iterable[Path] = (),
    ) -> None:
        self.directory = directory
        self._patterns: tuple[str, ...] = tuple(lines)
        self.sources: tuple[Path, ...] = tuple(sources)
        self._spec = pathspec.GitIgnoreSpec.from_lines(self._patterns)

    @classmethod
    def load(cls, directory: Path) -> "IgnoreFilter":
        """Load ``.gitignore`` and ``.aiignore`` from ``directory``.

        Missing or unreadable rule files contribute no patterns.
        """
        lines: list[str] = []
        sources: list[Path] = []
        for file_name in IGNORE_FILE_NAMES:
            rule_file = directory / file_name
            file_lines = _read_rule_lines(rule_file)
            if file_lines is None:
                continue
            lines.extend(file_lines)
            sources.append(rule_file)
            logger.debug(
                "ignore.patterns.loaded",
                source=str(rule_file),
                pattern_count=len(file_lines),
            )

        logger.info(
            "ignore.load.complete",
            directory=str(directory),
            rule_files=len(sources),
            pattern_count=len(lines),
        )
        return cls(directory, lines, sources)

    @classmethod
    def from_lines(cls, directory: Path, lines: Iterable[str]) -> "IgnoreFilter":
        return cls(directory, [line for line in lines if line.strip() and not line.startswith("#")])

    @property
    def patterns(self) -> tuple[str, ...]:
        return self._patterns

    def matches(self, relative_path: str | PurePath, is_dir: bool = False) -> bool:
        """Return True if the path, relative to this filter's directory, is excluded.

        Args:
            relative_path: Path relative to the directory the rules were loaded from.
            is_dir: Whether the path names a directory, so that directory-only
                patterns (ending in ``/``) apply to it.
        """
        if not self._patterns:
            return False

        if isinstance(relative_path, PurePath):
            candidate = relative_path.as_posix()
        else:
            candidate = relative_path.replace("\\", "/")
        if is_dir and not candidate.endswith("/"):
            candidate += "/"

        return self._spec.match_file(candidate)


# 🐝📁🔚
