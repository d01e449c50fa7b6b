#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Record types passed between the crawl stages."""

from pathlib import Path
from typing import TYPE_CHECKING

import attrs

if TYPE_CHECKING:
    from aicrawler.tracking import ChangeReport, ChangeTracking


@attrs.define(frozen=True, slots=True)
class FileEntry:
    """
    A file discovered during traversal.

    Attributes:
        path: Absolute path to the file.
        relative_path: Forward-slash path relative to the source root.
    """

    path: Path = attrs.field(validator=attrs.validators.instance_of(Path))
    relative_path: str = attrs.field(validator=attrs.validators.instance_of(str))


@attrs.define(frozen=True, slots=True)
class BundleInfo:
    """Describes one flushed bundle file."""

    part: int
    path: Path
    source_label: str
    file_count: int
    size_bytes: int


@attrs.define(kw_only=True, slots=True)
class DirectorySummary:
    """Outcome of crawling one configured source directory."""

    index: int
    source_directory: Path
    files_bundled: int = 0
    bundles: list[BundleInfo] = attrs.field(factory=list)
    tracking: "ChangeTracking | None" = None
    changes: "ChangeReport | None" = None

    @property
    def bundle_count(self) -> int:
        return len(self.bundles)


@attrs.define(kw_only=True, slots=True)
class CrawlSummary:
    """Outcome of a whole run across all source directories."""

    output_directory: Path
    bundle_count: int = 0
    directories: list[DirectorySummary] = attrs.field(factory=list)

    @property
    def bundles(self) -> list[BundleInfo]:
        return [bundle for directory in self.directories for bundle in directory.bundles]

    @property
    def files_bundled(self) -> int:
        return sum(directory.files_bundled for directory in self.directories)


# 🐝📁🔚
