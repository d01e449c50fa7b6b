#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""aicrawler: Snapshot source directories into size-bounded markdown bundles.

Each run also records content fingerprints so later runs can tell what changed.
"""

from importlib.metadata import PackageNotFoundError, version

from aicrawler.bundler import BundleWriter
from aicrawler.config import CrawlerConfig
from aicrawler.core import check, crawl, run
from aicrawler.errors import (
    BundleWriteError,
    ConfigurationError,
    CrawlerError,
    DirectoryTraversalError,
    FileWriteError,
    InvalidPathError,
    TrackingParseError,
    TrackingWriteError,
)
from aicrawler.formatter import ContentFormatter
from aicrawler.ignore import IgnoreFilter
from aicrawler.logger import logger
from aicrawler.metadata import BundleInfo, CrawlSummary, DirectorySummary, FileEntry
from aicrawler.reader import FileReader
from aicrawler.tracking import ChangeReport, ChangeTracker, ChangeTracking, FingerprintDelta
from aicrawler.walker import DirectoryWalker

logger.debug(
    "aicrawler.init",
    components_available=["IgnoreFilter", "DirectoryWalker", "ContentFormatter", "BundleWriter", "ChangeTracker"],
)

# Public API exports
__all__ = [
    "BundleInfo",
    "BundleWriteError",
    # Components (for advanced usage)
    "BundleWriter",
    "ChangeReport",
    "ChangeTracker",
    "ChangeTracking",
    "ConfigurationError",
    "ContentFormatter",
    "CrawlSummary",
    # Configuration
    "CrawlerConfig",
    # Errors
    "CrawlerError",
    "DirectorySummary",
    "DirectoryTraversalError",
    "DirectoryWalker",
    # Data structures
    "FileEntry",
    "FileReader",
    "FileWriteError",
    "FingerprintDelta",
    "IgnoreFilter",
    "InvalidPathError",
    "TrackingParseError",
    "TrackingWriteError",
    # Core operations
    "check",
    "crawl",
    "run",
]

try:
    __version__ = version("aicrawler")
except PackageNotFoundError:
    __version__ = "0.0.0"

# 🐝📁🔚
