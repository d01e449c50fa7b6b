#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Error types for aicrawler operations."""

from provide.foundation import FoundationError


class CrawlerError(FoundationError):
    """Base error for all crawling operations."""

    pass


class ConfigurationError(CrawlerError):
    """Error in aicrawler configuration."""

    pass


class InvalidPathError(ConfigurationError):
    """Configured source directory is missing or not a directory."""

    pass


class DirectoryTraversalError(CrawlerError):
    """A directory could not be listed during traversal."""

    pass


class FileWriteError(CrawlerError):
    """Failed to write a generated output file."""

    pass


class BundleWriteError(FileWriteError):
    """Failed to write a bundle file."""

    pass


class TrackingWriteError(FileWriteError):
    """Failed to write a change-tracking record."""

    pass


class TrackingParseError(CrawlerError):
    """A persisted change-tracking record is not valid."""

    pass


# 🐝📁🔚
