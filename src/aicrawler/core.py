#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Core orchestration for crawl and check operations."""

from collections.abc import Sequence
from pathlib import Path
import time

from aicrawler.bundler import BundleWriter
from aicrawler.config import (
    DEFAULT_HASH_ALGORITHM,
    DEFAULT_MAX_BUNDLE_BYTES,
    MISSING_SETTINGS_MESSAGE,
    CrawlerConfig,
    split_directory_setting,
)
from aicrawler.errors import ConfigurationError, FileWriteError
from aicrawler.formatter import ContentFormatter
from aicrawler.ignore import IgnoreFilter
from aicrawler.logger import logger
from aicrawler.metadata import CrawlSummary, DirectorySummary
from aicrawler.tracking import ChangeReport, ChangeTracker
from aicrawler.walker import DirectoryWalker


def _output_exclusions(source_directory: Path, output_directory: Path) -> tuple[Path, ...]:
    """Keep generated output out of a source tree that contains it."""
    if output_directory != source_directory and output_directory.is_relative_to(source_directory):
        return (output_directory,)
    return ()


def _source_label(source_directory: Path) -> str:
    return source_directory.name or str(source_directory)


def crawl(config: CrawlerConfig) -> CrawlSummary:
    """Bundle every configured source directory and record change tracking.

    Args:
        config: Validated crawl configuration.

    Returns:
        Summary of the run; ``bundle_count`` is the total number of bundles.

    Raises:
        FileWriteError: If the output directory, a bundle, or a tracking record
            cannot be written.
        DirectoryTraversalError: If a source directory cannot be listed.
    """
    logger.info(
        "crawl.start",
        source_directories=[str(p) for p in config.source_directories],
        output_directory=str(config.output_directory),
    )
    start_time = time.monotonic()

    try:
        config.output_directory.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("crawl.output.create_failed", path=str(config.output_directory), error=str(e))
        raise FileWriteError(f"Cannot create output directory '{config.output_directory}': {e}") from e

    writer = BundleWriter(config.output_directory, max_bundle_bytes=config.max_bundle_bytes)
    tracker = ChangeTracker(config.output_directory, hash_algorithm=config.hash_algorithm)
    formatter = ContentFormatter()
    summary = CrawlSummary(output_directory=config.output_directory)

    for index, source_directory in enumerate(config.source_directories):
        summary.directories.append(
            _crawl_directory(index, source_directory, config, writer, tracker, formatter)
        )

    summary.bundle_count = writer.part_count

    logger.info(
        "crawl.complete",
        bundles=summary.bundle_count,
        files=summary.files_bundled,
        placeholders=formatter.placeholder_count,
        duration_seconds=time.monotonic() - start_time,
    )
    return summary


def _crawl_directory(
    index: int,
    source_directory: Path,
    config: CrawlerConfig,
    writer: BundleWriter,
    tracker: ChangeTracker,
    formatter: ContentFormatter,
) -> DirectorySummary:
    logger.info("crawl.directory.start", index=index, path=str(source_directory))

    ignore_filter = IgnoreFilter.load(source_directory)
    exclude = _output_exclusions(source_directory, config.output_directory)
    walker = DirectoryWalker(
        source_directory, ignore_filter, exclude=exclude, follow_symlinks=config.follow_symlinks
    )

    first_bundle = len(writer.bundles)
    writer.write(_source_label(source_directory), (formatter.render(entry) for entry in walker))
    bundles = writer.bundles[first_bundle:]

    previous = tracker.load(index)
    tracking = tracker.track(
        source_directory,
        ignore_filter,
        index,
        exclude=exclude,
        follow_symlinks=config.follow_symlinks,
    )

    directory_summary = DirectorySummary(
        index=index,
        source_directory=source_directory,
        files_bundled=sum(bundle.file_count for bundle in bundles),
        bundles=bundles,
        tracking=tracking,
        changes=tracking.compare(previous, index=index),
    )
    logger.info(
        "crawl.directory.complete",
        index=index,
        files=directory_summary.files_bundled,
        bundles=directory_summary.bundle_count,
    )
    return directory_summary


def check(config: CrawlerConfig) -> list[ChangeReport]:
    """Compare current fingerprints with the persisted records without writing anything."""
    tracker = ChangeTracker(config.output_directory, hash_algorithm=config.hash_algorithm)
    reports: list[ChangeReport] = []

    for index, source_directory in enumerate(config.source_directories):
        ignore_filter = IgnoreFilter.load(source_directory)
        current = tracker.compute(
            source_directory,
            ignore_filter,
            exclude=_output_exclusions(source_directory, config.output_directory),
            follow_symlinks=config.follow_symlinks,
        )
        report = current.compare(tracker.load(index), index=index)
        logger.info(
            "check.directory.complete",
            index=index,
            path=str(source_directory),
            changed=report.has_changes,
        )
        reports.append(report)

    return reports


def run(
    source_directories: Sequence[str | Path] | str,
    output_directory: str | Path | None,
    *,
    workspace_root: str | Path | None = None,
    max_bundle_bytes: int = DEFAULT_MAX_BUNDLE_BYTES,
    hash_algorithm: str = DEFAULT_HASH_ALGORITHM,
    follow_symlinks: bool = False,
) -> int:
    """Crawl the given source directories into ``output_directory``.

    ``source_directories`` may also be a single comma-separated string.

    Returns:
        Total number of bundle files produced.

    Raises:
        ConfigurationError: If no source directory or no output directory is given.
    """
    if isinstance(source_directories, str):
        source_directories = split_directory_setting(source_directories)
    if not source_directories or output_directory is None or not str(output_directory).strip():
        raise ConfigurationError(MISSING_SETTINGS_MESSAGE)

    config = CrawlerConfig(
        source_directories=list(source_directories),
        output_directory=output_directory,
        workspace_root=Path(workspace_root) if workspace_root is not None else Path.cwd(),
        max_bundle_bytes=max_bundle_bytes,
        hash_algorithm=hash_algorithm,
        follow_symlinks=follow_symlinks,
    )
    return crawl(config).bundle_count


# 🐝📁🔚
