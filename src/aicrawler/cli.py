#!/usr/bin/env python3
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


from collections.abc import Callable
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import Any, Literal

import click
from provide.foundation.cli.decorators import output_options
from provide.foundation.console import perr, pout
from provide.foundation.context import CLIContext

from aicrawler.config import DEFAULT_HASH_ALGORITHM, DEFAULT_MAX_BUNDLE_BYTES, HASH_ALGORITHMS, CrawlerConfig
from aicrawler.core import check, crawl
from aicrawler.errors import CrawlerError
from aicrawler.logger import DEFAULT_LOG_LEVEL, configure_logging, logger
from aicrawler.output import display_bundle_table, display_change_reports

LogLevel = Literal["debug", "info", "warn", "warning", "error", "critical"]

LOG_LEVEL_CHOICES = ["debug", "info", "warn", "warning", "error", "critical"]

try:
    __version__ = version("aicrawler")
except PackageNotFoundError:
    __version__ = "unknown"


def directory_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by every command that reads the source/output settings."""
    decorators = [
        click.option(
            "--directory",
            "-d",
            type=str,
            envvar="AICRAWLER_DIRECTORY",
            default=None,
            help="Comma-separated source directories, absolute or relative to the workspace root.",
        ),
        click.option(
            "--output-dir",
            "-o",
            type=str,
            envvar="AICRAWLER_OUTPUT_DIRECTORY",
            default=None,
            help="Directory receiving bundles and change-tracking records.",
        ),
        click.option(
            "--workspace-root",
            "-w",
            type=click.Path(exists=True, file_okay=False, dir_okay=True, path_type=Path),
            default=".",
            show_default=True,
            help="Base directory for relative paths.",
        ),
        click.option(
            "--hash-algo",
            type=click.Choice(HASH_ALGORITHMS, case_sensitive=False),
            default=DEFAULT_HASH_ALGORITHM,
            show_default=True,
            help="Hashing algorithm for change-tracking fingerprints.",
        ),
        click.option(
            "--follow-symlinks",
            is_flag=True,
            default=False,
            help="Follow symbolic links during directory scan.",
        ),
        click.option(
            "--log-level",
            "-l",
            type=click.Choice(LOG_LEVEL_CHOICES, case_sensitive=False),
            default=DEFAULT_LOG_LEVEL,
            show_default=True,
            help="Set the logging level.",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _cli_context(ctx: click.Context, json_output: bool | None, no_color: bool, no_emoji: bool) -> CLIContext:
    if not hasattr(ctx, "obj") or ctx.obj is None:
        ctx.obj = CLIContext()
    cli_context: CLIContext = ctx.obj
    if json_output is not None:
        cli_context.json_output = json_output
    if no_color:
        cli_context.no_color = no_color
    if no_emoji:
        cli_context.no_emoji = no_emoji
    return cli_context


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, package_name="aicrawler", message="%(package)s version %(version)s")
def cli() -> None:
    """
    aicrawler: Snapshot source directories into size-bounded markdown bundles

    with change tracking.
    """


@cli.command(name="crawl", context_settings={"help_option_names": ["-h", "--help"]})
@directory_options
@click.option(
    "--max-bundle-bytes",
    type=click.IntRange(min=1),
    default=DEFAULT_MAX_BUNDLE_BYTES,
    show_default=True,
    help="Size bound for each bundle file, in bytes.",
)
@click.option(
    "--summary/--no-summary",
    default=True,
    help="Show a table of the bundles written.",
)
@click.option(
    "--plain",
    is_flag=True,
    default=False,
    help="Render the summary as plain text instead of a rich table.",
)
@output_options
@click.pass_context
def crawl_command(
    ctx: click.Context,
    directory: str | None,
    output_dir: str | None,
    workspace_root: Path,
    hash_algo: str,
    follow_symlinks: bool,
    log_level: LogLevel,
    max_bundle_bytes: int,
    summary: bool,
    plain: bool,
    json_output: bool | None,
    no_color: bool,
    no_emoji: bool,
) -> None:
    """Bundles the configured directories into markdown files."""
    cli_context = _cli_context(ctx, json_output, no_color, no_emoji)
    configure_logging(log_level)
    logger.info("aicrawler crawl command started", log_level=log_level)

    try:
        config = CrawlerConfig.from_settings(
            directory,
            output_dir,
            workspace_root,
            max_bundle_bytes=max_bundle_bytes,
            hash_algorithm=hash_algo,
            follow_symlinks=follow_symlinks,
        )
        result = crawl(config)
    except (CrawlerError, OSError) as e:
        logger.critical("cli.crawl.failed", error=str(e))
        perr(f"Error crawling directory: {e}", ctx=cli_context)
        raise SystemExit(1) from None

    if cli_context.json_output:
        display_bundle_table(result, ctx=cli_context)
        return

    pout(
        f"Successfully crawled directory and generated {result.bundle_count} markdown file(s)",
        color="green",
        ctx=cli_context,
    )
    if summary:
        display_bundle_table(result, force_plain_text=plain, ctx=cli_context)


@cli.command(name="check", context_settings={"help_option_names": ["-h", "--help"]})
@directory_options
@output_options
@click.pass_context
def check_command(
    ctx: click.Context,
    directory: str | None,
    output_dir: str | None,
    workspace_root: Path,
    hash_algo: str,
    follow_symlinks: bool,
    log_level: LogLevel,
    json_output: bool | None,
    no_color: bool,
    no_emoji: bool,
) -> None:
    """Reports whether sources or bundles changed since the last crawl.

    Exits with status 0 when nothing changed, 1 when something changed and
    2 when the check itself failed.
    """
    cli_context = _cli_context(ctx, json_output, no_color, no_emoji)
    configure_logging(log_level)
    logger.info("aicrawler check command started", log_level=log_level)

    try:
        config = CrawlerConfig.from_settings(
            directory,
            output_dir,
            workspace_root,
            hash_algorithm=hash_algo,
            follow_symlinks=follow_symlinks,
        )
        reports = check(config)
    except (CrawlerError, OSError) as e:
        logger.critical("cli.check.failed", error=str(e))
        perr(f"Error checking directory: {e}", ctx=cli_context)
        raise SystemExit(2) from None

    display_change_reports(reports, [str(p) for p in config.source_directories], ctx=cli_context)
    if any(report.has_changes for report in reports):
        raise SystemExit(1)


if __name__ == "__main__":  # pragma: no cover
    cli()

# 🐝📁🔚
