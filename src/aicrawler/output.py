#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Console presentation of crawl and check results."""

from collections.abc import Sequence
import sys
from typing import Any

from provide.foundation.console.output import pout
from provide.foundation.context import CLIContext
from rich.console import Console
from rich.table import Table

from aicrawler.logger import logger
from aicrawler.metadata import CrawlSummary
from aicrawler.tracking import ChangeReport, FingerprintDelta


def truncate_middle(text: str, max_len: int = 60) -> str:
    """Shorten ``text`` to ``max_len`` characters with a middle ellipsis."""
    if len(text) <= max_len:
        return text
    ellipsis = "..."
    if max_len <= len(ellipsis):
        return ellipsis[:max_len]
    keep = max_len - len(ellipsis)
    end_len = (keep + 1) // 2
    start_len = keep - end_len
    return f"{text[:start_len]}{ellipsis}{text[-end_len:]}"


def _json_mode(ctx: CLIContext | None) -> bool:
    return ctx is not None and bool(ctx.json_output)


def crawl_summary_data(summary: CrawlSummary) -> dict[str, Any]:
    return {
        "output_directory": summary.output_directory.as_posix(),
        "bundle_count": summary.bundle_count,
        "files_bundled": summary.files_bundled,
        "bundles": [
            {
                "part": bundle.part,
                "source": bundle.source_label,
                "bundle": bundle.path.name,
                "files": bundle.file_count,
                "size_bytes": bundle.size_bytes,
            }
            for bundle in summary.bundles
        ],
    }


def _delta_data(delta: FingerprintDelta) -> dict[str, list[str]]:
    return {"added": list(delta.added), "removed": list(delta.removed), "modified": list(delta.modified)}


def change_reports_data(reports: Sequence[ChangeReport], directories: Sequence[str]) -> list[dict[str, Any]]:
    return [
        {
            "index": report.index,
            "directory": directory,
            "previous_found": report.previous_found,
            "changed": report.has_changes,
            "sources": _delta_data(report.sources),
            "bundles": _delta_data(report.bundles),
        }
        for report, directory in zip(reports, directories, strict=True)
    ]


def display_bundle_table(
    summary: CrawlSummary, force_plain_text: bool = False, ctx: CLIContext | None = None
) -> None:
    """Show one row per bundle written during the run."""
    if _json_mode(ctx):
        pout(crawl_summary_data(summary), ctx=ctx)
        return

    bundles = summary.bundles
    if not bundles:
        pout("(No bundles were written: no files matched in the configured directories)", ctx=ctx)
        return

    title = f"Bundles in {truncate_middle(summary.output_directory.as_posix(), 50)} ({len(bundles)})"

    if not force_plain_text:
        console = Console(file=sys.stdout, no_color=bool(ctx and ctx.no_color))
        table = Table(
            title=title,
            show_header=True,
            header_style="bold cyan",
            row_styles=["none", "dim"],
        )
        table.add_column("Part", style="bold", justify="right", width=5)
        table.add_column("Source", style="green", ratio=2)
        table.add_column("Bundle", style="yellow", ratio=3)
        table.add_column("Files", style="magenta", justify="right", width=7)
        table.add_column("Size", style="blue", justify="right", width=12)
        for bundle in bundles:
            table.add_row(
                str(bundle.part),
                bundle.source_label,
                bundle.path.name,
                str(bundle.file_count),
                f"{bundle.size_bytes} B",
            )
        console.print(table)
        return

    logger.debug("output.plain_text")
    row_fmt = "{:>5} | {:<24} | {:<32} | {:>7} | {:>12}"
    pout(title, ctx=ctx)
    pout(row_fmt.format("Part", "Source", "Bundle", "Files", "Size"), ctx=ctx)
    pout("-" * 92, ctx=ctx)
    for bundle in bundles:
        pout(
            row_fmt.format(
                bundle.part,
                truncate_middle(bundle.source_label, 24),
                truncate_middle(bundle.path.name, 32),
                bundle.file_count,
                f"{bundle.size_bytes} B",
            ),
            ctx=ctx,
        )


def display_change_reports(
    reports: Sequence[ChangeReport], directories: Sequence[str], ctx: CLIContext | None = None
) -> None:
    """Print the changes found by a check, one section per source directory."""
    if _json_mode(ctx):
        pout(change_reports_data(reports, directories), json_key="directories", ctx=ctx)
        return

    for report, directory in zip(reports, directories, strict=True):
        if not report.previous_found:
            pout(f"[{report.index}] {directory}: no previous change tracking record", ctx=ctx)
            continue
        if not report.has_changes:
            pout(f"[{report.index}] {directory}: unchanged", ctx=ctx)
            continue

        pout(f"[{report.index}] {directory}: changed", color="yellow", ctx=ctx)
        for marker, paths in (
            ("+", report.sources.added),
            ("-", report.sources.removed),
            ("~", report.sources.modified),
        ):
            for path in paths:
                pout(f"  {marker} {path}", ctx=ctx)
        for marker, names in (
            ("+", report.bundles.added),
            ("-", report.bundles.removed),
            ("~", report.bundles.modified),
        ):
            for name in names:
                pout(f"  {marker} (bundle) {name}", ctx=ctx)


# 🐝📁🔚
