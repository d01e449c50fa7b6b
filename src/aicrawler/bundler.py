#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Size-bounded bundle creation."""

from collections.abc import Iterable
from pathlib import Path

from provide.foundation.file import atomic_write

from aicrawler.config import BUNDLE_PREFIX, BUNDLE_SUFFIX, DEFAULT_MAX_BUNDLE_BYTES
from aicrawler.errors import BundleWriteError
from aicrawler.formatter import OUTPUT_ENCODING, RenderedBlock, encoded_size, render_header
from aicrawler.logger import logger
from aicrawler.metadata import BundleInfo


def bundle_file_name(part: int) -> str:
    return f"{BUNDLE_PREFIX}{part}{BUNDLE_SUFFIX}"


class BundleWriter:
    """Packs rendered blocks into numbered bundle files.

    Part numbers are global to the writer: every call to :meth:`write` starts
    a new part and continues the numbering of the previous call. The size
    bound is best-effort; a single block larger than ``max_bundle_bytes`` is
    written alone rather than split.
    """

    def __init__(self, output_directory: Path, max_bundle_bytes: int = DEFAULT_MAX_BUNDLE_BYTES) -> None:
        self.output_directory = output_directory
        self.max_bundle_bytes = max_bundle_bytes
        self.part_count = 0
        self.bundles: list[BundleInfo] = []

    def bundle_path(self, part: int) -> Path:
        return self.output_directory / bundle_file_name(part)

    def write(self, source_label: str, blocks: Iterable[RenderedBlock]) -> int:
        """Write all blocks for one source directory.

        Args:
            source_label: Name shown in each bundle header (the source directory basename).
            blocks: Rendered blocks in traversal order.

        Returns:
            Number of bundle files produced for this stream.

        Raises:
            BundleWriteError: If a bundle file cannot be written.
        """
        produced = 0
        part = self.part_count + 1
        header = render_header(source_label, part)
        current_size = encoded_size(header)
        pending: list[RenderedBlock] = []

        for block in blocks:
            if pending and current_size + block.byte_size > self.max_bundle_bytes:
                self._flush(part, source_label, header, pending, current_size)
                produced += 1
                part += 1
                header = render_header(source_label, part)
                current_size = encoded_size(header)
                pending = []

            if block.byte_size > self.max_bundle_bytes:
                logger.warning(
                    "bundle.block.oversized",
                    path=block.relative_path,
                    size_bytes=block.byte_size,
                    max_bundle_bytes=self.max_bundle_bytes,
                )
            pending.append(block)
            current_size += block.byte_size

        if pending:
            self._flush(part, source_label, header, pending, current_size)
            produced += 1

        logger.info("bundle.source.complete", source=source_label, bundles=produced)
        return produced

    def _flush(
        self,
        part: int,
        source_label: str,
        header: str,
        pending: list[RenderedBlock],
        expected_size: int,
    ) -> None:
        path = self.bundle_path(part)
        text = header + "".join(block.text for block in pending)
        data = text.encode(OUTPUT_ENCODING, errors="replace")

        try:
            atomic_write(path, data)
        except OSError as e:
            logger.error("bundle.write.failure", path=str(path), error=str(e))
            raise BundleWriteError(f"Failed to write bundle '{path}': {e}") from e

        self.part_count = part
        self.bundles.append(
            BundleInfo(
                part=part,
                path=path,
                source_label=source_label,
                file_count=len(pending),
                size_bytes=len(data),
            )
        )
        logger.info(
            "bundle.write.success",
            path=str(path),
            part=part,
            files=len(pending),
            size_bytes=len(data),
            expected_size_bytes=expected_size,
        )


# 🐝📁🔚
