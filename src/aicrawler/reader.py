#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""File reading with a placeholder for binary or unreadable content."""

from pathlib import Path

from aicrawler.logger import logger

UNREADABLE_PLACEHOLDER = "Unable to read file contents (binary or unsupported encoding)."


class FileReader:
    """Reads file content as UTF-8 text, never raising for a single file."""

    def __init__(self, encoding: str = "utf-8") -> None:
        self.encoding = encoding

    def read(self, file_path: Path) -> tuple[str, bool]:
        """Read file content.

        Args:
            file_path: Path to file to read

        Returns:
            Tuple of (content, used_placeholder). The placeholder replaces the
            content when the bytes do not decode or the file cannot be read.
        """
        try:
            data = file_path.read_bytes()
        except OSError as e:
            logger.warning("file.read.os_error", path=str(file_path), error=str(e))
            return UNREADABLE_PLACEHOLDER, True

        try:
            content = data.decode(self.encoding)
        except UnicodeDecodeError:
            logger.info("file.read.undecodable", path=str(file_path), encoding=self.encoding)
            return UNREADABLE_PLACEHOLDER, True

        logger.debug("file.read.success", path=str(file_path), size_bytes=len(data))
        return content, False


# 🐝📁🔚
