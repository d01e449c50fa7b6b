#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Language detection and markdown rendering of file content."""

from pathlib import PurePath

import attrs

from aicrawler.logger import logger
from aicrawler.metadata import FileEntry
from aicrawler.reader import FileReader

DEFAULT_LANGUAGE = "text"
OUTPUT_ENCODING = "utf-8"

# Keys are lowercase file extensions including the leading dot
LANGUAGE_LABELS: dict[str, str] = {
    ".py": "python",
    ".php": "php",
    ".js": "javascript",
    ".json": "json",
    ".html": "html",
    ".css": "css",
    ".java": "java",
    ".cpp": "cpp",
    ".c": "c",
    ".cs": "csharp",
    ".rb": "ruby",
    ".go": "go",
    ".ts": "typescript",
    ".sql": "sql",
    ".sh": "bash",
    ".md": "markdown",
    ".xml": "xml",
    ".yaml": "yaml",
    ".yml": "yaml",
    ".h": "c",
    ".hpp": "cpp",
    ".jsx": "javascript",
    ".tsx": "typescript",
    ".rs": "rust",
    ".toml": "toml",
}


def detect_language(path: str | PurePath) -> str:
    """Map a file's extension (case-insensitive) to a code fence label."""
    suffix = PurePath(path).suffix.lower()
    return LANGUAGE_LABELS.get(suffix, DEFAULT_LANGUAGE)


def encoded_size(text: str) -> int:
    return len(text.encode(OUTPUT_ENCODING, errors="replace"))


@attrs.define(frozen=True, slots=True)
class RenderedBlock:
    """The markdown section for one file, with its encoded size."""

    relative_path: str
    language: str
    text: str
    byte_size: int


def render_block(relative_path: str, content: str, language: str) -> RenderedBlock:
    text = f"## File: {relative_path}\n\n```{language}\n{content}\n```\n\n"
    return RenderedBlock(
        relative_path=relative_path,
        language=language,
        text=text,
        byte_size=encoded_size(text),
    )


def render_header(source_label: str, part: int) -> str:
    return f"# Directory Contents: {source_label} (Part {part})\n\n"


class ContentFormatter:
    """Reads discovered files and renders them as markdown blocks."""

    def __init__(self, reader: FileReader | None = None) -> None:
        self.reader = reader or FileReader()
        self.placeholder_count = 0

    def render(self, entry: FileEntry) -> RenderedBlock:
        content, used_placeholder = self.reader.read(entry.path)
        if used_placeholder:
            self.placeholder_count += 1

        language = detect_language(entry.relative_path)
        block = render_block(entry.relative_path, content, language)
        logger.debug(
            "format.block.rendered",
            path=entry.relative_path,
            language=language,
            size_bytes=block.byte_size,
        )
        return block


# 🐝📁🔚
