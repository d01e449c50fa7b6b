#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


from pathlib import Path

import pytest

from aicrawler.formatter import (
    DEFAULT_LANGUAGE,
    ContentFormatter,
    detect_language,
    encoded_size,
    render_block,
    render_header,
)
from aicrawler.metadata import FileEntry
from aicrawler.reader import UNREADABLE_PLACEHOLDER, FileReader


@pytest.mark.parametrize(
    "path, expected",
    [
        ("main.py", "python"),
        ("web/app.JS", "javascript"),
        ("query.sql", "sql"),
        ("deploy.sh", "bash"),
        ("config.yml", "yaml"),
        ("config.yaml", "yaml"),
        ("Program.cs", "csharp"),
        ("README", DEFAULT_LANGUAGE),
        ("archive.tar.gz", DEFAULT_LANGUAGE),
    ],
)
def test_detect_language(path: str, expected: str):
    assert detect_language(path) == expected


def test_render_block_layout():
    block = render_block("src/main.py", "print('hi')", "python")
    assert block.text == "## File: src/main.py\n\n```python\nprint('hi')\n```\n\n"
    assert block.byte_size == len(block.text.encode("utf-8"))
    assert block.relative_path == "src/main.py"


def test_render_block_counts_bytes_not_characters():
    block = render_block("notes.txt", "héllo ✓", "text")
    assert block.byte_size == encoded_size(block.text)
    assert block.byte_size > len(block.text)


def test_render_header():
    assert render_header("project", 3) == "# Directory Contents: project (Part 3)\n\n"


def test_reader_reads_utf8(tmp_path: Path):
    target = tmp_path / "hello.txt"
    target.write_text("héllo\n", encoding="utf-8")
    assert FileReader().read(target) == ("héllo\n", False)


def test_reader_placeholder_for_binary(tmp_path: Path):
    target = tmp_path / "image.png"
    target.write_bytes(b"\x89PNG\r\n\x1a\n\xff\xfe\x00")
    assert FileReader().read(target) == (UNREADABLE_PLACEHOLDER, True)


def test_reader_placeholder_for_missing_file(tmp_path: Path):
    assert FileReader().read(tmp_path / "gone.txt") == (UNREADABLE_PLACEHOLDER, True)


def test_formatter_renders_entry(tmp_path: Path):
    target = tmp_path / "app.ts"
    target.write_text("let x = 1;", encoding="utf-8")
    formatter = ContentFormatter()

    block = formatter.render(FileEntry(path=target, relative_path="app.ts"))

    assert block.language == "typescript"
    assert block.text == "## File: app.ts\n\n```typescript\nlet x = 1;\n```\n\n"
    assert formatter.placeholder_count == 0


def test_formatter_counts_placeholders(tmp_path: Path):
    target = tmp_path / "blob.bin"
    target.write_bytes(b"\xff\xfe\xfd")
    formatter = ContentFormatter()

    block = formatter.render(FileEntry(path=target, relative_path="blob.bin"))

    assert UNREADABLE_PLACEHOLDER in block.text
    assert block.language == DEFAULT_LANGUAGE
    assert formatter.placeholder_count == 1


# 🐝📁🔚
