#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


from pathlib import Path

import pytest

from aicrawler.bundler import BundleWriter, bundle_file_name
from aicrawler.errors import BundleWriteError
from aicrawler.formatter import RenderedBlock, encoded_size, render_block, render_header


def _blocks(*names: str, body: str = "x") -> list[RenderedBlock]:
    return [render_block(name, body, "text") for name in names]


def test_bundle_file_name():
    assert bundle_file_name(1) == "directory_contents_1.md"


def test_single_bundle_when_everything_fits(tmp_path: Path):
    blocks = _blocks("a.txt", "b.txt")
    writer = BundleWriter(tmp_path)

    assert writer.write("proj", blocks) == 1

    expected = render_header("proj", 1) + "".join(block.text for block in blocks)
    assert (tmp_path / "directory_contents_1.md").read_text(encoding="utf-8") == expected
    assert writer.part_count == 1
    assert writer.bundles[0].file_count == 2
    assert writer.bundles[0].size_bytes == encoded_size(expected)


def test_splits_when_next_block_exceeds_bound(tmp_path: Path):
    first, second = _blocks("a.txt", "b.txt")
    # Exactly room for the header and the first block
    max_bytes = encoded_size(render_header("proj", 1)) + first.byte_size
    writer = BundleWriter(tmp_path, max_bundle_bytes=max_bytes)

    assert writer.write("proj", [first, second]) == 2

    part_one = (tmp_path / "directory_contents_1.md").read_text(encoding="utf-8")
    part_two = (tmp_path / "directory_contents_2.md").read_text(encoding="utf-8")
    assert part_one == render_header("proj", 1) + first.text
    assert part_two == render_header("proj", 2) + second.text


def test_bundles_respect_bound_and_preserve_order(tmp_path: Path):
    blocks = _blocks(*(f"file_{i:02d}.txt" for i in range(20)), body="y" * 40)
    max_bytes = 300
    writer = BundleWriter(tmp_path, max_bundle_bytes=max_bytes)

    produced = writer.write("proj", blocks)

    assert produced == len(writer.bundles) > 1
    bodies = []
    for info in writer.bundles:
        data = info.path.read_bytes()
        assert len(data) <= max_bytes
        header = render_header("proj", info.part)
        text = data.decode("utf-8")
        assert text.startswith(header)
        bodies.append(text[len(header) :])
    assert "".join(bodies) == "".join(block.text for block in blocks)


def test_oversized_block_written_alone(tmp_path: Path):
    small = render_block("small.txt", "s", "text")
    huge = render_block("huge.txt", "h" * 500, "text")
    writer = BundleWriter(tmp_path, max_bundle_bytes=200)

    assert writer.write("proj", [small, huge, small]) == 3

    assert [info.file_count for info in writer.bundles] == [1, 1, 1]
    assert writer.bundles[1].size_bytes > 200
    assert "## File: huge.txt" in writer.bundles[1].path.read_text(encoding="utf-8")


def test_oversized_first_block_does_not_leave_empty_bundle(tmp_path: Path):
    huge = render_block("huge.txt", "h" * 500, "text")
    writer = BundleWriter(tmp_path, max_bundle_bytes=100)

    assert writer.write("proj", [huge]) == 1
    assert sorted(p.name for p in tmp_path.iterdir()) == ["directory_contents_1.md"]


def test_no_blocks_writes_nothing(tmp_path: Path):
    writer = BundleWriter(tmp_path)
    assert writer.write("empty", []) == 0
    assert writer.part_count == 0
    assert list(tmp_path.iterdir()) == []


def test_numbering_continues_across_calls(tmp_path: Path):
    writer = BundleWriter(tmp_path)
    writer.write("first", _blocks("a.txt"))
    writer.write("second", _blocks("b.txt"))

    assert writer.part_count == 2
    second = (tmp_path / "directory_contents_2.md").read_text(encoding="utf-8")
    assert second.startswith("# Directory Contents: second (Part 2)\n\n")
    assert "## File: a.txt" not in second


def test_write_failure_raises(tmp_path: Path):
    (tmp_path / "directory_contents_1.md").mkdir()
    writer = BundleWriter(tmp_path)
    with pytest.raises(BundleWriteError, match="Failed to write bundle"):
        writer.write("proj", _blocks("a.txt"))
    assert [p.name for p in tmp_path.iterdir()] == ["directory_contents_1.md"]


def test_write_creates_output_directory(tmp_path: Path):
    writer = BundleWriter(tmp_path / "does_not_exist")
    assert writer.write("proj", _blocks("a.txt")) == 1
    assert writer.bundle_path(1).is_file()


# 🐝📁🔚
