#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


from collections.abc import Callable, Mapping
import os
from pathlib import Path

import pytest

TreeSpec = Mapping[str, str | bytes]

SAMPLE_PROJECT_FILES: dict[str, str | bytes] = {
    ".gitignore": "# build artefacts\n*.log\nnode_modules/\n",
    ".aiignore": "secrets.txt\n",
    ".env": "TOKEN=abc\n",
    ".hidden/notes.txt": "hidden notes\n",
    "a.py": "print('a')\n",
    "b.txt": "plain text\n",
    "build.log": "log line\n",
    "secrets.txt": "do not bundle\n",
    "docs/readme.md": "# Readme\n",
    "node_modules/pkg/index.js": "module.exports = 1;\n",
    "src/main.py": "def main():\n    return 0\n",
    "src/util.js": "export const x = 1;\n",
}

# Traversal order of the files above that survive the ignore rules
SAMPLE_PROJECT_INCLUDED = [
    "a.py",
    "b.txt",
    "docs/readme.md",
    "src/main.py",
    "src/util.js",
]


def write_tree(root: Path, files: TreeSpec) -> Path:
    """Create ``files`` (relative path -> text or bytes) under ``root``."""
    root.mkdir(parents=True, exist_ok=True)
    for relative_path, content in files.items():
        target = root / relative_path
        target.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            target.write_bytes(content)
        else:
            target.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def make_tree(tmp_path: Path) -> Callable[[str, TreeSpec], Path]:
    """Factory building a directory tree inside tmp_path."""

    def _make(name: str, files: TreeSpec) -> Path:
        return write_tree(tmp_path / name, files)

    return _make


@pytest.fixture
def sample_project(tmp_path: Path) -> Path:
    """A small project with hidden, ignored and included files."""
    return write_tree(tmp_path / "sample_project", SAMPLE_PROJECT_FILES)


@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Output location outside the source tree; not created up front."""
    return tmp_path / "out"


@pytest.fixture
def undecodable_name(tmp_path: Path) -> str:
    """A file name whose raw bytes are not UTF-8, as os.listdir reports it."""
    name = os.fsdecode(b"caf\xe9.txt")
    check_dir = tmp_path / "name_check"
    check_dir.mkdir()
    try:
        (check_dir / name).touch()
    except (OSError, UnicodeEncodeError, ValueError):
        pytest.skip("filesystem rejects file names that are not valid UTF-8")
    return name


# 🐝📁🔚
