#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


import hashlib
from pathlib import Path

import pytest

from aicrawler.utils import compute_file_hash


def test_compute_file_hash_sha256_success(tmp_path: Path):
    file_content = b"Hello, aicrawler!"
    test_file = tmp_path / "test_sha256.txt"
    test_file.write_bytes(file_content)
    assert compute_file_hash(test_file) == hashlib.sha256(file_content).hexdigest()


@pytest.mark.parametrize("algorithm", ["md5", "sha1", "sha512"])
def test_compute_file_hash_other_algorithms(tmp_path: Path, algorithm: str):
    file_content = b"Another test file content."
    test_file = tmp_path / "test_algo.dat"
    test_file.write_bytes(file_content)
    assert compute_file_hash(test_file, algorithm=algorithm) == hashlib.new(algorithm, file_content).hexdigest()


def test_compute_file_hash_reads_in_chunks(tmp_path: Path):
    file_content = bytes(range(256)) * 10
    test_file = tmp_path / "chunked.bin"
    test_file.write_bytes(file_content)
    assert compute_file_hash(test_file, buffer_size=7) == hashlib.sha256(file_content).hexdigest()


def test_compute_file_hash_empty_file(tmp_path: Path):
    test_file = tmp_path / "empty.txt"
    test_file.touch()
    assert compute_file_hash(test_file) == hashlib.sha256(b"").hexdigest()


def test_compute_file_hash_file_not_found(tmp_path: Path):
    with pytest.raises(OSError, match="Cannot read file"):
        compute_file_hash(tmp_path / "not_a_file.txt")


def test_compute_file_hash_directory(tmp_path: Path):
    with pytest.raises(OSError, match="Cannot read file"):
        compute_file_hash(tmp_path)


def test_compute_file_hash_unsupported_algorithm(tmp_path: Path):
    test_file = tmp_path / "test_algo.txt"
    test_file.write_text("content")
    with pytest.raises(ValueError, match="Unsupported hash algorithm"):
        compute_file_hash(test_file, algorithm="invalid-algo-123")


# 🐝📁🔚
