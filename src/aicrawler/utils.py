#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


from pathlib import Path

from provide.foundation.crypto import hash_file
from provide.foundation.errors import ResourceError, ValidationError

from aicrawler.logger import logger


def compute_file_hash(file_path: Path, algorithm: str = "sha256", buffer_size: int = 65536) -> str:
    """
    Compute the checksum of a file using the specified algorithm.

    Args:
        file_path: Path to the file.
        algorithm: Hashing algorithm name (e.g., 'sha256', 'md5').
        buffer_size: Size of chunks to read from the file.

    Returns:
        Lower-case hex digest of the file's raw bytes.

    Raises:
        ValueError: If the algorithm is not supported.
        OSError: If the file cannot be opened or read.
    """
    try:
        return hash_file(file_path, algorithm=algorithm, chunk_size=buffer_size)
    except ValidationError as e:
        logger.error("hash.algorithm.unsupported", algorithm=algorithm, path=str(file_path))
        raise ValueError(f"Unsupported hash algorithm: {algorithm}") from e
    except ResourceError as e:
        logger.debug("hash.read.failed", path=str(file_path), error=str(e))
        raise OSError(f"Cannot read file: {file_path}") from e


# 🐝📁🔚
