#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Content fingerprints for change detection between runs."""

from collections.abc import Iterable, Mapping
import json
import os
from pathlib import Path
import re

import attrs
from provide.foundation.file import atomic_write

from aicrawler.config import (
    BUNDLE_PREFIX,
    BUNDLE_SUFFIX,
    DEFAULT_HASH_ALGORITHM,
    TRACKING_PREFIX,
    TRACKING_SUFFIX,
)
from aicrawler.errors import DirectoryTraversalError, TrackingParseError, TrackingWriteError
from aicrawler.ignore import IgnoreFilter
from aicrawler.logger import logger
from aicrawler.utils import compute_file_hash
from aicrawler.walker import DirectoryWalker

BUNDLE_NAME_RE = re.compile(rf"^{re.escape(BUNDLE_PREFIX)}\d+{re.escape(BUNDLE_SUFFIX)}$")


def tracking_file_name(index: int) -> str:
    return f"{TRACKING_PREFIX}{index}{TRACKING_SUFFIX}"


@attrs.define(frozen=True, slots=True)
class FingerprintDelta:
    """Keys added, removed and modified between two fingerprint maps."""

    added: tuple[str, ...] = ()
    removed: tuple[str, ...] = ()
    modified: tuple[str, ...] = ()

    @classmethod
    def between(cls, previous: Mapping[str, str], current: Mapping[str, str]) -> "FingerprintDelta":
        previous_keys = set(previous)
        current_keys = set(current)
        return cls(
            added=tuple(sorted(current_keys - previous_keys)),
            removed=tuple(sorted(previous_keys - current_keys)),
            modified=tuple(
                sorted(key for key in previous_keys & current_keys if previous[key] != current[key])
            ),
        )

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed or self.modified)


@attrs.define(frozen=True, slots=True)
class ChangeReport:
    """Comparison of a directory's current fingerprints with its previous record."""

    index: int
    sources: FingerprintDelta
    bundles: FingerprintDelta
    previous_found: bool = True

    @property
    def has_changes(self) -> bool:
        return not self.previous_found or self.sources.has_changes or self.bundles.has_changes


@attrs.define(kw_only=True, slots=True)
class ChangeTracking:
    """
    Fingerprints recorded for one source directory.

    Attributes:
        remote_files: Source file path (relative, forward slashes) to hex digest.
        local_files: Bundle file name to hex digest.
    """

    remote_files: dict[str, str] = attrs.field(factory=dict)
    local_files: dict[str, str] = attrs.field(factory=dict)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {"remote_files": dict(self.remote_files), "local_files": dict(self.local_files)}

    def to_json(self) -> str:
        # Escaped output keeps undecodable file names (lone surrogates) writable.
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=True)

    @classmethod
    def from_json(cls, text: str) -> "ChangeTracking":
        """Parse a persisted record.

        Raises:
            TrackingParseError: If the text is not a valid tracking record.
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise TrackingParseError(f"Tracking record is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise TrackingParseError("Tracking record must be a JSON object.")

        maps: dict[str, dict[str, str]] = {}
        for key in ("remote_files", "local_files"):
            value = data.get(key, {})
            if not isinstance(value, dict) or not all(
                isinstance(k, str) and isinstance(v, str) for k, v in value.items()
            ):
                raise TrackingParseError(f"Tracking record field '{key}' must map strings to strings.")
            maps[key] = value
        return cls(remote_files=maps["remote_files"], local_files=maps["local_files"])

    def compare(self, previous: "ChangeTracking | None", index: int = 0) -> ChangeReport:
        """Compare this record against an earlier one (None means no earlier record)."""
        if previous is None:
            return ChangeReport(
                index=index,
                sources=FingerprintDelta.between({}, self.remote_files),
                bundles=FingerprintDelta.between({}, self.local_files),
                previous_found=False,
            )
        return ChangeReport(
            index=index,
            sources=FingerprintDelta.between(previous.remote_files, self.remote_files),
            bundles=FingerprintDelta.between(previous.local_files, self.local_files),
        )


class ChangeTracker:
    """Computes, persists and reloads change-tracking records in an output directory."""

    def __init__(self, output_directory: Path, hash_algorithm: str = DEFAULT_HASH_ALGORITHM) -> None:
        self.output_directory = output_directory
        self.hash_algorithm = hash_algorithm

    def tracking_path(self, index: int) -> Path:
        return self.output_directory / tracking_file_name(index)

    def _fingerprint(self, path: Path) -> str | None:
        try:
            return compute_file_hash(path, algorithm=self.hash_algorithm)
        except OSError as e:
            logger.debug("tracking.hash.skipped", path=str(path), error=str(e))
            return None

    def fingerprint_sources(
        self,
        source_directory: Path,
        ignore_filter: IgnoreFilter,
        exclude: Iterable[Path] = (),
        follow_symlinks: bool = False,
    ) -> dict[str, str]:
        """Fingerprint every file a fresh walk of ``source_directory`` yields."""
        fingerprints: dict[str, str] = {}
        walker = DirectoryWalker(
            source_directory, ignore_filter, exclude=exclude, follow_symlinks=follow_symlinks
        )
        for entry in walker:
            digest = self._fingerprint(entry.path)
            if digest is not None:
                fingerprints[entry.relative_path] = digest
        return fingerprints

    def fingerprint_bundles(self) -> dict[str, str]:
        """Fingerprint the bundle files currently present in the output directory."""
        try:
            names = sorted(name for name in os.listdir(self.output_directory) if BUNDLE_NAME_RE.match(name))
        except FileNotFoundError:
            logger.debug("tracking.output.absent", path=str(self.output_directory))
            return {}
        except OSError as e:
            raise DirectoryTraversalError(
                f"Cannot list output directory '{self.output_directory}': {e}"
            ) from e

        fingerprints: dict[str, str] = {}
        for name in names:
            digest = self._fingerprint(self.output_directory / name)
            if digest is not None:
                fingerprints[name] = digest
        return fingerprints

    def compute(
        self,
        source_directory: Path,
        ignore_filter: IgnoreFilter,
        exclude: Iterable[Path] = (),
        follow_symlinks: bool = False,
    ) -> ChangeTracking:
        return ChangeTracking(
            remote_files=self.fingerprint_sources(
                source_directory, ignore_filter, exclude=exclude, follow_symlinks=follow_symlinks
            ),
            local_files=self.fingerprint_bundles(),
        )

    def track(
        self,
        source_directory: Path,
        ignore_filter: IgnoreFilter,
        index: int,
        exclude: Iterable[Path] = (),
        follow_symlinks: bool = False,
    ) -> ChangeTracking:
        """Compute the record for one source directory and persist it under ``index``.

        Raises:
            TrackingWriteError: If the record cannot be written.
        """
        tracking = self.compute(
            source_directory, ignore_filter, exclude=exclude, follow_symlinks=follow_symlinks
        )
        self.save(tracking, index)
        return tracking

    def save(self, tracking: ChangeTracking, index: int) -> Path:
        path = self.tracking_path(index)
        try:
            atomic_write(path, tracking.to_json().encode("ascii"))
        except OSError as e:
            logger.error("tracking.write.failure", path=str(path), error=str(e))
            raise TrackingWriteError(f"Failed to write change tracking '{path}': {e}") from e

        logger.info(
            "tracking.write.success",
            path=str(path),
            remote_files=len(tracking.remote_files),
            local_files=len(tracking.local_files),
        )
        return path

    def load(self, index: int) -> ChangeTracking | None:
        """Load the record persisted for ``index``, or None if absent or invalid."""
        path = self.tracking_path(index)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("tracking.read.failure", path=str(path), error=str(e))
            return None

        try:
            return ChangeTracking.from_json(text)
        except TrackingParseError as e:
            logger.warning("tracking.parse.failure", path=str(path), error=str(e))
            return None


# 🐝📁🔚
