#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


from collections.abc import Iterable
from pathlib import Path

import attrs
from provide.foundation.config.base import BaseConfig, field

from aicrawler.errors import ConfigurationError, InvalidPathError
from aicrawler.logger import logger

DEFAULT_MAX_BUNDLE_BYTES = 5_242_880  # 5 MiB
DEFAULT_HASH_ALGORITHM = "sha256"
HASH_ALGORITHMS = ("sha256", "sha1", "md5", "sha512")

BUNDLE_PREFIX = "directory_contents_"
BUNDLE_SUFFIX = ".md"
TRACKING_PREFIX = "change_tracking-"
TRACKING_SUFFIX = ".json"
IGNORE_FILE_NAMES = (".gitignore", ".aiignore")

MISSING_SETTINGS_MESSAGE = (
    "Configuration must specify 'aiCrawler.directory' and 'aiCrawler.outputDirectory'."
)


def _to_path_list(value: Iterable[str | Path]) -> list[Path]:
    if isinstance(value, (str, Path)):
        raise TypeError("source_directories must be a list of paths, not a single path.")
    return [Path(item) for item in value]


def split_directory_setting(value: str | None) -> list[str]:
    """Split a comma-separated directory setting, dropping blank entries."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


@attrs.define(kw_only=True, slots=True)
class CrawlerConfig(BaseConfig):
    """Explicit configuration for a crawl run.

    Relative source and output paths are resolved against ``workspace_root``
    when the config is validated.
    """

    source_directories: list[Path] = field(
        converter=_to_path_list,
        validator=attrs.validators.deep_iterable(
            member_validator=attrs.validators.instance_of(Path),
            iterable_validator=attrs.validators.instance_of(list),
        ),
        description="Source directories to crawl, in order",
    )
    output_directory: Path = field(
        converter=Path,
        validator=attrs.validators.instance_of(Path),
        description="Directory receiving bundles and change-tracking records",
    )
    workspace_root: Path = field(
        factory=Path.cwd,
        converter=Path,
        validator=attrs.validators.instance_of(Path),
        description="Base directory for relative paths",
    )
    max_bundle_bytes: int = field(
        default=DEFAULT_MAX_BUNDLE_BYTES,
        validator=attrs.validators.instance_of(int),
        description="Size bound for each bundle file, in bytes",
    )
    hash_algorithm: str = field(
        default=DEFAULT_HASH_ALGORITHM,
        validator=attrs.validators.instance_of(str),
        description="Hash algorithm for change-tracking fingerprints",
    )
    follow_symlinks: bool = field(
        default=False,
        description="Follow symbolic links during traversal",
    )

    def __attrs_post_init__(self) -> None:
        super().__attrs_post_init__()
        self.validate()

    @classmethod
    def from_settings(
        cls,
        directory: str | None,
        output_directory: str | None,
        workspace_root: str | Path | None = None,
        **kwargs: object,
    ) -> "CrawlerConfig":
        """Build a config from the raw host settings.

        Args:
            directory: Comma-separated list of source directories.
            output_directory: Directory that receives bundles and tracking records.
            workspace_root: Base for relative paths (defaults to the current directory).
            **kwargs: Remaining CrawlerConfig fields.

        Raises:
            ConfigurationError: If either setting is missing or blank.
        """
        directories = split_directory_setting(directory)
        if not directories or not output_directory or not output_directory.strip():
            raise ConfigurationError(MISSING_SETTINGS_MESSAGE)

        return cls(
            source_directories=directories,
            output_directory=output_directory.strip(),
            workspace_root=Path(workspace_root) if workspace_root is not None else Path.cwd(),
            **kwargs,  # type: ignore[arg-type]
        )

    def validate(self) -> None:
        if not self.source_directories:
            raise ConfigurationError(MISSING_SETTINGS_MESSAGE)

        if self.max_bundle_bytes <= 0:
            raise ConfigurationError(
                f"max_bundle_bytes must be a positive integer, got {self.max_bundle_bytes}."
            )

        self.hash_algorithm = self.hash_algorithm.lower()
        if self.hash_algorithm not in HASH_ALGORITHMS:
            raise ConfigurationError(
                f"Unsupported hash algorithm '{self.hash_algorithm}'. "
                f"Choose one of: {', '.join(HASH_ALGORITHMS)}."
            )

        try:
            self.workspace_root = self.workspace_root.resolve()
            self.output_directory = self._resolve(self.output_directory)
            self.source_directories = [self._resolve(p) for p in self.source_directories]
        except OSError as e:
            raise ConfigurationError(f"Path resolution failed: {e}") from e

        for source_dir in self.source_directories:
            if not source_dir.exists():
                raise InvalidPathError(f"Source directory '{source_dir}' not found.")
            if not source_dir.is_dir():
                raise InvalidPathError(f"Source path '{source_dir}' is not a directory.")

        if self.output_directory.exists() and not self.output_directory.is_dir():
            raise InvalidPathError(f"Output path '{self.output_directory}' is not a directory.")

        logger.debug(
            "config.initialized",
            source_directories=[str(p) for p in self.source_directories],
            output_directory=str(self.output_directory),
            max_bundle_bytes=self.max_bundle_bytes,
            hash_algorithm=self.hash_algorithm,
        )

    def _resolve(self, path: Path) -> Path:
        if not path.is_absolute():
            path = self.workspace_root / path
        return path.resolve()


# 🐝📁🔚
