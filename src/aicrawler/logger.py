#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Foundation logging setup shared by every aicrawler module."""

from provide.foundation import get_hub, logger
from provide.foundation.logger import LoggingConfig, TelemetryConfig

DEFAULT_LOG_LEVEL = "warning"

_LEVEL_NAMES = {
    "trace": "TRACE",
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "warning": "WARNING",
    "error": "ERROR",
    "critical": "CRITICAL",
}


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Re-initialize the foundation logger, dropping events below ``level``.

    Args:
        level: Level name such as "debug", "info", "warning" or "error".

    Raises:
        ValueError: If the level name is unknown.
    """
    level_name = _LEVEL_NAMES.get(level.lower())
    if level_name is None:
        raise ValueError(f"Unknown log level: {level}")

    config = TelemetryConfig(
        service_name="aicrawler",
        logging=LoggingConfig(default_level=level_name),
    )
    # Re-binds the output stream to the current sys.stderr.
    get_hub().initialize_foundation(config, force=True)


configure_logging()

__all__ = ["DEFAULT_LOG_LEVEL", "configure_logging", "logger"]

# 🐝📁🔚
