#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#


import pytest

from aicrawler.logger import configure_logging, logger


def test_unknown_level_rejected():
    with pytest.raises(ValueError, match="Unknown log level: chatty"):
        configure_logging("chatty")


def test_events_below_level_are_dropped(capsys: pytest.CaptureFixture[str]):
    configure_logging("error")
    logger.warning("test.warning.dropped")
    logger.error("test.error.kept", detail="x")

    err = capsys.readouterr().err
    assert "test.warning.dropped" not in err
    assert "test.error.kept" in err
    assert "detail=x" in err


def test_warn_alias_keeps_warnings(capsys: pytest.CaptureFixture[str]):
    configure_logging("WARN")
    logger.info("test.info.dropped")
    logger.warning("test.warning.kept")

    err = capsys.readouterr().err
    assert "test.info.dropped" not in err
    assert "test.warning.kept" in err


def test_logs_follow_current_stderr(capsys: pytest.CaptureFixture[str]):
    configure_logging("info")
    logger.info("test.info.kept")
    assert "test.info.kept" in capsys.readouterr().err


# 🐝📁🔚
