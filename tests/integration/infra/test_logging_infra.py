from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Verifies the asynchronous QueueListener architecture, idempotency
of configuration, and log file rotation logic.
"""

import logging
import time
from pathlib import Path
from unittest.mock import patch

import pytest

from zkmirror.infra.logging import (
    _CONFIGURED_FLAG_ATTR,
    _HANDLER_TAG_ATTR,
    _QUEUE_LISTENER_ATTR,
    LoggingConfig,
    configure_logging,
    get_default_log_path,
    shutdown_logging,
)


@pytest.fixture(autouse=True)
def reset_logging():
    """Clean up the root logger before and after each test."""
    shutdown_logging()
    yield
    shutdown_logging()


def test_logging_idempotency() -> None:
    """TC-01: Verify that multiple config calls do not duplicate handlers."""
    cfg = LoggingConfig(level="INFO", console=True)

    configure_logging(cfg)
    root = logging.getLogger()
    initial_handler_count = len(root.handlers)

    configure_logging(cfg)
    assert len(root.handlers) == initial_handler_count, "Handlers were duplicated."


def test_log_rotation(tmp_path: Path) -> None:
    """TC-02: Verify file rotation when size limit is exceeded."""
    log_file = tmp_path / "test_rotate.log"
    cfg = LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    configure_logging(cfg)
    logger = logging.getLogger("test_rotate")

    for _ in range(10):
        logger.debug("Visited znode /a/very/long/path/used/to/trigger/rotation." * 3)

    # Give time for the QueueListener to process
    time.sleep(0.5)

    backup_file = tmp_path / "test_rotate.log.1"
    assert log_file.exists()
    assert backup_file.exists(), "Rotation backup file was not created."


def test_queue_listener_architecture() -> None:
    """TC-03: Verify that the root logger uses a QueueHandler-based architecture."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    root = logging.getLogger()
    queue_handlers = [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]

    assert len(queue_handlers) == 1
    assert getattr(root, _QUEUE_LISTENER_ATTR) is not None
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is True


def test_shutdown_detaches_handlers() -> None:
    """TC-04: Shutdown removes our handlers and allows reconfiguration."""
    configure_logging(LoggingConfig(level="INFO", console=True))

    shutdown_logging()

    root = logging.getLogger()
    assert not [h for h in root.handlers if getattr(h, _HANDLER_TAG_ATTR, False)]
    assert getattr(root, _QUEUE_LISTENER_ATTR) is None
    assert getattr(root, _CONFIGURED_FLAG_ATTR) is False


def test_unwritable_log_file_falls_back_to_console(tmp_path: Path) -> None:
    """TC-05: A log file that cannot be opened does not break logging."""
    with patch("zkmirror.infra.logging.handlers.RotatingFileHandler", side_effect=OSError("denied")):
        configure_logging(LoggingConfig(level="INFO", console=True, log_file=str(tmp_path / "x.log")))

    assert getattr(logging.getLogger(), _QUEUE_LISTENER_ATTR) is not None


def test_default_log_path() -> None:
    """TC-06: The default log file lives under the data directory."""
    with patch("zkmirror.infra.logging.core.get_user_data_dir", return_value="/data"):
        assert Path(get_default_log_path()) == Path("/data", "logs", "zkmirror.log")
