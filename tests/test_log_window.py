"""Tests for the Qt logging bridge."""

from __future__ import annotations

import logging

import pytest

pytest.importorskip("PySide6")

from grid_ui.log_window import QtLogHandler


class TestQtLogHandler:
    """Test QtLogHandler."""

    def test_emits_level_and_formatted_message(self) -> None:
        """Should forward the record level with the formatted text."""
        handler = QtLogHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
        received = []
        handler.record_logged.connect(lambda level, msg: received.append((level, msg)))

        logger = logging.getLogger("grid_detector.test_log_window")
        logger.propagate = False
        logger.addHandler(handler)
        try:
            logger.warning("catalog slow")
        finally:
            logger.removeHandler(handler)

        assert received == [(logging.WARNING, "WARNING - catalog slow")]

    def test_respects_handler_level(self) -> None:
        """Should drop records below the handler level."""
        handler = QtLogHandler(level=logging.ERROR)
        received = []
        handler.record_logged.connect(lambda level, msg: received.append(level))

        logger = logging.getLogger("grid_detector.test_log_window_level")
        logger.propagate = False
        logger.setLevel(logging.DEBUG)
        logger.addHandler(handler)
        try:
            logger.info("ignored")
            logger.error("shown")
        finally:
            logger.removeHandler(handler)

        assert received == [logging.ERROR]
