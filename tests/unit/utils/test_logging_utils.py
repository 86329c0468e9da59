"""Tests for logging utilities."""

from __future__ import annotations

import json
import logging
from pathlib import Path
import sys

import pytest

from mandalagen.core.utils.logging import (
    RENDER_LOGGER_NAME,
    StructuredJSONFormatter,
    configure_logging,
    get_logger,
    get_render_logger,
    log_performance,
)


@pytest.fixture
def restore_root_logging():
    """Restore root handlers and level after a test reconfigures logging."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


class TestStructuredJSONFormatter:
    """Tests for StructuredJSONFormatter."""

    def test_formats_record_as_json(self) -> None:
        """Output is one JSON object with level, message and context."""
        record = logging.LogRecord(
            name="mandalagen.test",
            level=logging.WARNING,
            pathname=__file__,
            lineno=10,
            msg="frame %d",
            args=(7,),
            exc_info=None,
        )
        record.effect = "tree-of-life"

        data = json.loads(StructuredJSONFormatter().format(record))
        assert data["level"] == "WARNING"
        assert data["message"] == "frame 7"
        assert data["context"]["logger_name"] == "mandalagen.test"
        assert data["context"]["effect"] == "tree-of-life"
        assert "timestamp" in data

    def test_includes_exception_details(self) -> None:
        """Exceptions add type, message and trace."""
        try:
            raise ValueError("bad speed")
        except ValueError:
            exc_info = sys.exc_info()
        record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), exc_info)

        context = json.loads(StructuredJSONFormatter().format(record))["context"]
        assert context["error_type"] == "ValueError"
        assert context["error_message"] == "bad speed"
        assert "Traceback" in context["stack_trace"]


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_sets_level_and_plain_formatter(self, restore_root_logging) -> None:
        """Level is case-insensitive; default formatter is plain text."""
        configure_logging(level="debug")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert not isinstance(root.handlers[0].formatter, StructuredJSONFormatter)

    def test_structured_to_file(self, tmp_path: Path, restore_root_logging) -> None:
        """Structured logs go to the file as JSON lines."""
        path = tmp_path / "render.jsonl"
        configure_logging(level="INFO", filename=str(path), structured=True)
        logging.getLogger("mandalagen.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()
            handler.close()

        line = path.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "hello"


class TestLoggers:
    """Tests for logger helpers."""

    def test_get_logger_plain(self) -> None:
        """Without context a plain Logger is returned."""
        assert isinstance(get_logger("mandalagen.x"), logging.Logger)

    def test_get_logger_with_context(self) -> None:
        """Context kwargs produce a LoggerAdapter carrying them."""
        adapter = get_logger("mandalagen.x", effect="chakra-mandala", frame=3)
        assert isinstance(adapter, logging.LoggerAdapter)
        assert adapter.extra == {"effect": "chakra-mandala", "frame": 3}

    def test_render_logger_name(self) -> None:
        """The render logger has a fixed name."""
        assert get_render_logger().name == RENDER_LOGGER_NAME

    def test_log_performance(self, caplog: pytest.LogCaptureFixture) -> None:
        """Decorated functions keep their result and name and log timing."""

        @log_performance
        def sample(x: int) -> int:
            return x * 2

        with caplog.at_level(logging.DEBUG, logger=RENDER_LOGGER_NAME):
            assert sample(21) == 42
        assert sample.__name__ == "sample"
        assert "'sample' took" in caplog.text
