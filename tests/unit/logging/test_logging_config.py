"""Unit tests for logging configuration, JSON output and selection context."""

import json
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from subpolicy.config.models import LoggingConfig
from subpolicy.logging import (
    JSONFormatter,
    SelectionContextFilter,
    clear_selection_context,
    configure_logging,
    get_selection_context,
    selection_context,
    set_selection_context,
)


@pytest.fixture(autouse=True)
def reset_root_logger():
    """Save and restore root logger state between tests."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    yield
    for handler in root.handlers:
        if handler not in original_handlers:
            handler.close()
    root.handlers[:] = original_handlers
    root.setLevel(original_level)
    clear_selection_context()


def _record(message: str = "hello", **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="subpolicy.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg=message,
        args=(),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestConfigureLogging:
    """Tests for configure_logging()."""

    def test_configure_default_level(self) -> None:
        """Should configure info level by default."""
        configure_logging(LoggingConfig())
        assert logging.getLogger().level == logging.INFO

    def test_configure_level_case_insensitive(self) -> None:
        """Should accept level regardless of case."""
        configure_logging(LoggingConfig(level="DEBUG"))
        assert logging.getLogger().level == logging.DEBUG

    def test_stderr_handler_without_file(self) -> None:
        """Should log to stderr when no file is configured."""
        configure_logging(LoggingConfig())

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)

    def test_file_handler(self, tmp_path: Path) -> None:
        """Should add a rotating file handler and create parent dirs."""
        log_file = tmp_path / "logs" / "subpolicy.log"
        configure_logging(LoggingConfig(file=log_file, max_bytes=1024))

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], RotatingFileHandler)
        assert handlers[0].maxBytes == 1024
        assert log_file.parent.exists()

    def test_file_and_stderr(self, tmp_path: Path) -> None:
        """Should add both handlers when include_stderr is set."""
        configure_logging(LoggingConfig(file=tmp_path / "a.log", include_stderr=True))
        assert len(logging.getLogger().handlers) == 2

    def test_json_format(self, tmp_path: Path) -> None:
        """Should write JSON lines when format is json."""
        log_file = tmp_path / "a.log"
        configure_logging(LoggingConfig(file=log_file, format="json"))

        with selection_context("movie.mkv"):
            logging.getLogger("subpolicy.test").info("picked %d", 3)
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text().splitlines()[-1])
        assert entry["message"] == "picked 3"
        assert entry["level"] == "INFO"
        assert entry["logger"] == "subpolicy.test"
        assert entry["item"] == "movie.mkv"
        assert "context" not in entry

    def test_json_policy_decisions(
        self, tmp_path: Path, policy_factory, stream_factory
    ) -> None:
        """Policy decision lines carry a decision object and the item."""
        log_file = tmp_path / "a.log"
        configure_logging(LoggingConfig(level="debug", file=log_file, format="json"))

        policy = policy_factory("original")
        with selection_context("movie.mkv"):
            policy.evaluate([stream_factory(index=2, language="")])
        for handler in logging.getLogger().handlers:
            handler.flush()

        entries = [json.loads(line) for line in log_file.read_text().splitlines()]
        decisions = [e for e in entries if "decision" in e]
        assert decisions[0]["item"] == "movie.mkv"
        assert decisions[0]["decision"] == {
            "stream_index": 2,
            "relevant": False,
            "reason": "not original language",
            "rank": None,
        }

    def test_text_format_carries_item_tag(self, tmp_path: Path) -> None:
        """Text lines carry the selection context tag."""
        log_file = tmp_path / "a.log"
        configure_logging(LoggingConfig(file=log_file))

        with selection_context("movie.mkv"):
            logging.getLogger("subpolicy.test").info("inside")
        logging.getLogger("subpolicy.test").info("outside")
        for handler in logging.getLogger().handlers:
            handler.flush()

        inside, outside = log_file.read_text().splitlines()[-2:]
        assert "[movie.mkv] subpolicy.test - INFO - inside" in inside
        assert "[" not in outside.split(" - ", 1)[1]


class TestJSONFormatter:
    """Tests for JSONFormatter."""

    def test_basic_fields(self) -> None:
        """Entries have timestamp, level and message."""
        entry = json.loads(JSONFormatter().format(_record()))
        assert entry["message"] == "hello"
        assert entry["level"] == "INFO"
        assert "timestamp" in entry
        assert "context" not in entry

    def test_extra_fields_in_context(self) -> None:
        """Unrecognized extras go into context."""
        entry = json.loads(JSONFormatter().format(_record(request="a.yaml")))
        assert entry["context"] == {"request": "a.yaml"}

    def test_decision_fields_grouped(self) -> None:
        """Policy decision extras are grouped under decision."""
        record = _record(stream_index=4, relevant=True, reason="original language")
        entry = json.loads(JSONFormatter().format(record))
        assert entry["decision"] == {
            "stream_index": 4,
            "relevant": True,
            "reason": "original language",
        }
        assert "context" not in entry

    def test_exception_included(self) -> None:
        """Exception text is included."""
        try:
            raise ValueError("boom")
        except ValueError:
            record = _record()
            record.exc_info = sys.exc_info()
        entry = json.loads(JSONFormatter().format(record))
        assert "ValueError: boom" in entry["exception"]


class TestSelectionContext:
    """Tests for selection context propagation."""

    def test_set_and_clear(self) -> None:
        """Context can be set and cleared."""
        set_selection_context("a.mkv")
        assert get_selection_context() == "a.mkv"
        clear_selection_context()
        assert get_selection_context() is None

    def test_context_manager_restores_previous(self) -> None:
        """Nested contexts restore the outer value."""
        with selection_context("outer"):
            with selection_context("inner"):
                assert get_selection_context() == "inner"
            assert get_selection_context() == "outer"
        assert get_selection_context() is None

    def test_filter_enriches_record(self) -> None:
        """The filter adds item_id and item_tag without dropping records."""
        record = _record()
        with selection_context("x.mkv"):
            assert SelectionContextFilter().filter(record) is True
        assert record.item_id == "x.mkv"
        assert record.item_tag == "[x.mkv] "

        other = _record()
        SelectionContextFilter().filter(other)
        assert other.item_tag == ""
