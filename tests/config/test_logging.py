"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging
from collections.abc import Generator

import pytest
import structlog

from api_response import codec
from api_response.config.logging import configure_logging
from api_response.exceptions import CodecError


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root and library logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    lib = logging.getLogger("api_response")
    lib_handlers = lib.handlers[:]
    lib_level = lib.level
    lib_propagate = lib.propagate
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    lib.handlers = lib_handlers
    lib.setLevel(lib_level)
    lib.propagate = lib_propagate


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("api_response").level == logging.DEBUG

    def test_root_logger_untouched(self) -> None:
        root = logging.getLogger()
        app_handler = logging.NullHandler()
        root.addHandler(app_handler)
        root.setLevel(logging.INFO)
        configure_logging(verbose=True, log_json=True)
        assert app_handler in root.handlers
        assert root.level == logging.INFO
        assert logging.getLogger("api_response").propagate is False

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("api_response").level == logging.WARNING

    def test_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("API_RESPONSE_VERBOSE", "true")
        configure_logging()
        assert logging.getLogger("api_response").level == logging.DEBUG

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("api_response.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "api_response.test"
        assert "timestamp" in parsed

    def test_decode_failure_logged(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        with pytest.raises(CodecError):
            codec.decode("{not json")
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "api_response.codec"
        assert parsed["event"].startswith("Decoding Response")

    def test_decode_failure_silent_when_not_verbose(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=False, log_json=True)
        with pytest.raises(CodecError):
            codec.decode("{not json")
        assert capfd.readouterr().err == ""

    def test_idempotent_calls(self) -> None:
        """Multiple configure_logging calls don't stack handlers."""
        configure_logging(verbose=True, log_json=False)
        configure_logging(verbose=True, log_json=True)
        assert len(logging.getLogger("api_response").handlers) == 1
