"""Tests for structlog configuration."""

from __future__ import annotations

import io
import json
import logging
from collections.abc import Generator

import pytest
import structlog

from attachments.config.logging import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore root logger state after each test."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    pkg = logging.getLogger(PACKAGE_LOGGER)
    pkg_level = pkg.level
    yield
    root.handlers = original_handlers
    root.setLevel(original_level)
    pkg.setLevel(pkg_level)
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING

    def test_json_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        log = structlog.get_logger("attachments.test")
        log.warning("json test", answer=42)
        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "attachments.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)

        logging.getLogger("attachments.domain.field_types").debug("Registered field type text")

        parsed = json.loads(stream.getvalue().strip())
        assert parsed["event"] == "Registered field type text"
        assert parsed["level"] == "debug"
        assert parsed["logger"] == "attachments.domain.field_types"

    def test_package_debug_hidden_without_verbose(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=False, log_json=True, stream=stream)
        logging.getLogger("attachments.site").debug("noise")
        logging.getLogger("attachments.site").warning("Skipping field type")
        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        assert json.loads(lines[0])["event"] == "Skipping field type"

    def test_third_party_debug_is_suppressed(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, log_json=True, stream=stream)
        logging.getLogger("pluggy").debug("hook noise")
        logging.getLogger("jinja2").debug("template noise")
        assert stream.getvalue() == ""

    def test_human_mode_output(self) -> None:
        stream = io.StringIO()
        configure_logging(verbose=True, stream=stream)
        structlog.get_logger("attachments.test").warning("hello world", key="val")
        output = stream.getvalue()
        assert "hello world" in output
        assert "key" in output

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=True)
        configure_logging(verbose=True)
        assert len(logging.getLogger().handlers) == 1
