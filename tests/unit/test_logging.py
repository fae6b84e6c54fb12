"""Tests for structured logging setup."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator

import pytest
import structlog

from seedsift.config.settings import ObservabilitySettings
from seedsift.observability.logging import setup_logging


@pytest.fixture(autouse=True)
def restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    structlog.reset_defaults()


class TestSetupLogging:
    def test_json_output_for_stdlib_loggers(self, capsys: pytest.CaptureFixture[str]) -> None:
        setup_logging(ObservabilitySettings(log_level="info", log_format="json"))
        logging.getLogger("seedsift.test").info("Registered adapter: %s", "sample")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "Registered adapter: sample"
        assert record["level"] == "info"
        assert record["logger"] == "seedsift.test"

    def test_level_applied(self) -> None:
        setup_logging(ObservabilitySettings(log_level="warning"))
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_defaults_without_settings(self) -> None:
        setup_logging()
        assert logging.getLogger().level == logging.INFO
