"""Tests for bifslide.utils.logging module."""

from __future__ import annotations

import json
import logging

import pytest

from bifslide.utils.logging import (
    configure_logging,
    get_logger,
    set_correlation_context,
)


def _read_last_json_log_line(capsys: pytest.CaptureFixture[str]) -> dict[str, object]:
    captured = capsys.readouterr()
    lines = [line for line in captured.out.splitlines() if line.strip()]
    assert lines, "Expected at least one log line on stdout"
    return json.loads(lines[-1])


def test_configure_logging_sets_root_level() -> None:
    configure_logging(level="WARNING", log_format="console")
    assert logging.getLogger().level == logging.WARNING


def test_configure_logging_default_settings_do_not_error() -> None:
    configure_logging()


def test_get_logger_returns_logger_proxy() -> None:
    configure_logging(level="DEBUG", log_format="console")
    logger = get_logger("test.module")
    assert hasattr(logger, "info")
    assert hasattr(logger, "debug")
    assert hasattr(logger, "warning")


def test_json_log_contains_correlation_ids(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")
    set_correlation_context(slide_path="/slides/a.bif")

    logger = get_logger("test.json")
    logger.info("hello", foo="bar")
    payload = _read_last_json_log_line(capsys)

    assert payload["event"] == "hello"
    assert payload["foo"] == "bar"
    assert payload["slide_path"] == "/slides/a.bif"
    assert payload["level"] == "info"
    assert payload["logger"] == "test.json"


def test_bound_value_wins_over_context(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")
    set_correlation_context(slide_path="/slides/a.bif")

    get_logger("test.bound").bind(slide_path="/slides/b.bif", directory=5).info("found")
    payload = _read_last_json_log_line(capsys)

    assert payload["slide_path"] == "/slides/b.bif"
    assert payload["directory"] == 5


def test_json_log_without_context_omits_ids(
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging(level="INFO", log_format="json")

    get_logger("test.plain").info("plain")
    payload = _read_last_json_log_line(capsys)

    assert "slide_path" not in payload
