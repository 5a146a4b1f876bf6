"""Tests for logging configuration helpers."""

from __future__ import annotations

import io
import logging
import sys
from typing import Any

import pytest

from retry_command.cli import config as cli_config


def test_setup_logging_calls_basic_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure setup_logging configures a stderr handler at WARNING by default."""
    captured: dict[str, Any] = {}

    def fake_basic_config(**kwargs: Any) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    cli_config.setup_logging()

    assert captured["level"] == logging.WARNING
    assert captured["style"] == "{"
    assert captured["force"] is True
    assert isinstance(captured["handlers"][0], logging.StreamHandler)
    assert captured["handlers"][0].stream is sys.stderr


def test_setup_logging_accepts_explicit_level_and_stream(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure setup_logging forwards custom level and stream overrides."""
    captured: dict[str, Any] = {}
    stream = io.StringIO()

    def fake_basic_config(**kwargs: Any) -> None:
        captured.update(kwargs)

    monkeypatch.setattr(logging, "basicConfig", fake_basic_config)

    cli_config.setup_logging(level=logging.DEBUG, stream=stream)

    assert captured["level"] == logging.DEBUG
    assert captured["handlers"][0].stream is stream
