"""Unit tests for structlog configuration -- renderer selection and stderr routing."""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator

import pytest
import structlog

from quillpen.utils.logging import configure_logging


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    structlog.reset_defaults()
    root.handlers[:] = handlers
    root.setLevel(level)


def _renderer() -> object:
    return structlog.get_config()["processors"][-1]


class TestConfigureLogging:
    def test_development_uses_console_renderer(self) -> None:
        configure_logging(app_env="development")
        assert isinstance(_renderer(), structlog.dev.ConsoleRenderer)

    def test_production_uses_json_renderer(self) -> None:
        configure_logging(app_env="production")
        assert isinstance(_renderer(), structlog.processors.JSONRenderer)

    def test_json_flag_overrides_environment(self) -> None:
        configure_logging(json_output=True, app_env="development")
        assert isinstance(_renderer(), structlog.processors.JSONRenderer)

    def test_stdlib_bridge_writes_to_stderr(self) -> None:
        configure_logging(log_level="debug")
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr

    def test_sdk_loggers_are_quietened(self) -> None:
        configure_logging(log_level="DEBUG")
        assert logging.getLogger("httpx").level == logging.WARNING
        configure_logging(log_level="ERROR")
        assert logging.getLogger("openai").level == logging.ERROR
