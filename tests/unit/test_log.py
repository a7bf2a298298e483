"""Tests for txt2cal logging setup."""

from __future__ import annotations

import io
import logging
import re

import pytest

import txt2cal
from txt2cal.log import PACKAGE_LOGGER, setup_logging


def _owned_handlers(logger: logging.Logger) -> list[logging.Handler]:
    return [h for h in logger.handlers if getattr(h, "_txt2cal_log_handler", False)]


class TestLibraryDefaults:
    """Importing the package configures nothing visible."""

    def test_package_logger_has_null_handler(self) -> None:
        handlers = logging.getLogger(txt2cal.__name__).handlers

        assert any(isinstance(h, logging.NullHandler) for h in handlers)


class TestSetupLogging:
    def test_configures_package_logger_not_root(self) -> None:
        root = logging.getLogger()
        root_handlers = root.handlers[:]
        root_level = root.level

        logger = setup_logging("DEBUG")

        assert logger.name == PACKAGE_LOGGER
        assert logger.level == logging.DEBUG
        assert root.handlers == root_handlers
        assert root.level == root_level

    def test_stops_propagation_to_root(self) -> None:
        assert setup_logging().propagate is False

    def test_default_level_is_info(self) -> None:
        assert setup_logging().level == logging.INFO

    def test_level_is_case_insensitive(self) -> None:
        assert setup_logging("warning").level == logging.WARNING

    def test_invalid_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            setup_logging("INVALID")

    def test_idempotent_for_same_stream(self) -> None:
        stream = io.StringIO()
        logger = setup_logging(stream=stream)

        setup_logging("DEBUG", stream=stream)

        handlers = _owned_handlers(logger)
        assert len(handlers) == 1
        assert handlers[0].level == logging.DEBUG

    def test_new_stream_replaces_handler(self) -> None:
        first, second = io.StringIO(), io.StringIO()
        setup_logging(stream=first)
        logger = setup_logging(stream=second)

        logging.getLogger("txt2cal.parser").info("moved")

        assert len(_owned_handlers(logger)) == 1
        assert first.getvalue() == ""
        assert "moved" in second.getvalue()

    def test_module_records_use_cli_format(self) -> None:
        stream = io.StringIO()
        setup_logging("INFO", stream=stream)

        logging.getLogger("txt2cal.serializer").info("hello")

        assert re.search(
            r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2} \| INFO\s+\| txt2cal\.serializer \| hello",
            stream.getvalue(),
        )

    def test_other_loggers_are_not_captured(self) -> None:
        stream = io.StringIO()
        setup_logging("DEBUG", stream=stream)

        logging.getLogger("someapp").warning("not ours")

        assert "not ours" not in stream.getvalue()
