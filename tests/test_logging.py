from __future__ import annotations

import logging
import sys

import orjson
import pytest

from utils.logging import JsonFormatter, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in list(root.handlers):
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def _record(**kwargs) -> logging.LogRecord:
    defaults = dict(name="services.api.app", level=logging.INFO, pathname=__file__, lineno=1,
                    msg="served %d rows", args=(3,), exc_info=None)
    defaults.update(kwargs)
    return logging.LogRecord(**defaults)


def test_json_formatter_renders_message_and_extra_fields() -> None:
    record = _record()
    record.chart_rows = 3

    payload = orjson.loads(JsonFormatter().format(record))

    assert payload["message"] == "served 3 rows"
    assert payload["level"] == "INFO"
    assert payload["logger"] == "services.api.app"
    assert payload["chart_rows"] == 3
    assert "exc_info" not in payload
    assert "pathname" not in payload


def test_json_formatter_includes_traceback() -> None:
    try:
        raise RuntimeError("connection refused")
    except RuntimeError:
        record = _record(level=logging.ERROR, msg="query failed", args=(), exc_info=sys.exc_info())

    payload = orjson.loads(JsonFormatter().format(record))

    assert "RuntimeError: connection refused" in payload["exc_info"]


def test_setup_logging_replaces_root_handlers(restore_root_logger: logging.Logger) -> None:
    setup_logging(level="debug", format_type="json")
    setup_logging(level="warning", format_type="text")

    root = restore_root_logger
    assert len(root.handlers) == 1
    assert not isinstance(root.handlers[0].formatter, JsonFormatter)
    assert root.level == logging.WARNING


def test_setup_logging_unknown_level_falls_back_to_info(restore_root_logger: logging.Logger) -> None:
    setup_logging(level="verbose", format_type="json")

    assert restore_root_logger.level == logging.INFO
    assert isinstance(restore_root_logger.handlers[0].formatter, JsonFormatter)
