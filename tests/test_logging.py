"""Tests for logging helpers."""

import json
import logging

import pytest

from federated_catalog.utils.logging import (
    JsonFormatter,
    build_formatter,
    get_contextual_logger,
    setup_logging,
)


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way the test found it."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def _capture(logger):
    records = []

    class _Capture(logging.Handler):
        def emit(self, record):
            records.append(record)

    logger.addHandler(_Capture())
    return records


def test_json_formatter_includes_context():
    """Contextual fields end up at the top level of the JSON document."""
    logger = get_contextual_logger("federated_catalog.test.json", {"command": "ShowTablesAdapter"})
    logger.logger.setLevel(logging.INFO)
    records = _capture(logger.logger)

    logger.info("listed 3 tables")

    document = json.loads(JsonFormatter().format(records[0]))
    assert document["message"] == "listed 3 tables"
    assert document["level"] == "INFO"
    assert document["logger"] == "federated_catalog.test.json"
    assert document["command"] == "ShowTablesAdapter"


def test_json_formatter_without_context():
    """Plain records have no command key."""
    record = logging.LogRecord("x", logging.WARNING, __file__, 1, "plain", None, None)
    document = json.loads(JsonFormatter().format(record))
    assert document["message"] == "plain"
    assert "command" not in document


def test_build_formatter():
    """Text and JSON are the known formats."""
    assert isinstance(build_formatter("json"), JsonFormatter)
    assert not isinstance(build_formatter("text"), JsonFormatter)
    with pytest.raises(ValueError):
        build_formatter("xml")


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    """Records reach the log file in the chosen format and level."""
    log_file = tmp_path / "fedcat.log"
    setup_logging(level="info", log_format="json", log_file=str(log_file))

    assert restore_root_logger.level == logging.INFO
    logging.getLogger("federated_catalog.test.file").debug("hidden")
    logging.getLogger("federated_catalog.test.file").info("kept")

    lines = log_file.read_text().splitlines()
    assert [json.loads(line)["message"] for line in lines] == ["kept"]
