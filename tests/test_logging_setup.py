import json
import logging

import pendulum
import pytest

from habitual.logging_setup import JsonFormatter, configure_logging


@pytest.fixture()
def restore_habitual_logger():
    logger = logging.getLogger("habitual")
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


def test_json_formatter_includes_extras():
    record = logging.LogRecord(
        "habitual.test", logging.INFO, __file__, 1, "hid %s", ("Water",), None
    )
    record._json_date = pendulum.date(2024, 1, 1)
    record._json_count = 2

    payload = json.loads(JsonFormatter().format(record))
    assert payload["msg"] == "hid Water"
    assert payload["level"] == "INFO"
    assert payload["date"] == "2024-01-01"
    assert payload["count"] == 2


def test_configure_logging_writes_json_lines(tmp_path, restore_habitual_logger):
    logfile = configure_logging(tmp_path / "logs")
    logging.getLogger("habitual.service.test").info(
        "recorded value", extra={"_json_value": 3}
    )
    for handler in logging.getLogger("habitual").handlers:
        handler.flush()

    lines = logfile.read_text().strip().splitlines()
    entry = json.loads(lines[-1])
    assert entry["msg"] == "recorded value"
    assert entry["value"] == 3


def test_configure_logging_twice_does_not_duplicate_handlers(
    tmp_path, restore_habitual_logger
):
    configure_logging(tmp_path)
    configure_logging(tmp_path)
    assert len(logging.getLogger("habitual").handlers) == 2
