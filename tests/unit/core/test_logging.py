"""Tests for the logging helpers."""

import json
import logging
import sys

from notefeed.core.logging import JSONFormatter, build_logging_config, get_logger, mask_token


def make_record(**extra):
    record = logging.LogRecord(
        name="notefeed.test",
        level=logging.INFO,
        pathname=__file__,
        lineno=10,
        msg="Token %s issued",
        args=("abc",),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_outputs_message_and_extras():
    entry = json.loads(JSONFormatter().format(make_record(user_id=7)))

    assert entry["level"] == "INFO"
    assert entry["logger"] == "notefeed.test"
    assert entry["message"] == "Token abc issued"
    assert entry["extra"] == {"user_id": 7}


def test_json_formatter_includes_exception():
    try:
        raise RuntimeError("boom")
    except RuntimeError:
        record = make_record()
        record.exc_info = sys.exc_info()

    entry = json.loads(JSONFormatter().format(record))
    assert entry["exception"]["type"] == "RuntimeError"
    assert entry["exception"]["message"] == "boom"


def test_get_logger_namespaces_under_app():
    assert get_logger("services.auth").name == "notefeed.services.auth"


def test_mask_token_never_logs_full_secret():
    token = "f" * 64
    assert mask_token(token) == "ffffffff..."
    assert mask_token(None) == "None"


def test_config_skips_file_handlers_when_disabled():
    # LOG_TO_FILE=false in the test environment
    config = build_logging_config()
    assert set(config["handlers"]) == {"console"}
    assert config["loggers"]["notefeed"]["handlers"] == ["console"]
