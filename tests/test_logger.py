"""
Tests for structured event logging.
"""

import json
import logging

import pytest

from decimal_schema.observability.logger import LOGGER_NAME, RequestTimer, log_event


class _Collector(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def collector(monkeypatch):
    monkeypatch.setenv("LOG_COLOR", "0")
    handler = _Collector()
    logger = logging.getLogger(LOGGER_NAME)
    logger.addHandler(handler)
    yield handler
    logger.removeHandler(handler)


def test_event_is_json(collector):
    log_event("DECIMAL_TYPE_INFERRED", {"column": "price", "precision": 5})
    record = collector.records[-1]
    assert record.levelno == logging.INFO
    assert json.loads(record.getMessage()) == {
        "event_type": "DECIMAL_TYPE_INFERRED",
        "column": "price",
        "precision": 5,
    }


def test_failed_event_logged_as_error(collector):
    log_event("DECIMAL_RUN_FAILED", {"message": "boom"})
    assert collector.records[-1].levelno == logging.ERROR


def test_warning_event_level(collector):
    log_event("DECIMAL_COLUMN_WARNING", {})
    assert collector.records[-1].levelno == logging.WARNING


def test_timer_is_non_negative():
    assert RequestTimer().duration() >= 0
