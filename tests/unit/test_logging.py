"""
Unit tests for the logging subsystem: context propagation, JSON output and
the bounded queue.
"""

import json
import logging
import queue
import sys

import pytest

from ghostagotchi.core.logging.logger import (
    ContextFilter,
    DroppingQueueHandler,
    JSONFormatter,
    LogContext,
    dropped_log_records,
)


def make_record(**extra):
    record = logging.LogRecord(
        "ghostagotchi.tests", logging.INFO, __file__, 10, "Pet fed", None, None
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


@pytest.mark.unit
class TestLogContext:
    def test_context_is_stamped_on_record(self):
        # Arrange
        record = make_record()

        # Act
        with LogContext(user_id=42, command="POST /pet/feed", correlation_id="abc123"):
            ContextFilter().filter(record)

        # Assert
        assert record.user_id == "42"
        assert record.command == "POST /pet/feed"
        assert record.correlation_id == "abc123"
        assert not hasattr(record, "guild_id")

    def test_explicit_extra_wins(self):
        record = make_record(user_id="7")

        with LogContext(user_id=42):
            ContextFilter().filter(record)

        assert record.user_id == "7"

    def test_context_cleared_after_block(self):
        with LogContext(user_id=42):
            pass

        record = make_record()
        ContextFilter().filter(record)

        assert not hasattr(record, "user_id")

    async def test_async_block_generates_correlation_id(self):
        record = make_record()

        async with LogContext(component="api"):
            ContextFilter().filter(record)

        assert record.component == "api"
        assert len(record.correlation_id) == 8


@pytest.mark.unit
class TestJSONFormatter:
    def test_context_and_extra_fields(self):
        record = make_record(user_id="42", xp_gained=10)

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "Pet fed"
        assert data["level"] == "INFO"
        assert data["user_id"] == "42"
        assert data["extra"] == {"xp_gained": 10}

    def test_exception_is_included(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = logging.LogRecord(
                "ghostagotchi.tests", logging.ERROR, __file__, 10, "failed", None,
                exc_info=sys.exc_info(),
            )

        data = json.loads(JSONFormatter().format(record))

        assert "RuntimeError: boom" in data["exception"]


@pytest.mark.unit
class TestDroppingQueueHandler:
    def test_full_queue_drops_and_counts(self):
        before = dropped_log_records()
        handler = DroppingQueueHandler(queue.Queue(maxsize=1))

        handler.enqueue(make_record())
        handler.enqueue(make_record())

        assert dropped_log_records() == before + 1
