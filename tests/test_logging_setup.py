"""
Logging Setup Tests

Component loggers: JSON record shape, stream selection, redirection.
"""

import io
import json
import logging
import sys

from hybrid_config.common.logging_setup import (
    ComponentLoggerAdapter,
    redirect_logs,
    setup_logging,
)


def test_json_record_carries_component_and_extra():
    stream = io.StringIO()
    logger = setup_logging("test.json", stream=stream)
    adapter = ComponentLoggerAdapter(logger, {"component": "test.json"})

    adapter.warning("Backup creation failed", extra={"path": "/tmp/backups"})

    entry = json.loads(stream.getvalue())
    assert entry["level"] == "WARNING"
    assert entry["component"] == "test.json"
    assert entry["message"] == "Backup creation failed"
    assert entry["path"] == "/tmp/backups"
    assert "lineno" not in entry


def test_text_format_when_json_disabled():
    stream = io.StringIO()
    logger = setup_logging("test.text", json_format=False, stream=stream)

    logger.info("plain line")

    assert "[INFO] hybrid_config.test.text: plain line" in stream.getvalue()


def test_redirect_ignores_closed_previous_stream():
    closed = io.StringIO()
    setup_logging("test.redirect", stream=closed)
    closed.close()

    target = io.StringIO()
    redirect_logs(target)
    try:
        logging.getLogger("hybrid_config.test.redirect").info("after redirect")
    finally:
        redirect_logs(sys.__stderr__)

    assert "after redirect" in target.getvalue()
