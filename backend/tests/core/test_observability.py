"""Tests for the JSON log formatter and idempotent setup."""

import json
import logging

from folio.infrastructure.observability import JSONFormatter, setup_logging


def _record(**extra):
    record = logging.LogRecord("folio.test", logging.INFO, __file__, 1, "hello %s", ("x",), None)
    record.__dict__.update(extra)
    return record


def test_formats_message_and_service():
    line = json.loads(JSONFormatter("svc").format(_record()))
    assert line["message"] == "hello x"
    assert line["service"] == "svc"
    assert line["level"] == "INFO"


def test_extra_context_surfaces_only_when_present():
    line = json.loads(JSONFormatter().format(_record(entity_id="abc", listing=None)))
    assert line["entity_id"] == "abc"
    assert "listing" not in line


def test_setup_logging_does_not_stack_handlers():
    root = logging.getLogger()
    before = list(root.handlers)
    try:
        setup_logging("DEBUG", "json")
        setup_logging("INFO", "text")
        assert len([h for h in root.handlers if h.get_name() == "folio"]) == 1
    finally:
        for h in [h for h in root.handlers if h not in before]:
            root.removeHandler(h)
