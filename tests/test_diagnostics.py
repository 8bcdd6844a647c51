from __future__ import annotations

import logging

import pytest

from htmlpdf.core.diagnostics import LoggingEmitter, NullEmitter, format_event_message


def test_format_event_message_for_known_events() -> None:
    assert (
        format_event_message("pdf_generate", {"mode": "stream", "command": "wk -q a.html -"})
        == "Generating PDF (stream): wk -q a.html -"
    )
    assert format_event_message("pdf_generated", {"bytes": 12}) == "PDF generated (12 bytes)"
    assert format_event_message("pdf_cleanup", {"count": 2}) == "Removed 2 temporary file(s)"
    assert format_event_message("pdf_cleanup", {"count": 0}) is None
    assert format_event_message("unknown", {}) is None


def test_logging_emitter_forwards_to_logger(caplog: pytest.LogCaptureFixture) -> None:
    emitter = LoggingEmitter(logger_obj=logging.getLogger("htmlpdf.test"))

    with caplog.at_level(logging.DEBUG, logger="htmlpdf.test"):
        emitter.event("pdf_generated", {"bytes": 3})
        emitter.event("custom", {"value": 1})
        emitter.warning("careful")
        emitter.error("broken", ValueError("bad"))

    messages = [record.getMessage() for record in caplog.records]
    assert "PDF generated (3 bytes)" in messages
    assert "diagnostic event custom: {'value': 1}" in messages
    assert "careful" in messages
    error_record = next(record for record in caplog.records if record.getMessage() == "broken")
    assert error_record.levelno == logging.ERROR
    assert error_record.exc_info is not None


def test_null_emitter_accepts_everything() -> None:
    emitter = NullEmitter()
    emitter.warning("w")
    emitter.error("e", RuntimeError("x"))
    emitter.event("pdf_generate", {})
    assert emitter.debug_enabled is False
