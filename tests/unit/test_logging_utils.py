# ============================================================================
# FILE: tests/unit/test_logging_utils.py
# ============================================================================
"""
Unit tests for logging helpers
"""

import json
import logging
import sys

import pytest

from clinical_structuring.utils.logging import JsonFormatter, get_logger, log_performance, setup_logging


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_json_formatter_fields():
    record = logging.LogRecord(
        name="clinical_structuring.test",
        level=logging.WARNING,
        pathname=__file__,
        lineno=42,
        msg="Found %d notes",
        args=(3,),
        exc_info=None
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["level"] == "WARNING"
    assert payload["logger"] == "clinical_structuring.test"
    assert payload["message"] == "Found 3 notes"
    assert payload["line"] == 42
    assert payload["timestamp"].endswith("+00:00")
    assert "exception" not in payload


def test_json_formatter_includes_exception():
    try:
        raise ValueError("boom")
    except ValueError:
        record = logging.getLogger("x").makeRecord(
            "x", logging.ERROR, __file__, 1, "failed", (), exc_info=sys.exc_info()
        )

    payload = json.loads(JsonFormatter().format(record))

    assert "ValueError: boom" in payload["exception"]


def test_log_performance_success(caplog):
    logger = logging.getLogger("clinical_structuring.perf")

    @log_performance(logger, "Sample operation")
    def add(a, b):
        return a + b

    with caplog.at_level(logging.INFO, logger="clinical_structuring.perf"):
        assert add(2, 3) == 5

    assert "Sample operation completed in" in caplog.text
    assert add.__name__ == "add"


def test_log_performance_failure_reraises(caplog):
    logger = logging.getLogger("clinical_structuring.perf")

    @log_performance(logger, "Sample operation")
    def explode():
        raise RuntimeError("decoder crashed")

    with caplog.at_level(logging.INFO, logger="clinical_structuring.perf"):
        with pytest.raises(RuntimeError):
            explode()

    assert "Sample operation failed after" in caplog.text
    assert "decoder crashed" in caplog.text


def test_setup_logging_writes_file(tmp_path, restore_root_logger):
    log_file = tmp_path / "logs" / "structuring.log"

    setup_logging(level="DEBUG", log_file=log_file, format_json=True)
    logging.getLogger("clinical_structuring.setup").debug("hello file")
    for handler in restore_root_logger.handlers:
        handler.flush()

    assert restore_root_logger.level == logging.DEBUG
    line = log_file.read_text().strip().splitlines()[-1]
    assert json.loads(line)["message"] == "hello file"


def test_get_logger_returns_named_logger():
    assert get_logger("clinical_structuring.api") is logging.getLogger("clinical_structuring.api")


@pytest.mark.asyncio
async def test_log_performance_wraps_coroutines(caplog):
    logger = logging.getLogger("clinical_structuring.perf")

    @log_performance(logger, "Async structuring")
    async def structure(pdf_bytes, file_name=""):
        return len(pdf_bytes)

    with caplog.at_level(logging.INFO, logger="clinical_structuring.perf"):
        assert await structure(b"%PDF", file_name="records.pdf") == 4

    record = caplog.records[-1]
    assert record.getMessage().startswith("Async structuring (records.pdf) completed in")
    assert record.operation == "Async structuring"
    assert record.file_name == "records.pdf"
    assert record.duration_s >= 0


@pytest.mark.asyncio
async def test_log_performance_async_failure_reraises(caplog):
    logger = logging.getLogger("clinical_structuring.perf")

    @log_performance(logger, "Async structuring")
    async def explode(pdf_bytes, file_name=""):
        raise RuntimeError("decoder crashed")

    with caplog.at_level(logging.INFO, logger="clinical_structuring.perf"):
        with pytest.raises(RuntimeError):
            await explode(b"", "broken.pdf")

    assert "Async structuring (broken.pdf) failed after" in caplog.text
    assert caplog.records[-1].levelname == "ERROR"


def test_json_formatter_lifts_structuring_fields():
    record = logging.getLogger("x").makeRecord(
        "x", logging.INFO, __file__, 1, "Structured records.pdf", (), None,
        extra={"file_name": "records.pdf", "page_count": 2, "note_count": 1}
    )

    payload = json.loads(JsonFormatter().format(record))

    assert payload["file_name"] == "records.pdf"
    assert payload["page_count"] == 2
    assert payload["note_count"] == 1
    assert "duration_s" not in payload
