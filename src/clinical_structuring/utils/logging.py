# ============================================================================
# src/clinical_structuring/utils/logging.py
# ============================================================================
"""
Logging configuration and utilities for the structuring pipeline.

Structuring stages attach `extra` fields (operation, file_name, duration_s,
page counts) to their records; JsonFormatter emits them as top-level keys so
per-document timings can be filtered in JSON logs.
"""

import inspect
import json
import logging
import sys
import time
from datetime import datetime, timezone
from functools import wraps
from pathlib import Path
from typing import Optional

# LogRecord attributes promoted to top-level JSON keys when present
STRUCTURED_FIELDS = (
    "operation",
    "file_name",
    "duration_s",
    "page_count",
    "encounter_count",
    "note_count",
)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[Path] = None,
    format_json: bool = False
) -> None:
    """
    Setup logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for logging
        format_json: Whether to use JSON format
    """
    log_level = getattr(logging, level.upper())

    if format_json:
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(
            '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=log_level, handlers=handlers, force=True)


class JsonFormatter(logging.Formatter):
    """JSON log formatter with the structuring fields lifted to the top level."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            'timestamp': datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno
        }

        for name in STRUCTURED_FIELDS:
            if hasattr(record, name):
                log_data[name] = getattr(record, name)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


def get_logger(name: str) -> logging.Logger:
    """Logger for a module (usually __name__)."""
    return logging.getLogger(name)


def _file_name(signature: inspect.Signature, args, kwargs) -> str:
    try:
        bound = signature.bind_partial(*args, **kwargs)
    except TypeError:
        return ""
    return bound.arguments.get("file_name") or ""


def log_performance(logger: logging.Logger, operation: str):
    """
    Decorator timing a structuring stage.

    Works on plain and coroutine functions. The log record carries
    `operation`, `duration_s` and, when the wrapped call received one,
    `file_name`. Failures are logged and re-raised unchanged.

    Args:
        logger: Logger instance
        operation: Operation name
    """
    def _completed(start: float, file_name: str) -> None:
        duration = time.perf_counter() - start
        label = f"{operation} ({file_name})" if file_name else operation
        logger.info(
            f"{label} completed in {duration:.3f}s",
            extra={"operation": operation, "file_name": file_name, "duration_s": round(duration, 3)}
        )

    def _failed(start: float, file_name: str, error: Exception) -> None:
        duration = time.perf_counter() - start
        label = f"{operation} ({file_name})" if file_name else operation
        logger.error(
            f"{label} failed after {duration:.3f}s: {error}",
            extra={"operation": operation, "file_name": file_name, "duration_s": round(duration, 3)}
        )

    def decorator(func):
        signature = inspect.signature(func)

        if inspect.iscoroutinefunction(func):
            @wraps(func)
            async def async_wrapper(*args, **kwargs):
                file_name = _file_name(signature, args, kwargs)
                start = time.perf_counter()
                try:
                    result = await func(*args, **kwargs)
                except Exception as e:
                    _failed(start, file_name, e)
                    raise
                _completed(start, file_name)
                return result

            return async_wrapper

        @wraps(func)
        def wrapper(*args, **kwargs):
            file_name = _file_name(signature, args, kwargs)
            start = time.perf_counter()
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                _failed(start, file_name, e)
                raise
            _completed(start, file_name)
            return result

        return wrapper
    return decorator
