# src/glogger/core/logging/handlers.py
"""
Sink handlers and their dictConfig factories.

Handlers
--------
LineStreamHandler / LineFileHandler are the stdlib StreamHandler / FileHandler
with two changes:

  - terminator is "": the formatters already end every entry with "\\n", so
    StreamHandler.emit() performs exactly one `stream.write(entry)` per record.
    Handler.handle() holds the handler lock around emit(), which means
    concurrent requests can never interleave partial JSON lines.

  - handleError() knows about SerializationError. When JsonFormatter rejects a
    record, a small fallback entry is written in its place (level "error",
    the offending field keys, and the correlationId when one was bound) so the
    request still leaves a trace in the log. Every other failure (closed
    stream, full disk, ...) goes to the stdlib Handler.handleError(), which
    reports to sys.stderr when logging.raiseExceptions is set and never raises.
    Nothing is retried.

Factories
---------
get_console_handler / get_file_handler return handler configuration dicts for
`logging.config.dictConfig()`; builder.py picks one based on settings.LOG_OUTPUT.
"""

import json
import logging
import sys
from logging import LogRecord
from typing import IO

from glogger.config.settings import Settings
from glogger.exceptions import SerializationError
from .formatters import get_fields
from .levels import level_from_name

FALLBACK_MESSAGE = "failed to serialize log entry"


class LineHandlerMixin:
    terminator = ""

    def handleError(self, record: LogRecord) -> None:
        exc = sys.exc_info()[1]
        if isinstance(exc, SerializationError):
            self.write_fallback(record, exc)
            return
        super().handleError(record)

    def write_fallback(self, record: LogRecord, error: SerializationError) -> None:
        entry = {
            "level": "error",
            "message": FALLBACK_MESSAGE,
            "time": int(record.created),
            "originalMessage": record.getMessage(),
            **error.to_payload(),
        }
        correlation_id = get_fields(record).get("correlationId")
        if isinstance(correlation_id, str):
            entry["correlationId"] = correlation_id
        try:
            self.stream.write(json.dumps(entry, ensure_ascii=False, separators=(",", ":")) + "\n")
            self.flush()
        except Exception:
            super().handleError(record)


class LineStreamHandler(LineHandlerMixin, logging.StreamHandler):
    """StreamHandler writing one pre-terminated entry per write() call."""


class LineFileHandler(LineHandlerMixin, logging.FileHandler):
    """FileHandler writing one pre-terminated entry per write() call. No rotation."""


def _handler_filters(settings: Settings) -> list[str]:
    return ["redact"] if settings.LOG_REDACT else []


def get_console_handler(settings: Settings, stream: IO[str] | None = None) -> dict:
    """
    Return a handler configuration dict for a stream handler.

    Args:
        settings: Settings instance. Relevant attributes:
                    - LOG_FORMAT: 'json' or 'text' (formatter name)
                    - LOG_LEVEL: minimum severity name
                    - LOG_OUTPUT: 'stderr' or 'stdout'
                    - LOG_REDACT: attach the "redact" filter
        stream: optional file-like object; overrides LOG_OUTPUT (used by tests
                to capture entries in an io.StringIO).
    """
    return {
        "class": "glogger.core.logging.handlers.LineStreamHandler",
        "formatter": settings.LOG_FORMAT,
        "level": level_from_name(settings.LOG_LEVEL),
        "filters": _handler_filters(settings),
        # dictConfig resolves "ext://sys.stderr" at configure time; objects are passed through
        "stream": stream if stream is not None else f"ext://sys.{settings.LOG_OUTPUT}",
    }


def get_file_handler(settings: Settings) -> dict:
    return {
        "class": "glogger.core.logging.handlers.LineFileHandler",
        "formatter": settings.LOG_FORMAT,
        "level": level_from_name(settings.LOG_LEVEL),
        "filters": _handler_filters(settings),
        "filename": settings.LOG_OUTPUT,
        "encoding": "utf-8",
    }
