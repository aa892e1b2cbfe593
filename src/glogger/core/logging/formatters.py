# src/glogger/core/logging/formatters.py

r"""
Custom logging formatters for glogger.

This module provides the two formatters the sink can be configured with:

  - JsonFormatter: emits one compact JSON object per record, terminated by a
    single newline (newline-delimited JSON). This is the wire format consumed
    by log collectors and the format of the request lifecycle entries.

  - ColorFormatter: a human-friendly, ANSI-colored single line intended for
    local development consoles (LOG_FORMAT=text).

Where do the structured fields come from?
  - RequestLogger (adapters.py) merges its bound fields (correlationId, host)
    with any per-call `extra={...}` and attaches the result to the LogRecord as
    a single attribute, `record.fields`. Formatters read only that attribute;
    the rest of the LogRecord (pathname, thread, process, ...) is never emitted.

Both formatters carry the line terminator themselves, and the handlers in
handlers.py write `format(record)` as-is with an empty terminator. One record
is therefore exactly one `write()` call.

Wire format (JsonFormatter):

    {"level":"info","message":"Incoming Rquest","time":1700000000}\n

  - key order: level, message, time, then the record's fields in insertion order
  - time: integer Unix seconds (int(record.created))
  - fields are unioned at the top level, not nested under a "fields" key
  - a field named like a core key is renamed to "fields.<key>" rather than
    overwriting level/message/time
"""

import json
import logging
from collections.abc import Mapping
from logging import LogRecord
from typing import Any

from pydantic import BaseModel

from glogger.exceptions import SerializationError
from .levels import level_name

FIELDS_ATTR = "fields"
RESERVED_KEYS = ("level", "message", "time")


def get_fields(record: LogRecord) -> Mapping[str, Any]:
    """Return the structured fields attached to a record (empty when there are none)."""
    fields = getattr(record, FIELDS_ATTR, None)
    if isinstance(fields, Mapping):
        return fields
    return {}


def encode_value(value: Any) -> Any:
    """
    `default=` hook for json.dumps.

    pydantic models are dumped through their aliases; anything else json cannot
    handle is rejected with TypeError, which JsonFormatter turns into a
    SerializationError.
    """
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def dumps(payload: Any) -> str:
    return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), allow_nan=False,
                      default=encode_value)


class JsonFormatter(logging.Formatter):
    """
    Structured JSON formatter (newline-delimited JSON).

    Responsibilities:
      - Build the canonical `level`, `message`, `time` keys.
      - Union the record's structured fields in at the top level.
      - Add the formatted traceback under `error` when the record carries exc_info.
      - Serialize deterministically: identical input gives identical output.

    Unlike a best-effort formatter this one does NOT stringify values it cannot
    encode. It raises SerializationError naming the offending field keys and
    lets the handler decide what to write instead (see handlers.py).
    """

    def __init__(self, *, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        # 1) Core keys, always in this order.
        log_record: dict[str, Any] = {
            "level": level_name(record.levelno, record.levelname.lower()),
            "message": record.getMessage(),
            "time": int(record.created),
        }

        # 2) Structured fields, clashing keys moved aside.
        fields = get_fields(record)
        for key, value in fields.items():
            if key in RESERVED_KEYS:
                key = f"fields.{key}"
            log_record[key] = value

        # 3) Exception information (if provided by the logging call).
        if record.exc_info and "error" not in log_record:
            log_record["error"] = self.formatException(record.exc_info)

        try:
            return dumps(log_record) + "\n"
        except (TypeError, ValueError) as exc:
            # ValueError covers circular references and NaN/Infinity
            raise SerializationError(str(exc), fields=self._unserializable(fields)) from exc

    @staticmethod
    def _unserializable(fields: Mapping[str, Any]) -> list[str]:
        bad = []
        for key, value in fields.items():
            try:
                dumps(value)
            except (TypeError, ValueError):
                bad.append(key)
        return bad


class ColorFormatter(logging.Formatter):
    """
    Development-friendly colored formatter.

    Produces: TIMESTAMP | LEVEL | MESSAGE | key=value key=value ...

    Structured values are rendered as compact JSON (pydantic models through their
    aliases); anything JSON cannot encode falls back to str(), since this output
    is for humans and never parsed.
    """

    COLOR_CODES = {
        "trace": "\033[1;36;47m",  # bold cyan on white
        "debug": "\033[36m",       # cyan
        "info": "\033[32m",        # green
        "warn": "\033[33m",        # yellow
        "error": "\033[31m",       # red
        "fatal": "\033[1;41m",     # bold on red background
        "RESET": "\033[0m",
    }

    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)

    def format(self, record: LogRecord) -> str:
        level = level_name(record.levelno, record.levelname.lower())
        color = self.COLOR_CODES.get(level, "")
        reset = self.COLOR_CODES["RESET"]

        timestamp = self.formatTime(record, self.datefmt)
        base = f"{timestamp} | {color}{level:<5}{reset} | {record.getMessage()}"

        pairs = " ".join(f"{key}={self._render(value)}" for key, value in get_fields(record).items())
        if pairs:
            base = f"{base} | {pairs}"

        if record.exc_info:
            base = base + "\n" + self.formatException(record.exc_info)

        return base + "\n"

    @staticmethod
    def _render(value: Any) -> str:
        if isinstance(value, str):
            return value
        try:
            return dumps(value)
        except (TypeError, ValueError):
            return str(value)
