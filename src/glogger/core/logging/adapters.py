# src/glogger/core/logging/adapters.py
"""
Per-request loggers.

RequestLogger is a `logging.LoggerAdapter` carrying a frozen set of structured
fields. `bind()` never mutates: it returns a new adapter over the same
underlying logger with the merged field set, so a logger handed to one request
can never be changed by another.

    base = RequestLogger(logging.getLogger("glogger"))
    request_logger = base.bind(correlationId="abc-123", host=host_info)
    request_logger.info("user loaded", extra={"userId": 42})

Per-call `extra` keys are merged with the bound fields and the result is
attached to the LogRecord as `record.fields`, which is all the formatters read.
Bound fields always win: a call key that clashes with one (say a handler
passing its own `correlationId`) is kept under "fields.<key>" instead.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .formatters import FIELDS_ATTR
from .levels import TRACE


class RequestLogger(logging.LoggerAdapter):
    def __init__(self, logger: logging.Logger, fields: Mapping[str, Any] | None = None):
        super().__init__(logger, MappingProxyType(dict(fields or {})))

    @property
    def fields(self) -> Mapping[str, Any]:
        return self.extra

    def bind(self, **fields: Any) -> RequestLogger:
        """Return a new logger with `fields` added to the bound field set."""
        return type(self)(self.logger, {**self.extra, **fields})

    def process(self, msg, kwargs):
        call_fields = kwargs.pop("extra", None) or {}
        fields = dict(self.extra)
        for key, value in call_fields.items():
            if key in self.extra:
                key = f"fields.{key}"
            fields[key] = value
        kwargs["extra"] = {FIELDS_ATTR: fields}
        return msg, kwargs

    def trace(self, msg, *args, **kwargs) -> None:
        self.log(TRACE, msg, *args, **kwargs)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.logger.name} fields={sorted(self.extra)}>"


class NullRequestLogger(RequestLogger):
    """Discards everything. Returned when no logger is bound to a request."""

    def __init__(self, fields: Mapping[str, Any] | None = None):
        super().__init__(logging.getLogger("glogger.null"), fields)

    def bind(self, **fields: Any) -> NullRequestLogger:
        return self

    def isEnabledFor(self, level: int) -> bool:
        return False

    def log(self, level, msg, *args, **kwargs) -> None:
        return None


NULL_LOGGER = NullRequestLogger()
